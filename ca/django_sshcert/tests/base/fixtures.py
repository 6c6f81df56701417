# This file is part of django-sshcert.
#
# django-sshcert is free software: you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# django-sshcert is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public
# License for more details.
#
# You should have received a copy of the GNU General Public License along with django-sshcert. If not, see
# <http://www.gnu.org/licenses/>.

"""Pytest fixtures used throughout the code base."""

# pylint: disable=redefined-outer-name  # requested pytest fixtures show up this way.

from collections.abc import Iterator
from typing import Any

import pytest
import requests_mock as requests_mock_module

from django_sshcert.clients import ca_clients
from django_sshcert.clients.tpp import TppClient
from django_sshcert.constants import PublicKeyMethod
from django_sshcert.models import SshCertificate
from django_sshcert.pydantic.request import SshCertificateParameters
from django_sshcert.tests.base.constants import (
    CERTIFICATE,
    CERTIFICATE_DETAILS,
    KEY_ID,
    PICKUP_ID,
    PUBLIC_KEY,
    TEMPLATE,
    TPP_ISSUED_RESPONSE,
    TPP_REQUEST_RESPONSE,
    TPP_REQUEST_URL,
    TPP_RETRIEVE_URL,
)
from django_sshcert.tests.base.mocks import FakeClock, FakeWaiter, StubClient


@pytest.fixture
def parameters() -> dict[str, Any]:
    """Minimal parameters for requesting a certificate, with a small key size for fast tests."""
    return {"key_id": KEY_ID, "template": TEMPLATE, "key_size": 1024}


@pytest.fixture
def file_parameters() -> SshCertificateParameters:
    """Parameters for a certificate for a public key supplied by the caller."""
    return SshCertificateParameters(
        key_id=KEY_ID, template=TEMPLATE, public_key_method=PublicKeyMethod.FILE, public_key=PUBLIC_KEY
    )


@pytest.fixture
def service_parameters() -> SshCertificateParameters:
    """Parameters for a certificate where the certificate authority generates the key pair."""
    return SshCertificateParameters(
        key_id=KEY_ID, template=TEMPLATE, public_key_method=PublicKeyMethod.SERVICE
    )


@pytest.fixture
def clock() -> FakeClock:
    """Fake monotonic clock."""
    return FakeClock()


@pytest.fixture
def waiter(clock: FakeClock) -> FakeWaiter:
    """Fake event that advances `clock` instead of sleeping."""
    return FakeWaiter(clock)


@pytest.fixture
def stub_client(clock: FakeClock) -> StubClient:
    """Stub client that never issues a certificate unless results are added."""
    client = StubClient()
    client.clock = clock
    return client


@pytest.fixture
def tpp_client() -> TppClient:
    """The client configured in the test settings."""
    client = ca_clients["default"]
    assert isinstance(client, TppClient)
    return client


@pytest.fixture
def tpp_mock() -> Iterator[requests_mock_module.Mocker]:
    """Mock the Trust Protection Platform so that a certificate is issued immediately."""
    with requests_mock_module.Mocker() as mocker:
        mocker.post(TPP_REQUEST_URL, json=TPP_REQUEST_RESPONSE)
        mocker.post(TPP_RETRIEVE_URL, json=TPP_ISSUED_RESPONSE)
        yield mocker


@pytest.fixture
def pending_cert(db: None) -> SshCertificate:  # pylint: disable=unused-argument
    """A certificate that was submitted but not yet retrieved."""
    return SshCertificate.objects.create(
        identity=PICKUP_ID,
        key_id=KEY_ID,
        public_key_method=PublicKeyMethod.FILE.value,
        parameters={
            "key_id": KEY_ID,
            "template": TEMPLATE,
            "public_key_method": PublicKeyMethod.FILE.value,
            "public_key": PUBLIC_KEY,
        },
    )


@pytest.fixture
def issued_cert(pending_cert: SshCertificate) -> SshCertificate:
    """A certificate that was issued."""
    pending_cert.status = SshCertificate.STATUS_ISSUED
    pending_cert.certificate = CERTIFICATE
    pending_cert.certificate_type = CERTIFICATE_DETAILS["CertificateType"]
    pending_cert.public_key = PUBLIC_KEY
    pending_cert.public_key_fingerprint = f"SHA256:{CERTIFICATE_DETAILS['PublicKeyFingerprintSHA256']}"
    pending_cert.signing_ca = f"SHA256:{CERTIFICATE_DETAILS['CAFingerprintSHA256']}"
    pending_cert.serial = CERTIFICATE_DETAILS["SerialNumber"]
    pending_cert.valid_from = "2024-01-01 00:00:00+00:00"
    pending_cert.valid_to = "2024-01-02 00:00:00+00:00"
    pending_cert.save()
    return pending_cert
