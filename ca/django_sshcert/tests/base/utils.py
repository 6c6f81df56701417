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

"""Utility functions used in testing."""

from io import StringIO
from typing import Any, Optional
from unittest import mock

from django.core.management import call_command

from django_sshcert.pydantic.response import SshCertificateResponse
from django_sshcert.tests.base.constants import CERTIFICATE, CERTIFICATE_DETAILS, PUBLIC_KEY


def cmd(
    *args: Any, stdout: Optional[StringIO] = None, stderr: Optional[StringIO] = None, **kwargs: Any
) -> tuple[str, str]:
    """Call to a manage.py command using call_command."""
    if stdout is None:
        stdout = StringIO()
    if stderr is None:
        stderr = StringIO()
    stdin = kwargs.pop("stdin", StringIO())

    with mock.patch("sys.stdin", stdin):
        call_command(*args, stdout=stdout, stderr=stderr, **kwargs)

    return stdout.getvalue(), stderr.getvalue()


def issued_response(**kwargs: Any) -> SshCertificateResponse:
    """Get a response for an issued certificate, any keyword argument overrides the default values."""
    data: dict[str, Any] = {
        "CertificateData": CERTIFICATE,
        "PublicKeyData": PUBLIC_KEY,
        "PrivateKeyData": "",
        "CertificateDetails": CERTIFICATE_DETAILS,
    }
    data.update(kwargs)
    return SshCertificateResponse.model_validate(data)
