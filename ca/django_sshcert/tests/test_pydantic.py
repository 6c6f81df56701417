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

"""Test Pydantic models for requesting SSH certificates."""

from typing import Any

from pydantic import ValidationError

import pytest

from django_sshcert.constants import PublicKeyMethod
from django_sshcert.deprecation import RemovedInDjangoSshCert030Warning
from django_sshcert.pydantic import (
    IssuedSshCertificate,
    SshCertificateDetails,
    SshCertificateParameters,
    SshCertificateRequest,
    SshCertificateResponse,
)
from django_sshcert.tests.base.constants import (
    CERTIFICATE,
    CERTIFICATE_DETAILS,
    KEY_ID,
    PICKUP_ID,
    PUBLIC_KEY,
    TEMPLATE,
    VALID_TO_TIMESTAMP,
)


def assert_error_types(ex_info: pytest.ExceptionInfo[ValidationError], *types: str) -> None:
    """Assert the types of all errors in a Pydantic validation error."""
    assert tuple(error["type"] for error in ex_info.value.errors()) == types


def test_parameters_defaults() -> None:
    """Test default values for parameters."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE)
    assert params.public_key_method == PublicKeyMethod.LOCAL
    assert params.key_size == 0
    assert params.valid_hours is None
    assert params.windows is False
    assert params.passphrase == ""
    assert params.principals == ()
    assert params.source_address == ()
    assert params.destination_address == ()
    assert params.extension == ()


def test_parameters_passphrase_is_secret() -> None:
    """Test that the passphrase does not show up in the representation of parameters."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, key_passphrase="secret")
    assert params.passphrase == "secret"
    assert "secret" not in repr(params)
    assert "secret" not in str(params.model_dump(mode="json"))


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    (
        ({"principals": "root"}, ("root",)),
        ({"principals": ["root", "deploy"]}, ("root", "deploy")),
        ({"principals": None}, ()),
        ({"source_address": "192.0.2.0/24"}, ("192.0.2.0/24",)),
        ({"destination_address": ["host1", "host2"]}, ("host1", "host2")),
    ),
)
def test_parameters_lists(kwargs: dict[str, Any], expected: tuple[str, ...]) -> None:
    """Test that list parameters also accept single strings."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, **kwargs)
    assert getattr(params, next(iter(kwargs))) == expected


@pytest.mark.parametrize(("value", "expected"), (("", None), (0, None), (-3, None), (24, 24), ("12", 12)))
def test_parameters_valid_hours(value: Any, expected: Any) -> None:
    """Test that empty and non-positive validity periods are treated as unset."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, valid_hours=value)
    assert params.valid_hours == expected


@pytest.mark.parametrize(
    "kwargs",
    (
        {"template": TEMPLATE},
        {"key_id": KEY_ID},
        {"key_id": "", "template": TEMPLATE},
        {"key_id": KEY_ID, "template": ""},
        {"key_id": KEY_ID, "template": TEMPLATE, "public_key_method": "unknown"},
        {"key_id": KEY_ID, "template": TEMPLATE, "key_size": "large"},
        {"key_id": KEY_ID, "template": TEMPLATE, "valid_hours": "forever"},
        {"key_id": KEY_ID, "template": TEMPLATE, "extension": [":value"]},
    ),
)
def test_parameters_with_invalid_values(kwargs: dict[str, Any]) -> None:
    """Test invalid parameters."""
    with pytest.raises(ValidationError):
        SshCertificateParameters.model_validate(kwargs)


def test_parameters_extensions() -> None:
    """Test extensions with and without values."""
    params = SshCertificateParameters(
        key_id=KEY_ID, template=TEMPLATE, extension=["permit-pty", "login@github.com:jdoe"]
    )
    assert params.extension == ("permit-pty", "login@github.com:jdoe")


@pytest.mark.parametrize("public_key", ("", " ", "\n"))
def test_parameters_file_with_empty_public_key(public_key: str) -> None:
    """Test that a public key is required when reading it from a file."""
    with pytest.raises(ValidationError) as ex_info:
        SshCertificateParameters(
            key_id=KEY_ID, template=TEMPLATE, public_key_method="file", public_key=public_key
        )
    assert_error_types(ex_info, "empty_public_key")


def test_parameters_file_with_missing_public_key() -> None:
    """Test that the public key is also validated when it is not passed at all."""
    with pytest.raises(ValidationError) as ex_info:
        SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, public_key_method="file")
    assert_error_types(ex_info, "empty_public_key")


@pytest.mark.parametrize("method", ("local", "service"))
def test_parameters_empty_public_key_for_other_methods(method: str) -> None:
    """Test that an empty public key is fine if the public key is not read from a file."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, public_key_method=method)
    assert params.public_key == ""


def test_deprecated_principal() -> None:
    """Test that the deprecated principal parameter is folded into principals."""
    msg = r"^principal is deprecated and will be removed in django-sshcert 0\.3\. Use principals instead\.$"
    with pytest.warns(RemovedInDjangoSshCert030Warning, match=msg):
        params = SshCertificateParameters.model_validate(
            {"key_id": KEY_ID, "template": TEMPLATE, "principal": ["root", "deploy"]}
        )
    assert params.principals == ("root", "deploy")


def test_deprecated_principal_with_single_string() -> None:
    """Test the deprecated principal parameter with a single string."""
    with pytest.warns(RemovedInDjangoSshCert030Warning):
        params = SshCertificateParameters.model_validate(
            {"key_id": KEY_ID, "template": TEMPLATE, "principal": "root"}
        )
    assert params.principals == ("root",)


def test_deprecated_principal_with_empty_value() -> None:
    """Test that an empty deprecated principal is simply ignored."""
    params = SshCertificateParameters.model_validate(
        {"key_id": KEY_ID, "template": TEMPLATE, "principal": [], "principals": ["root"]}
    )
    assert params.principals == ("root",)


def test_principal_and_principals_are_mutually_exclusive() -> None:
    """Test passing both principal and principals."""
    with pytest.raises(ValidationError) as ex_info:
        SshCertificateParameters.model_validate(
            {"key_id": KEY_ID, "template": TEMPLATE, "principal": ["root"], "principals": ["deploy"]}
        )
    assert_error_types(ex_info, "mutually_exclusive")
    assert ex_info.value.errors()[0]["ctx"] == {"fields": ["principal", "principals"]}


def test_parameters_are_frozen() -> None:
    """Test that parameters cannot be modified."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE)
    with pytest.raises(ValidationError):
        params.key_id = "other"  # type: ignore[misc]


def test_request_from_parameters() -> None:
    """Test creating a request from parameters."""
    params = SshCertificateParameters(
        key_id=KEY_ID,
        template=TEMPLATE,
        folder="SSH",
        valid_hours=8,
        principals=["root"],
        source_address=["192.0.2.0/24"],
        destination_address=["host.example.com"],
        extension=["permit-pty"],
        force_command="/bin/true",
        object_name="deploy-cert",
    )
    request = SshCertificateRequest.from_parameters(params, PUBLIC_KEY)
    assert request == SshCertificateRequest(
        key_id=KEY_ID,
        template=TEMPLATE,
        folder="SSH",
        force_command="/bin/true",
        valid_hours=8,
        object_name="deploy-cert",
        public_key_data=PUBLIC_KEY,
        generate_key_pair=False,
        principals=("root",),
        source_addresses=("192.0.2.0/24",),
        destination_addresses=("host.example.com",),
        extensions=("permit-pty",),
    )


def test_request_from_parameters_for_service() -> None:
    """Test that the key pair is generated by the certificate authority for the service method."""
    params = SshCertificateParameters(key_id=KEY_ID, template=TEMPLATE, public_key_method="service")
    request = SshCertificateRequest.from_parameters(params, "", key_size=2048)
    assert request.generate_key_pair is True
    assert request.public_key_data == ""
    assert request.key_size == 2048


@pytest.mark.parametrize("public_key_data", ("", "  "))
def test_request_with_empty_public_key(public_key_data: str) -> None:
    """Test that a request requires public key data unless the key pair is generated remotely."""
    with pytest.raises(ValidationError) as ex_info:
        SshCertificateRequest(key_id=KEY_ID, template=TEMPLATE, public_key_data=public_key_data)
    assert_error_types(ex_info, "empty_public_key")


def test_response_with_aliases() -> None:
    """Test parsing a response as returned by the Trust Protection Platform."""
    response = SshCertificateResponse.model_validate(
        {
            "CertificateData": CERTIFICATE,
            "PublicKeyData": PUBLIC_KEY,
            "CertificateDetails": CERTIFICATE_DETAILS,
        }
    )
    assert response.certificate_data == CERTIFICATE
    assert response.public_key_data == PUBLIC_KEY
    assert response.private_key_data == ""
    assert response.details.certificate_type == "User"
    assert response.details.valid_to == VALID_TO_TIMESTAMP


def test_response_with_field_names() -> None:
    """Test creating a response with field names."""
    response = SshCertificateResponse(certificate_data=CERTIFICATE)
    assert response.public_key_data == ""
    assert response.details == SshCertificateDetails()
    assert response.details.valid_from == 0
    assert response.details.serial_number == ""


def test_response_without_certificate() -> None:
    """Test that certificate data is required in a response."""
    with pytest.raises(ValidationError):
        SshCertificateResponse.model_validate({"PublicKeyData": PUBLIC_KEY})


def test_issued_certificate_is_frozen() -> None:
    """Test that an issued certificate cannot be modified."""
    request = SshCertificateRequest(key_id=KEY_ID, template=TEMPLATE, public_key_data=PUBLIC_KEY)
    record = IssuedSshCertificate(
        request=request,
        identity=PICKUP_ID,
        certificate=CERTIFICATE,
        certificate_type="User",
        public_key=PUBLIC_KEY,
        private_key="",
        public_key_fingerprint="SHA256:",
        signing_ca="SHA256:",
        serial="",
        valid_from="",
        valid_to="",
    )
    with pytest.raises(ValidationError):
        record.certificate = "changed"  # type: ignore[misc]
