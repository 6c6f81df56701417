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

"""Models for configuring and requesting SSH certificates."""

from typing import Annotated, Any, Optional

from annotated_types import MinLen
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from django_sshcert.constants import PublicKeyMethod
from django_sshcert.deprecation import RemovedInDjangoSshCert030Warning, deprecate_parameter
from django_sshcert.pydantic.validators import (
    empty_as_none_validator,
    extension_validator,
    str_list_validator,
)

NonEmptyStr = Annotated[str, MinLen(1)]
ValidHours = Annotated[Optional[int], BeforeValidator(empty_as_none_validator)]
StrList = Annotated[tuple[str, ...], BeforeValidator(str_list_validator)]
ExtensionList = Annotated[
    tuple[Annotated[str, AfterValidator(extension_validator)], ...], BeforeValidator(str_list_validator)
]


class SshCertificateParameters(BaseModel):
    """Parameters for requesting a single SSH certificate.

    This is the configuration surface exposed to callers. `principal` is accepted as a deprecated alias for
    `principals`:

    >>> params = SshCertificateParameters(key_id="deploy", template="Default", principals=["root"])
    >>> params.principals
    ('root',)
    >>> params.public_key_method
    <PublicKeyMethod.LOCAL: 'local'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_id: NonEmptyStr
    template: NonEmptyStr
    key_passphrase: SecretStr = SecretStr("")
    folder: str = ""
    force_command: str = ""
    key_size: int = 0
    windows: bool = False
    valid_hours: ValidHours = None
    object_name: str = ""
    public_key_method: PublicKeyMethod = PublicKeyMethod.LOCAL
    public_key: str = Field(default="", validate_default=True)
    principals: StrList = ()
    source_address: StrList = ()
    destination_address: StrList = ()
    extension: ExtensionList = ()

    @model_validator(mode="before")
    @classmethod
    def fold_deprecated_principal(cls, data: Any) -> Any:
        """Fold the deprecated `principal` parameter into `principals`."""
        if not isinstance(data, dict) or "principal" not in data:
            return data

        data = data.copy()
        principal = data.pop("principal")
        if not principal:
            return data
        if data.get("principals"):
            raise PydanticCustomError(
                "mutually_exclusive",
                "principal and principals are mutually exclusive.",
                {"fields": ["principal", "principals"]},
            )

        deprecate_parameter("principal", RemovedInDjangoSshCert030Warning, "principals")
        data["principals"] = principal
        return data

    @field_validator("public_key")
    @classmethod
    def validate_public_key(cls, value: str, info: ValidationInfo) -> str:
        """Validate that a public key is given if it is read from a file."""
        if info.data.get("public_key_method") == PublicKeyMethod.FILE and not value.strip():
            raise PydanticCustomError("empty_public_key", "public key is empty")
        return value

    @property
    def passphrase(self) -> str:
        """The passphrase for the private key as plain text."""
        return self.key_passphrase.get_secret_value()


class SshCertificateRequest(BaseModel):
    """A request for an SSH certificate as it is sent to the certificate authority.

    `public_key_data` may only be empty if the certificate authority is asked to generate the key pair
    (`generate_key_pair` is ``True``).
    """

    model_config = ConfigDict(frozen=True)

    key_id: NonEmptyStr
    template: NonEmptyStr
    folder: str = ""
    force_command: str = ""
    key_size: Optional[int] = None
    valid_hours: Optional[int] = None
    object_name: str = ""
    public_key_data: str = ""
    generate_key_pair: bool = False
    principals: tuple[str, ...] = ()
    source_addresses: tuple[str, ...] = ()
    destination_addresses: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_public_key_data(self) -> "SshCertificateRequest":
        """Validate that public key data is present unless the key pair is generated by the authority."""
        if not self.generate_key_pair and not self.public_key_data.strip():
            raise PydanticCustomError("empty_public_key", "public key is empty")
        return self

    @classmethod
    def from_parameters(
        cls, parameters: SshCertificateParameters, public_key_data: str, key_size: Optional[int] = None
    ) -> "SshCertificateRequest":
        """Build a request from caller parameters and the public key obtained for them."""
        return cls(
            key_id=parameters.key_id,
            template=parameters.template,
            folder=parameters.folder,
            force_command=parameters.force_command,
            key_size=key_size,
            valid_hours=parameters.valid_hours,
            object_name=parameters.object_name,
            public_key_data=public_key_data,
            generate_key_pair=parameters.public_key_method == PublicKeyMethod.SERVICE,
            principals=parameters.principals,
            source_addresses=parameters.source_address,
            destination_addresses=parameters.destination_address,
            extensions=parameters.extension,
        )
