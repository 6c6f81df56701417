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

"""Models for responses returned by a certificate authority."""

from pydantic import BaseModel, ConfigDict, Field


class SshCertificateDetails(BaseModel):
    """Details about an issued SSH certificate.

    Field names are also accepted in the form returned by the Trust Protection Platform, e.g.
    ``PublicKeyFingerprintSHA256``. Timestamps are seconds since the Unix epoch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    certificate_type: str = Field(default="", alias="CertificateType")
    public_key_fingerprint_sha256: str = Field(default="", alias="PublicKeyFingerprintSHA256")
    ca_fingerprint_sha256: str = Field(default="", alias="CAFingerprintSHA256")
    serial_number: str = Field(default="", alias="SerialNumber")
    valid_from: int = Field(default=0, alias="ValidFrom")
    valid_to: int = Field(default=0, alias="ValidTo")


class SshCertificateResponse(BaseModel):
    """The raw response for an issued SSH certificate.

    `private_key_data` is empty unless the certificate authority generated the key pair.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    certificate_data: str = Field(alias="CertificateData")
    public_key_data: str = Field(default="", alias="PublicKeyData")
    private_key_data: str = Field(default="", alias="PrivateKeyData")
    details: SshCertificateDetails = Field(default_factory=SshCertificateDetails, alias="CertificateDetails")
