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

"""Model for an issued SSH certificate."""

from pydantic import BaseModel, ConfigDict

from django_sshcert.pydantic.request import SshCertificateRequest


class IssuedSshCertificate(BaseModel):
    """An issued SSH certificate as produced by reconciling the response of the certificate authority.

    Instances are immutable and only created after a certificate was successfully retrieved.
    """

    model_config = ConfigDict(frozen=True)

    #: The request that this certificate was issued for.
    request: SshCertificateRequest

    #: Identity of the certificate at the certificate authority (the pickup ID).
    identity: str

    certificate: str
    certificate_type: str
    public_key: str
    private_key: str
    public_key_fingerprint: str
    signing_ca: str
    serial: str
    valid_from: str
    valid_to: str
