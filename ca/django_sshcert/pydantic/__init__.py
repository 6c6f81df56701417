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

"""Pydantic models for django-sshcert."""

from django_sshcert.pydantic.record import IssuedSshCertificate
from django_sshcert.pydantic.request import SshCertificateParameters, SshCertificateRequest
from django_sshcert.pydantic.response import SshCertificateDetails, SshCertificateResponse

__all__ = [
    "IssuedSshCertificate",
    "SshCertificateDetails",
    "SshCertificateParameters",
    "SshCertificateRequest",
    "SshCertificateResponse",
]
