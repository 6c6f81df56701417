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

"""QuerySet classes for django-sshcert models."""

from typing import TYPE_CHECKING

from django.db import models

if not TYPE_CHECKING:
    SshCertificateQuerySetBase = models.QuerySet
else:  # pragma: no cover  # only used for type checking
    from typing import Self

    from django_sshcert.models import SshCertificate

    SshCertificateQuerySetBase = models.QuerySet[SshCertificate]


class SshCertificateQuerySet(SshCertificateQuerySetBase):
    """QuerySet for SSH certificates."""

    def pending(self) -> "Self":
        """Return certificates that were submitted but not yet retrieved."""
        return self.filter(status=self.model.STATUS_PENDING)

    def issued(self) -> "Self":
        """Return certificates that were successfully issued."""
        return self.filter(status=self.model.STATUS_ISSUED)

    def failed(self) -> "Self":
        """Return certificates that the certificate authority refused to issue."""
        return self.filter(status=self.model.STATUS_FAILED)

    def observable(self) -> "Self":
        """Return certificates where certificate data is available."""
        return self.exclude(certificate="")
