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

"""Store issued certificates in the database."""

import logging
import typing

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from django_sshcert.constants import RECORD_FIELDS
from django_sshcert.exceptions import ProjectionError
from django_sshcert.pydantic.record import IssuedSshCertificate

if typing.TYPE_CHECKING:
    from django_sshcert.models import SshCertificate

log = logging.getLogger(__name__)


def project(record: IssuedSshCertificate) -> dict[str, str]:
    """Get the fields of `record` that are exposed to users of an issued certificate."""
    values = {field: getattr(record, field) for field in RECORD_FIELDS}
    values["identity"] = record.identity
    return values


def store_record(instance: "SshCertificate", record: IssuedSshCertificate) -> "SshCertificate":
    """Store `record` in the given model instance.

    Every field is validated before it is set. The instance is saved in a single transaction and marked as
    issued.

    Raises
    ------
    :py:class:`~django_sshcert.exceptions.ProjectionError`
        If a value is not accepted by the model. The instance is not saved in this case.
    """
    values = project(record)
    for name, value in values.items():
        field = instance._meta.get_field(name)
        try:
            cleaned = field.clean(value, instance)
        except DjangoValidationError as ex:
            raise ProjectionError(f"{name}: {'; '.join(ex.messages)}", field=name) from ex
        setattr(instance, name, cleaned)

    instance.status = instance.STATUS_ISSUED
    instance.error = ""
    with transaction.atomic():
        instance.save()

    log.info("%s: Stored certificate for key id %s.", instance.identity, instance.key_id)
    return instance
