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

"""Asynchronous Celery tasks for django-sshcert.

.. seealso:: https://docs.celeryproject.org/en/stable/index.html
"""

import logging
import typing
from datetime import timedelta
from typing import Optional

from celery import shared_task
from celery.local import Proxy

from django_sshcert.conf import model_settings
from django_sshcert.exceptions import RetrievalError
from django_sshcert.models import SshCertificate

log = logging.getLogger(__name__)

FuncTypeVar = typing.TypeVar("FuncTypeVar", bound=typing.Callable[..., typing.Any])


def run_task(task: "Proxy[FuncTypeVar]", *args: typing.Any, **kwargs: typing.Any) -> typing.Any:
    """Function that passes `task` to celery or invokes it directly, depending on ``SSHCERT_USE_CELERY``."""
    eager = kwargs.pop("eager", False)

    if model_settings.SSHCERT_USE_CELERY is True and eager is False:
        return task.delay(*args, **kwargs)

    return task(*args, **kwargs)


@shared_task
def retrieve_ssh_certificate(identity: str, key_passphrase: str = "", timeout: Optional[float] = None) -> str:
    """Task to retrieve a pending certificate.

    Returns the serial of the certificate once it is issued.
    """
    parsed_timeout: Optional[timedelta] = None
    if timeout is not None:
        parsed_timeout = timedelta(seconds=timeout)

    cert = SshCertificate.objects.resume(identity, key_passphrase=key_passphrase, timeout=parsed_timeout)
    return cert.serial


@shared_task
def retrieve_pending_ssh_certificates() -> list[str]:
    """Task to retrieve all pending certificates.

    Passphrases are never stored, so certificates with a private key that is protected by a passphrase are
    skipped and have to be retrieved with ``manage.py retrieve_ssh_cert --key-passphrase``. Returns the
    identities of all certificates that were retrieved (or scheduled for retrieval, if Celery is used).
    """
    pending = SshCertificate.objects.pending()
    for identity in pending.filter(passphrase_protected=True).values_list("identity", flat=True):
        log.warning(
            "%s: Private key is protected by a passphrase, retrieve it with "
            "`manage.py retrieve_ssh_cert --key-passphrase`.",
            identity,
        )

    identities = list(pending.filter(passphrase_protected=False).values_list("identity", flat=True))
    retrieved = []
    for identity in identities:
        try:
            run_task(retrieve_ssh_certificate, identity)
        except RetrievalError as ex:
            log.warning("%s: Could not retrieve certificate: %s", identity, ex)
        else:
            retrieved.append(identity)
    return retrieved
