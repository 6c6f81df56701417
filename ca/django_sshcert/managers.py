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

"""Django model managers."""

import logging
import typing
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Optional, Union

from django.db import models

from django_sshcert.clients.base import CertificateAuthorityClient
from django_sshcert.constants import PublicKeyMethod
from django_sshcert.exceptions import (
    RetrievalCancelledError,
    RetrievalError,
    RetrievalTimeoutError,
    ValidationError,
)
from django_sshcert.projection import store_record
from django_sshcert.pydantic.request import SshCertificateParameters
from django_sshcert.signals import post_issue_ssh_cert, post_request_ssh_cert, pre_request_ssh_cert
from django_sshcert.typehints import Waiter
from django_sshcert.workflow import IssuanceWorkflow

log = logging.getLogger(__name__)

# https://mypy.readthedocs.io/en/latest/runtime_troubles.html
if typing.TYPE_CHECKING:
    from django_sshcert.models import SshCertificate
    from django_sshcert.querysets import SshCertificateQuerySet

    SshCertificateManagerBase = models.Manager[SshCertificate]
else:
    SshCertificateManagerBase = models.Manager


class SshCertificateManager(SshCertificateManagerBase):
    """Model manager for the SshCertificate model."""

    if typing.TYPE_CHECKING:
        # Methods added by from_queryset(), declared here for type checkers.
        def pending(self) -> "SshCertificateQuerySet": ...

        def observable(self) -> "SshCertificateQuerySet": ...

    def issue(
        self,
        parameters: Union[SshCertificateParameters, Mapping[str, Any]],
        client: Optional[CertificateAuthorityClient] = None,
        timeout: Optional[timedelta] = None,
        cancel: Optional[Waiter] = None,
    ) -> "SshCertificate":
        """Request a new certificate and wait for it to be issued.

        A row with ``pending`` status is stored as soon as the certificate authority acknowledged the
        request. If retrieving the certificate times out (or is cancelled), the row remains pending and the
        certificate can be retrieved later with :py:meth:`resume`.

        Parameters
        ----------
        parameters : dict or :py:class:`~django_sshcert.pydantic.request.SshCertificateParameters`
            The parameters for the certificate.
        client : :py:class:`~django_sshcert.clients.base.CertificateAuthorityClient`, optional
            The client to use. The default is the client configured with ``SSHCERT_DEFAULT_CLIENT``.
        timeout : timedelta, optional
            Maximum time to wait for the certificate. The default is ``SSHCERT_RETRIEVE_TIMEOUT``.
        cancel : :py:class:`threading.Event`, optional
            Set this event to abort waiting for the certificate.
        """
        workflow = IssuanceWorkflow.from_parameters(
            parameters, client=client, timeout=timeout, cancel=cancel
        )
        pre_request_ssh_cert.send(sender=self.model, parameters=workflow.parameters)

        cert: Optional["SshCertificate"] = None

        def store_pending(submitted: IssuanceWorkflow) -> None:
            nonlocal cert
            cert = self._create_pending(submitted)

        workflow.source_public_key()
        workflow.submit(on_submitted=store_pending)
        assert cert is not None  # for mypy, set by store_pending()
        return self._complete(cert, workflow)

    def _create_pending(self, workflow: IssuanceWorkflow) -> "SshCertificate":
        params = workflow.parameters
        # A private key generated by the certificate authority can only be retrieved with the same passphrase.
        protected = params.public_key_method == PublicKeyMethod.SERVICE and bool(params.passphrase)
        cert = self.create(
            identity=workflow.pickup_id,
            key_id=params.key_id,
            public_key_method=params.public_key_method.value,
            parameters=params.model_dump(mode="json", exclude={"key_passphrase"}),
            passphrase_protected=protected,
            public_key=workflow.public_key.decode("utf-8"),
            private_key=workflow.private_key.decode("utf-8"),
        )
        post_request_ssh_cert.send(sender=self.model, certificate=cert)
        return cert

    def resume(
        self,
        identity: str,
        key_passphrase: str = "",
        client: Optional[CertificateAuthorityClient] = None,
        timeout: Optional[timedelta] = None,
        cancel: Optional[Waiter] = None,
    ) -> "SshCertificate":
        """Retrieve a pending certificate without submitting a new request.

        `key_passphrase` must be given again if the certificate authority generates the key pair and it was
        passed when the certificate was requested.

        Raises
        ------
        SshCertificate.DoesNotExist
            If there is no pending certificate with the given identity.
        :py:class:`~django_sshcert.exceptions.ValidationError`
            If the private key is protected with a passphrase, but `key_passphrase` is not given.
        """
        cert = self.pending().get(identity=identity)
        if cert.passphrase_protected and not key_passphrase:
            message = "key_passphrase: Passphrase is required to retrieve this certificate."
            raise ValidationError(message, fields=("key_passphrase",))
        parameters = IssuanceWorkflow.validate({**cert.parameters, "key_passphrase": key_passphrase})
        workflow = IssuanceWorkflow.resume(
            parameters,
            cert.identity,
            client=client,
            private_key=cert.private_key.encode("utf-8"),
            public_key=cert.public_key.encode("utf-8"),
            timeout=timeout,
            cancel=cancel,
        )
        return self._complete(cert, workflow)

    def _complete(self, cert: "SshCertificate", workflow: IssuanceWorkflow) -> "SshCertificate":
        try:
            response = workflow.retrieve()
        except (RetrievalTimeoutError, RetrievalCancelledError):
            log.warning("%s: Certificate not yet retrieved, row remains pending.", cert.identity)
            raise
        except RetrievalError as ex:
            cert.status = cert.STATUS_FAILED
            cert.error = str(ex)[:256]
            cert.save(update_fields=["status", "error", "updated"])
            raise

        record = workflow.reconcile(response)
        store_record(cert, record)
        post_issue_ssh_cert.send(sender=self.model, certificate=cert)
        return cert

    def read(self, identity: str) -> Optional["SshCertificate"]:
        """Get the certificate with the given identity, or ``None`` if no certificate data is available.

        A pending certificate is not returned, but also not removed.
        """
        return self.observable().filter(identity=identity).first()

    def discard(self, identity: str) -> bool:
        """Remove the certificate with the given identity from the database.

        The certificate is not revoked at the certificate authority. Discarding a certificate that does not
        exist has no effect.

        Returns
        -------
        bool
            ``True`` if a certificate was removed, ``False`` otherwise.
        """
        deleted, _details = self.filter(identity=identity).delete()
        if deleted:
            log.info("%s: Discarded certificate.", identity)
        return deleted > 0
