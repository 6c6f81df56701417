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

"""Base classes for certificate authority clients."""

import abc
import logging
import threading
import time
import typing
from collections.abc import Iterator
from datetime import timedelta
from threading import local
from typing import Any, Optional

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from django_sshcert.conf import ClientConfigurationModel, model_settings
from django_sshcert.exceptions import RetrievalCancelledError, RetrievalTimeoutError
from django_sshcert.pydantic.request import SshCertificateRequest
from django_sshcert.pydantic.response import SshCertificateResponse
from django_sshcert.typehints import Clock, Waiter

log = logging.getLogger(__name__)


class CertificateAuthorityClient(metaclass=abc.ABCMeta):
    """Base class for all clients talking to a certificate authority that issues SSH certificates.

    Implementations only have to send a single request and make a single attempt at retrieving the
    certificate. Waiting for a certificate to be issued is implemented in :py:meth:`retrieve`.
    """

    #: Alias under which this client is configured under settings.SSHCERT_CLIENTS.
    alias: str

    #: Human readable name of the certificate authority.
    title: typing.ClassVar[str]

    #: Clock used for calculating the deadline when waiting for a certificate.
    clock: Clock = staticmethod(time.monotonic)

    def __init__(self, alias: str, **kwargs: Any) -> None:
        self.alias = alias

        for key, value in kwargs.items():
            setattr(self, key, value)

    @abc.abstractmethod
    def request(self, request: SshCertificateRequest) -> str:
        """Submit a certificate request and return the pickup ID.

        Implementations must raise :py:class:`~django_sshcert.exceptions.SubmissionError` if the request
        cannot be submitted.
        """

    @abc.abstractmethod
    def fetch(
        self, pickup_id: str, passphrase: str, include_details: bool, timeout: Optional[float] = None
    ) -> Optional[SshCertificateResponse]:
        """Make a single attempt at retrieving the certificate.

        Implementations must return ``None`` if the certificate was not yet issued or the certificate
        authority could not be reached, and raise :py:class:`~django_sshcert.exceptions.RetrievalError` if
        the certificate authority reports that the certificate will not be issued.

        `timeout` is the number of seconds left until the deadline of :py:meth:`retrieve`. A single attempt
        should not take longer than that. It is ``0`` for the last attempt made right at the deadline.
        """

    def retrieve(
        self,
        pickup_id: str,
        passphrase: str = "",
        include_details: bool = True,
        timeout: Optional[timedelta] = None,
        cancel: Optional[Waiter] = None,
        poll_interval: Optional[timedelta] = None,
    ) -> SshCertificateResponse:
        """Retrieve a certificate, waiting until it is issued or `timeout` is reached.

        Parameters
        ----------
        pickup_id : str
            The pickup ID returned by :py:meth:`request`.
        passphrase : str, optional
            Passphrase used to encrypt a private key generated by the certificate authority.
        include_details : bool, optional
            Whether to retrieve details (fingerprints, serial and validity) of the certificate.
        timeout : timedelta, optional
            The maximum time to wait for the certificate. The default is ``SSHCERT_RETRIEVE_TIMEOUT``.
        cancel : :py:class:`threading.Event`, optional
            Waiting is aborted as soon as this event is set.
        poll_interval : timedelta, optional
            Time between two attempts. The default is ``SSHCERT_POLL_INTERVAL``.
        """
        if timeout is None:
            timeout = model_settings.SSHCERT_RETRIEVE_TIMEOUT
        if poll_interval is None:
            poll_interval = model_settings.SSHCERT_POLL_INTERVAL
        if cancel is None:
            cancel = threading.Event()

        deadline = self.clock() + timeout.total_seconds()
        attempt = 0
        while True:
            if cancel.is_set():
                raise RetrievalCancelledError(f"{pickup_id}: Retrieval was cancelled.", pickup_id=pickup_id)

            attempt += 1
            budget = max(deadline - self.clock(), 0.0)
            response = self.fetch(pickup_id, passphrase, include_details, timeout=budget)
            if response is not None:
                log.info("%s: Retrieved certificate after %s attempt(s).", pickup_id, attempt)
                return response

            remaining = deadline - self.clock()
            if remaining <= 0:
                raise RetrievalTimeoutError(
                    f"{pickup_id}: Certificate was not issued within {timeout}.", pickup_id=pickup_id
                )

            log.debug("%s: Certificate is not yet issued (attempt %s).", pickup_id, attempt)
            if cancel.wait(min(poll_interval.total_seconds(), remaining)):
                raise RetrievalCancelledError(f"{pickup_id}: Retrieval was cancelled.", pickup_id=pickup_id)


class CertificateAuthorityClients:
    """A client handler similar to Django's storages or caches handler."""

    def __init__(self) -> None:
        self._clients = local()

    def __getitem__(self, name: Optional[str]) -> CertificateAuthorityClient:
        if name is None:
            name = model_settings.SSHCERT_DEFAULT_CLIENT

        try:
            return typing.cast(CertificateAuthorityClient, self._clients.clients[name])
        except AttributeError:
            self._clients.clients = {}  # first client is loaded
        except KeyError:
            pass  # this client not yet loaded

        self._clients.clients[name] = self._get_client(name)
        return self._clients.clients[name]  # type: ignore[no-any-return]

    def __iter__(self) -> Iterator[CertificateAuthorityClient]:
        for name in model_settings.SSHCERT_CLIENTS:
            yield self[name]

    def _reset(self) -> None:
        self._clients = local()

    def _get_client(self, alias: str) -> CertificateAuthorityClient:
        """Get the client with the given alias."""
        try:
            configuration: ClientConfigurationModel = model_settings.SSHCERT_CLIENTS[alias]
        except KeyError as ex:
            raise ImproperlyConfigured(f"{alias}: certificate authority client is not configured.") from ex

        backend = configuration.BACKEND
        options = configuration.OPTIONS.copy()
        try:
            client_cls = import_string(backend)
        except ImportError as ex:
            raise ImproperlyConfigured(f"Could not find backend {backend!r}: {ex}") from ex

        if not isinstance(client_cls, type) or not issubclass(client_cls, CertificateAuthorityClient):
            raise ImproperlyConfigured(f"{backend}: Class does not refer to a certificate authority client.")

        return client_cls(alias, **options)  # type: ignore[no-any-return]
