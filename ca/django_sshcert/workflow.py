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

"""The workflow for issuing a single SSH certificate.

An issuance validates the configuration, obtains a public key (depending on the
:py:class:`~django_sshcert.constants.PublicKeyMethod`), submits the request, waits for the certificate and
finally reconciles the response with locally generated key material.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import timedelta
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from django_sshcert.clients import ca_clients
from django_sshcert.clients.base import CertificateAuthorityClient
from django_sshcert.conf import model_settings
from django_sshcert.constants import TERMINAL_STATES, IssuanceState, PublicKeyMethod
from django_sshcert.exceptions import EmptyPublicKeyError, ValidationError
from django_sshcert.pydantic.record import IssuedSshCertificate
from django_sshcert.pydantic.request import SshCertificateParameters, SshCertificateRequest
from django_sshcert.pydantic.response import SshCertificateResponse
from django_sshcert.typehints import SubmittedCallback, Waiter
from django_sshcert.utils import (
    format_fingerprint,
    generate_ssh_key_pair,
    normalize_line_endings,
    resolve_key_size,
    seconds_to_datetime,
)

log = logging.getLogger(__name__)


def _validation_error(ex: PydanticValidationError) -> ValidationError:
    """Convert a Pydantic validation error into a :py:class:`~django_sshcert.exceptions.ValidationError`."""
    fields: list[str] = []
    messages: list[str] = []
    empty_public_key = False
    for error in ex.errors():
        error_fields = [str(loc) for loc in error["loc"][:1]]
        error_fields += (error.get("ctx") or {}).get("fields", [])
        fields += [field for field in error_fields if field not in fields]

        if error["type"] == "empty_public_key":
            empty_public_key = True
        messages.append(f"{'.'.join(error_fields)}: {error['msg']}" if error_fields else error["msg"])

    if empty_public_key:
        return EmptyPublicKeyError()
    return ValidationError("; ".join(messages), fields=fields)


def build_request(
    parameters: SshCertificateParameters, public_key_data: str, key_size: Optional[int] = None
) -> SshCertificateRequest:
    """Build the request sent to the certificate authority."""
    try:
        return SshCertificateRequest.from_parameters(parameters, public_key_data, key_size=key_size)
    except PydanticValidationError as ex:
        raise _validation_error(ex) from ex


def reconcile(
    response: SshCertificateResponse,
    private_key: bytes,
    public_key: bytes,
    method: PublicKeyMethod,
    windows: bool,
    request: SshCertificateRequest,
    identity: str,
) -> IssuedSshCertificate:
    """Merge the response of the certificate authority with locally generated key material.

    This function has no side effects: The same input always produces the same record.

    * If the response does not contain a private key, the locally generated private key is used.
    * A locally generated public key always takes precedence over the public key in the response.
    * If the certificate authority generated the key pair and the certificate is not used on Windows,
      Windows line endings in the private key are converted to Unix line endings.

    Parameters
    ----------
    response : :py:class:`~django_sshcert.pydantic.response.SshCertificateResponse`
        The response returned by the certificate authority.
    private_key : bytes
        The locally generated private key, or ``b""`` if no key was generated locally.
    public_key : bytes
        The locally generated public key, or ``b""`` if no key was generated locally.
    method : :py:class:`~django_sshcert.constants.PublicKeyMethod`
        How the public key was obtained.
    windows : bool
        If the certificate will be used on Windows.
    request : :py:class:`~django_sshcert.pydantic.request.SshCertificateRequest`
        The request that was sent to the certificate authority.
    identity : str
        The pickup ID of the certificate.
    """
    private_key_data = response.private_key_data
    if not private_key_data:
        private_key_data = private_key.decode("utf-8")

    public_key_data = response.public_key_data
    if public_key:
        public_key_data = public_key.decode("utf-8")

    if method == PublicKeyMethod.SERVICE and not windows:
        private_key_data = normalize_line_endings(private_key_data)

    details = response.details
    return IssuedSshCertificate(
        request=request,
        identity=identity,
        certificate=response.certificate_data,
        certificate_type=details.certificate_type,
        public_key=public_key_data,
        private_key=private_key_data,
        public_key_fingerprint=format_fingerprint(details.public_key_fingerprint_sha256),
        signing_ca=format_fingerprint(details.ca_fingerprint_sha256),
        serial=details.serial_number,
        valid_from=str(seconds_to_datetime(details.valid_from)),
        valid_to=str(seconds_to_datetime(details.valid_to)),
    )


class IssuanceWorkflow:
    """Issue a single SSH certificate.

    Every step moves the workflow to the next state. If a step fails, the workflow moves to
    ``IssuanceState.FAILED``, ``failure_reason`` is set and the exception is re-raised. The pickup ID is
    preserved once it was received, so retrieval can be attempted again with :py:meth:`retrieve` or later
    with :py:meth:`resume`. No other step can be run once the workflow failed or completed.

    Parameters
    ----------
    parameters : :py:class:`~django_sshcert.pydantic.request.SshCertificateParameters`
        The validated parameters.
    client : :py:class:`~django_sshcert.clients.base.CertificateAuthorityClient`, optional
        The client to use. The default is the client configured with ``SSHCERT_DEFAULT_CLIENT``.
    timeout : timedelta, optional
        Maximum time to wait for the certificate. The default is ``SSHCERT_RETRIEVE_TIMEOUT``.
    cancel : :py:class:`threading.Event`, optional
        Set this event to abort waiting for the certificate.
    """

    def __init__(
        self,
        parameters: SshCertificateParameters,
        client: Optional[CertificateAuthorityClient] = None,
        timeout: Optional[timedelta] = None,
        cancel: Optional[Waiter] = None,
    ) -> None:
        if client is None:
            client = ca_clients[model_settings.SSHCERT_DEFAULT_CLIENT]
        if cancel is None:
            cancel = threading.Event()

        self.parameters = parameters
        self.client = client
        self.timeout = timeout
        self.cancel = cancel

        self.state = IssuanceState.VALIDATING
        self.failure_reason: Optional[str] = None
        self.request: Optional[SshCertificateRequest] = None
        self.pickup_id: Optional[str] = None
        self.private_key = b""
        self.public_key = b""

    def __repr__(self) -> str:
        return f"<IssuanceWorkflow: {self.parameters.key_id} ({self.state.value})>"

    @classmethod
    def validate(
        cls, parameters: Union[SshCertificateParameters, Mapping[str, Any]]
    ) -> SshCertificateParameters:
        """Validate parameters for a certificate request.

        This is always called before any key material is generated or any request is sent.

        Raises
        ------
        :py:class:`~django_sshcert.exceptions.ValidationError`
            If the parameters are invalid. The `fields` attribute names the invalid parameters.
        """
        if isinstance(parameters, SshCertificateParameters):
            return parameters

        try:
            return SshCertificateParameters.model_validate(dict(parameters))
        except PydanticValidationError as ex:
            raise _validation_error(ex) from ex

    @classmethod
    def from_parameters(
        cls,
        parameters: Union[SshCertificateParameters, Mapping[str, Any]],
        client: Optional[CertificateAuthorityClient] = None,
        **kwargs: Any,
    ) -> "IssuanceWorkflow":
        """Validate `parameters` and create a new workflow."""
        return cls(cls.validate(parameters), client=client, **kwargs)

    @classmethod
    def resume(
        cls,
        parameters: SshCertificateParameters,
        pickup_id: str,
        client: Optional[CertificateAuthorityClient] = None,
        private_key: bytes = b"",
        public_key: bytes = b"",
        **kwargs: Any,
    ) -> "IssuanceWorkflow":
        """Create a workflow for a certificate that was already submitted.

        The returned workflow continues with :py:meth:`retrieve`, `private_key` and `public_key` are the key
        pair that was generated when the certificate was submitted (if any).
        """
        workflow = cls(parameters, client=client, **kwargs)
        workflow.private_key = private_key
        workflow.public_key = public_key
        workflow.request = build_request(parameters, workflow._get_public_key_data())
        workflow.pickup_id = pickup_id
        workflow.state = IssuanceState.SUBMITTED
        return workflow

    @property
    def method(self) -> PublicKeyMethod:
        """Shortcut for the method to obtain the public key."""
        return self.parameters.public_key_method

    @contextmanager
    def _step(self, state: IssuanceState) -> Iterator[None]:
        # Only a failed retrieval can be repeated, as the pickup ID is preserved.
        retry = self.state == IssuanceState.FAILED and state == IssuanceState.AWAITING_PICKUP
        if self.state in TERMINAL_STATES and not retry:
            raise ValueError(f"{self.parameters.key_id}: Issuance is already {self.state.value}.")

        log.debug("%s: %s -> %s", self.parameters.key_id, self.state.value, state.value)
        self.state = state
        try:
            yield
        except Exception as ex:
            self.state = IssuanceState.FAILED
            self.failure_reason = str(ex)
            log.warning("%s: Issuance failed while %s: %s", self.parameters.key_id, state.value, ex)
            raise

    def _get_public_key_data(self) -> str:
        if self.method == PublicKeyMethod.LOCAL:
            return self.public_key.decode("utf-8")
        if self.method == PublicKeyMethod.FILE:
            return self.parameters.public_key
        return ""

    def source_public_key(self) -> str:
        """Obtain the public key for the certificate request.

        A new key pair is generated for ``PublicKeyMethod.LOCAL``, the caller supplied public key is used for
        ``PublicKeyMethod.FILE`` and no public key is used for ``PublicKeyMethod.SERVICE``.

        Returns
        -------
        str
            The public key that will be sent to the certificate authority.
        """
        with self._step(IssuanceState.SOURCING_PUBLIC_KEY):
            key_size = None
            if self.method == PublicKeyMethod.LOCAL:
                key_size = resolve_key_size(self.parameters.key_size)
                self.private_key, self.public_key = generate_ssh_key_pair(
                    key_size,
                    self.parameters.passphrase,
                    self.parameters.key_id,
                    private_format=model_settings.SSHCERT_PRIVATE_KEY_FORMAT,
                )
            elif self.method == PublicKeyMethod.FILE and not self.parameters.public_key.strip():
                raise EmptyPublicKeyError()
            elif self.method == PublicKeyMethod.SERVICE and self.parameters.key_size > 0:
                key_size = self.parameters.key_size

            public_key_data = self._get_public_key_data()
            self.request = build_request(self.parameters, public_key_data, key_size=key_size)
        return public_key_data

    def submit(self, on_submitted: Optional[SubmittedCallback] = None) -> str:
        """Submit the request to the certificate authority.

        `on_submitted` is called with this workflow as soon as the pickup ID was received. Submission is
        never retried.
        """
        if self.request is None:
            self.source_public_key()
        request = self.request
        assert request is not None  # for mypy, set by source_public_key()

        with self._step(IssuanceState.SUBMITTED):
            self.pickup_id = self.client.request(request)
            if on_submitted is not None:
                on_submitted(self)
        return self.pickup_id

    def retrieve(self, timeout: Optional[timedelta] = None) -> SshCertificateResponse:
        """Wait for the certificate to be issued.

        Raises
        ------
        :py:class:`~django_sshcert.exceptions.RetrievalTimeoutError`
            If the certificate was not issued within `timeout`. The pickup ID remains available.
        :py:class:`~django_sshcert.exceptions.RetrievalCancelledError`
            If waiting was cancelled.
        :py:class:`~django_sshcert.exceptions.RetrievalError`
            If the certificate authority reports that the certificate will not be issued.
        """
        if self.pickup_id is None:
            raise ValueError("Certificate request has not been submitted yet.")
        if timeout is None:
            timeout = self.timeout

        with self._step(IssuanceState.AWAITING_PICKUP):
            return self.client.retrieve(
                self.pickup_id,
                passphrase=self.parameters.passphrase,
                include_details=True,
                timeout=timeout,
                cancel=self.cancel,
            )

    def reconcile(self, response: SshCertificateResponse) -> IssuedSshCertificate:
        """Create the record for the issued certificate from `response`."""
        if self.pickup_id is None or self.request is None:
            raise ValueError("Certificate request has not been submitted yet.")

        with self._step(IssuanceState.RECONCILING):
            record = reconcile(
                response,
                private_key=self.private_key,
                public_key=self.public_key,
                method=self.method,
                windows=self.parameters.windows,
                request=self.request,
                identity=self.pickup_id,
            )
        self.state = IssuanceState.COMPLETED
        log.info("%s: Certificate issued for key id %s.", self.pickup_id, self.parameters.key_id)
        return record

    def run(self, on_submitted: Optional[SubmittedCallback] = None) -> IssuedSshCertificate:
        """Run all steps of the workflow and return the issued certificate."""
        self.source_public_key()
        self.submit(on_submitted=on_submitted)
        response = self.retrieve()
        return self.reconcile(response)
