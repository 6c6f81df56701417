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

"""Client for the SSH certificate API of a Venafi Trust Protection Platform (TPP)."""

import logging
from typing import Any, Optional, Union

import requests
from pydantic import ValidationError as PydanticValidationError

from django.core.exceptions import ImproperlyConfigured

from django_sshcert import constants
from django_sshcert.clients.base import CertificateAuthorityClient
from django_sshcert.exceptions import RetrievalError, SubmissionError
from django_sshcert.pydantic.request import SshCertificateRequest
from django_sshcert.pydantic.response import SshCertificateResponse
from django_sshcert.typehints import JSONObject
from django_sshcert.utils import parse_extensions

log = logging.getLogger(__name__)


def template_dn(template: str) -> str:
    """Get the full distinguished name of a certificate template.

    >>> template_dn("Default")
    '\\\\VED\\\\Certificate Authority\\\\SSH\\\\Templates\\\\Default'
    """
    if template.startswith(constants.TPP_TEMPLATE_PREFIX):
        return template
    return f"{constants.TPP_TEMPLATE_PREFIX}{template}"


def policy_dn(folder: str) -> str:
    """Get the full distinguished name of a policy folder."""
    if folder.startswith(constants.TPP_POLICY_PREFIX):
        return folder
    return f"{constants.TPP_POLICY_PREFIX}{folder}"


class TppClient(CertificateAuthorityClient):
    """Client for a Venafi Trust Protection Platform.

    Configure it like any other client in ``SSHCERT_CLIENTS``::

        SSHCERT_CLIENTS = {
            "default": {
                "BACKEND": "django_sshcert.clients.tpp.TppClient",
                "OPTIONS": {"url": "https://tpp.example.com", "access_token": "..."},
            }
        }
    """

    title = "Venafi Trust Protection Platform"

    url: str
    access_token: str
    verify: Union[bool, str]
    request_timeout: float

    def __init__(
        self,
        alias: str,
        url: str = "",
        access_token: str = "",
        verify: Union[bool, str] = True,
        request_timeout: float = 30,
        **kwargs: Any,
    ) -> None:
        if not url:
            raise ImproperlyConfigured(f"{alias}: url is required for {self.title}.")
        if not access_token:
            raise ImproperlyConfigured(f"{alias}: access_token is required for {self.title}.")

        super().__init__(
            alias,
            url=url.rstrip("/"),
            access_token=access_token,
            verify=verify,
            request_timeout=request_timeout,
            **kwargs,
        )

    def get_endpoint(self, name: str) -> str:
        """Get the URL for the given endpoint of the SSH certificate API."""
        return f"{self.url}/vedsdk/SSHCertificates/{name}"

    def post(self, name: str, payload: JSONObject, timeout: Optional[float] = None) -> requests.Response:
        """Send `payload` to the given endpoint.

        Every call uses its own session, so that no state is shared between concurrent requests. If
        `timeout` is given, the request does not take longer than that (but at least
        ``MIN_REQUEST_TIMEOUT``) even if the configured ``request_timeout`` is longer.
        """
        request_timeout = self.request_timeout
        if timeout is not None:
            request_timeout = min(request_timeout, max(timeout, constants.MIN_REQUEST_TIMEOUT))

        with requests.Session() as session:
            session.headers["Authorization"] = f"Bearer {self.access_token}"
            session.verify = self.verify
            return session.post(self.get_endpoint(name), json=payload, timeout=request_timeout)

    def get_request_payload(self, request: SshCertificateRequest) -> JSONObject:
        """Get the payload for requesting a certificate."""
        payload: JSONObject = {"CADN": template_dn(request.template), "KeyId": request.key_id}
        if request.folder:
            payload["PolicyDN"] = policy_dn(request.folder)
        if request.object_name:
            payload["ObjectName"] = request.object_name
        if request.destination_addresses:
            payload["DestinationAddresses"] = list(request.destination_addresses)
        if request.principals:
            payload["Principals"] = list(request.principals)
        if request.valid_hours:
            payload["ValidityPeriod"] = f"{request.valid_hours}h"
        if request.public_key_data:
            payload["PublicKeyData"] = request.public_key_data
        elif request.key_size:
            payload["KeySize"] = request.key_size
        if request.extensions:
            payload["Extensions"] = parse_extensions(request.extensions)
        if request.force_command:
            payload["ForceCommand"] = request.force_command
        if request.source_addresses:
            payload["SourceAddresses"] = list(request.source_addresses)
        return payload

    def request(self, request: SshCertificateRequest) -> str:
        try:
            response = self.post("Request", self.get_request_payload(request))
        except requests.RequestException as ex:
            raise SubmissionError(f"Could not submit certificate request: {ex}") from ex

        data, error = parse_response(response)
        if error:
            raise SubmissionError(error)

        pickup_id = data.get("DN")
        if not pickup_id or not isinstance(pickup_id, str):
            raise SubmissionError("Response did not contain a pickup ID.")

        log.info("%s: Certificate request for key id %s submitted.", pickup_id, request.key_id)
        return pickup_id

    def fetch(
        self, pickup_id: str, passphrase: str, include_details: bool, timeout: Optional[float] = None
    ) -> Optional[SshCertificateResponse]:
        payload: JSONObject = {
            "DN": pickup_id,
            "IncludePrivateKeyData": True,
            "IncludeCertificateDetails": include_details,
        }
        if passphrase:
            payload["PrivateKeyPassphrase"] = passphrase

        try:
            response = self.post("Retrieve", payload, timeout=timeout)
        except requests.RequestException as ex:
            # The request was submitted already, so the certificate may still be issued.
            log.warning("%s: Could not reach %s, certificate is still pending: %s", pickup_id, self.title, ex)
            return None

        data, error = parse_response(response)
        processing = data.get("ProcessingDetails") or {}
        status = processing.get("Status", "")
        if status == constants.TPP_STATUS_REJECTED:
            reason = processing.get("StatusDescription") or error or "No reason given"
            raise RetrievalError(f"{pickup_id}: Certificate request was rejected: {reason}", pickup_id)
        if error:
            raise RetrievalError(f"{pickup_id}: {error}", pickup_id)

        if not data.get("CertificateData"):
            if status == constants.TPP_STATUS_ISSUED:
                message = f"{pickup_id}: Response did not contain the issued certificate."
                raise RetrievalError(message, pickup_id)
            log.debug("%s: Processing status is %r.", pickup_id, status)
            return None

        try:
            return SshCertificateResponse.model_validate({k: v for k, v in data.items() if v is not None})
        except PydanticValidationError as ex:
            raise RetrievalError(f"{pickup_id}: Unexpected response: {ex}", pickup_id) from ex


def parse_response(response: requests.Response) -> tuple[JSONObject, str]:
    """Parse a response of the Trust Protection Platform.

    Returns the parsed body and an error message, which is empty if the request was successful.
    """
    try:
        data = response.json()
    except ValueError:
        return {}, f"HTTP {response.status_code}: Could not parse response."
    if not isinstance(data, dict):
        return {}, f"HTTP {response.status_code}: Unexpected response."

    result = data.get("Response") or {}
    if not response.ok or result.get("Success") is False:
        message = result.get("ErrorMessage") or data.get("Error") or response.reason
        return data, f"HTTP {response.status_code}: {message}"
    return data, ""
