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

"""Exceptions raised while issuing SSH certificates."""

import typing
from collections.abc import Iterable


class SshCertificateError(Exception):
    """Base class for all errors raised while issuing an SSH certificate."""

    #: Name of the stage in which the error occurred.
    stage: typing.ClassVar[str] = "issuance"


class ValidationError(SshCertificateError):
    """Raised when the configuration of a certificate request is invalid.

    No key material is generated and no request is sent to the certificate authority if this error is raised.
    """

    stage = "validation"

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class EmptyPublicKeyError(ValidationError):
    """Raised when a caller supplied public key is required but empty."""

    def __init__(self, message: str = "public key is empty") -> None:
        super().__init__(message, fields=("public_key",))


class KeyGenerationError(SshCertificateError):
    """Raised when a local key pair cannot be generated."""

    stage = "key_generation"


class SubmissionError(SshCertificateError):
    """Raised when the certificate authority rejects or cannot receive a certificate request."""

    stage = "submission"


class RetrievalError(SshCertificateError):
    """Raised when an issued certificate cannot be retrieved.

    The pickup ID is preserved so that retrieval can be attempted again later.
    """

    stage = "retrieval"

    def __init__(self, message: str, pickup_id: str) -> None:
        super().__init__(message)
        self.pickup_id = pickup_id


class RetrievalTimeoutError(RetrievalError):
    """Raised when the certificate was not issued within the configured timeout."""


class RetrievalCancelledError(RetrievalError):
    """Raised when waiting for the certificate was cancelled."""


class ProjectionError(SshCertificateError):
    """Raised when a field of an issued certificate cannot be stored."""

    stage = "projection"

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field
