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

"""Central functions to generate key material and convert values returned by a certificate authority."""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    Encoding,
    KeySerializationEncryption,
    NoEncryption,
    PublicFormat,
)

from django_sshcert import constants
from django_sshcert.conf import model_settings
from django_sshcert.exceptions import KeyGenerationError
from django_sshcert.typehints import PrivateKeyFormats

log = logging.getLogger(__name__)


def normalize_line_endings(value: str) -> str:
    """Replace Windows line endings with Unix line endings.

    >>> normalize_line_endings("abc\\r\\ndef")
    'abc\\ndef'
    """
    return value.replace("\r\n", "\n")


def format_fingerprint(value: str, algorithm: str = constants.FINGERPRINT_ALGORITHM) -> str:
    """Format a fingerprint as displayed by OpenSSH.

    >>> format_fingerprint("47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU")
    'SHA256:47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU'
    """
    return f"{algorithm}:{value}"


def resolve_key_size(key_size: Optional[int]) -> int:
    """Get the key size for a locally generated key pair.

    Any key size that is not a positive integer is replaced with the default key size.

    >>> resolve_key_size(2048)
    2048
    >>> resolve_key_size(0)
    3072
    """
    if key_size is None or key_size <= 0:
        return model_settings.SSHCERT_DEFAULT_KEY_SIZE
    return key_size


def generate_ssh_key_pair(
    key_size: int,
    passphrase: Optional[str],
    comment: str,
    private_format: PrivateKeyFormats = "pem",
) -> tuple[bytes, bytes]:
    """Generate an RSA key pair for use with SSH.

    Parameters
    ----------
    key_size : int
        The size of the RSA key. Must be at least ``SSHCERT_MIN_KEY_SIZE``.
    passphrase : str, optional
        If given, the private key is encrypted with this passphrase.
    comment : str
        Comment added to the public key, usually the key ID of the certificate.
    private_format : str, optional
        The serialization format of the private key, ``"pem"`` (the default), ``"pkcs8"`` or
        ``"openssh"``.

    Returns
    -------
    tuple
        The private key serialized in the requested format and the public key in the format used in an
        ``authorized_keys`` file. Both use Unix line endings.

    Raises
    ------
    KeyGenerationError
        If the key size or format is invalid or the key cannot be generated.
    """
    min_key_size = model_settings.SSHCERT_MIN_KEY_SIZE
    if key_size < min_key_size:
        raise KeyGenerationError(f"{key_size}: Key size must be at least {min_key_size} bits.")

    try:
        private_format_type = constants.PRIVATE_KEY_FORMATS[private_format]
    except KeyError as ex:
        raise KeyGenerationError(f"{private_format}: Unsupported private key format.") from ex

    encryption: KeySerializationEncryption = NoEncryption()
    if passphrase:
        encryption = BestAvailableEncryption(passphrase.encode("utf-8"))

    log.debug("Generating %s bit RSA key pair for %s.", key_size, comment)
    try:
        private_key = rsa.generate_private_key(public_exponent=constants.PUBLIC_EXPONENT, key_size=key_size)
        private_pem = private_key.private_bytes(Encoding.PEM, private_format_type, encryption)
        public_key = private_key.public_key().public_bytes(Encoding.OpenSSH, PublicFormat.OpenSSH)
    except (ValueError, TypeError, UnsupportedAlgorithm) as ex:
        raise KeyGenerationError(f"Could not generate key pair: {ex}") from ex

    if comment:
        public_key += b" " + comment.encode("utf-8")

    return private_pem.replace(b"\r\n", b"\n"), public_key


def seconds_to_datetime(seconds: int) -> datetime:
    """Convert seconds since the Unix epoch to a timezone-aware datetime in UTC.

    Values outside the range that can be represented by :py:class:`~datetime.datetime` are clamped to the
    earliest or latest representable value.

    >>> seconds_to_datetime(0)
    datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    >>> seconds_to_datetime(1704067200)
    datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if seconds < constants.MIN_TIMESTAMP:
        return constants.MIN_DATETIME
    if seconds > constants.MAX_TIMESTAMP:
        return constants.MAX_DATETIME
    return constants.EPOCH + timedelta(seconds=seconds)


def parse_extensions(extensions: Iterable[str]) -> dict[str, str]:
    """Parse a list of certificate extensions into a mapping.

    Extensions are given either as ``name:value`` or as ``name`` (for extensions without a value).

    >>> parse_extensions(["permit-pty", "login@github.com:jdoe"])
    {'permit-pty': '', 'login@github.com': 'jdoe'}
    """
    parsed = {}
    for extension in extensions:
        name, _sep, value = extension.partition(":")
        parsed[name] = value
    return parsed
