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

"""Constants used throughout django-sshcert.

.. NOTE:: Do **not** import any module from django_sshcert here, this module is imported by almost every
   other module.
"""

import enum
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

from cryptography.hazmat.primitives.serialization import PrivateFormat

#: Key size used for locally generated key pairs if no (or a non-positive) key size is given.
DEFAULT_KEY_SIZE = 3072

#: Smallest RSA key size that cryptography is able to generate.
MIN_KEY_SIZE = 1024

#: RSA public exponent used for all generated keys.
PUBLIC_EXPONENT = 65537

#: Default timeout for retrieving an issued certificate.
DEFAULT_RETRIEVE_TIMEOUT = timedelta(seconds=10)

#: Default interval between two attempts to retrieve a pending certificate.
DEFAULT_POLL_INTERVAL = timedelta(seconds=2)

#: Default alias for the certificate authority client.
DEFAULT_CLIENT = "default"

#: Default backend for the certificate authority client.
DEFAULT_CLIENT_BACKEND = "django_sshcert.clients.tpp.TppClient"

#: Hash algorithm name prefixed to fingerprints returned by the certificate authority.
FINGERPRINT_ALGORITHM = "SHA256"

# Prefixes for object paths in a Trust Protection Platform instance
TPP_TEMPLATE_PREFIX = "\\VED\\Certificate Authority\\SSH\\Templates\\"
TPP_POLICY_PREFIX = "\\VED\\Policy\\"

#: Shortest timeout (in seconds) for a single HTTP request, used for the last attempt at the deadline.
MIN_REQUEST_TIMEOUT = 1.0

#: Processing status reported by the Trust Protection Platform for an issued certificate.
TPP_STATUS_ISSUED = "Issued"

#: Processing status reported by the Trust Protection Platform for a rejected request.
TPP_STATUS_REJECTED = "Rejected"

# Bounds for timestamps that can be represented as datetime
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MIN_DATETIME = datetime.min.replace(tzinfo=timezone.utc)
MAX_DATETIME = datetime.max.replace(microsecond=0, tzinfo=timezone.utc)
MIN_TIMESTAMP = int((MIN_DATETIME - EPOCH).total_seconds())
MAX_TIMESTAMP = int((MAX_DATETIME - EPOCH).total_seconds())

#: Private key formats that locally generated private keys can be serialized to.
PRIVATE_KEY_FORMATS = MappingProxyType(
    {
        "pem": PrivateFormat.TraditionalOpenSSL,
        "pkcs8": PrivateFormat.PKCS8,
        "openssh": PrivateFormat.OpenSSH,
    }
)


class PublicKeyMethod(enum.Enum):
    """Enumeration of ways that the public key of a certificate request is obtained.

    ``local`` generates a new key pair locally, ``file`` uses a public key supplied by the caller and
    ``service`` asks the certificate authority to generate the key pair.
    """

    LOCAL = "local"
    FILE = "file"
    SERVICE = "service"


class IssuanceState(enum.Enum):
    """States of a single certificate issuance."""

    VALIDATING = "validating"
    SOURCING_PUBLIC_KEY = "sourcing_public_key"
    SUBMITTED = "submitted"
    AWAITING_PICKUP = "awaiting_pickup"
    RECONCILING = "reconciling"
    COMPLETED = "completed"
    FAILED = "failed"


#: States in which an issuance does not continue.
TERMINAL_STATES = frozenset([IssuanceState.COMPLETED, IssuanceState.FAILED])

#: Fields of an issued certificate that are persisted.
RECORD_FIELDS = (
    "certificate",
    "certificate_type",
    "public_key",
    "private_key",
    "public_key_fingerprint",
    "signing_ca",
    "serial",
    "valid_from",
    "valid_to",
)
