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

"""Various type aliases used throughout django-sshcert."""

import argparse
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from django_sshcert.workflow import IssuanceWorkflow

#: Argument parser or argument group.
ActionsContainer = argparse._ActionsContainer  # pylint: disable=protected-access

#: Serialization formats for locally generated private keys.
PrivateKeyFormats = Literal["pem", "pkcs8", "openssh"]

#: JSON object as returned by the certificate authority.
JSONObject = dict[str, Any]

#: Callback invoked as soon as the certificate authority returned a pickup ID.
SubmittedCallback = Callable[["IssuanceWorkflow"], None]


class Clock(Protocol):  # pragma: no cover
    """Protocol for a monotonic clock, e.g. :py:func:`time.monotonic`."""

    def __call__(self) -> float: ...


class Waiter(Protocol):  # pragma: no cover
    """Protocol for an event that can be waited on, e.g. :py:class:`threading.Event`."""

    def is_set(self) -> bool: ...

    def wait(self, timeout: float | None = None) -> bool: ...
