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

"""Reusable validators for Pydantic models."""

from collections.abc import Callable
from datetime import timedelta
from typing import Any, Literal


def timedelta_as_number_parser(unit: Literal["seconds", "hours", "days"] = "seconds") -> Callable[[Any], Any]:
    """Validator for timedeltas.

    .. WARNING:: This validator differs in that it has to be called with a unit for timedeltas.
    """

    def validator(value: Any) -> Any:
        if isinstance(value, (float, int)):
            return timedelta(**{unit: value})  # type: ignore[misc]  # mypy complains that unit is not a str
        return value

    return validator


def empty_as_none_validator(value: Any) -> Any:
    """Convert an empty string or a non-positive number to ``None``."""
    if value == "":
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value <= 0:
        return None
    return value


def str_list_validator(value: Any) -> Any:
    """Convert a single string to a list with one element, and ``None`` to an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


def extension_validator(value: str) -> str:
    """Validate an extension in the form of ``name`` or ``name:value``."""
    if not value.split(":", 1)[0]:
        raise ValueError(f"{value}: Extension name must not be empty.")
    return value
