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

"""Utility functions for loading settings."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

import yaml

from django.core.exceptions import ImproperlyConfigured

#: Prefix for environment variables that are loaded as settings.
ENVIRONMENT_PREFIX = "DJANGO_SSHCERT_"

#: Settings that are parsed as boolean when loaded from the environment.
BOOLEAN_SETTINGS = ("DEBUG", "SSHCERT_USE_CELERY")

#: Settings that are parsed as integer when loaded from the environment.
INTEGER_SETTINGS = (
    "SSHCERT_DEFAULT_KEY_SIZE",
    "SSHCERT_MIN_KEY_SIZE",
    "SSHCERT_RETRIEVE_TIMEOUT",
    "SSHCERT_POLL_INTERVAL",
)


def load_secret_key(secret_key: Optional[str], secret_key_file: Optional[str]) -> str:
    """Load SECRET_KEY from file if not set elsewhere."""
    if secret_key:
        return secret_key

    if secret_key_file and os.path.exists(secret_key_file):
        with open(secret_key_file, encoding="utf-8") as stream:
            return stream.read().strip()
    raise ImproperlyConfigured("Unable to determine SECRET_KEY.")


def get_settings_files(base_dir: Path, paths: str) -> Iterator[Path]:
    """Get relevant settings files.

    `paths` is a colon-separated list of files or directories. Directories yield all ``.yaml`` files in
    alphabetical order. A ``settings.yaml`` in the project directory is always loaded last.
    """
    for settings_path in [base_dir / p for p in paths.split(":") if p]:
        if not settings_path.exists():
            raise ImproperlyConfigured(f"{settings_path}: No such file or directory.")

        if settings_path.is_dir():
            yield from sorted(
                settings_path / _f.name
                for _f in settings_path.iterdir()
                if _f.suffix == ".yaml" and _f.is_file()
            )
        else:
            yield settings_path

    settings_yaml = base_dir / "ca" / "settings.yaml"
    if settings_yaml.exists():
        yield settings_yaml


def load_settings_from_files(base_dir: Path) -> Iterator[tuple[str, Any]]:
    """Load settings from YAML files."""
    # CONFIGURATION_DIRECTORY is set by the SystemD ConfigurationDirectory= directive.
    settings_paths = os.environ.get(
        f"{ENVIRONMENT_PREFIX}SETTINGS", os.environ.get("CONFIGURATION_DIRECTORY", "")
    )

    settings_files = []
    for full_path in get_settings_files(base_dir, settings_paths):
        with open(full_path, encoding="utf-8") as stream:
            try:
                data = yaml.safe_load(stream)
            except yaml.YAMLError as ex:
                logging.exception(ex)
                raise ImproperlyConfigured(f"{full_path}: Invalid YAML.") from ex

        if data is None:
            pass  # silently ignore empty files
        elif not isinstance(data, dict):
            raise ImproperlyConfigured(f"{full_path}: File is not a key/value mapping.")
        else:
            settings_files.append(full_path)
            yield from data.items()

    yield "SETTINGS_FILES", tuple(settings_files)


def load_settings_from_environment() -> Iterator[tuple[str, Any]]:
    """Load settings from the environment."""
    prefix_length = len(ENVIRONMENT_PREFIX)
    for key, value in os.environ.items():
        if not key.startswith(ENVIRONMENT_PREFIX):
            continue
        key = key[prefix_length:]
        if key == "SETTINGS":  # points to yaml files loaded in get_settings_files
            continue

        if key == "ALLOWED_HOSTS":
            yield key, value.split()
        elif key in BOOLEAN_SETTINGS:
            yield key, parse_bool(value)
        elif key in INTEGER_SETTINGS:
            try:
                yield key, int(value)
            except ValueError as ex:
                raise ImproperlyConfigured(f"{ENVIRONMENT_PREFIX}{key}: {value}: Not an integer.") from ex
        else:
            yield key, value


def parse_bool(value: str) -> bool:
    """Parse a variable that is supposed to represent a boolean value."""
    return value.strip().lower() in ("true", "yes", "1")
