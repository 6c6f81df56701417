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

"""Application configuration for django-sshcert."""

from collections.abc import Iterable
from datetime import timedelta
from typing import Annotated, Any

from annotated_types import Ge, Gt, Le
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from django.conf import settings as _settings
from django.core.exceptions import ImproperlyConfigured

from django_sshcert import constants
from django_sshcert.pydantic.validators import timedelta_as_number_parser
from django_sshcert.typehints import PrivateKeyFormats

SecondsValidator = BeforeValidator(timedelta_as_number_parser("seconds"))


class ClientConfigurationModel(BaseModel):
    """Configuration of a single certificate authority client."""

    BACKEND: str
    OPTIONS: dict[str, Any] = Field(default_factory=dict)


def _default_clients() -> dict[str, ClientConfigurationModel]:
    return {
        constants.DEFAULT_CLIENT: ClientConfigurationModel(
            BACKEND=constants.DEFAULT_CLIENT_BACKEND, OPTIONS={}
        )
    }


class SettingsModel(BaseModel):
    """Pydantic model defining available settings."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    SSHCERT_CLIENTS: dict[str, ClientConfigurationModel] = Field(default_factory=_default_clients)
    SSHCERT_DEFAULT_CLIENT: str = constants.DEFAULT_CLIENT
    SSHCERT_DEFAULT_KEY_SIZE: Annotated[int, Ge(constants.MIN_KEY_SIZE)] = constants.DEFAULT_KEY_SIZE
    SSHCERT_MIN_KEY_SIZE: Annotated[int, Ge(constants.MIN_KEY_SIZE)] = constants.MIN_KEY_SIZE
    SSHCERT_PRIVATE_KEY_FORMAT: PrivateKeyFormats = "pem"
    SSHCERT_RETRIEVE_TIMEOUT: Annotated[
        timedelta, Gt(timedelta(0)), Le(timedelta(hours=1)), SecondsValidator
    ] = constants.DEFAULT_RETRIEVE_TIMEOUT
    SSHCERT_POLL_INTERVAL: Annotated[
        timedelta, Gt(timedelta(0)), Le(timedelta(minutes=5)), SecondsValidator
    ] = constants.DEFAULT_POLL_INTERVAL
    SSHCERT_USE_CELERY: bool = False

    @model_validator(mode="after")
    def check_default_client(self) -> "SettingsModel":
        """Validate that the default client is configured."""
        if self.SSHCERT_DEFAULT_CLIENT not in self.SSHCERT_CLIENTS:
            raise ValueError(f"{self.SSHCERT_DEFAULT_CLIENT}: The default client is not configured.")
        return self

    @model_validator(mode="after")
    def check_minimum_key_size(self) -> "SettingsModel":
        """Validate that the default key size is not below the minimum key size."""
        if self.SSHCERT_MIN_KEY_SIZE > self.SSHCERT_DEFAULT_KEY_SIZE:
            raise ValueError(f"SSHCERT_DEFAULT_KEY_SIZE cannot be lower then {self.SSHCERT_MIN_KEY_SIZE}")
        return self


class SettingsProxy:
    """Proxy class to access settings from the model.

    This class exists to enable reloading of settings in test cases.
    """

    __settings: SettingsModel

    def __init__(self) -> None:
        self.reload()

    def __dir__(self, object: Any = None) -> Iterable[str]:  # pylint: disable=redefined-builtin
        return list(super().__dir__()) + list(self.__settings.model_fields)

    def reload(self) -> None:
        """Reload settings model from django settings."""
        try:
            self.__settings = SettingsModel.model_validate(_settings)
        except ValueError as ex:
            raise ImproperlyConfigured(str(ex)) from ex

    def __getattr__(self, item: str) -> Any:
        return getattr(self.__settings, item)


model_settings = SettingsProxy()
