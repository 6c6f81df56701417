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

"""System checks for django-sshcert.

.. seealso:: https://docs.djangoproject.com/en/dev/topics/checks/
"""

from typing import Any, Optional

from django.apps import AppConfig
from django.core import checks
from django.core.exceptions import ImproperlyConfigured

from django_sshcert.clients import ca_clients
from django_sshcert.conf import model_settings


# TYPE NOTE: django-stubs does not type-hint the decorator
@checks.register()  # type: ignore[type-var]
def check_clients(app_configs: Optional[list[AppConfig]], **kwargs: Any) -> list[checks.CheckMessage]:
    """Check that all configured certificate authority clients can be loaded."""
    # only run checks if manage.py check is run with no app labels (== all) or the django_sshcert app label
    if app_configs is not None and not [config for config in app_configs if config.name == "django_sshcert"]:
        return []

    errors: list[checks.CheckMessage] = []
    for alias in model_settings.SSHCERT_CLIENTS:
        try:
            ca_clients[alias]
        except ImproperlyConfigured as ex:
            errors.append(
                checks.Error(
                    f"{alias}: Certificate authority client cannot be loaded: {ex}",
                    hint="Check the SSHCERT_CLIENTS setting.",
                    id="django-sshcert.clients.E001",
                )
            )
    return errors
