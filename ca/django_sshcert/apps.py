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

"""Default Django app configuration.

.. seealso:: https://docs.djangoproject.com/en/dev/ref/applications/
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DjangoSshCertConfig(AppConfig):
    """Standard configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_sshcert"
    verbose_name = _("SSH Certificates")

    def ready(self) -> None:
        # pylint: disable=import-outside-toplevel  # that's how checks work

        from django_sshcert import checks  # NOQA: F401  # import already registers the checks
