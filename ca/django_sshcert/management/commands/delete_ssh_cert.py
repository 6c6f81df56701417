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

"""Management command to delete an SSH certificate.

.. seealso:: https://docs.djangoproject.com/en/dev/howto/custom-management-commands/
"""

from typing import Any

from django.core.management.base import CommandParser

from django_sshcert.management.base import BaseCommand
from django_sshcert.models import SshCertificate


class Command(BaseCommand):
    """Implement :command:`manage.py delete_ssh_cert`."""

    help = "Delete an SSH certificate. The certificate is not revoked at the certificate authority."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("identity", help="Identity (pickup ID) of the certificate.")

    def handle(self, identity: str, **options: Any) -> None:
        if SshCertificate.objects.discard(identity):
            self.stdout.write(f"{identity}: Certificate deleted.")
        else:
            self.stdout.write(f"{identity}: Certificate not found, nothing to delete.")
