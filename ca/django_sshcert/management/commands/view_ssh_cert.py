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

"""Management command to view an SSH certificate.

.. seealso:: https://docs.djangoproject.com/en/dev/howto/custom-management-commands/
"""

from typing import Any

from django.core.management.base import CommandParser

from django_sshcert.management import actions
from django_sshcert.management.base import BaseCommand
from django_sshcert.models import SshCertificate


class Command(BaseCommand):
    """Implement :command:`manage.py view_ssh_cert`."""

    help = "View an SSH certificate."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "cert",
            action=actions.SshCertificateAction,
            metavar="IDENTITY",
            help="Identity (pickup ID) of the certificate.",
        )
        parser.add_argument(
            "--private-key", action="store_true", default=False, help="Output the private key as well."
        )

    def handle(self, cert: SshCertificate, private_key: bool, **options: Any) -> None:
        self.output_certificate(cert, private_key=private_key)
