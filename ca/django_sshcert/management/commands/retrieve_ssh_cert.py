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

"""Management command to retrieve a pending SSH certificate.

.. seealso:: https://docs.djangoproject.com/en/dev/howto/custom-management-commands/
"""

from datetime import timedelta
from typing import Any, Optional

from django.core.management.base import CommandError, CommandParser

from django_sshcert.exceptions import SshCertificateError
from django_sshcert.management import actions
from django_sshcert.management.base import BaseCommand
from django_sshcert.models import SshCertificate


class Command(BaseCommand):
    """Implement :command:`manage.py retrieve_ssh_cert`."""

    help = "Retrieve a certificate that was requested earlier but not yet retrieved."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "cert",
            action=actions.SshCertificateAction,
            pending=True,
            metavar="IDENTITY",
            help="Identity (pickup ID) of the pending certificate.",
        )
        self.add_passphrase_argument(parser)
        self.add_client_argument(parser)
        self.add_timeout_argument(parser)
        parser.add_argument(
            "--private-key", action="store_true", default=False, help="Output the private key as well."
        )

    def handle(
        self,
        cert: SshCertificate,
        key_passphrase: str,
        client: str,
        timeout: Optional[timedelta],
        private_key: bool,
        **options: Any,
    ) -> None:
        ca_client = self.get_client(client)
        try:
            cert = SshCertificate.objects.resume(
                cert.identity, key_passphrase=key_passphrase, client=ca_client, timeout=timeout
            )
        except SshCertificateError as ex:
            raise CommandError(str(ex)) from ex

        self.output_certificate(cert, private_key=private_key)
