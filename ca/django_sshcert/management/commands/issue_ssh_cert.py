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

"""Management command to request a new SSH certificate.

.. seealso:: https://docs.djangoproject.com/en/dev/howto/custom-management-commands/
"""

from datetime import timedelta
from typing import Any, Optional

from django.core.management.base import CommandError, CommandParser

from django_sshcert.constants import PublicKeyMethod
from django_sshcert.exceptions import RetrievalCancelledError, RetrievalTimeoutError, SshCertificateError
from django_sshcert.management import actions
from django_sshcert.management.base import BaseCommand
from django_sshcert.models import SshCertificate


class Command(BaseCommand):
    """Implement :command:`manage.py issue_ssh_cert`."""

    help = "Request a new SSH certificate from a certificate authority."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("key_id", help="Key ID of the new certificate.")
        parser.add_argument("--template", required=True, help="Certificate template to use.")
        parser.add_argument("--folder", default="", help="Policy folder for the certificate.")
        parser.add_argument("--object-name", default="", help="Name of the certificate object.")

        group = parser.add_argument_group("Public key")
        group.add_argument(
            "--public-key-method",
            choices=[method.value for method in PublicKeyMethod],
            default=PublicKeyMethod.LOCAL.value,
            help="How to obtain the public key (default: %(default)s).",
        )
        group.add_argument(
            "--public-key",
            action=actions.PublicKeyAction,
            default="",
            metavar="PATH",
            help='Read the public key from PATH ("-" for stdin). Requires --public-key-method=file.',
        )
        group.add_argument(
            "--key-size", type=int, default=0, help="Size of a generated key (default: 3072 bits)."
        )
        self.add_passphrase_argument(group)
        group.add_argument(
            "--windows",
            action="store_true",
            default=False,
            help="Keep Windows line endings in a private key generated by the certificate authority.",
        )

        group = parser.add_argument_group("Certificate")
        group.add_argument("--valid-hours", type=int, help="Validity of the certificate in hours.")
        group.add_argument(
            "--principal",
            dest="principals",
            action="append",
            default=[],
            help="Principal for the certificate. May be given multiple times.",
        )
        group.add_argument("--force-command", default="", help="Command forced for the certificate.")
        group.add_argument(
            "--source-address",
            action="append",
            default=[],
            help="Source address (in CIDR notation) the certificate can be used from.",
        )
        group.add_argument(
            "--destination-address", action="append", default=[], help="Address the certificate is valid for."
        )
        group.add_argument(
            "--extension",
            action="append",
            default=[],
            metavar="NAME[:VALUE]",
            help="Extension for the certificate. May be given multiple times.",
        )

        self.add_client_argument(parser)
        self.add_timeout_argument(parser)
        parser.add_argument(
            "--private-key", action="store_true", default=False, help="Output the private key as well."
        )

    def handle(
        self, client: str, timeout: Optional[timedelta], private_key: bool, **options: Any
    ) -> None:
        parameters = {
            name: options[name]
            for name in (
                "key_id",
                "template",
                "folder",
                "object_name",
                "public_key_method",
                "public_key",
                "key_size",
                "key_passphrase",
                "windows",
                "valid_hours",
                "principals",
                "force_command",
                "source_address",
                "destination_address",
                "extension",
            )
        }

        ca_client = self.get_client(client)
        try:
            cert = SshCertificate.objects.issue(parameters, client=ca_client, timeout=timeout)
        except (RetrievalTimeoutError, RetrievalCancelledError) as ex:
            raise CommandError(
                f"{ex} Retrieve it later with: manage.py retrieve_ssh_cert '{ex.pickup_id}'"
            ) from ex
        except SshCertificateError as ex:
            raise CommandError(str(ex)) from ex

        self.output_certificate(cert, private_key=private_key)
