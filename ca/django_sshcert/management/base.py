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

"""Command subclasses and argparse helpers for django-sshcert."""

import abc
from typing import Optional

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand as _BaseCommand, CommandError, CommandParser

from django_sshcert.clients import ca_clients
from django_sshcert.clients.base import CertificateAuthorityClient
from django_sshcert.conf import model_settings
from django_sshcert.management import actions
from django_sshcert.models import SshCertificate
from django_sshcert.typehints import ActionsContainer


class BaseCommand(_BaseCommand, metaclass=abc.ABCMeta):
    """Base class for most/all management commands."""

    def add_client_argument(self, parser: CommandParser) -> None:
        """Add the ``--client`` argument."""
        parser.add_argument(
            "--client",
            metavar="ALIAS",
            choices=list(model_settings.SSHCERT_CLIENTS),
            help="Certificate authority client to use (default: %(default)s).",
            default=model_settings.SSHCERT_DEFAULT_CLIENT,
        )

    def add_timeout_argument(self, parser: CommandParser) -> None:
        """Add the ``--timeout`` argument."""
        timeout = int(model_settings.SSHCERT_RETRIEVE_TIMEOUT.total_seconds())
        parser.add_argument(
            "--timeout",
            action=actions.TimeoutAction,
            metavar="SECONDS",
            help=f"Maximum time to wait for the certificate to be issued (default: {timeout}).",
        )

    def add_passphrase_argument(self, parser: ActionsContainer) -> None:
        """Add the ``--key-passphrase`` argument."""
        parser.add_argument(
            "--key-passphrase",
            action=actions.PasswordAction,
            default="",
            metavar="PASSPHRASE",
            prompt="Passphrase for the private key: ",
            help="Passphrase for the private key. Omit the value to be prompted for it.",
        )

    def get_client(self, alias: Optional[str]) -> CertificateAuthorityClient:
        """Get the client with the given alias."""
        try:
            return ca_clients[alias]
        except ImproperlyConfigured as ex:
            raise CommandError(str(ex)) from ex

    def output_certificate(self, cert: SshCertificate, private_key: bool = False) -> None:
        """Output details and the certificate itself."""
        self.stdout.write(f"* Identity: {cert.identity}")
        self.stdout.write(f"* Key ID: {cert.key_id}")
        self.stdout.write(f"* Status: {cert.get_status_display()}")
        if cert.status == SshCertificate.STATUS_FAILED:
            self.stdout.write(f"* Error: {cert.error}")
        if not cert.certificate:
            return

        self.stdout.write(f"* Certificate type: {cert.certificate_type}")
        self.stdout.write(f"* Serial: {cert.serial}")
        self.stdout.write(f"* Valid from: {cert.valid_from}")
        self.stdout.write(f"* Valid to: {cert.valid_to}")
        self.stdout.write(f"* Public key fingerprint: {cert.public_key_fingerprint}")
        self.stdout.write(f"* Signing CA: {cert.signing_ca}")
        self.stdout.write("")
        self.stdout.write("Certificate:")
        self.stdout.write(cert.certificate)
        self.stdout.write("Public key:")
        self.stdout.write(cert.public_key)

        if private_key and cert.private_key:
            self.stdout.write("Private key:")
            self.stdout.write(cert.private_key, ending="")
