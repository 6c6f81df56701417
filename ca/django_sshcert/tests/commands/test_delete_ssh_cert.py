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

"""Test the delete_ssh_cert management command."""

import pytest

from django_sshcert.models import SshCertificate
from django_sshcert.tests.base.utils import cmd

pytestmark = [pytest.mark.django_db]


@pytest.mark.parametrize("status", (SshCertificate.STATUS_PENDING, SshCertificate.STATUS_FAILED))
def test_delete(pending_cert: SshCertificate, status: str) -> None:
    """Test deleting a certificate that was not issued."""
    pending_cert.status = status
    pending_cert.save()

    stdout, stderr = cmd("delete_ssh_cert", pending_cert.identity)
    assert stdout == f"{pending_cert.identity}: Certificate deleted.\n"
    assert stderr == ""
    assert SshCertificate.objects.exists() is False


def test_delete_issued(issued_cert: SshCertificate) -> None:
    """Test deleting an issued certificate."""
    stdout, stderr = cmd("delete_ssh_cert", issued_cert.identity)
    assert stdout == f"{issued_cert.identity}: Certificate deleted.\n"
    assert stderr == ""
    assert SshCertificate.objects.filter(identity=issued_cert.identity).exists() is False


def test_delete_unknown(issued_cert: SshCertificate) -> None:
    """Test deleting a certificate that does not exist."""
    stdout, stderr = cmd("delete_ssh_cert", "unknown")
    assert stdout == "unknown: Certificate not found, nothing to delete.\n"
    assert stderr == ""
    assert SshCertificate.objects.filter(identity=issued_cert.identity).exists() is True
