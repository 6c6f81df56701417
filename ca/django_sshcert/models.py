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

"""Django models for django-sshcert."""

from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from django_sshcert.constants import PublicKeyMethod
from django_sshcert.managers import SshCertificateManager
from django_sshcert.querysets import SshCertificateQuerySet

fingerprint_validator = RegexValidator(
    r"^[A-Z0-9-]+:[A-Za-z0-9+/=]*$", message=_("Fingerprint must have the form ALGORITHM:value.")
)


class SshCertificate(models.Model):
    """An SSH certificate requested from a certificate authority.

    A row is created as soon as the certificate authority acknowledged the request (with ``pending`` status),
    certificate data is only set once the certificate was retrieved.
    """

    STATUS_PENDING = "pending"
    STATUS_ISSUED = "issued"
    STATUS_FAILED = "failed"
    STATUS_CHOICES = (
        (STATUS_PENDING, _("Pending")),
        (STATUS_ISSUED, _("Issued")),
        (STATUS_FAILED, _("Failed")),
    )
    PUBLIC_KEY_METHOD_CHOICES = (
        (PublicKeyMethod.LOCAL.value, _("Generated locally")),
        (PublicKeyMethod.FILE.value, _("Supplied by caller")),
        (PublicKeyMethod.SERVICE.value, _("Generated by certificate authority")),
    )

    objects: SshCertificateManager = SshCertificateManager.from_queryset(SshCertificateQuerySet)()

    created = models.DateTimeField(auto_now_add=True)
    updated = models.DateTimeField(auto_now=True)

    identity = models.CharField(
        max_length=512,
        unique=True,
        verbose_name=_("Identity"),
        help_text=_("Pickup ID of the certificate at the certificate authority."),
    )
    key_id = models.CharField(
        max_length=256, verbose_name=_("Key ID"), help_text=_("Key ID of the certificate.")
    )
    public_key_method = models.CharField(
        max_length=8,
        choices=PUBLIC_KEY_METHOD_CHOICES,
        default=PublicKeyMethod.LOCAL.value,
        verbose_name=_("Public key method"),
        help_text=_("How the public key for the certificate was obtained."),
    )
    parameters = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("Parameters used for requesting the certificate (the passphrase is never stored)."),
    )
    passphrase_protected = models.BooleanField(
        default=False,
        verbose_name=_("Passphrase protected"),
        help_text=_("If a private key generated by the certificate authority is passphrase protected."),
    )
    status = models.CharField(
        max_length=8,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        help_text=_("Current status of the certificate."),
    )
    error = models.CharField(blank=True, max_length=256, help_text=_("Human readable error message."))

    certificate = models.TextField(blank=True, verbose_name=_("Certificate"))
    certificate_type = models.CharField(max_length=64, blank=True, verbose_name=_("Certificate type"))
    public_key = models.TextField(blank=True, verbose_name=_("Public key"))
    private_key = models.TextField(
        blank=True,
        verbose_name=_("Private key"),
        help_text=_("Private key, if it was generated locally or by the certificate authority."),
    )
    public_key_fingerprint = models.CharField(
        max_length=128,
        blank=True,
        validators=[fingerprint_validator],
        verbose_name=_("Public key fingerprint"),
    )
    signing_ca = models.CharField(
        max_length=128,
        blank=True,
        validators=[fingerprint_validator],
        verbose_name=_("Signing CA"),
        help_text=_("Fingerprint of the CA that signed the certificate."),
    )
    serial = models.CharField(max_length=64, blank=True, verbose_name=_("Serial"))
    valid_from = models.CharField(max_length=64, blank=True, verbose_name=_("Valid from"))
    valid_to = models.CharField(max_length=64, blank=True, verbose_name=_("Valid to"))

    class Meta:
        verbose_name = _("SSH certificate")
        verbose_name_plural = _("SSH certificates")

    def __str__(self) -> str:
        return f"{self.key_id} ({self.get_status_display()})"
