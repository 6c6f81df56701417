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

"""Deprecation classes in django-sshcert."""

import warnings

# IMPORTANT: Do **not** import any module from django_sshcert here, or you risk circular imports.


class RemovedInDjangoSshCert030Warning(PendingDeprecationWarning):
    """Warning if a feature will be removed in django-sshcert~=0.3.0."""

    version = "0.3"


RemovedInNextVersionWarning = RemovedInDjangoSshCert030Warning

DeprecationWarningType = type[RemovedInDjangoSshCert030Warning]


def deprecate_parameter(
    name: str, category: DeprecationWarningType, replacement: str, stacklevel: int = 2
) -> None:
    """Emit a warning that the configuration parameter `name` is deprecated in favor of `replacement`."""
    warnings.warn(
        f"{name} is deprecated and will be removed in django-sshcert {category.version}. "
        f"Use {replacement} instead.",
        category=category,
        stacklevel=stacklevel,
    )
