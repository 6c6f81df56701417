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

"""pytest configuration."""

# pylint: disable=redefined-outer-name  # requested pytest fixtures show up this way.

from ca import settings_utils  # noqa: F401  # to get rid of pytest warnings for untested modules

# NOTE: Assertion rewrites are in __init__.py

# Load fixtures from local "plugin":
pytest_plugins = ["django_sshcert.tests.base.fixtures"]
