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

"""Default settings for the django-sshcert Django project."""

import os
from pathlib import Path

from ca.settings_utils import load_secret_key, load_settings_from_environment, load_settings_from_files

# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
BASE_DIR = Path(__file__).resolve().parent.parent  # ca/

DEBUG = False

ADMINS = (
    # ('Your Name', 'your_email@example.com'),
)

if os.environ.get("SQLITE_NAME"):
    db_file = os.environ.get("SQLITE_NAME")
else:
    db_file = os.path.join(BASE_DIR, "db.sqlite3")


DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": db_file,
    }
}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Hosts/domain names that are valid for this site; required if DEBUG is False
ALLOWED_HOSTS: list[str] = []

# Local time zone for this installation. Choices can be found here:
# http://en.wikipedia.org/wiki/List_of_tz_zones_by_name
TIME_ZONE = "UTC"

LANGUAGE_CODE = "en-us"
USE_I18N = True
USE_TZ = True

# Make this unique, and don't share it with anybody.
SECRET_KEY = os.environ.get("DJANGO_SSHCERT_SECRET_KEY", "")
SECRET_KEY_FILE = ""

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django_sshcert",
]
SSHCERT_CUSTOM_APPS: list[str] = []

# Logging configuration. Set LOGGING to a dict to replace the default configuration completely, or just
# LOG_FORMAT/LOG_LEVEL to adapt it.
LOGGING = None
LOG_FORMAT = "[%(levelname)-8s %(asctime).19s] %(message)s"
LOG_LEVEL = "WARNING"
LIBRARY_LOG_LEVEL = "WARNING"

# Certificate authorities that certificates can be requested from. Configure "url" and "access_token" in
# OPTIONS, e.g. in a YAML settings file.
SSHCERT_CLIENTS = {
    "default": {
        "BACKEND": "django_sshcert.clients.tpp.TppClient",
        "OPTIONS": {},
    },
}
SSHCERT_USE_CELERY = False

# Load settings from files
for _setting, _value in load_settings_from_files(BASE_DIR):
    globals()[_setting] = _value

# Load settings from environment variables
for _setting, _value in load_settings_from_environment():
    globals()[_setting] = _value

# Load SECRET_KEY from a file if not already defined.
# NOTE: This must be called AFTER load_settings_from_environment(), as this might set SECRET_KEY_FILE in the
#       first place.
SECRET_KEY = load_secret_key(SECRET_KEY, SECRET_KEY_FILE)

INSTALLED_APPS = INSTALLED_APPS + SSHCERT_CUSTOM_APPS

if LOGGING is None:
    LOGGING = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "main": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "main",
            },
        },
        "loggers": {
            "django_sshcert": {
                "handlers": ["console"],
                "level": LOG_LEVEL,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": LIBRARY_LOG_LEVEL,
        },
    }
