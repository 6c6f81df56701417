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

"""Celery application for the django-sshcert Django project."""

import os
from datetime import timedelta

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ca.settings")

app = Celery("django_sshcert")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Certificates that were not issued in time are retrieved in the background. An entry with the same name in
# CELERY_BEAT_SCHEDULE takes precedence.
app.conf.beat_schedule = {
    "retrieve-pending-ssh-certificates": {
        "task": "django_sshcert.tasks.retrieve_pending_ssh_certificates",
        "schedule": timedelta(minutes=5),
    },
    **app.conf.beat_schedule,
}
