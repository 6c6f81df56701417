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

"""
**django-sshcert** adds a few custom Django signals to important events to let you execute custom actions when
these events happen. Please see `Djangos documentation on signals
<https://docs.djangoproject.com/en/dev/ref/signals/>`_ for further information on how to use signals.
"""

import django.dispatch

pre_request_ssh_cert = django.dispatch.Signal()
"""Called before a certificate request is submitted to the certificate authority.

Parameters
----------

parameters : :py:class:`~django_sshcert.pydantic.request.SshCertificateParameters`
    The validated parameters of the request.
**kwargs
"""

post_request_ssh_cert = django.dispatch.Signal()
"""Called after the certificate authority acknowledged a certificate request.

Parameters
----------

certificate : :py:class:`~django_sshcert.models.SshCertificate`
    The pending certificate. The `identity` field holds the pickup ID.
**kwargs
"""

post_issue_ssh_cert = django.dispatch.Signal()
"""Called after a certificate was retrieved and stored.

Parameters
----------

certificate : :py:class:`~django_sshcert.models.SshCertificate`
    The issued certificate.
**kwargs
"""
