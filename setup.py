#!/usr/bin/env python3
#
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

"""setuptools based setup.py file for django-sshcert."""

from setuptools import find_packages
from setuptools import setup

install_requires = [
    "Django>=4.2",
    "pydantic>=2.5",
    "annotated-types",
    "cryptography>=42",
    "requests>=2.31",
    "celery>=5.3",
    "packaging",
    "PyYAML>=6.0",
]

setup(
    name="django-sshcert",
    version="0.2.0",
    description="Request SSH certificates from a certificate authority with Django.",
    license="GPLv3+",
    python_requires=">=3.10",
    packages=find_packages("ca", exclude=("django_sshcert.tests", "django_sshcert.tests.*")),
    package_dir={"": "ca"},
    py_modules=[],
    install_requires=install_requires,
    extras_require={
        "test": [
            "pytest",
            "pytest-django<4.13",
            "pytest-cov",
            "requests-mock",
            "freezegun",
        ],
    },
)
