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

"""Various actions for argparse."""

import abc
import argparse
import getpass
import sys
import typing
from datetime import timedelta
from typing import Any, Optional

from django_sshcert.models import SshCertificate

ParseType = typing.TypeVar("ParseType")
ActionType = typing.TypeVar("ActionType")


class SingleValueAction(argparse.Action, typing.Generic[ParseType, ActionType], metaclass=abc.ABCMeta):
    """Abstract/generic base class for arguments that take a single value.

    The main purpose of this class is to improve type hinting.
    """

    @abc.abstractmethod
    def parse_value(self, value: ParseType) -> ActionType:
        """Parse the value passed to the command line. Implementing classes must implement this method."""
        raise NotImplementedError

    def __call__(  # type: ignore[override] # argparse.Action defines much looser type
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: ParseType,
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, self.parse_value(values))


class SshCertificateAction(SingleValueAction[str, SshCertificate]):
    """Action for naming an SSH certificate by its identity."""

    def __init__(self, pending: Optional[bool] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.pending = pending

    def parse_value(self, value: str) -> SshCertificate:
        """Parse the value for this action."""
        queryset = SshCertificate.objects.all()
        if self.pending is True:
            queryset = queryset.pending()
        elif self.pending is False:
            queryset = queryset.observable()

        try:
            return queryset.get(identity=value)
        except SshCertificate.DoesNotExist as ex:
            raise argparse.ArgumentError(self, f"{value}: Certificate not found.") from ex


class TimeoutAction(SingleValueAction[str, timedelta]):
    """Action for a timeout given in seconds.

    >>> parser = argparse.ArgumentParser()
    >>> parser.add_argument('--timeout', action=TimeoutAction)  # doctest: +ELLIPSIS
    TimeoutAction(...)
    >>> parser.parse_args(['--timeout', '30'])
    Namespace(timeout=datetime.timedelta(seconds=30))
    """

    def parse_value(self, value: str) -> timedelta:
        """Parse the value for this action."""
        try:
            seconds = float(value)
        except ValueError as ex:
            raise argparse.ArgumentError(self, f"{value}: Timeout must be a number.") from ex
        if seconds <= 0:
            raise argparse.ArgumentError(self, f"{value}: Timeout must be a positive number.")
        return timedelta(seconds=seconds)


class PublicKeyAction(SingleValueAction[str, str]):
    """Action for reading a public key from a file.

    Pass ``-`` to read the public key from stdin.
    """

    def parse_value(self, value: str) -> str:
        """Parse the value for this action."""
        if value == "-":
            return sys.stdin.read()

        try:
            with open(value, encoding="utf-8") as stream:
                return stream.read()
        except OSError as ex:
            raise argparse.ArgumentError(self, f"{value}: Could not read public key: {ex.strerror}") from ex


class PasswordAction(argparse.Action):
    """Action for adding a password argument.

    If the cli does not pass an argument value, the action prompt the user for a password.

    >>> parser = argparse.ArgumentParser()
    >>> parser.add_argument('--password', action=PasswordAction)  # doctest: +ELLIPSIS
    PasswordAction(...)
    >>> parser.parse_args(['--password', 'secret'])
    Namespace(password='secret')
    """

    def __init__(self, prompt: str = "Password: ", **kwargs: Any) -> None:
        kwargs.setdefault("nargs", "?")
        super().__init__(**kwargs)
        self.prompt = prompt

    def __call__(  # type: ignore[override] # argparse.Action defines much looser type for values
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Optional[str],
        option_string: Optional[str] = None,
    ) -> None:
        if values is None:
            values = getpass.getpass(prompt=self.prompt)

        setattr(namespace, self.dest, values)
