import pytest
from rich.console import Console

from argconv import Argument, Command, CommandResult


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def command():
    return Command("cmd")


@pytest.fixture
def command_result(command):
    return CommandResult(command)


@pytest.fixture
def parse(command, command_result):
    """Attribute ``tokens`` to a new argument of ``command`` and return its result.

    Keyword arguments are forwarded to :class:`Argument`.
    """

    def inner(tokens=(), name="arg", **kwargs):
        argument = Argument(name, **kwargs)
        command.add_argument(argument)
        return command_result.add_argument(argument, tokens)

    return inner
