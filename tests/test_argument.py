from typing import Any, Optional, Sequence

import pytest

from argconv import Argument, ArgumentArity, Command, InvalidOperationError, Option
from argconv.arity import MAXIMUM_ARITY


@pytest.mark.parametrize(
    "hint",
    [str, Optional[str], Any, list, list[str], Sequence[str]],
)
def test_string_hints_have_no_converter(hint):
    assert Argument("arg", hint=hint).converter is None


@pytest.mark.parametrize(
    "hint",
    [int, float, bool, list[int], tuple[str, ...], tuple[str, str], set[str]],
)
def test_typed_hints_have_builtin_converter(hint):
    assert Argument("arg", hint=hint).converter is not None


def test_custom_converter_wins():
    def converter(result):
        return 1

    argument = Argument("arg", hint=int, converter=converter)
    assert argument.converter is converter
    assert argument.custom_converter is converter

    argument.custom_converter = None
    assert argument.converter is not converter
    assert argument.converter is not None


def test_default_value():
    argument = Argument("arg")
    assert not argument.has_default_value

    with pytest.raises(InvalidOperationError):
        argument.get_default_value(None)

    argument.set_default_value(5)
    assert argument.has_default_value
    assert argument.get_default_value(None) == 5

    argument.set_default_value_factory(lambda result: [])
    first = argument.get_default_value(None)
    assert first == []
    assert argument.get_default_value(None) is not first


def test_default_none_is_a_default():
    assert Argument("arg", default=None).has_default_value


def test_option_argument():
    option = Option("--out-dir", aliases="-o")
    assert option.names == ("--out-dir", "-o")
    assert option.argument.name == "out-dir"
    assert option.argument.hint is str


def test_symbols_compare_by_identity():
    assert Argument("arg") != Argument("arg")


def test_command():
    argument = Argument("arg")
    option = Option("--flag")
    command = Command("cmd", arguments=argument)
    command.add_option(option)

    assert command.arguments == [argument]
    assert command.options == [option]
    assert command.kind == "command"
    assert option.kind == "option"
    assert argument.kind == "argument"


def test_option_does_not_change_shared_argument():
    def validator(result):
        pass

    argument = Argument("files", hint=list[str], default=["a"], validators=[validator])
    option = Option("--files", argument=argument)

    assert argument.arity == ArgumentArity(0, MAXIMUM_ARITY)
    assert option.argument.arity == ArgumentArity(1, MAXIMUM_ARITY)
    assert option.argument is not argument
    assert option.argument.get_default_value(None) == ["a"]
    assert option.argument.validators == [validator]

    option.argument.add_validator(validator)
    assert argument.validators == [validator]
