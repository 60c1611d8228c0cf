from unittest.mock import Mock

import pytest

from argconv import Failure, ParseError, Success


def set_error(message):
    def validator(result):
        result.error_message = message

    return validator


def test_custom_error_no_validators(parse):
    result = parse(["a"])
    assert result.custom_error() is None


def test_custom_error_existing_message(parse):
    validator = Mock()
    result = parse(["a"], validators=[validator])
    result.error_message = "Already broken."

    error = result.custom_error()

    assert error == ParseError(message="Already broken.")
    assert error.symbol_result is result
    validator.assert_not_called()


def test_custom_error_validators_in_order(parse):
    calls = []

    def first(result):
        calls.append("first")

    def second(result):
        calls.append("second")
        result.error_message = "Second failed."

    third = Mock()

    result = parse(["a"], validators=[first, second, third])
    error = result.custom_error()

    assert calls == ["first", "second"]
    assert str(error) == "Second failed."
    third.assert_not_called()


def test_custom_error_first_failure_wins(parse):
    result = parse(["a"], validators=[set_error("One."), set_error("Two.")])
    assert str(result.custom_error()) == "One."


def test_custom_error_blank_message_continues(parse):
    final = Mock()
    result = parse(["a"], validators=[set_error("   "), final])
    assert result.custom_error() is None
    final.assert_called_once_with(result)


def test_custom_error_validators_see_tokens(parse):
    def validator(result):
        if any(token.value == "bad" for token in result.tokens):
            result.error_message = "Token 'bad' is not allowed."

    assert parse(["good"], name="x", validators=[validator]).custom_error() is None
    assert str(parse(["bad"], name="y", validators=[validator]).custom_error()) == "Token 'bad' is not allowed."


@pytest.mark.parametrize("exception_type", [ValueError, TypeError, AssertionError])
def test_custom_error_validator_raises(parse, exception_type):
    def validator(result):
        raise exception_type("Must be positive.")

    result = parse(["-1"], validators=[validator])

    assert str(result.custom_error()) == "Must be positive."
    assert result.error_message == "Must be positive."


def test_custom_error_validator_raises_without_message(parse):
    def validator(result):
        raise ValueError

    result = parse(["-1"], validators=[validator])
    assert str(result.custom_error()) == "Invalid value for argument 'arg'."


def test_custom_error_add_validator(parse):
    result = parse(["a"])
    result.argument.add_validator(set_error("Added later."))
    assert str(result.custom_error()) == "Added later."


def test_custom_error_independent_of_conversion(parse):
    converter = Mock(return_value=1)
    result = parse(["a"], converter=converter, validators=[set_error("Invalid.")])

    assert str(result.custom_error()) == "Invalid."
    converter.assert_not_called()


@pytest.mark.parametrize("hint", [str, int])
def test_custom_error_does_not_fail_conversion(parse, hint):
    result = parse(["5"], hint=hint, validators=[set_error("Validator says no.")])

    assert str(result.custom_error()) == "Validator says no."
    assert type(result.get_conversion_result()) is Success
    assert result.get_value_or_default(int) == 5
    assert result.error_message == "Validator says no."


def test_converter_message_after_custom_error(parse):
    def converter(result):
        result.error_message = "Converter says no."

    result = parse(["5"], converter=converter, validators=[set_error("Validator says no.")])
    result.custom_error()

    assert result.get_conversion_result() == Failure(result.argument, "Converter says no.")
