from typing import Optional

import pytest

from argconv import Argument, ArgumentArity, ArgumentResult, Failure
from argconv.arity import EXACTLY_ONE, MAXIMUM_ARITY, ONE_OR_MORE, ZERO, ZERO_OR_MORE, ZERO_OR_ONE


@pytest.mark.parametrize(
    "minimum, maximum",
    [
        (-1, 1),
        (0, -1),
        (2, 1),
        (0, MAXIMUM_ARITY + 1),
    ],
)
def test_arity_invalid(minimum, maximum):
    with pytest.raises(ValueError):
        ArgumentArity(minimum, maximum)


def test_arity_unbounded_by_default():
    arity = ArgumentArity(1)
    assert arity.maximum == MAXIMUM_ARITY
    assert arity.is_unbounded
    assert arity == ONE_OR_MORE


def test_arity_contains():
    arity = ArgumentArity(1, 3)
    assert 0 not in arity
    assert 1 in arity
    assert 3 in arity
    assert 4 not in arity


def test_arity_str():
    assert str(ArgumentArity(1, 3)) == "[1, 3]"
    assert str(ZERO_OR_MORE) == "[0, *]"


@pytest.mark.parametrize(
    "hint, parent_kind, expected",
    [
        (str, "command", EXACTLY_ONE),
        (int, "command", EXACTLY_ONE),
        (Optional[int], "command", EXACTLY_ONE),
        (bool, "command", ZERO_OR_ONE),
        (list[int], "command", ZERO_OR_MORE),
        (list[int], "option", ONE_OR_MORE),
        (tuple[int, ...], "command", ZERO_OR_MORE),
        (tuple[int, str], "command", ArgumentArity(2, 2)),
        (set, "command", ZERO_OR_MORE),
    ],
)
def test_arity_default(hint, parent_kind, expected):
    assert ArgumentArity.default(hint, parent_kind) == expected


def test_argument_arity_explicit_overrides_hint():
    argument = Argument("arg", hint=list[str], arity=ZERO)
    assert argument.arity == ZERO

    argument.arity = None
    assert argument.arity == ZERO_OR_MORE


def test_validate_within_bounds(parse):
    result = parse(["a", "b"], arity=ZERO_OR_MORE)
    assert ArgumentArity.validate(result, 0, 2) is None


def test_validate_too_few_with_default(parse):
    result = parse([], default="x")
    assert ArgumentArity.validate(result, 1, 1) is None


def test_validate_too_few_without_parent():
    result = ArgumentResult(Argument("arg"))
    failure = ArgumentArity.validate(result, 1, 1)
    assert failure == Failure(result.argument, "Required argument missing for argument: 'arg'.")
