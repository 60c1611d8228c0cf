import pytest

from argconv import Argument, ArgumentArity, InvalidOperationError, Token
from argconv.arity import ZERO_OR_MORE


def _values(tokens):
    return [token.value for token in tokens]


def test_only_take_partitions_tokens(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)
    result.only_take(2)

    assert _values(result.tokens) == ["a", "b"]
    assert _values(result.passed_on_tokens) == ["c"]


def test_only_take_twice(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)
    result.only_take(2)

    with pytest.raises(InvalidOperationError):
        result.only_take(1)

    with pytest.raises(InvalidOperationError):
        result.only_take(-1)

    assert _values(result.tokens) == ["a", "b"]
    assert _values(result.passed_on_tokens) == ["c"]


def test_only_take_negative(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)

    with pytest.raises(ValueError):
        result.only_take(-1)

    assert _values(result.tokens) == ["a", "b", "c"]
    assert result.passed_on_tokens is None

    # A rejected call does not count.
    result.only_take(1)
    assert _values(result.tokens) == ["a"]


def test_only_take_zero(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)
    result.only_take(0)

    assert _values(result.tokens) == ["a", "b", "c"]
    assert result.passed_on_tokens is None

    with pytest.raises(InvalidOperationError):
        result.only_take(1)


def test_only_take_more_than_owned(parse):
    result = parse(["a", "b"], arity=ZERO_OR_MORE)
    result.only_take(5)

    assert _values(result.tokens) == ["a", "b"]
    assert result.passed_on_tokens == ()


def test_only_take_preserves_token_identity(parse):
    tokens = [Token("a"), Token("b")]
    result = parse(tokens, arity=ZERO_OR_MORE)
    result.only_take(1)

    assert result.tokens[0] is tokens[0]
    assert result.passed_on_tokens[0] is tokens[1]


def test_only_take_before_conversion(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)
    result.only_take(1)
    assert result.get_value_or_default() == ["a"]


def test_only_take_after_conversion_keeps_cached_outcome(parse):
    result = parse(["a", "b", "c"], arity=ZERO_OR_MORE)
    assert result.get_value_or_default() == ["a", "b", "c"]

    result.only_take(1)
    assert _values(result.tokens) == ["a"]
    assert result.get_value_or_default() == ["a", "b", "c"]


def test_only_take_resolves_arity_violation(parse):
    result = parse(["a", "b", "c"], arity=ArgumentArity(1, 2))
    result.only_take(2)
    assert result.get_value_or_default() == ["a", "b"]


def test_passed_on_tokens_feed_next_argument(command, command_result):
    files = Argument("files", hint=list[str], arity=ArgumentArity(1, 3))
    count = Argument("count", hint=int, default=1)
    command.add_argument(files)
    command.add_argument(count)

    files_result = command_result.add_argument(files, ["a.txt", "b.txt", "7"])
    files_result.only_take(2)
    count_result = command_result.add_argument(count, files_result.passed_on_tokens)

    assert files_result.get_value_or_default() == ["a.txt", "b.txt"]
    assert count_result.get_value_or_default() == 7
