import collections.abc
import logging
import operator
import re
import typing
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum, Flag
from functools import reduce
from typing import Any, Literal, get_args, get_origin

from argconv.annotations import NoneType, is_nonetype, is_union, resolve, resolve_annotated, resolve_new_type
from argconv.exceptions import CoercionError
from argconv.utils import UNSET, is_class_and_subclass

logger = logging.getLogger(__name__)

_implicit_iterable_type_mapping: dict[Any, Any] = {
    Iterable: list[str],
    typing.Sequence: list[str],
    Sequence: list[str],
    frozenset: frozenset[str],
    list: list[str],
    set: set[str],
    tuple: tuple[str, ...],
}

ITERABLE_TYPES = {
    Iterable,
    typing.Sequence,
    Sequence,
    frozenset,
    list,
    set,
    tuple,
}

# Abstract iterable hints are materialized as lists.
_concrete_iterable_types: dict[Any, type] = {
    Iterable: list,
    typing.Sequence: list,
    Sequence: list,
    frozenset: frozenset,
    list: list,
    set: set,
}

# Types whose natural representation on the command line is the raw string.
STRING_TYPES = {str, Any, object}


def _bool(s: str) -> bool:
    s = s.lower()
    if s in {"no", "n", "0", "false", "f", "off"}:
        return False
    elif s in {"yes", "y", "1", "true", "t", "on"}:
        return True
    else:
        # Being a little bit conservative when coercing strings into boolean.
        raise ValueError(s)


def _int(s: str) -> int:
    s = s.lower()
    if s.startswith("0x"):
        return int(s, 16)
    elif s.startswith("0o"):
        return int(s, 8)
    elif s.startswith("0b"):
        return int(s, 2)
    elif "." in s:
        # Casting to a float first allows for things like "30.0"
        return int(round(float(s)))
    else:
        return int(s)


def _bytes(s: str) -> bytes:
    return bytes(s, encoding="utf8")


def _bytearray(s: str) -> bytearray:
    return bytearray(_bytes(s))


def _decimal(s: str) -> Decimal:
    try:
        return Decimal(s)
    except InvalidOperation as e:
        raise ValueError(s) from e


def _date(s: str) -> date:
    return date.fromisoformat(s)


def _datetime(s: str) -> datetime:
    formats = [
        "%Y-%m-%d",  # 1956-01-31
        "%Y-%m-%dT%H:%M:%S",  # 1956-01-31T10:00:00
        "%Y-%m-%d %H:%M:%S",  # 1956-01-31 10:00:00
        "%Y-%m-%dT%H:%M:%S%z",  # 1956-01-31T10:00:00+0000
        "%Y-%m-%dT%H:%M:%S.%f",  # 1956-01-31T10:00:00.123456
        "%Y-%m-%dT%H:%M:%S.%f%z",  # 1956-01-31T10:00:00.123456+0000
    ]

    for fmt in formats:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue

    raise ValueError(s)


def _timedelta(s: str) -> timedelta:
    """Parse a duration string like ``"1h30m"``."""
    negative = False
    if s.startswith("-"):
        negative = True
        s = s[1:]

    matches = re.findall(r"((\d+\.\d+|\d+)([smhdw]))", s)
    if not matches or "".join(m[0] for m in matches) != s:
        raise ValueError(f"Could not parse duration string: {s}")

    multipliers = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}
    seconds = sum(float(value) * multipliers[unit] for _, value, unit in matches)

    if negative:
        seconds = -seconds
    return timedelta(seconds=seconds)


# For types that need more logic than just invoking their type
_converters: dict[Any, typing.Callable[[str], Any]] = {
    bool: _bool,
    int: _int,
    bytes: _bytes,
    bytearray: _bytearray,
    Decimal: _decimal,
    date: _date,
    datetime: _datetime,
    timedelta: _timedelta,
}


def _enum_key(s: str) -> str:
    return s.lower().replace("-", "_")


def get_enum_member(type_: type[Enum], value: str) -> Enum:
    """Match a raw value to an enum's member.

    Matching is case-insensitive and treats ``-`` and ``_`` as equivalent.
    """
    if not isinstance(value, str):
        raise CoercionError(value=value, target_type=type_)
    key = _enum_key(value)
    for name, member in type_.__members__.items():
        if _enum_key(name) == key:
            return member
    raise CoercionError(value=value, target_type=type_)


def _as_values(value: Any) -> list[Any]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _convert_tuple(type_: Any, value: Any) -> tuple:
    values = _as_values(value)
    inner_types = tuple(x for x in get_args(type_) if x is not ...)
    if ... in get_args(type_) or not inner_types:
        # variable-length tuple (list-like)
        inner_type = inner_types[0] if inner_types else str
        return tuple(_convert(inner_type, v) for v in values)

    if len(inner_types) != len(values):
        raise CoercionError(
            msg=f"Incorrect number of arguments: expected {len(inner_types)} but got {len(values)}.",
            value=value,
            target_type=type_,
        )
    return tuple(_convert(inner_type, v) for inner_type, v in zip(inner_types, values, strict=True))


def _convert_scalar(type_: Any, value: Any) -> Any:
    if not isinstance(value, str) and isinstance(value, Iterable):
        values = list(value)
        if len(values) != 1:
            raise CoercionError(value=value, target_type=type_)
        value = values[0]

    if isinstance(type_, type) and isinstance(value, type_):
        return value

    try:
        if isinstance(value, str):
            return _converters.get(type_, type_)(value)
        return type_(value)
    except CoercionError:
        raise
    except (ValueError, TypeError, ArithmeticError) as e:
        raise CoercionError(value=value, target_type=type_) from e


def _convert(type_: Any, value: Any) -> Any:
    """Inner recursive conversion function for public :func:`convert`."""
    type_ = resolve_new_type(resolve_annotated(type_))
    type_ = _implicit_iterable_type_mapping.get(type_, type_)

    if type_ in STRING_TYPES:
        if type_ is str and not isinstance(value, str):
            return _convert_scalar(str, value)
        return value

    origin_type = get_origin(type_)
    inner_types = get_args(type_)

    if is_union(type_):
        if value is None and any(is_nonetype(t) for t in inner_types):
            return None
        for t in inner_types:
            if is_nonetype(t):
                continue
            try:
                return _convert(t, value)
            except CoercionError:
                pass
        raise CoercionError(value=value, target_type=type_)
    elif origin_type is Literal:
        # Try coercing the value into each allowed Literal value (left-to-right).
        for choice in inner_types:
            try:
                res = _convert(type(choice), value)
            except CoercionError:
                continue
            if res == choice:
                return res
        raise CoercionError(value=value, target_type=type_)
    elif origin_type is tuple:
        return _convert_tuple(type_, value)
    elif origin_type in ITERABLE_TYPES:
        inner_type = inner_types[0] if inner_types else str
        return _concrete_iterable_types[origin_type](_convert(inner_type, v) for v in _as_values(value))
    elif is_class_and_subclass(type_, Flag):
        if isinstance(value, type_):
            return value
        return reduce(operator.or_, (get_enum_member(type_, v) for v in _as_values(value)), type_(0))
    elif is_class_and_subclass(type_, Enum):
        if isinstance(value, type_):
            return value
        values = _as_values(value)
        if len(values) != 1 or not isinstance(values[0], str):
            raise CoercionError(value=value, target_type=type_)
        return get_enum_member(type_, values[0])
    else:
        return _convert_scalar(type_, value)


def convert(type_: Any, value: str | Sequence[str] | None) -> Any:
    """Coerce a raw command-line value into a specified type.

    Parameters
    ----------
    type_: Any
        A type hint/annotation to coerce ``value`` into.
        :obj:`None` and :obj:`.UNSET` leave ``value`` untouched.
    value: str | Sequence[str] | None
        A single raw token value, a sequence of raw token values,
        or an already-converted python object.

    Raises
    ------
    CoercionError
        ``value`` could not be coerced into ``type_``.

    Returns
    -------
    Any
        Coerced version of ``value``. If ``value`` is :obj:`None`,
        the type-appropriate default from :func:`default_for` is returned.
    """
    if type_ is UNSET or type_ is None:
        return value
    if value is None:
        return default_for(type_)
    out = _convert(type_, value)
    logger.debug("Converted %r into %r for %r.", value, out, type_)
    return out


def default_for(type_: Any) -> Any:
    """The "zero" value for a type hint.

    Numbers and booleans get their zero, collections are empty,
    everything else (including ``Optional[...]``) is :obj:`None`.
    """
    if type_ is UNSET or type_ is None:
        return None
    if is_union(resolve_annotated(type_)) and NoneType in get_args(resolve_annotated(type_)):
        return None

    type_ = resolve(type_)
    type_ = _implicit_iterable_type_mapping.get(type_, type_)
    origin_type = get_origin(type_) or type_

    if origin_type is tuple:
        return ()
    elif origin_type in _concrete_iterable_types:
        return _concrete_iterable_types[origin_type]()
    elif origin_type is dict:
        return {}
    elif type_ in (bool, int, float, complex):
        return type_()
    return None


def token_count(type_: Any) -> tuple[int, bool]:
    """The number of tokens the type hint consumes.

    Returns
    -------
    int
        Number of tokens to consume.
        ``0`` for flags (``bool``).
    bool
        If ``True``, the hint accepts any number of (groups of) tokens.
    """
    type_ = resolve(type_)
    origin_type = get_origin(type_)

    if (origin_type or type_) is tuple:
        args = get_args(type_)
        if args:
            return sum(token_count(x)[0] for x in args if x is not ...), ... in args
        else:
            return 1, True
    elif (origin_type or type_) is bool:
        return 0, False
    elif type_ in ITERABLE_TYPES or (origin_type in ITERABLE_TYPES and len(get_args(type_)) == 0):
        return 1, True
    elif is_class_and_subclass(type_, Flag):
        return 1, True
    elif origin_type in ITERABLE_TYPES or origin_type is collections.abc.Iterable:
        return token_count(get_args(type_)[0])[0], True
    elif is_union(type_):
        sub_args = get_args(type_)
        token_count_target = token_count(sub_args[0])
        for sub_type_ in sub_args[1:]:
            if token_count(sub_type_) != token_count_target:
                raise ValueError(
                    f"Cannot Union types that consume different numbers of tokens: {sub_args[0]} {sub_type_}"
                )
        return token_count_target
    else:
        return 1, False
