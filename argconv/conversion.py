"""Outcome of converting an argument's tokens into a value.

Exactly one of :class:`Success`, :class:`Failure` or :class:`TypeMismatchFailure`
describes a conversion; consumers are expected to ``match`` over :data:`ConversionOutcome`.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

from attrs import field

from argconv._convert import convert, default_for
from argconv.exceptions import CoercionError
from argconv.utils import UNSET, frozen

if TYPE_CHECKING:
    from argconv.argument import Argument
    from argconv.result import ArgumentResult

logger = logging.getLogger(__name__)


@frozen
class Success:
    """Conversion produced a value."""

    argument: "Argument" = field(eq=False, repr=lambda a: repr(a.name))
    value: Any = None

    @property
    def error_message(self) -> None:
        return None


@frozen
class Failure:
    """Conversion failed; ``error_message`` is shown to the user."""

    argument: "Argument" = field(eq=False, repr=lambda a: repr(a.name))
    error_message: str


@frozen
class TypeMismatchFailure:
    """A raw token could not be converted into the argument's declared type."""

    argument: "Argument" = field(eq=False, repr=lambda a: repr(a.name))
    error_message: str
    value: str | None = field(kw_only=True)
    """Offending raw token value."""

    expected_type: Any = field(kw_only=True)
    """Type the token was supposed to be converted into."""

    @classmethod
    def from_result(
        cls,
        argument_result: "ArgumentResult",
        value: str | None,
        expected_type: Any,
    ) -> "TypeMismatchFailure":
        context = argument_result if argument_result.parent is None else argument_result.parent
        message = argument_result.resources.format_argument_conversion_cannot_parse(context, value, expected_type)
        return cls(argument_result.argument, message, value=value, expected_type=expected_type)


ConversionOutcome: TypeAlias = Success | Failure | TypeMismatchFailure


def _offending_value(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        return str(value[0]) if value else None
    return str(value)


def convert_if_needed(
    outcome: ConversionOutcome,
    argument_result: "ArgumentResult",
    type_: Any = UNSET,
) -> ConversionOutcome:
    """Coerce a successful outcome's value into ``type_``.

    Failed outcomes, and any outcome when ``type_`` is :obj:`.UNSET`, are returned unchanged.
    A value that cannot be coerced produces a :class:`TypeMismatchFailure`.
    """
    match outcome:
        case Success(value=value) if type_ is not UNSET:
            try:
                converted = convert(type_, value)
            except CoercionError:
                logger.debug("Unable to coerce %r into %r for %s.", value, type_, argument_result)
                return TypeMismatchFailure.from_result(argument_result, _offending_value(value), type_)
            if converted is value:
                return outcome
            return Success(outcome.argument, converted)
        case _:
            return outcome


def get_value_or_default(outcome: ConversionOutcome, type_: Any = UNSET) -> Any:
    """The successful value, or the type-appropriate default if conversion failed."""
    match outcome:
        case Success(value=value):
            return value
        case Failure() | TypeMismatchFailure():
            return default_for(type_)
