from typing import TYPE_CHECKING, Any, Literal, Optional, get_args, get_origin

from attrs import define

from argconv.annotations import get_hint_name
from argconv.utils import UNSET

if TYPE_CHECKING:
    from argconv.argument import Argument


__all__ = [
    "ArgconvError",
    "CoercionError",
    "InvalidOperationError",
]


class InvalidOperationError(RuntimeError):
    """A method was called while the object was in a state that does not permit it."""

    # This doesn't derive from ArgconvError since this is a developer error
    # rather than a user-input error.


@define(kw_only=True)
class ArgconvError(Exception):
    """Root exception for conversion errors."""

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    argument: Optional["Argument"] = None
    """
    :class:`Argument` that was being converted.
    """

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return ""


@define(kw_only=True)
class CoercionError(ArgconvError):
    """There was an error performing automatic type coercion."""

    value: Any = UNSET
    """
    Raw value that couldn't be coerced.
    """

    target_type: Any = None
    """
    Intended type to coerce into.
    """

    def __str__(self):
        if self.msg is not None:
            return self.msg

        if get_origin(self.target_type) is Literal:
            choices = "{" + ", ".join(repr(x) for x in get_args(self.target_type)) + "}"
            target_type_name = f"one of {choices}"
        else:
            target_type_name = get_hint_name(self.target_type)

        if self.value is UNSET:
            return f"Unable to convert value to {target_type_name}."
        return f'Unable to convert "{self.value}" into {target_type_name}.'
