import typing
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Literal, get_args, get_origin

from attrs import Factory, define, evolve, field

from argconv._convert import STRING_TYPES, convert
from argconv.annotations import resolve
from argconv.arity import ArgumentArity
from argconv.exceptions import InvalidOperationError
from argconv.utils import UNSET, to_list_converter, to_tuple_converter

if TYPE_CHECKING:
    from argconv.result import ArgumentResult

DefaultValueFactory = Callable[["ArgumentResult"], Any]
Converter = Callable[["ArgumentResult"], Any]
Validator = Callable[["ArgumentResult"], None]


# Hints satisfied by the plain list of raw token values.
_RAW_SEQUENCE_TYPES = {list, Sequence, typing.Sequence, Iterable}


def _is_string_hint(hint: Any) -> bool:
    """Whether tokens can be handed over as raw strings without conversion."""
    hint = resolve(hint)
    if hint in STRING_TYPES or hint in _RAW_SEQUENCE_TYPES:
        return True
    if get_origin(hint) not in _RAW_SEQUENCE_TYPES:
        return False
    return all(resolve(x) in STRING_TYPES for x in get_args(hint))


@define(eq=False)
class Symbol:
    """A named element of a command line: a command, an option, or an argument."""

    kind: ClassVar[str] = "symbol"

    name: str
    description: str = field(default="", kw_only=True)


@define(eq=False)
class Argument(Symbol):
    """Declaration of a positional value and how its tokens become a python value.

    Parameters
    ----------
    name: str
        Name used in messages and help.
    hint: Any
        Declared value type. Non-string types get a built-in converter.
    arity: ArgumentArity | None
        Number of tokens accepted. Inferred from ``hint`` if not provided.
    default: Any
        Static default value. Mutually exclusive with ``default_factory``.
    default_factory: Callable[[ArgumentResult], Any] | None
        Produces the default value. May record ``error_message`` on the result it receives.
    converter: Callable[[ArgumentResult], Any] | None
        Custom conversion of the result's tokens.
    validators: Iterable[Callable[[ArgumentResult], None]]
        Run in order by :meth:`.ArgumentResult.custom_error`.
    """

    kind: ClassVar[str] = "argument"

    hint: Any = field(default=str, kw_only=True)
    _arity: ArgumentArity | None = field(default=None, alias="arity", kw_only=True)
    _default: Any = field(default=UNSET, alias="default", kw_only=True, repr=False)
    _default_factory: DefaultValueFactory | None = field(
        default=None, alias="default_factory", kw_only=True, repr=False
    )
    _converter: Converter | None = field(default=None, alias="converter", kw_only=True, repr=False)
    validators: list[Validator] = field(factory=list, converter=to_list_converter, kw_only=True, repr=False)

    _parent_kind: Literal["command", "option"] = field(default="command", init=False, repr=False)

    def __attrs_post_init__(self):
        if self._default is not UNSET:
            if self._default_factory is not None:
                raise ValueError("Cannot specify both default and default_factory.")
            self.set_default_value(self._default)
            self._default = UNSET

    @property
    def arity(self) -> ArgumentArity:
        if self._arity is None:
            return ArgumentArity.default(self.hint, self._parent_kind)
        return self._arity

    @arity.setter
    def arity(self, value: ArgumentArity | None):
        self._arity = value

    @property
    def has_default_value(self) -> bool:
        return self._default_factory is not None

    def set_default_value(self, value: Any):
        """Use a static ``value`` when no tokens are supplied."""
        self._default_factory = lambda _: value

    def set_default_value_factory(self, factory: DefaultValueFactory):
        """Compute the default from a fresh :class:`.ArgumentResult` when no tokens are supplied."""
        self._default_factory = factory

    def get_default_value(self, argument_result: "ArgumentResult") -> Any:
        if self._default_factory is None:
            raise InvalidOperationError(f"Argument {self.name!r} does not have a default value.")
        return self._default_factory(argument_result)

    def add_validator(self, validator: Validator):
        self.validators.append(validator)

    @property
    def custom_converter(self) -> Converter | None:
        """User-supplied converter, if any."""
        return self._converter

    @custom_converter.setter
    def custom_converter(self, converter: Converter | None):
        self._converter = converter

    @property
    def converter(self) -> Converter | None:
        """Converter applied to an :class:`.ArgumentResult`'s tokens.

        The user-supplied converter if there is one; otherwise a built-in typed converter
        for non-string hints; otherwise :obj:`None` (tokens are handed over as raw strings).
        """
        if self._converter is not None:
            return self._converter
        if _is_string_hint(self.hint):
            return None
        return self._convert_tokens

    def _convert_tokens(self, argument_result: "ArgumentResult") -> Any:
        values = [token.value for token in argument_result.tokens]
        if self.arity.maximum == 1:
            return convert(self.hint, values[0] if values else None)
        return convert(self.hint, values)


@define(eq=False)
class Option(Symbol):
    """A named token (e.g. ``--count``) that introduces a value."""

    kind: ClassVar[str] = "option"

    aliases: tuple[str, ...] = field(default=(), converter=to_tuple_converter, kw_only=True)
    argument: Argument = field(
        default=Factory(lambda self: Argument(self.name.lstrip("-")), takes_self=True),
        kw_only=True,
    )
    """Argument receiving the option's values; defaults to a string argument named after the option.

    The option holds its own copy, so the declaration passed in is left untouched.
    """

    def __attrs_post_init__(self):
        self.argument = evolve(self.argument, validators=list(self.argument.validators))
        self.argument._parent_kind = "option"

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@define(eq=False)
class Command(Symbol):
    """A named operation owning positional arguments and options."""

    kind: ClassVar[str] = "command"

    arguments: list[Argument] = field(factory=list, converter=to_list_converter, kw_only=True)
    options: list[Option] = field(factory=list, converter=to_list_converter, kw_only=True)

    def add_argument(self, argument: Argument):
        self.arguments.append(argument)

    def add_option(self, option: Option):
        self.options.append(option)
