import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional, cast

from attrs import define, field

from argconv.arity import ArgumentArity
from argconv.conversion import (
    ConversionOutcome,
    Failure,
    Success,
    TypeMismatchFailure,
    convert_if_needed,
    get_value_or_default,
)
from argconv.exceptions import ArgconvError, InvalidOperationError
from argconv.resources import DEFAULT_RESOURCES, Resources
from argconv.token import Token
from argconv.utils import UNSET, is_blank

if TYPE_CHECKING:
    from argconv.argument import Argument, Command, Option, Symbol

logger = logging.getLogger(__name__)

_OUTCOME_TYPES = (Success, Failure, TypeMismatchFailure)


def _to_tokens(values: Iterable[Token | str] | None) -> list[Token]:
    if values is None:
        return []
    return [value if isinstance(value, Token) else Token(value) for value in values]


def _validator_message(e: Exception) -> str | None:
    if isinstance(e, ArgconvError):
        return e.msg
    if e.args and not is_blank(str(e.args[0])):
        return str(e.args[0])
    return None


@define(kw_only=True)
class ParseError:
    """A user-facing error attributed to a :class:`SymbolResult`."""

    message: str
    symbol_result: Optional["SymbolResult"] = field(default=None, eq=False, repr=False)

    def __str__(self):
        return self.message


@define(eq=False)
class SymbolResult:
    """Per-parse state for a single :class:`.Symbol`.

    Results form a tree mirroring the command line: a :class:`CommandResult` at the root,
    with :class:`OptionResult` and :class:`ArgumentResult` children.
    """

    symbol: "Symbol"
    parent: Optional["SymbolResult"] = None
    _tokens: list[Token] = field(factory=list, converter=_to_tokens, alias="tokens")
    error_message: str | None = field(default=None, kw_only=True)
    """Set by validators, converters and default-value factories to report a problem."""

    _resources: Resources | None = field(default=None, alias="resources", kw_only=True, repr=False)
    children: list["SymbolResult"] = field(factory=list, init=False, repr=False)

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens currently owned by this result."""
        return tuple(self._tokens)

    def add_token(self, token: Token | str):
        self._tokens.extend(_to_tokens([token]))

    @property
    def root(self) -> "SymbolResult":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def resources(self) -> Resources:
        """Message templates; inherited from the parent when not set explicitly."""
        if self._resources is not None:
            return self._resources
        if self.parent is not None:
            return self.parent.resources
        return DEFAULT_RESOURCES

    def add_child(self, result: "SymbolResult") -> "SymbolResult":
        if result.parent is not self:
            raise ValueError(f"{result!r} is not a child of {self!r}.")
        self.children.append(result)
        return result

    def add_argument(self, argument: "Argument", tokens: Iterable[Token | str] = ()) -> "ArgumentResult":
        """Create and register the :class:`ArgumentResult` for ``argument``."""
        return cast(ArgumentResult, self.add_child(ArgumentResult(argument, self, tokens)))

    def find_result_for(self, symbol: "Symbol") -> Optional["SymbolResult"]:
        """Depth-first search of this subtree for the result of ``symbol``."""
        for child in self.children:
            if child.symbol is symbol:
                return child
            if (found := child.find_result_for(symbol)) is not None:
                return found
        return None

    def use_default_value_for(self, argument: "Argument") -> bool:
        """Whether ``argument`` should take its default value rather than converting tokens."""
        return False

    def _argument_is_implicit(self, argument: "Argument") -> bool:
        for child in self.children:
            if child.symbol is argument:
                return isinstance(child, ArgumentResult) and child.is_implicit
        return argument.has_default_value


@define(eq=False)
class CommandResult(SymbolResult):
    """Result for a :class:`.Command`; usually the root of the result tree."""

    @property
    def command(self) -> "Command":
        return cast("Command", self.symbol)

    def add_option(
        self,
        option: "Option",
        tokens: Iterable[Token | str] = (),
        *,
        is_implicit: bool = False,
    ) -> "OptionResult":
        """Create and register the :class:`OptionResult` (and its argument result) for ``option``."""
        option_result = cast(OptionResult, self.add_child(OptionResult(option, self, is_implicit=is_implicit)))
        option_result.add_argument(option.argument, tokens)
        return option_result

    def use_default_value_for(self, argument: "Argument") -> bool:
        return self._argument_is_implicit(argument)


@define(eq=False)
class OptionResult(SymbolResult):
    """Result for an :class:`.Option`."""

    is_implicit: bool = field(default=False, kw_only=True)
    """The option was not on the command line; it is present only to supply its default."""

    @property
    def option(self) -> "Option":
        return cast("Option", self.symbol)

    def use_default_value_for(self, argument: "Argument") -> bool:
        if self.is_implicit and argument.has_default_value:
            return True
        return self._argument_is_implicit(argument)


@define(eq=False)
class ArgumentResult(SymbolResult):
    """Result for an :class:`.Argument`: owns tokens and converts them into a value.

    Conversion happens lazily on the first request for a value, and the outcome is cached.
    """

    _passed_on_tokens: tuple[Token, ...] | None = field(default=None, init=False, repr=False)
    _only_take_called: bool = field(default=False, init=False, repr=False)
    _conversion_result: ConversionOutcome | None = field(default=None, init=False, repr=False)

    @property
    def argument(self) -> "Argument":
        return cast("Argument", self.symbol)

    @property
    def is_implicit(self) -> bool:
        """No tokens were supplied and the argument has a default value."""
        return self.argument.has_default_value and not self._tokens

    @property
    def passed_on_tokens(self) -> tuple[Token, ...] | None:
        """Tokens given back by :meth:`only_take`, for use by subsequent arguments.

        :obj:`None` if no tokens have been given back.
        """
        return self._passed_on_tokens

    def get_conversion_result(self) -> ConversionOutcome:
        """Convert the owned tokens; computed once, then cached."""
        if self._conversion_result is None:
            self._conversion_result = self._convert()
        return self._conversion_result

    def get_value_or_default(self, type_: Any = UNSET) -> Any:
        """The converted value, coerced into ``type_`` if provided.

        Never raises for a missing or failed value; the type-appropriate default
        (e.g. ``0``, ``[]``, :obj:`None`) is returned instead.
        Check :meth:`get_conversion_result` for failures.
        """
        outcome = convert_if_needed(self.get_conversion_result(), self, type_)
        return get_value_or_default(outcome, type_)

    def only_take(self, number_of_tokens: int):
        """Keep the first ``number_of_tokens`` tokens and give the rest back to the parser.

        Given-back tokens are available from :attr:`passed_on_tokens`. May only be called once,
        and must be called before the value is first requested to affect it.

        Raises
        ------
        ValueError
            ``number_of_tokens`` is negative.
        InvalidOperationError
            Called more than once.
        """
        if self._only_take_called:
            raise InvalidOperationError("only_take can only be called once.")

        if number_of_tokens < 0:
            raise ValueError(f"number_of_tokens must be at least 0; got {number_of_tokens}.")

        self._only_take_called = True

        if number_of_tokens == 0:
            return

        self._passed_on_tokens = tuple(self._tokens[number_of_tokens:])
        del self._tokens[number_of_tokens:]
        logger.debug("%s passed on %d token(s).", self, len(self._passed_on_tokens))

    def custom_error(self) -> ParseError | None:
        """Run the argument's validators, returning the first error reported.

        A validator reports an error by setting :attr:`error_message`, or by raising
        :exc:`ValueError`, :exc:`TypeError` or :exc:`AssertionError`.
        """
        if self.error_message:
            return ParseError(message=self.error_message, symbol_result=self)

        for validator in self.argument.validators:
            try:
                validator(self)
            except (AssertionError, ValueError, TypeError) as e:
                self.error_message = _validator_message(e) or self.resources.format_invalid_value(self)

            if not is_blank(self.error_message):
                return ParseError(message=cast(str, self.error_message), symbol_result=self)

        return None

    def _should_check_arity(self) -> bool:
        return not (isinstance(self.parent, OptionResult) and self.parent.is_implicit)

    def _convert(self) -> ConversionOutcome:
        argument = self.argument
        arity = argument.arity

        if self._should_check_arity():
            failure = ArgumentArity.validate(self, arity.minimum, arity.maximum)
            if failure is not None:
                logger.debug("%s failed arity check %s.", self, arity)
                return failure

        if self.parent is not None and self.parent.use_default_value_for(argument):
            transient = ArgumentResult(argument, self.parent)
            value = argument.get_default_value(transient)
            if transient.error_message:
                return Failure(argument, transient.error_message)
            logger.debug("%s using default value %r.", self, value)
            return Success(argument, value)

        converter = argument.converter
        if converter is None:
            values = [token.value for token in self._tokens]
            if arity.maximum == 1:
                return Success(argument, values[0] if values else None)
            return Success(argument, values)

        # Only a message recorded by the converter itself marks the conversion as failed.
        previous_message, self.error_message = self.error_message, None
        try:
            value = converter(self)
        except (AssertionError, ValueError, TypeError, ArgconvError) as e:
            logger.debug("Converter for %s raised %r.", self, e)
            message = self.error_message
            if is_blank(message) and isinstance(e, ArgconvError):
                message = e.msg
            self._restore_error_message(previous_message)
            if not is_blank(message):
                return Failure(argument, cast(str, message))
            return self._type_mismatch()

        message = self.error_message
        self._restore_error_message(previous_message)

        if isinstance(value, _OUTCOME_TYPES):
            return value

        if not is_blank(message):
            return Failure(argument, cast(str, message))

        return Success(argument, value)

    def _restore_error_message(self, previous_message: str | None):
        if is_blank(self.error_message):
            self.error_message = previous_message

    def _type_mismatch(self) -> TypeMismatchFailure:
        value = self._tokens[0].value if self._tokens else None
        return TypeMismatchFailure.from_result(self, value, self.argument.hint)

    def __str__(self):
        tokens = " ".join(f"<{token.value}>" for token in self._tokens)
        return f"{type(self).__name__} {self.argument.name}: {tokens}"
