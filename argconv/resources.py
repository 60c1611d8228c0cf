from typing import TYPE_CHECKING, Any

from argconv.annotations import get_hint_name
from argconv.utils import frozen

if TYPE_CHECKING:
    from argconv.result import SymbolResult


def _describe(symbol_result: "SymbolResult") -> tuple[str, str]:
    symbol = symbol_result.symbol
    return symbol.kind, symbol.name


@frozen(kw_only=True)
class Resources:
    """Message templates used when building user-facing error messages.

    Substitute an instance with different templates to localize messages.
    Each template is a :meth:`str.format` string; available fields are listed per template.
    """

    required_argument_missing: str = "Required argument missing for {kind}: '{name}'."
    """Fields: ``kind``, ``name``."""

    expects_one_argument: str = "{Kind} '{name}' expects a single argument but {count} were provided."
    """Fields: ``kind``, ``Kind``, ``name``, ``count``."""

    expects_fewer_arguments: str = (
        "{Kind} '{name}' expects no more than {maximum} arguments, but {count} were provided."
    )
    """Fields: ``kind``, ``Kind``, ``name``, ``maximum``, ``count``."""

    argument_conversion_cannot_parse: str = "Cannot parse argument '{value}' for {kind} '{name}' as expected type '{type}'."
    """Fields: ``value``, ``kind``, ``name``, ``type``."""

    invalid_value: str = "Invalid value for {kind} '{name}'."
    """Fields: ``kind``, ``name``. Used when a validator fails without a message."""

    def _format(self, template: str, symbol_result: "SymbolResult", **kwargs: Any) -> str:
        kind, name = _describe(symbol_result)
        return template.format(kind=kind, Kind=kind.capitalize(), name=name, **kwargs)

    def format_required_argument_missing(self, symbol_result: "SymbolResult") -> str:
        return self._format(self.required_argument_missing, symbol_result)

    def format_expects_one_argument(self, symbol_result: "SymbolResult", count: int) -> str:
        return self._format(self.expects_one_argument, symbol_result, count=count)

    def format_expects_fewer_arguments(self, symbol_result: "SymbolResult", maximum: int, count: int) -> str:
        return self._format(self.expects_fewer_arguments, symbol_result, maximum=maximum, count=count)

    def format_argument_conversion_cannot_parse(
        self,
        symbol_result: "SymbolResult",
        value: str | None,
        type_: Any,
    ) -> str:
        return self._format(
            self.argument_conversion_cannot_parse,
            symbol_result,
            value="" if value is None else value,
            type=get_hint_name(type_),
        )

    def format_invalid_value(self, symbol_result: "SymbolResult") -> str:
        return self._format(self.invalid_value, symbol_result)


DEFAULT_RESOURCES = Resources()
