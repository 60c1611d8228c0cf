from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Optional

from attrs import evolve, field

from argconv.utils import frozen

if TYPE_CHECKING:
    from argconv.argument import Symbol


class TokenType(Enum):
    """What the outer parser recognized a token as."""

    ARGUMENT = auto()
    COMMAND = auto()
    OPTION = auto()
    DOUBLE_DASH = auto()
    UNPARSED = auto()
    DIRECTIVE = auto()


@frozen
class Token:
    """A single unit of the command line, already segmented by the outer parser."""

    value: str
    type: TokenType = field(default=TokenType.ARGUMENT, kw_only=True)
    symbol: Optional["Symbol"] = field(default=None, kw_only=True, eq=False)

    def evolve(self, **kwargs: Any) -> "Token":
        return evolve(self, **kwargs)

    def __str__(self):
        return self.value
