__version__ = "0.1.0"

__all__ = [
    "Argument",
    "ArgumentArity",
    "ArgumentResult",
    "ArgconvError",
    "CoercionError",
    "Command",
    "CommandResult",
    "ConversionOutcome",
    "ErrorPanel",
    "Failure",
    "InvalidOperationError",
    "Option",
    "OptionResult",
    "ParseError",
    "Resources",
    "Success",
    "SymbolResult",
    "Token",
    "TokenType",
    "TypeMismatchFailure",
    "UNSET",
    "convert",
    "render_errors",
]

from argconv._convert import convert
from argconv.argument import Argument, Command, Option
from argconv.arity import ArgumentArity
from argconv.conversion import ConversionOutcome, Failure, Success, TypeMismatchFailure
from argconv.exceptions import ArgconvError, CoercionError, InvalidOperationError
from argconv.panel import ErrorPanel, render_errors
from argconv.resources import Resources
from argconv.result import ArgumentResult, CommandResult, OptionResult, ParseError, SymbolResult
from argconv.token import Token, TokenType
from argconv.utils import UNSET
