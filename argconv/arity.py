from typing import TYPE_CHECKING, Any, Literal

from attrs import field

from argconv._convert import token_count
from argconv.conversion import Failure
from argconv.utils import frozen

if TYPE_CHECKING:
    from argconv.result import ArgumentResult

MAXIMUM_ARITY = 100_000
"""Stand-in for an unbounded maximum number of values."""


def _non_negative(instance, attribute, value):
    if value < 0:
        raise ValueError(f"{attribute.name} must be non-negative; got {value}.")


@frozen
class ArgumentArity:
    """The minimum and maximum number of values an argument may consume."""

    minimum: int = field(validator=_non_negative)
    maximum: int = field(default=MAXIMUM_ARITY, validator=_non_negative)

    def __attrs_post_init__(self):
        if self.maximum < self.minimum:
            raise ValueError(f"maximum ({self.maximum}) must be greater than or equal to minimum ({self.minimum}).")
        if self.maximum > MAXIMUM_ARITY:
            raise ValueError(f"maximum must be at most {MAXIMUM_ARITY}; got {self.maximum}.")

    @property
    def is_unbounded(self) -> bool:
        return self.maximum == MAXIMUM_ARITY

    def __contains__(self, count: int) -> bool:
        return self.minimum <= count <= self.maximum

    def __str__(self):
        maximum = "*" if self.is_unbounded else self.maximum
        return f"[{self.minimum}, {maximum}]"

    @classmethod
    def default(cls, hint: Any, parent_kind: Literal["command", "option"] = "command") -> "ArgumentArity":
        """Infer an arity from a type hint.

        Parameters
        ----------
        hint: Any
            Declared value type of the argument.
        parent_kind: Literal["command", "option"]
            Collections on an option must receive at least one value.
        """
        count, consume_all = token_count(hint)
        if consume_all:
            return ONE_OR_MORE if parent_kind == "option" else ZERO_OR_MORE
        elif count == 0:
            return ZERO_OR_ONE
        else:
            return cls(count, count)

    @staticmethod
    def validate(argument_result: "ArgumentResult", minimum: int, maximum: int) -> Failure | None:
        """Check the number of tokens owned by ``argument_result`` against ``[minimum, maximum]``.

        Returns
        -------
        Failure | None
            :obj:`None` if the token count is acceptable.
        """
        argument = argument_result.argument
        parent = argument_result.parent
        context = argument_result if parent is None else parent
        resources = argument_result.resources
        count = len(argument_result.tokens)

        if count < minimum:
            if parent is not None and parent.use_default_value_for(argument):
                return None
            return Failure(argument, resources.format_required_argument_missing(context))

        if count > maximum:
            if maximum == 1:
                message = resources.format_expects_one_argument(context, count)
            else:
                message = resources.format_expects_fewer_arguments(context, maximum, count)
            return Failure(argument, message)

        return None


ZERO = ArgumentArity(0, 0)
ZERO_OR_ONE = ArgumentArity(0, 1)
EXACTLY_ONE = ArgumentArity(1, 1)
ZERO_OR_MORE = ArgumentArity(0, MAXIMUM_ARITY)
ONE_OR_MORE = ArgumentArity(1, MAXIMUM_ARITY)
