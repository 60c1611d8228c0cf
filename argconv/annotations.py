"""Inspection of the type hints an :class:`.Argument` declares."""

from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin


def is_nonetype(hint) -> bool:
    return hint is NoneType


def is_union(hint: Any) -> bool:
    """``Union[...]``, ``Optional[...]`` or ``X | Y``."""
    return hint is Union or hint is UnionType or get_origin(hint) in (Union, UnionType)


def resolve_annotated(hint: Any) -> Any:
    """Strip ``Annotated[...]`` metadata."""
    if get_origin(hint) is Annotated:
        return get_args(hint)[0]
    return hint


def resolve_new_type(hint: Any) -> Any:
    while hasattr(hint, "__supertype__"):
        hint = hint.__supertype__
    return hint


def resolve(hint: Any) -> Any:
    """Reduce ``hint`` to the type that token values are converted into.

    ``Annotated`` metadata and ``NewType`` wrappers are removed and :obj:`None` is dropped
    from unions. A bare :obj:`None` hint means ``str``.
    """
    if hint is None:
        return str

    while True:
        reduced = resolve_new_type(resolve_annotated(hint))
        if is_union(reduced):
            members = tuple(t for t in get_args(reduced) if not is_nonetype(t))
            if not members:
                raise ValueError(f"{hint!r} has no type besides None.")
            reduced = members[0] if len(members) == 1 else Union[members]  # noqa: UP007
        if reduced == hint:
            return hint
        hint = reduced


def get_hint_name(hint) -> str:
    """Readable name of ``hint`` for error messages, e.g. ``list[int]`` or ``int|None``."""
    if isinstance(hint, str):
        return hint
    if is_nonetype(hint):
        return "None"
    if hint is Any:
        return "Any"
    if is_union(hint):
        return "|".join(get_hint_name(arg) for arg in get_args(hint))
    if origin := get_origin(hint):
        args = ", ".join("..." if arg is ... else get_hint_name(arg) for arg in get_args(hint))
        return f"{get_hint_name(origin)}[{args}]" if args else get_hint_name(origin)
    return getattr(hint, "__name__", None) or getattr(hint, "_name", None) or str(hint)
