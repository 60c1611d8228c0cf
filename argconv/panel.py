"""Rich-based rendering of parse errors."""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rich.console import Console
    from rich.panel import Panel

    from argconv.result import ParseError


def ErrorPanel(message: Any, title: str = "Error", style: str = "red") -> "Panel":  # noqa: N802
    """Create a :class:`~rich.panel.Panel` with a consistent style.

    .. code-block:: text

        ╭─ Error ──────────────────────────────────╮
        │ Message content here.                    │
        ╰──────────────────────────────────────────╯

    Parameters
    ----------
    message: Any
        The body of the panel will be filled with the stringified version of the message.
    title: str
        Title of the panel that appears in the top-left corner.
    style: str
        Rich `style <https://rich.readthedocs.io/en/stable/style.html>`_ for the panel border.
    """
    from rich import box
    from rich.panel import Panel
    from rich.text import Text

    return Panel(
        Text(str(message), "default"),
        title=title,
        style=style,
        box=box.ROUNDED,
        expand=True,
        title_align="left",
    )


def render_errors(errors: Iterable["ParseError"], console: "Console | None" = None) -> bool:
    """Print each error as an :func:`ErrorPanel` to ``console`` (stderr by default).

    Returns
    -------
    bool
        :obj:`True` if any error was printed.
    """
    errors = list(errors)
    if not errors:
        return False

    if console is None:
        from rich.console import Console

        console = Console(stderr=True)

    console.print(ErrorPanel("\n".join(str(error) for error in errors)))
    return True
