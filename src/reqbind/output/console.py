"""Rich Console factory and theme for reqbind output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

REQBIND_THEME = Theme(
    {
        "rb.ok": "bold green",
        "rb.error": "bold red",
        "rb.op": "bold cyan",
        "rb.key": "dim",
        "rb.path": "bold blue",
        "rb.source.path": "magenta",
        "rb.source.query": "yellow",
        "rb.source.header": "cyan",
        "rb.source.body": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=REQBIND_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_source(source: str) -> str:
    """Return the Rich style name for a source kind."""
    return f"rb.source.{source}" if source in ("path", "query", "header", "body") else ""
