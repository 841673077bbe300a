"""Centralized terminal output for commandfile.

Command methods return their data; the registration layer echoes it to
stdout. Status and errors go to stderr through this module.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# stderr console for error messages
err_console = Console(stderr=True)


def error(message: str, *, console: Console | None = None) -> None:
    """Print an error message (red X) to stderr."""
    c = console or err_console
    c.print(f"[red]  ✗ {escape(message)}[/red]", highlight=False)
