"""CLI console helpers built on Rich.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
never pay for it.  The console targets stderr; colour and verbosity are
configured once from the parsed flags via :func:`configure`.
"""

from __future__ import annotations

from typing import Any

from ytplay.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


class _ConsoleProxy:
    """Lazily-built Rich console shared by the whole CLI layer."""

    def __init__(self) -> None:
        self._console: Any = None
        self.no_color: bool = False
        self.quiet: bool = False

    def configure(self, *, no_color: bool = False, quiet: bool = False) -> None:
        """Apply ``--no-color`` / ``--quiet``; drops any cached console."""
        self.no_color = no_color
        self.quiet = quiet
        self._console = None

    @property
    def rich(self) -> Any:
        """The underlying ``rich.console.Console`` instance."""
        if self._console is None:
            console_class = _load_rich_console_class()
            self._console = console_class(stderr=True, no_color=self.no_color)
        return self._console

    def print(self, *objects: object) -> None:
        """Render unconditionally (errors, warnings, tables)."""
        self.rich.print(*objects)

    def info(self, message: str) -> None:
        """``::`` informational line, hidden by ``--quiet``."""
        if not self.quiet:
            self.rich.print(f"[bold cyan]::[/bold cyan] {message}")

    def ok(self, message: str) -> None:
        """``[+]`` confirmation line, hidden by ``--quiet``."""
        if not self.quiet:
            self.rich.print(f"[bold green]\\[+][/bold green] {message}")

    def warn(self, message: str) -> None:
        """``[!]`` warning line, always shown."""
        self.rich.print(f"[bold yellow]\\[!][/bold yellow] {message}")


console = _ConsoleProxy()


def escape(text: str) -> str:
    """Escape Rich markup in user-supplied text such as video titles."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return rich_escape(text)


def configure(*, no_color: bool = False, quiet: bool = False) -> None:
    """Module-level shortcut for :meth:`_ConsoleProxy.configure`."""
    console.configure(no_color=no_color, quiet=quiet)
