"""Interactive result selection UI for the CLI layer.

This module is responsible for:

* Rendering a Rich table of search results.
* Prompting the user to pick one via questionary arrow keys.
* Returning the 0-based index of the pick, or ``None`` to quit.

All display-related logic lives here — no searching, no playback.
"""

from __future__ import annotations

from typing import Any

from ytplay.cli.console import console, escape
from ytplay.core.models import SearchResults, VideoResult
from ytplay.exceptions import EnvironmentError

TITLE_WIDTH: int = 60
CHANNEL_WIDTH: int = 22
QUERY_WIDTH: int = 46
ELLIPSIS: str = "…"

_QUIT: str = "quit"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for result rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def truncate(text: str, width: int) -> str:
    """Cut *text* to *width* characters, marking the cut with ``…``."""
    if len(text) <= width:
        return text
    return text[:width] + ELLIPSIS


def _build_choice_label(index: int, result: VideoResult) -> str:
    """Build the single-line label shown in the questionary selector.

    Format: ``" 1.  Title…   3:32   1.5M"``
    """
    title = truncate(result.title, TITLE_WIDTH)
    return f"{index + 1:>2}.  {title}   {result.duration}   {result.views}"


# ---------------------------------------------------------------------------
# Rich table display
# ---------------------------------------------------------------------------

def display_results(query: str, results: SearchResults) -> None:
    """Print a Rich table summarising the search results."""
    table_class = _import_rich_table()

    console.print()
    console.print(
        f"[bold cyan]Search :[/bold cyan] [bold]{escape(truncate(query, QUERY_WIDTH))}[/bold]"
    )
    console.print(f"[bold cyan]Results:[/bold cyan] [green]{len(results)}[/green]")
    console.print()

    table = table_class(
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="yellow", width=4)
    table.add_column("Title", justify="left", style="bold", max_width=TITLE_WIDTH + 1)
    table.add_column("Channel", justify="left", style="dim", max_width=CHANNEL_WIDTH + 1)
    table.add_column("Duration", justify="right", style="green")
    table.add_column("Views", justify="right", style="magenta")

    for i, result in enumerate(results, start=1):
        table.add_row(
            str(i),
            escape(truncate(result.title, TITLE_WIDTH)),
            escape(truncate(result.channel, CHANNEL_WIDTH)),
            result.duration,
            result.views,
        )

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def prompt_result_selection(query: str, results: SearchResults) -> int | None:
    """Display results and prompt the user for an interactive selection.

    Returns
    -------
    int | None
        The 0-based index of the chosen result, or ``None`` when the user
        picked "Quit" or cancelled the prompt (Ctrl+C / Esc / EOF).
    """
    questionary = _import_questionary()

    display_results(query, results)

    choices = [
        questionary.Choice(title=_build_choice_label(i, result), value=i)
        for i, result in enumerate(results)
    ]
    choices.append(questionary.Choice(title="  Quit", value=_QUIT))

    selected: int | str | None = questionary.select(
        "Select a video to play:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None or selected == _QUIT:
        return None
    return int(selected)
