"""``ytplay --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies ytplay's requirements.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from ytplay.cli import exit_codes
from ytplay.cli.console import console
from ytplay.core.models import BACKEND
from ytplay.core.players import FALLBACK_PLAYER
from ytplay.infra.dependency_resolver import (
    backend_install_commands,
    detect_executable,
    detect_player,
)
from ytplay.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _backend_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp executable row."""
    status_obj = detect_executable(BACKEND)
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "yt-dlp (PATH)", path_str, "[green]OK[/green]"
    return "yt-dlp (PATH)", "not found", "[red]FAIL[/red]"


def _ytdlp_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp package version row."""
    try:
        from yt_dlp.version import __version__ as ydl_ver

        return "yt-dlp", ydl_ver, "[green]OK[/green]"
    except ImportError:
        pass

    # Fallback: yt-dlp installed but version submodule unavailable.
    try:
        import yt_dlp  # noqa: F401

        return "yt-dlp", "unknown", "[green]OK[/green]"
    except ImportError:
        return "yt-dlp", "NOT INSTALLED", "[yellow]WARN[/yellow]"


def _player_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the auto-detected player row."""
    player = detect_player()
    status_obj = detect_executable(player)
    if status_obj.found:
        return "Player", f"{player} ({status_obj.path})", "[green]OK[/green]"
    return "Player", f"none (fallback {FALLBACK_PLAYER} missing)", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _ytplay_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the ytplay version row."""
    return "ytplay", __version__, "[green]OK[/green]"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    from rich.table import Table

    checks = [
        _ytplay_version_check(),
        _python_version_check(),
        _backend_check(),
        _ytdlp_version_check(),
        _player_check(),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="ytplay doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)

    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if not detect_executable(BACKEND).found:
        console.print("[yellow]yt-dlp is not on PATH.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in backend_install_commands():
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
