"""Infrastructure: yt-dlp and media player detection.

This module is responsible for locating the backend and a player on
the system PATH, falling back through the platform's preference list
when the configured player is missing, and providing
platform-specific installation guidance.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from ytplay.core.models import BACKEND
from ytplay.core.players import FALLBACK_PLAYER, preferences_for
from ytplay.exceptions import BackendNotFoundError, PlayerNotFoundError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Detection results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutableStatus:
    """Result of a PATH probe for one executable.

    Attributes
    ----------
    name : str
        The executable that was looked up.
    found : bool
        Whether it was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    """

    name: str
    found: bool
    path: Path | None


@dataclass(frozen=True, slots=True)
class PlayerResolution:
    """Outcome of :func:`resolve_player`."""

    player: str
    """Name (or path) of the player to launch."""

    path: Path
    """Where the player was found."""

    fell_back: bool
    """``True`` when the configured player was missing and replaced."""


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_executable(name: str) -> ExecutableStatus:
    """Probe PATH for *name*.

    Returns an :class:`ExecutableStatus` regardless of the outcome — the
    caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)
    if result is None:
        return ExecutableStatus(name=name, found=False, path=None)
    return ExecutableStatus(name=name, found=True, path=Path(result).resolve())


def require_backend() -> Path:
    """Locate yt-dlp or raise :class:`BackendNotFoundError`.

    The pipeline cannot do anything without the backend, so there is no
    fallback here.
    """
    status = detect_executable(BACKEND)
    if not status.found or status.path is None:
        hint_lines = ["Install yt-dlp using one of:"]
        hint_lines.extend(f"  {cmd}" for cmd in backend_install_commands())
        hint_lines.append("  Docs: https://github.com/yt-dlp/yt-dlp")
        raise BackendNotFoundError(
            "yt-dlp not found.",
            hint="\n".join(hint_lines),
        )
    return status.path


def detect_player(system: str | None = None) -> str:
    """Return the first available player in the platform preference order.

    When none is installed, :data:`FALLBACK_PLAYER` is returned anyway so
    that the failure surfaces at the explicit availability check.
    """
    order = preferences_for(system if system is not None else platform.system())
    for candidate in order:
        if detect_executable(candidate).found:
            logger.debug("Auto-detected player %s", candidate)
            return candidate
    logger.debug("No preferred player found; defaulting to %s", FALLBACK_PLAYER)
    return FALLBACK_PLAYER


def resolve_player(configured: str | None) -> PlayerResolution:
    """Verify the configured (or auto-detected) player is reachable.

    An unreachable configured player triggers one auto-detection pass as
    a recovery attempt.

    Raises
    ------
    PlayerNotFoundError
        When neither the configured player nor any preferred player is
        available.
    """
    player = configured or detect_player()
    status = detect_executable(player)
    if status.found and status.path is not None:
        return PlayerResolution(player=player, path=status.path, fell_back=False)

    logger.warning("Player '%s' not found, auto-detecting...", player)
    replacement = detect_player()
    status = detect_executable(replacement)
    if not status.found or status.path is None:
        raise PlayerNotFoundError(
            "No supported player found.",
            hint="Install mpv, vlc, or ffplay, or pass one with -p/--player.",
        )
    return PlayerResolution(player=replacement, path=status.path, fell_back=True)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def backend_install_commands() -> tuple[str, ...]:
    """Return yt-dlp install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install yt-dlp",
            "pip install yt-dlp",
        )
    if system == "darwin":
        return (
            "brew install yt-dlp",
            "pip install yt-dlp",
        )
    return ("pip install yt-dlp",)
