"""Static player tables: playback capability and platform preferences.

Adding a player that understands yt-dlp format selectors natively, or
changing the auto-detection order for a platform, is a data change in
this module — no control flow depends on specific player names.
"""

from __future__ import annotations

import enum
from pathlib import PurePath


class PlayerCapability(enum.Enum):
    """How a player can be handed a YouTube video in stream mode."""

    NATIVE_YTDL = "native"
    """Player runs yt-dlp itself and accepts ``--ytdl-format``."""

    GENERIC = "generic"
    """Player needs a direct media URL resolved beforehand."""


PLAYER_CAPABILITIES: dict[str, PlayerCapability] = {
    "mpv": PlayerCapability.NATIVE_YTDL,
    "iina": PlayerCapability.NATIVE_YTDL,
}
"""Players not listed here are treated as :attr:`PlayerCapability.GENERIC`."""

PLAYER_PREFERENCES: dict[str, tuple[str, ...]] = {
    "darwin": ("iina", "mpv", "vlc", "ffplay"),
    "windows": ("mpv", "vlc", "ffplay"),
    "linux": ("mpv", "vlc", "ffplay", "mplayer"),
}
"""Auto-detection order keyed by lower-cased :func:`platform.system`."""

DEFAULT_PREFERENCES: tuple[str, ...] = PLAYER_PREFERENCES["linux"]

FALLBACK_PLAYER: str = "mpv"
"""Chosen when auto-detection finds nothing at all."""


def player_key(player: str) -> str:
    """Normalise ``/usr/bin/mpv`` or ``MPV.exe`` to ``mpv``."""
    name = PurePath(player).name.lower()
    if name.endswith(".exe"):
        name = name[: -len(".exe")]
    return name


def capability_for(player: str) -> PlayerCapability:
    """Look up the stream-mode capability of *player*."""
    return PLAYER_CAPABILITIES.get(player_key(player), PlayerCapability.GENERIC)


def preferences_for(system: str) -> tuple[str, ...]:
    """Return the auto-detection order for an OS name like ``"Darwin"``."""
    return PLAYER_PREFERENCES.get(system.lower(), DEFAULT_PREFERENCES)
