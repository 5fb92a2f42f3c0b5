"""Pure display formatters for raw duration and view-count values.

Both formatters are total: every integer (including zero and negative
values) and ``None`` map to a string, with ``"?"`` standing in for
anything unknown or non-positive.
"""

from __future__ import annotations

from ytplay.core.models import UNKNOWN


def parse_int(text: str | None) -> int:
    """Convert an extracted numeric run to ``int``, ``0`` when unusable.

    Lenient on purpose: ``""``, ``"-"`` and ``None`` read as 0.
    """
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


def format_duration(seconds: int | None) -> str:
    """Render *seconds* as ``H:MM:SS`` (one hour or more) or ``M:SS``."""
    if seconds is None or seconds <= 0:
        return UNKNOWN
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_views(count: int | None) -> str:
    """Render *count* as ``2.5M``, ``1.5K`` or the plain integer."""
    if count is None or count <= 0:
        return UNKNOWN
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)
