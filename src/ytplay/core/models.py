"""Domain models for ytplay.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

import enum
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ytplay.exceptions import InvalidSelectionError, NoResultsError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BACKEND: str = "yt-dlp"
"""Executable name of the search/download backend."""

WATCH_URL_BASE: str = "https://www.youtube.com/watch?v="

DEFAULT_RESULTS: int = 8
MAX_RESULTS: int = 25

DEFAULT_QUALITY: str = "bestvideo[height<=1080]+bestaudio/best[height<=1080]"
AUDIO_ONLY_QUALITY: str = "bestaudio"

QUALITY_PRESETS: dict[str, str] = {
    "4k": "bestvideo[height<=2160]+bestaudio/best",
    "1080": "bestvideo[height<=1080]+bestaudio/best[height<=1080]",
    "720": "bestvideo[height<=720]+bestaudio/best[height<=720]",
    "480": "bestvideo[height<=480]+bestaudio/best[height<=480]",
    "360": "bestvideo[height<=360]+bestaudio/best[height<=360]",
    "worst": "worst",
}

UNKNOWN: str = "?"
UNKNOWN_CHANNEL: str = "Unknown"


def default_output_dir() -> Path:
    """Return ``<system temp dir>/ytplay``."""
    return Path(tempfile.gettempdir()) / "ytplay"


def build_watch_url(video_id: str) -> str:
    """Reconstruct the canonical watch URL for *video_id*."""
    return f"{WATCH_URL_BASE}{video_id}"


# ---------------------------------------------------------------------------
# Search results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoResult:
    """A single search hit, already formatted for display."""

    id: str
    """YouTube video ID (e.g. ``dQw4w9WgXcQ``)."""

    title: str
    """Full title.  Display layers truncate; commands never do."""

    duration: str = UNKNOWN
    """``H:MM:SS`` / ``M:SS``, or ``"?"`` when unknown."""

    views: str = UNKNOWN
    """``1.5K`` / ``2.5M`` style count, or ``"?"`` when unknown."""

    channel: str = UNKNOWN_CHANNEL
    """Channel name, uploader name, or ``"Unknown"``."""

    @property
    def watch_url(self) -> str:
        return build_watch_url(self.id)


@dataclass(frozen=True, slots=True)
class SearchResults:
    """Immutable, ordered collection of :class:`VideoResult` entries.

    Produced once per search and passed explicitly to the selection and
    playback steps.
    """

    results: tuple[VideoResult, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def __bool__(self) -> bool:
        return len(self.results) > 0

    def __iter__(self) -> Iterator[VideoResult]:
        return iter(self.results)

    def pick(self, index: int) -> VideoResult:
        """Return the result at 0-based *index*.

        Raises
        ------
        NoResultsError
            If the collection is empty.
        InvalidSelectionError
            If *index* is outside ``0 .. len - 1``.
        """
        if not self.results:
            raise NoResultsError("There are no results to choose from.")
        if not 0 <= index < len(self.results):
            raise InvalidSelectionError(
                f"Invalid choice: {index + 1}",
                hint=f"Pick a number between 1 and {len(self.results)}.",
            )
        return self.results[index]


# ---------------------------------------------------------------------------
# Configuration snapshot
# ---------------------------------------------------------------------------

class PlaybackMode(enum.Enum):
    """How the selected video reaches the player."""

    STREAM = "stream"
    DOWNLOAD = "download"


@dataclass(frozen=True, slots=True)
class Config:
    """Read-only snapshot of everything the pipeline needs.

    Built by the CLI layer; the core never mutates it.  Once the player
    has been resolved the CLI produces a copy via
    :func:`dataclasses.replace`.
    """

    query: str
    num_results: int = DEFAULT_RESULTS
    mode: PlaybackMode = PlaybackMode.STREAM
    audio_only: bool = False
    quality: str = DEFAULT_QUALITY
    output_dir: Path = field(default_factory=default_output_dir)
    keep: bool = False
    subtitle_lang: str | None = None
    player: str | None = None
    player_args: tuple[str, ...] = ()
    ytdlp_args: tuple[str, ...] = ()
    first: bool = False
    verbose: bool = False
    quiet: bool = False
    no_color: bool = False
