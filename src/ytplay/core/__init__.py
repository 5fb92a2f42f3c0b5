"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No direct subprocess or filesystem I/O; both arrive through the
  protocols in :mod:`ytplay.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from ytplay.core.models import Config, PlaybackMode, SearchResults, VideoResult
from ytplay.core.playback_service import PlaybackService
from ytplay.core.protocols import CommandRunner, FileSystem
from ytplay.core.search_service import SearchService

__all__: list[str] = [
    "CommandRunner",
    "Config",
    "FileSystem",
    "PlaybackMode",
    "PlaybackService",
    "SearchResults",
    "SearchService",
    "VideoResult",
]
