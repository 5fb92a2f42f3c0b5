"""Custom exception hierarchy for ytplay.

All exceptions that cross layer boundaries must inherit from
:class:`YtPlayError`.  Raw ``OSError`` / ``subprocess`` failures must
NEVER propagate beyond the infrastructure layer — they are caught there
and re-raised as a typed subclass defined here.

Hierarchy
---------
YtPlayError
├── InvalidQueryError
├── NoResultsError
├── InvalidSelectionError
├── ProcessLaunchError
├── StreamResolutionError
├── DownloadFailedError
├── ArtifactNotFoundError
├── OutputDirectoryError
└── EnvironmentError
    ├── BackendNotFoundError
    └── PlayerNotFoundError
"""

from __future__ import annotations


class YtPlayError(Exception):
    """Base exception for all ytplay errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Search ----------------------------------------------------------------

class InvalidQueryError(YtPlayError):
    """Raised when the search query is empty after sanitising."""


class NoResultsError(YtPlayError):
    """Raised when a search produced no usable results."""


class InvalidSelectionError(YtPlayError):
    """Raised when the chosen result index is out of range."""


# --- External processes ----------------------------------------------------

class ProcessLaunchError(YtPlayError):
    """Raised when an external executable cannot be started at all."""


class StreamResolutionError(YtPlayError):
    """Raised when yt-dlp does not print a direct media URL."""


class DownloadFailedError(YtPlayError):
    """Raised when the yt-dlp download exits with a nonzero status."""


class ArtifactNotFoundError(YtPlayError):
    """Raised when a reportedly successful download left no file behind."""


class OutputDirectoryError(YtPlayError):
    """Raised when the download directory cannot be created or used."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(YtPlayError):
    """Raised when a required runtime dependency is not available."""


class BackendNotFoundError(EnvironmentError):
    """Raised when the yt-dlp executable cannot be located on PATH."""


class PlayerNotFoundError(EnvironmentError):
    """Raised when no usable media player is found, even after fallback."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
