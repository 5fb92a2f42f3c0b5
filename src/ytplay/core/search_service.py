"""Core search service — turns a query into :class:`SearchResults`.

The service builds the ``yt-dlp`` flat-search invocation, streams the
backend's one-object-per-line output through an injected
:class:`~ytplay.core.protocols.CommandRunner`, and materialises a
bounded, ordered tuple of :class:`~ytplay.core.models.VideoResult`.

Guarantees
----------
* No subprocess or filesystem access of its own.
* Malformed or partial lines are skipped, never fatal.
* The returned collection never exceeds ``min(count, MAX_RESULTS)``.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence

from ytplay.core.formatters import format_duration, format_views, parse_int
from ytplay.core.models import (
    BACKEND,
    MAX_RESULTS,
    UNKNOWN,
    UNKNOWN_CHANNEL,
    SearchResults,
    VideoResult,
)
from ytplay.core.protocols import CommandEcho, CommandRunner
from ytplay.core.record_extractor import extract_field
from ytplay.exceptions import InvalidQueryError

logger = logging.getLogger(__name__)

# Per-field length bounds for extracted values.
TITLE_MAX: int = 511
ID_MAX: int = 31
CHANNEL_MAX: int = 127
NUMBER_MAX: int = 63


def render_command(argv: Sequence[str]) -> str:
    """Return a shell-safe, copy-pasteable rendering of *argv*.

    ``shlex.split(render_command(argv)) == list(argv)`` holds for every
    argument, including ones containing quotes or spaces.
    """
    return shlex.join(argv)


def sanitize_query(query: str) -> str:
    """Collapse internal whitespace and strip the ends."""
    return " ".join(query.split())


def clamp_count(count: int) -> int:
    return max(1, min(count, MAX_RESULTS))


def build_search_argv(query: str, count: int) -> list[str]:
    """Build the flat, one-record-per-line search invocation."""
    return [
        BACKEND,
        "--no-warnings",
        "--flat-playlist",
        "--dump-json",
        f"ytsearch{count}:{query}",
    ]


def parse_result_line(line: str) -> VideoResult | None:
    """Build a :class:`VideoResult` from one output line.

    Returns ``None`` for lines that are not objects or lack a ``title``
    or ``id``.
    """
    if not line.startswith("{"):
        return None

    title = extract_field(line, "title", TITLE_MAX)
    if not title:
        return None
    video_id = extract_field(line, "id", ID_MAX)
    if not video_id:
        return None

    raw_duration = extract_field(line, "duration", NUMBER_MAX)
    duration = format_duration(parse_int(raw_duration)) if raw_duration else UNKNOWN

    raw_views = extract_field(line, "view_count", NUMBER_MAX)
    views = format_views(parse_int(raw_views)) if raw_views else UNKNOWN

    channel = (
        extract_field(line, "channel", CHANNEL_MAX)
        or extract_field(line, "uploader", CHANNEL_MAX)
        or UNKNOWN_CHANNEL
    )

    return VideoResult(
        id=video_id,
        title=title,
        duration=duration,
        views=views,
        channel=channel,
    )


class SearchService:
    """Stateless service that runs one synchronous search per call.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    command_echo:
        Optional verbose side channel, invoked before the search runs.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        command_echo: CommandEcho | None = None,
    ) -> None:
        self._runner: CommandRunner = runner
        self._echo: CommandEcho | None = command_echo

    def search(self, query: str, count: int) -> SearchResults:
        """Search YouTube for *query* and return at most *count* results.

        A search with no hits returns an empty :class:`SearchResults`;
        deciding whether that is fatal is up to the caller.

        Raises
        ------
        InvalidQueryError
            If *query* is empty after sanitising.
        ProcessLaunchError
            If the backend cannot be started.
        """
        clean = sanitize_query(query)
        if not clean:
            raise InvalidQueryError(
                "No search query provided.",
                hint="Pass one or more search words, e.g. ytplay \"lofi hip hop\"",
            )
        limit = clamp_count(count)
        argv = build_search_argv(clean, limit)
        if self._echo is not None:
            self._echo(BACKEND, argv)

        results: list[VideoResult] = []
        skipped = 0
        with self._runner.stream_lines(argv) as lines:
            for line in lines:
                result = parse_result_line(line)
                if result is None:
                    skipped += 1
                    continue
                results.append(result)
                if len(results) >= limit:
                    break

        logger.debug(
            "Search %r: %d result(s), %d line(s) skipped",
            clean,
            len(results),
            skipped,
        )
        return SearchResults(results=tuple(results))
