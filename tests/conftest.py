"""Shared pytest fixtures and configuration for the ytplay test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp and players are never launched; the command runner is faked
  at the core boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import pytest


class FakeRunner:
    """In-memory :class:`~ytplay.core.protocols.CommandRunner`.

    Records every argv it is asked to run, in order, under ``calls``
    as ``(kind, argv)`` pairs.
    """

    def __init__(
        self,
        *,
        lines: Sequence[str] = (),
        first_line: str | None = None,
        run_statuses: Sequence[int] = (),
    ) -> None:
        self.lines = list(lines)
        self.first_line_value = first_line
        self.run_statuses = list(run_statuses)
        self.calls: list[tuple[str, list[str]]] = []
        self.lines_consumed = 0
        self.stream_closed = False

    @contextmanager
    def stream_lines(self, argv: Sequence[str]) -> Iterator[Iterator[str]]:
        self.calls.append(("stream", list(argv)))

        def _iterate() -> Iterator[str]:
            for line in self.lines:
                self.lines_consumed += 1
                yield line

        try:
            yield _iterate()
        finally:
            self.stream_closed = True

    def first_line(self, argv: Sequence[str]) -> str | None:
        self.calls.append(("first_line", list(argv)))
        return self.first_line_value

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(("run", list(argv)))
        if self.run_statuses:
            return self.run_statuses.pop(0)
        return 0

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


class FakeFileSystem:
    """In-memory :class:`~ytplay.core.protocols.FileSystem`."""

    def __init__(self, newest: Path | None = None, *, remove_ok: bool = True) -> None:
        self.newest = newest
        self.remove_ok = remove_ok
        self.created: list[Path] = []
        self.removed: list[Path] = []

    def ensure_directory(self, path: Path) -> None:
        self.created.append(Path(path))

    def newest_file(self, directory: Path) -> Path | None:
        return self.newest

    def remove(self, path: Path) -> bool:
        self.removed.append(Path(path))
        return self.remove_ok


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def fake_files() -> FakeFileSystem:
    return FakeFileSystem()
