"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol

CommandEcho = Callable[[str, Sequence[str]], None]
"""Verbose side channel: called with a short label and the argv to run."""


class CommandRunner(Protocol):
    """Contract for launching external processes.

    Implementations must map launch failures (missing executable,
    permission errors) to :class:`~ytplay.exceptions.ProcessLaunchError`.
    """

    def stream_lines(self, argv: Sequence[str]) -> AbstractContextManager[Iterator[str]]:
        """Run *argv* and yield its stdout one line at a time.

        stderr is discarded.  Leaving the context must terminate and reap
        the process even when the iterator was not exhausted.
        """
        ...  # pragma: no cover

    def first_line(self, argv: Sequence[str]) -> str | None:
        """Run *argv* and return its first stdout line, stripped.

        Returns ``None`` when the process prints nothing usable.
        """
        ...  # pragma: no cover

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* attached to the terminal and return its exit status."""
        ...  # pragma: no cover


class FileSystem(Protocol):
    """Contract for the few filesystem operations download mode needs."""

    def ensure_directory(self, path: Path) -> None:
        """Create *path* and its parents; existing directories are fine.

        Failures raise :class:`~ytplay.exceptions.OutputDirectoryError`.
        """
        ...  # pragma: no cover

    def newest_file(self, directory: Path) -> Path | None:
        """Return the most recently modified regular file in *directory*."""
        ...  # pragma: no cover

    def remove(self, path: Path) -> bool:
        """Delete *path*, returning ``False`` instead of raising on failure."""
        ...  # pragma: no cover
