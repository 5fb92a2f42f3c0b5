"""Local filesystem implementation of :class:`~ytplay.core.protocols.FileSystem`.

Download mode needs exactly three things from the disk: an output
directory, the file yt-dlp just wrote into it, and a way to delete that
file afterwards.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ytplay.exceptions import OutputDirectoryError

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Concrete :class:`FileSystem` for the local disk."""

    def ensure_directory(self, path: Path) -> None:
        """Create *path* (and parents); a no-op when it already exists.

        Raises
        ------
        OutputDirectoryError
            If *path* is a file, or cannot be created.
        """
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(
                f"Cannot use output directory {path}: {exc.strerror or exc}",
                hint="Choose a writable directory with -o/--output.",
            ) from exc

    def newest_file(self, directory: Path) -> Path | None:
        """Return the most recently modified regular file, or ``None``.

        An unreadable or missing directory reads as empty.
        """
        newest: tuple[float, str] | None = None
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if not entry.is_file():
                            continue
                        mtime = entry.stat().st_mtime
                    except OSError:
                        continue
                    if newest is None or mtime > newest[0]:
                        newest = (mtime, entry.path)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", directory, exc)
            return None
        return Path(newest[1]) if newest is not None else None

    def remove(self, path: Path) -> bool:
        """Delete *path*; failures are logged and reported as ``False``."""
        try:
            Path(path).unlink()
        except OSError as exc:
            logger.debug("Failed to remove %s: %s", path, exc)
            return False
        return True
