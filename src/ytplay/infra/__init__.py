"""Infrastructure layer — external system integration.

This layer wraps all interaction with subprocesses, the filesystem and
the system PATH.  Every raw ``OSError`` must be caught here and
re-raised as a :class:`~ytplay.exceptions.YtPlayError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ytplay.infra.dependency_resolver import (
    ExecutableStatus,
    PlayerResolution,
    detect_executable,
    detect_player,
    require_backend,
    resolve_player,
)
from ytplay.infra.filesystem import LocalFileSystem
from ytplay.infra.process_runner import SubprocessRunner

__all__: list[str] = [
    "ExecutableStatus",
    "LocalFileSystem",
    "PlayerResolution",
    "SubprocessRunner",
    "detect_executable",
    "detect_player",
    "require_backend",
    "resolve_player",
]
