"""Subprocess-backed implementation of :class:`~ytplay.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that starts external
processes.  Launch failures are caught here and re-raised as
:class:`~ytplay.exceptions.ProcessLaunchError`.

Rules
-----
* argv lists only — ``shell=True`` is never used.
* Every child started for streaming is terminated and reaped when its
  context exits, on every path.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from ytplay.exceptions import ProcessLaunchError

logger = logging.getLogger(__name__)

TERMINATE_TIMEOUT: float = 5.0
"""Seconds to wait for a terminated child before killing it."""


class SubprocessRunner:
    """Concrete :class:`CommandRunner` backed by :mod:`subprocess`.

    This class satisfies the :class:`~ytplay.core.protocols.CommandRunner`
    protocol structurally — no explicit inheritance required.
    """

    @contextmanager
    def stream_lines(self, argv: Sequence[str]) -> Iterator[Iterator[str]]:
        """Yield an iterator over the stdout lines of *argv*.

        Lines keep their trailing newline.  stderr is discarded.
        """
        proc = self._spawn(argv)
        if proc.stdout is None:
            self._close(proc)
            raise ProcessLaunchError(f"No output pipe for {argv[0]}")
        try:
            yield iter(proc.stdout)
        finally:
            self._close(proc)

    def first_line(self, argv: Sequence[str]) -> str | None:
        """Return the first stdout line of *argv*, stripped, or ``None``."""
        with self.stream_lines(argv) as lines:
            line = next(lines, None)
        if line is None:
            return None
        return line.rstrip("\r\n ") or None

    def run(self, argv: Sequence[str]) -> int:
        """Run *argv* with inherited stdio and return its exit status."""
        logger.debug("Running %s", argv[0])
        try:
            completed = subprocess.run(list(argv), check=False)
        except OSError as exc:
            raise self._launch_error(argv, exc) from exc
        return completed.returncode

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _spawn(self, argv: Sequence[str]) -> subprocess.Popen[str]:
        logger.debug("Spawning %s", argv[0])
        try:
            return subprocess.Popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise self._launch_error(argv, exc) from exc

    @staticmethod
    def _close(proc: subprocess.Popen[str]) -> None:
        """Stop a streaming child that may still be producing output."""
        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=TERMINATE_TIMEOUT)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()
        logger.debug("Process %s exited with status %s", proc.args, proc.returncode)

    @staticmethod
    def _launch_error(argv: Sequence[str], exc: OSError) -> ProcessLaunchError:
        return ProcessLaunchError(
            f"Failed to launch {argv[0]}: {exc}",
            hint=f"Is {argv[0]} installed and in PATH?",
        )
