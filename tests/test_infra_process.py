"""Tests for the subprocess runner and local filesystem (infra/).

The runner tests launch the current Python interpreter as a stand-in
for yt-dlp; nothing touches the network.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ytplay.exceptions import OutputDirectoryError, ProcessLaunchError
from ytplay.infra.filesystem import LocalFileSystem
from ytplay.infra.process_runner import SubprocessRunner

MISSING = "ytplay-definitely-not-an-executable"


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


# ---------------------------------------------------------------------------
# SubprocessRunner
# ---------------------------------------------------------------------------

class TestStreamLines:
    def test_reads_lines(self) -> None:
        with SubprocessRunner().stream_lines(_py("print('a'); print('b')")) as lines:
            assert [line.rstrip("\r\n") for line in lines] == ["a", "b"]

    def test_early_exit_terminates_child(self) -> None:
        code = "import time\nwhile True:\n    print('x', flush=True)\n    time.sleep(0.01)"
        with SubprocessRunner().stream_lines(_py(code)) as lines:
            assert next(lines).strip() == "x"
        # Leaving the context must not hang on the endless child.

    def test_missing_pipe_is_launch_error(self) -> None:
        proc = MagicMock(stdout=None)
        proc.poll.return_value = 0
        with patch("ytplay.infra.process_runner.subprocess.Popen", return_value=proc):
            with pytest.raises(ProcessLaunchError, match="No output pipe"):
                with SubprocessRunner().stream_lines(["yt-dlp"]):
                    pass
        proc.terminate.assert_not_called()

    def test_missing_executable(self) -> None:
        with pytest.raises(ProcessLaunchError, match="Failed to launch") as info:
            with SubprocessRunner().stream_lines([MISSING]):
                pass
        assert info.value.hint is not None


class TestFirstLine:
    def test_first_line_stripped(self) -> None:
        argv = _py("print('https://example.invalid/media  '); print('second')")
        assert SubprocessRunner().first_line(argv) == "https://example.invalid/media"

    def test_no_output_is_none(self) -> None:
        assert SubprocessRunner().first_line(_py("pass")) is None

    def test_blank_line_is_none(self) -> None:
        assert SubprocessRunner().first_line(_py("print()")) is None


class TestRun:
    def test_returns_exit_status(self) -> None:
        assert SubprocessRunner().run(_py("raise SystemExit(3)")) == 3

    def test_success(self) -> None:
        assert SubprocessRunner().run(_py("pass")) == 0

    def test_missing_executable(self) -> None:
        with pytest.raises(ProcessLaunchError):
            SubprocessRunner().run([MISSING])


# ---------------------------------------------------------------------------
# LocalFileSystem
# ---------------------------------------------------------------------------

class TestLocalFileSystem:
    def test_ensure_directory_is_idempotent(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        files = LocalFileSystem()
        files.ensure_directory(target)
        files.ensure_directory(target)
        assert target.is_dir()

    def test_ensure_directory_over_regular_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "notadir"
        blocker.write_bytes(b"x")

        with pytest.raises(OutputDirectoryError, match="Cannot use output directory") as info:
            LocalFileSystem().ensure_directory(blocker)
        assert info.value.hint is not None
        assert "-o" in info.value.hint

    def test_ensure_directory_below_regular_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "notadir"
        blocker.write_bytes(b"x")

        with pytest.raises(OutputDirectoryError):
            LocalFileSystem().ensure_directory(blocker / "clips")

    def test_newest_file_by_mtime(self, tmp_path: Path) -> None:
        old = tmp_path / "old.webm"
        new = tmp_path / "new.mp4"
        old.write_bytes(b"o")
        new.write_bytes(b"n")
        os.utime(old, (1_000, 1_000))
        os.utime(new, (2_000, 2_000))

        assert LocalFileSystem().newest_file(tmp_path) == new

    def test_directories_ignored(self, tmp_path: Path) -> None:
        clip = tmp_path / "clip.mkv"
        clip.write_bytes(b"c")
        os.utime(clip, (1_000, 1_000))
        (tmp_path / "subdir").mkdir()

        assert LocalFileSystem().newest_file(tmp_path) == clip

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert LocalFileSystem().newest_file(tmp_path) is None

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert LocalFileSystem().newest_file(tmp_path / "nope") is None

    def test_remove(self, tmp_path: Path) -> None:
        clip = tmp_path / "clip.mkv"
        clip.write_bytes(b"c")
        assert LocalFileSystem().remove(clip) is True
        assert not clip.exists()

    def test_remove_missing_reports_false(self, tmp_path: Path) -> None:
        assert LocalFileSystem().remove(tmp_path / "gone.mkv") is False
