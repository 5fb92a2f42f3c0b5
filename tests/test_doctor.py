"""Tests for the ``ytplay --doctor`` command (cli/doctor.py).

Executable lookups are mocked — no system dependency, no internet.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS when only warnings are present.
* Doctor returns GENERAL_ERROR when yt-dlp is missing and prints
  install guidance.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ytplay.cli import exit_codes
from ytplay.infra.dependency_resolver import ExecutableStatus


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found(name: str) -> ExecutableStatus:
    return ExecutableStatus(name=name, found=True, path=Path(f"/usr/bin/{name}"))


def _missing(name: str) -> ExecutableStatus:
    return ExecutableStatus(name=name, found=False, path=None)


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from ytplay.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestBackendCheck:
    @patch("ytplay.cli.doctor.detect_executable", side_effect=_found)
    def test_found(self, _mock_detect: MagicMock) -> None:
        from ytplay.cli.doctor import _backend_check

        label, value, status = _backend_check()
        assert label == "yt-dlp (PATH)"
        assert "yt-dlp" in value
        assert "OK" in status

    @patch("ytplay.cli.doctor.detect_executable", side_effect=_missing)
    def test_missing_fails(self, _mock_detect: MagicMock) -> None:
        from ytplay.cli.doctor import _backend_check

        _label, value, status = _backend_check()
        assert value == "not found"
        assert "FAIL" in status


class TestYtdlpVersionCheck:
    def test_installed(self) -> None:
        from ytplay.cli.doctor import _ytdlp_version_check

        label, _value, status = _ytdlp_version_check()
        assert label == "yt-dlp"
        assert "OK" in status

    @patch.dict("sys.modules", {"yt_dlp": None, "yt_dlp.version": None})
    def test_not_installed(self) -> None:
        from ytplay.cli.doctor import _ytdlp_version_check

        _label, value, status = _ytdlp_version_check()
        assert value == "NOT INSTALLED"
        assert "WARN" in status


class TestPlayerCheck:
    @patch("ytplay.cli.doctor.detect_executable", side_effect=_found)
    @patch("ytplay.cli.doctor.detect_player", return_value="vlc")
    def test_found(self, _mock_player: MagicMock, _mock_detect: MagicMock) -> None:
        from ytplay.cli.doctor import _player_check

        label, value, status = _player_check()
        assert label == "Player"
        assert value.startswith("vlc")
        assert "OK" in status

    @patch("ytplay.cli.doctor.detect_executable", side_effect=_missing)
    @patch("ytplay.cli.doctor.detect_player", return_value="mpv")
    def test_missing_is_warning(self, _mock_player: MagicMock, _mock_detect: MagicMock) -> None:
        from ytplay.cli.doctor import _player_check

        _label, _value, status = _player_check()
        assert "WARN" in status


class TestOsCheck:
    @patch("ytplay.cli.doctor.platform.machine", return_value="arm64")
    @patch("ytplay.cli.doctor.platform.release", return_value="23.4.0")
    @patch("ytplay.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from ytplay.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert "macOS" in value
        assert "Darwin" not in value


class TestYtplayVersionCheck:
    def test_returns_current_version(self) -> None:
        from ytplay.cli.doctor import _ytplay_version_check
        from ytplay.version import __version__

        label, value, status = _ytplay_version_check()
        assert label == "ytplay"
        assert value == __version__
        assert "OK" in status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("ytplay.cli.doctor.detect_executable", side_effect=_found)
    @patch("ytplay.cli.doctor.detect_player", return_value="mpv")
    def test_all_pass_returns_success(
        self, _mock_player: MagicMock, _mock_detect: MagicMock,
    ) -> None:
        from ytplay.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch("ytplay.cli.doctor.detect_executable")
    @patch("ytplay.cli.doctor.detect_player", return_value="mpv")
    def test_missing_player_still_succeeds(
        self, _mock_player: MagicMock, mock_detect: MagicMock,
    ) -> None:
        """A missing player is a WARN, not a FAIL."""
        from ytplay.cli.doctor import run_doctor

        mock_detect.side_effect = lambda name: _found(name) if name == "yt-dlp" else _missing(name)
        assert run_doctor() == exit_codes.SUCCESS

    @patch("ytplay.cli.doctor.platform.system", return_value="Darwin")
    @patch("ytplay.cli.doctor.detect_executable", side_effect=_missing)
    @patch("ytplay.cli.doctor.detect_player", return_value="iina")
    def test_missing_backend_fails_with_guidance(
        self,
        _mock_player: MagicMock,
        _mock_detect: MagicMock,
        _mock_system: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from ytplay.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.GENERAL_ERROR
        captured = capsys.readouterr()
        assert "brew install yt-dlp" in captured.err
        assert "macOS" in captured.err
