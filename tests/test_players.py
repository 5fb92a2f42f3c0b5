"""Tests for the player tables (core/players.py)."""

from __future__ import annotations

import pytest

from ytplay.core.players import (
    DEFAULT_PREFERENCES,
    FALLBACK_PLAYER,
    PlayerCapability,
    capability_for,
    player_key,
    preferences_for,
)


class TestCapability:
    @pytest.mark.parametrize("player", ["mpv", "iina", "MPV", "/opt/bin/mpv", "mpv.exe"])
    def test_native(self, player: str) -> None:
        assert capability_for(player) is PlayerCapability.NATIVE_YTDL

    @pytest.mark.parametrize("player", ["vlc", "ffplay", "mplayer", "something-else"])
    def test_generic(self, player: str) -> None:
        assert capability_for(player) is PlayerCapability.GENERIC


class TestPlayerKey:
    @pytest.mark.parametrize(
        ("player", "expected"),
        [
            ("mpv", "mpv"),
            ("/usr/local/bin/vlc", "vlc"),
            ("FFPLAY.EXE", "ffplay"),
        ],
    )
    def test_normalises(self, player: str, expected: str) -> None:
        assert player_key(player) == expected


class TestPreferences:
    def test_darwin_prefers_iina(self) -> None:
        assert preferences_for("Darwin")[0] == "iina"

    def test_windows_has_no_mplayer(self) -> None:
        assert "mplayer" not in preferences_for("Windows")

    def test_linux(self) -> None:
        assert preferences_for("Linux") == ("mpv", "vlc", "ffplay", "mplayer")

    def test_unknown_system_uses_default(self) -> None:
        assert preferences_for("Plan9") == DEFAULT_PREFERENCES

    def test_fallback_is_native(self) -> None:
        assert capability_for(FALLBACK_PLAYER) is PlayerCapability.NATIVE_YTDL
