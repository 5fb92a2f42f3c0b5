"""Core playback service — runs the selected video through a player.

Two top-level modes, chosen by :attr:`Config.mode`:

``STREAM``
    Players with :attr:`PlayerCapability.NATIVE_YTDL` get the watch URL
    and the format selector directly.  Every other player gets a direct
    media URL resolved beforehand with ``yt-dlp -g``.

``DOWNLOAD``
    yt-dlp downloads into :attr:`Config.output_dir`, the newest file in
    that directory is played, and it is deleted afterwards unless
    :attr:`Config.keep` is set.

Guarantees
----------
* Every command is an argv list — no shell, no string splicing.
* External processes and files are reached only through the injected
  :class:`CommandRunner` and :class:`FileSystem`.
* The return value is the player's exit status; judging it is the
  caller's job.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ytplay.core.models import BACKEND, Config, PlaybackMode, VideoResult
from ytplay.core.players import PlayerCapability, capability_for
from ytplay.core.protocols import CommandEcho, CommandRunner, FileSystem
from ytplay.exceptions import (
    ArtifactNotFoundError,
    DownloadFailedError,
    StreamResolutionError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)

OUTPUT_TEMPLATE: str = "%(title)s.%(ext)s"


class PlaybackService:
    """Stateless service that drives stream or download playback.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    files:
        Any object satisfying the :class:`FileSystem` protocol.
    command_echo:
        Optional verbose side channel, invoked before each command.
    """

    def __init__(
        self,
        runner: CommandRunner,
        files: FileSystem,
        *,
        command_echo: CommandEcho | None = None,
    ) -> None:
        self._runner: CommandRunner = runner
        self._files: FileSystem = files
        self._echo: CommandEcho | None = command_echo

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def play(self, result: VideoResult, config: Config) -> int:
        """Play *result* according to *config* and return the exit status.

        ``config.player`` must already be resolved.

        Raises
        ------
        StreamResolutionError
            Stream mode, generic player: yt-dlp printed no media URL.
        DownloadFailedError
            Download mode: yt-dlp exited with a nonzero status.
        ArtifactNotFoundError
            Download mode: no file was found after a successful download.
        OutputDirectoryError
            Download mode: the output directory cannot be created.
        ProcessLaunchError
            If yt-dlp or the player cannot be started.
        """
        if config.mode is PlaybackMode.DOWNLOAD:
            return self._download_and_play(result, config)
        return self._stream(result, config)

    # ------------------------------------------------------------------
    # Command construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_native_argv(player: str, url: str, config: Config) -> list[str]:
        """Player runs yt-dlp itself; pass it the format selector."""
        argv = [player, f"--ytdl-format={config.quality}"]
        if config.subtitle_lang:
            argv += ["--sub-auto=all", f"--slang={config.subtitle_lang}"]
        if config.audio_only:
            argv.append("--no-video")
        argv += config.player_args
        argv.append(url)
        return argv

    @staticmethod
    def build_resolve_argv(url: str, config: Config) -> list[str]:
        """Ask yt-dlp for the direct media URL of *url*."""
        return [
            BACKEND,
            "--no-warnings",
            "-g",
            "-f",
            config.quality,
            *config.ytdlp_args,
            url,
        ]

    @staticmethod
    def build_download_argv(url: str, config: Config) -> list[str]:
        """Download *url* into ``config.output_dir``."""
        return [
            BACKEND,
            "--no-warnings",
            "-f",
            config.quality,
            "-o",
            str(Path(config.output_dir) / OUTPUT_TEMPLATE),
            *config.ytdlp_args,
            url,
        ]

    @staticmethod
    def build_player_argv(player: str, target: str, config: Config) -> list[str]:
        """Hand a resolved URL or local file to a plain player."""
        return [player, *config.player_args, target]

    # ------------------------------------------------------------------
    # Stream mode
    # ------------------------------------------------------------------

    def _stream(self, result: VideoResult, config: Config) -> int:
        player = self._require_player(config)
        url = result.watch_url

        if capability_for(player) is PlayerCapability.NATIVE_YTDL:
            argv = self.build_native_argv(player, url, config)
        else:
            media_url = self._resolve_media_url(url, config)
            argv = self.build_player_argv(player, media_url, config)

        return self._launch("player", argv)

    def _resolve_media_url(self, url: str, config: Config) -> str:
        argv = self.build_resolve_argv(url, config)
        self._emit("yt-dlp -g", argv)
        media_url = self._runner.first_line(argv)
        if not media_url:
            raise StreamResolutionError(
                "yt-dlp returned no stream URL.",
                hint=append_ytdlp_upgrade_suggestion(
                    "Try a different quality selector with -q, or use mpv.",
                ),
            )
        logger.debug("Resolved %s to a direct media URL", url)
        return media_url

    # ------------------------------------------------------------------
    # Download mode
    # ------------------------------------------------------------------

    def _download_and_play(self, result: VideoResult, config: Config) -> int:
        player = self._require_player(config)
        output_dir = Path(config.output_dir)
        self._files.ensure_directory(output_dir)

        argv = self.build_download_argv(result.watch_url, config)
        self._emit(BACKEND, argv)
        status = self._runner.run(argv)
        if status != 0:
            raise DownloadFailedError(
                f"yt-dlp download failed (exit status {status}).",
                hint=append_ytdlp_upgrade_suggestion(
                    "Check your network or try a different quality selector.",
                ),
            )

        artifact = self._files.newest_file(output_dir)
        if artifact is None:
            raise ArtifactNotFoundError(
                f"Could not find downloaded file in {output_dir}",
            )
        logger.info("Saved: %s", artifact)

        try:
            return self._launch("player", self.build_player_argv(player, str(artifact), config))
        finally:
            if not config.keep:
                self._cleanup(artifact)

    def _cleanup(self, artifact: Path) -> None:
        logger.debug("Removing temporary file %s", artifact)
        if not self._files.remove(artifact):
            logger.warning("Could not remove temporary file %s", artifact)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_player(config: Config) -> str:
        if not config.player:
            raise ValueError("Config.player must be resolved before playback.")
        return config.player

    def _launch(self, label: str, argv: list[str]) -> int:
        self._emit(label, argv)
        return self._runner.run(argv)

    def _emit(self, label: str, argv: list[str]) -> None:
        if self._echo is not None:
            self._echo(label, argv)
