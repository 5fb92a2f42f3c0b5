"""CLI application entry point and command routing for ytplay.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ytplay.exceptions.YtPlayError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import dataclasses
import shlex
import sys
from collections.abc import Sequence
from pathlib import Path

from ytplay.cli import exit_codes
from ytplay.cli.console import configure, console, escape
from ytplay.core.models import (
    AUDIO_ONLY_QUALITY,
    DEFAULT_QUALITY,
    DEFAULT_RESULTS,
    MAX_RESULTS,
    QUALITY_PRESETS,
    Config,
    PlaybackMode,
    default_output_dir,
)
from ytplay.exceptions import YtPlayError
from ytplay.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

_EPILOG = """\
examples:
  ytplay "lofi hip hop"
  ytplay -1 "rick astley"
  ytplay -d -k --1080 "big buck bunny"
  ytplay -a "beethoven moonlight"
  ytplay -p vlc -n 15 "documentaries"
  ytplay --subs pl "ted talk"
"""


def _result_count(value: str) -> int:
    """argparse type: integer clamped to ``1 .. MAX_RESULTS``."""
    try:
        count = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    return max(1, min(count, MAX_RESULTS))


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``ytplay <search words…>`` — search, pick, play
    * ``ytplay --doctor``        — environment diagnostics
    * ``ytplay --version``
    """
    parser = argparse.ArgumentParser(
        prog="ytplay",
        description="Search YouTube, then stream or download through a local player.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run environment diagnostics and exit.",
    )
    parser.add_argument("query", nargs="*", help="Search query words.")

    search = parser.add_argument_group("search")
    search.add_argument(
        "-n",
        "--results",
        type=_result_count,
        default=DEFAULT_RESULTS,
        metavar="N",
        help=f"Results to show (default {DEFAULT_RESULTS}, max {MAX_RESULTS}).",
    )
    search.add_argument(
        "-1",
        "--first",
        action="store_true",
        help="Auto-play the first result, skip the menu.",
    )

    playback = parser.add_argument_group("playback")
    mode = playback.add_mutually_exclusive_group()
    mode.add_argument(
        "-s",
        "--stream",
        dest="mode",
        action="store_const",
        const=PlaybackMode.STREAM,
        help="Stream, no file saved (default).",
    )
    mode.add_argument(
        "-d",
        "--download",
        dest="mode",
        action="store_const",
        const=PlaybackMode.DOWNLOAD,
        help="Download to the output directory, then play.",
    )
    playback.add_argument("-k", "--keep", action="store_true", help="Keep the downloaded file.")
    playback.add_argument("-a", "--audio-only", action="store_true", help="Audio only.")
    playback.add_argument("-q", "--quality", metavar="FMT", help="yt-dlp format selector.")
    for preset in QUALITY_PRESETS:
        playback.add_argument(
            f"--{preset}",
            dest="preset",
            action="store_const",
            const=preset,
            help=f"Quality preset: {preset}.",
        )
    playback.add_argument("--subs", metavar="LANG", help="Subtitle language, e.g. en, pl.")

    player = parser.add_argument_group("player")
    player.add_argument("-p", "--player", metavar="NAME", help="mpv, vlc, ffplay, iina, mplayer.")
    player.add_argument("--player-args", metavar="ARGS", default="", help="Extra flags for the player.")
    player.add_argument("--ytdlp-args", metavar="ARGS", default="", help="Extra flags for yt-dlp.")

    output = parser.add_argument_group("output")
    output.add_argument(
        "-o",
        "--output",
        metavar="DIR",
        type=Path,
        default=None,
        help=f"Download directory (default: {default_output_dir()}).",
    )
    output.add_argument("--no-color", action="store_true", help="Disable colours.")
    output.add_argument("--quiet", action="store_true", help="Minimal output.")
    output.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show the exact yt-dlp / player commands.",
    )
    return parser


def _select_quality(args: argparse.Namespace) -> str:
    """``--audio-only`` beats ``-q`` beats a preset beats the default."""
    if args.audio_only:
        return AUDIO_ONLY_QUALITY
    if args.quality:
        return str(args.quality)
    if args.preset:
        return QUALITY_PRESETS[args.preset]
    return DEFAULT_QUALITY


def build_config(args: argparse.Namespace) -> Config:
    """Translate parsed arguments into the immutable :class:`Config`."""
    return Config(
        query=" ".join(args.query),
        num_results=1 if args.first else args.results,
        mode=args.mode or PlaybackMode.STREAM,
        audio_only=args.audio_only,
        quality=_select_quality(args),
        output_dir=args.output if args.output is not None else default_output_dir(),
        keep=args.keep,
        subtitle_lang=args.subs or None,
        player=args.player or None,
        player_args=tuple(shlex.split(args.player_args)),
        ytdlp_args=tuple(shlex.split(args.ytdlp_args)),
        first=args.first,
        verbose=args.verbose,
        quiet=args.quiet,
        no_color=args.no_color,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _echo_command(label: str, argv: Sequence[str]) -> None:
    """Verbose side channel: show the command about to run."""
    from ytplay.core.search_service import render_command

    console.print(f"[dim]\\[{escape(label)}][/dim] {escape(render_command(argv))}")


def _handle_play(config: Config) -> int:
    """Dispatch search → selection → playback.

    Flow:
    1. Verify yt-dlp and resolve the player.
    2. Run the search.
    3. Pick a result (menu, or the first one with ``--first``).
    4. Play it and report the player's exit status.
    """
    from ytplay.cli.results_prompt import prompt_result_selection
    from ytplay.core.playback_service import PlaybackService
    from ytplay.core.search_service import SearchService
    from ytplay.exceptions import NoResultsError
    from ytplay.infra.dependency_resolver import require_backend, resolve_player
    from ytplay.infra.filesystem import LocalFileSystem
    from ytplay.infra.process_runner import SubprocessRunner

    require_backend()
    resolution = resolve_player(config.player)
    if resolution.fell_back:
        console.warn(f"Using '{escape(resolution.player)}'.")
    config = dataclasses.replace(config, player=resolution.player)

    echo = _echo_command if config.verbose else None
    runner = SubprocessRunner()

    console.info(f"Searching YouTube for: [bold]{escape(config.query)}[/bold] ...")
    results = SearchService(runner, command_echo=echo).search(
        config.query,
        config.num_results,
    )
    if not results:
        raise NoResultsError(
            f"No results found for '{config.query}'",
            hint="Run with -v to print the exact yt-dlp command.",
        )

    if config.first:
        selected = results.pick(0)
        console.ok(f"Playing: [bold]{escape(selected.title)}[/bold]")
    else:
        index = prompt_result_selection(config.query, results)
        if index is None:
            console.print("\n  [bold cyan]Goodbye![/bold cyan]\n")
            return exit_codes.SUCCESS
        selected = results.pick(index)

        console.print()
        console.ok(f"Selected : [bold]{escape(selected.title)}[/bold]")
        console.ok(f"Mode     : [green]{config.mode.value.capitalize()}[/green]")
        console.ok(f"Quality  : [yellow]{escape(config.quality)}[/yellow]")
        console.ok(f"Player   : [magenta]{escape(config.player or '')}[/magenta]")

    playback = PlaybackService(runner, LocalFileSystem(), command_echo=echo)
    status = playback.play(selected, config)
    if status != 0:
        console.warn(f"Player exited with code {status}")
    if not config.quiet:
        console.print("\n  [bold cyan]\\[ytplay][/bold cyan] Done.\n")
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from ytplay.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ytplay CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)

    configure(no_color=args.no_color, quiet=args.quiet)

    if args.doctor:
        return _handle_doctor()

    if not args.query:
        parser.print_help()
        return exit_codes.SUCCESS

    from ytplay.cli.logging_setup import setup_logging

    config = build_config(args)
    setup_logging(verbose=config.verbose, no_color=config.no_color)
    return _handle_play(config)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtPlayError as exc:
        console.print(f"[bold red]\\[ERROR][/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
