"""Root logger configuration for the CLI.

Core and infra modules log through ``logging.getLogger(__name__)``;
only the CLI decides where records go.  A single Rich handler on stderr
keeps log lines visually consistent with the rest of the output.
"""

from __future__ import annotations

import logging

from ytplay.exceptions import EnvironmentError


def setup_logging(*, verbose: bool = False, no_color: bool = False) -> None:
    """Install a ``RichHandler`` on the root logger.

    ``WARNING`` by default, ``DEBUG`` with ``--verbose``.  Calling this
    more than once only adjusts the level.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if any(getattr(h, "_ytplay", False) for h in root_logger.handlers):
        return

    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=verbose,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    handler._ytplay = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)

    logging.captureWarnings(True)
