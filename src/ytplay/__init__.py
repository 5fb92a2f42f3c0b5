"""ytplay — search YouTube from the terminal, then stream or download.

Drives the ``yt-dlp`` executable and a locally installed media player
through a strict layered architecture.
"""

from ytplay.version import __version__

__all__: list[str] = ["__version__"]
