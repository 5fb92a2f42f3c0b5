"""Allow ``python -m ytplay`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m ytplay`` behaves identically to the ``ytplay``
console script.
"""

from __future__ import annotations

from ytplay.cli.app import cli

if __name__ == "__main__":
    cli()
