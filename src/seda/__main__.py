"""Allow ``python -m seda`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m seda`` behaves identically to the ``seda`` console
script.
"""

from __future__ import annotations

from seda.cli.app import cli

if __name__ == "__main__":
    cli()
