"""Allow ``python -m propmaster`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m propmaster`` behaves identically to the ``propmaster``
console script.
"""

from __future__ import annotations

from propmaster.cli.app import cli

if __name__ == "__main__":
    cli()
