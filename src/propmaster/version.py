"""Single source of truth for the propmaster version."""

from __future__ import annotations

__version__: str = "0.1.1"
