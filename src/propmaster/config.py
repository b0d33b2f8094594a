"""Runtime settings resolved from the process environment.

Only two knobs exist: where persisted state (the analytics consent file)
lives, and how chatty the ``propmaster`` logger is.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR_ENV: str = "PROPMASTER_CONFIG_DIR"
LOG_LEVEL_ENV: str = "PROPMASTER_LOG_LEVEL"

DEFAULT_LOG_LEVEL: int = logging.WARNING
CONSENT_FILENAME: str = "analytics.json"


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable process settings."""

    config_dir: Path
    """Directory holding persisted propmaster state."""

    log_level: int = DEFAULT_LOG_LEVEL
    """Level applied to the ``propmaster`` logger."""

    @property
    def consent_file(self) -> Path:
        """Location of the persisted analytics consent flag."""
        return self.config_dir / CONSENT_FILENAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        return cls(
            config_dir=_resolve_config_dir(env),
            log_level=_resolve_log_level(env.get(LOG_LEVEL_ENV)),
        )


def _resolve_config_dir(env: Mapping[str, str]) -> Path:
    explicit = env.get(CONFIG_DIR_ENV)
    if explicit:
        return Path(explicit).expanduser()
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / "propmaster"
    return Path.home() / ".config" / "propmaster"


def _resolve_log_level(raw: str | None) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(raw.strip().upper())
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL
