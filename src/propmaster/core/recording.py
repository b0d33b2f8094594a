"""In-memory implementations of the core protocols.

These never touch real storage or the network.  ``RecordingAnalytics``
doubles as the production ``--mock-analytics`` implementation so build
bots never emit real telemetry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from propmaster.core.paths import checked_relative_path

logger = logging.getLogger(__name__)


class RecordingTarget:
    """Generation target that captures ``(path, bytes)`` pairs.

    Parameters
    ----------
    on_write:
        Optional observer called with each accepted relative path.
    """

    def __init__(self, on_write: Callable[[str], None] | None = None) -> None:
        self.files: list[tuple[str, bytes]] = []
        self._on_write = on_write

    @classmethod
    def factory(cls, _root: Path, on_write: Callable[[str], None]) -> RecordingTarget:
        """:data:`~propmaster.core.protocols.TargetFactory` adapter."""
        return cls(on_write)

    def write(self, relative_path: str, contents: bytes) -> None:
        path = checked_relative_path(relative_path).as_posix()
        self.files.append((path, bytes(contents)))
        if self._on_write is not None:
            self._on_write(path)

    @property
    def paths(self) -> list[str]:
        return [path for path, _ in self.files]

    def read(self, relative_path: str) -> bytes:
        """Return the last bytes written at *relative_path*."""
        for path, contents in reversed(self.files):
            if path == relative_path:
                return contents
        raise KeyError(relative_path)


@dataclass
class RecordingAnalytics:
    """Telemetry port that records hits instead of sending them.

    Consent defaults to "already decided, opted out" so an automated run
    never blocks on the interactive prompt.
    """

    opt_in: bool = False
    has_set_opt_in: bool = True
    screen_views: list[str] = field(default_factory=list)
    events: list[tuple[str, str, str | None]] = field(default_factory=list)

    def send_screen_view(self, view_name: str) -> None:
        logger.debug("mock screen view: %s", view_name)
        self.screen_views.append(view_name)

    def send_event(self, category: str, action: str, label: str | None = None) -> None:
        logger.debug("mock event: %s/%s", category, action)
        self.events.append((category, action, label))


@dataclass
class BufferedOutput:
    """Output sink that keeps stdout and stderr lines in memory."""

    out: list[str] = field(default_factory=list)
    err: list[str] = field(default_factory=list)

    def stdout(self, message: str = "") -> None:
        self.out.extend(message.split("\n"))

    def stderr(self, message: str = "") -> None:
        self.err.extend(message.split("\n"))

    @property
    def out_text(self) -> str:
        return "\n".join(self.out)

    @property
    def err_text(self) -> str:
        return "\n".join(self.err)
