"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and generators
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationTarget(Protocol):
    """Write sink for exactly one generation run.

    A target must not be reused across runs.
    """

    def write(self, relative_path: str, contents: bytes) -> None:
        """Write *contents* at *relative_path* below the target root.

        Raises
        ------
        TargetUnavailableError
            When the root cannot be created.
        TargetWriteError
            When the underlying write fails.
        UnsafeTargetPathError
            When *relative_path* is absolute or escapes the root.
        """
        ...  # pragma: no cover


TargetFactory = Callable[[Path, Callable[[str], None]], GenerationTarget]
"""Builds a target for ``(root, on_write)``; called once per generation run."""


@runtime_checkable
class Generator(Protocol):
    """A pluggable unit producing a named kind of scaffolded project."""

    @property
    def id(self) -> str: ...  # pragma: no cover

    @property
    def description(self) -> str: ...  # pragma: no cover

    @property
    def entrypoint(self) -> str | None: ...  # pragma: no cover

    def generate(self, project_name: str, target: GenerationTarget) -> None:
        """Render every file of the project into *target*."""
        ...  # pragma: no cover

    def num_files(self) -> int:
        """Files written by the most recent :meth:`generate` call."""
        ...  # pragma: no cover


class TelemetryPort(Protocol):
    """Analytics and consent side channel used by the dispatcher."""

    opt_in: bool
    """Persisted consent; assigning stores a new decision."""

    @property
    def has_set_opt_in(self) -> bool:
        """``False`` while the consent state is still unknown."""
        ...  # pragma: no cover

    def send_screen_view(self, view_name: str) -> None: ...  # pragma: no cover

    def send_event(self, category: str, action: str, label: str | None = None) -> None:
        ...  # pragma: no cover


class OutputSink(Protocol):
    """Line-oriented user-facing output."""

    def stdout(self, message: str = "") -> None: ...  # pragma: no cover

    def stderr(self, message: str = "") -> None: ...  # pragma: no cover


ConsentPrompt = Callable[[OutputSink], bool]
"""Blocking yes/no question; returns ``True`` to opt in."""
