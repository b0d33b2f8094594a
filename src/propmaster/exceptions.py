"""Custom exception hierarchy for propmaster.

Expected dispatch branches (help, consent toggle, argument-shape errors)
are reported as :class:`~propmaster.core.models.DispatchOutcome` values
and never raised.  The classes below cover the genuinely exceptional
conditions: parser failures, I/O against a generation target, generator
crashes, and unreadable persisted state.

Hierarchy
---------
PropmasterError
├── ArgumentParseError
├── TargetError
│   ├── TargetUnavailableError
│   ├── TargetWriteError
│   └── UnsafeTargetPathError
├── GenerationError
├── ConsentStoreError
└── EnvironmentError
"""

from __future__ import annotations


class PropmasterError(Exception):
    """Base exception for all propmaster errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Arguments -------------------------------------------------------------

class ArgumentParseError(PropmasterError):
    """Raised by the option parser for a malformed command line."""


# --- Generation targets ----------------------------------------------------

class TargetError(PropmasterError):
    """Base class for failures of a generation target."""


class TargetUnavailableError(TargetError):
    """Raised when the target root directory cannot be created."""


class TargetWriteError(TargetError):
    """Raised when a single file cannot be written into the target."""


class UnsafeTargetPathError(TargetError):
    """Raised when a relative path would escape the target root."""


# --- Generators ------------------------------------------------------------

class GenerationError(PropmasterError):
    """Raised when a generator fails while producing content."""


# --- Persisted state / environment ----------------------------------------

class ConsentStoreError(PropmasterError):
    """Raised when the analytics consent file cannot be written."""


class EnvironmentError(PropmasterError):
    """Raised when a required runtime dependency is not available."""
