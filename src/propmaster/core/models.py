"""Domain models for propmaster.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  :class:`Options` is the parsed snapshot
of one invocation; the ``*Shown`` / ``*Emitted`` / ``*Completed`` /
:class:`Failed` classes together form :data:`DispatchOutcome`, the single
terminal result of a dispatcher run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Parsed options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """Immutable snapshot of the parsed command line."""

    arguments: tuple[str, ...] = ()
    """The raw argument list, used to detect an empty invocation."""

    output_directory: str | None = None
    """Value of ``-o/--outdir``; required for generation."""

    help: bool = False

    analytics_toggle: bool | None = None
    """``True``/``False`` when ``--[no-]analytics`` was given, else ``None``."""

    machine: bool = False
    mock_analytics: bool = False
    version: bool = False

    positional: tuple[str, ...] = ()
    """Positional arguments; exactly one (the generator id) is expected."""

    parse_error: str | None = None
    """Parser message when the command line was malformed."""


# ---------------------------------------------------------------------------
# Failure taxonomy
# ---------------------------------------------------------------------------

class FailureKind(str, Enum):
    """Why a dispatcher run failed."""

    ARGUMENT_ERROR = "argument_error"
    NO_GENERATOR_SPECIFIED = "no_generator_specified"
    TOO_MANY_ARGUMENTS = "too_many_arguments"
    UNKNOWN_GENERATOR = "unknown_generator"
    NO_OUTPUT_DIRECTORY = "no_output_directory"
    INVALID_NAME = "invalid_name"
    TARGET_UNAVAILABLE = "target_unavailable"
    GENERATION_FAILED = "generation_failed"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HelpShown:
    """Usage text was printed."""

    explicit: bool
    """``True`` for ``--help``, ``False`` for an empty invocation."""


@dataclass(frozen=True, slots=True)
class VersionShown:
    version: str


@dataclass(frozen=True, slots=True)
class ConsentToggled:
    """``--[no-]analytics`` stored a new consent decision."""

    opt_in: bool


@dataclass(frozen=True, slots=True)
class MachineListingEmitted:
    """The JSON generator listing was written to stdout."""

    count: int


@dataclass(frozen=True, slots=True)
class GenerationCompleted:
    """A generator ran to completion against its target."""

    generator_id: str
    project_name: str
    file_count: int


@dataclass(frozen=True, slots=True)
class Failed:
    """The run ended with a user-facing error."""

    kind: FailureKind
    message: str
    cause: BaseException | None = None


DispatchOutcome = Union[
    HelpShown,
    VersionShown,
    ConsentToggled,
    MachineListingEmitted,
    GenerationCompleted,
    Failed,
]
"""Exactly one of these is produced per dispatcher run."""


def is_success(outcome: DispatchOutcome) -> bool:
    """Return ``True`` for every outcome except :class:`Failed`."""
    return not isinstance(outcome, Failed)
