"""Core layer — dispatch decision logic and the contracts it relies on.

Rules
-----
* No ``print()`` calls; user-facing text goes through an ``OutputSink``.
* No filesystem or network I/O (in-memory doubles only).
* No imports from ``cli`` or ``infra``.
"""

from propmaster.core.dispatcher import Dispatcher
from propmaster.core.models import (
    ConsentToggled,
    DispatchOutcome,
    Failed,
    FailureKind,
    GenerationCompleted,
    HelpShown,
    MachineListingEmitted,
    Options,
    VersionShown,
)
from propmaster.core.naming import NameViolation, normalize_project_name, validate_project_name
from propmaster.core.protocols import GenerationTarget, Generator, OutputSink, TelemetryPort
from propmaster.core.recording import BufferedOutput, RecordingAnalytics, RecordingTarget
from propmaster.core.registry import GeneratorRegistry

__all__: list[str] = [
    "BufferedOutput",
    "ConsentToggled",
    "DispatchOutcome",
    "Dispatcher",
    "Failed",
    "FailureKind",
    "GenerationCompleted",
    "GenerationTarget",
    "Generator",
    "GeneratorRegistry",
    "HelpShown",
    "MachineListingEmitted",
    "NameViolation",
    "Options",
    "OutputSink",
    "RecordingAnalytics",
    "RecordingTarget",
    "TelemetryPort",
    "VersionShown",
    "normalize_project_name",
    "validate_project_name",
]
