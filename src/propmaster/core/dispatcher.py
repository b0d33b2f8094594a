"""Command dispatcher — turns parsed options into exactly one outcome.

The decision order below is significant: each branch assumes none of the
earlier ones matched.

1. Parser failure passthrough.
2. Explicit ``--[no-]analytics`` toggle.
3. ``--mock-analytics`` swaps the telemetry port for this run.
4. ``--version``.
5. ``--help`` or an empty invocation (consent prompt first if unknown).
6. ``--machine`` listing.
7. Positional-argument shape.
8. Generator resolution.
9. Output directory presence.
10. Project-name derivation, validation, and normalization.
11. Target acquisition and generation.

Guarantees
----------
* Argument-shape and name errors are detected before any target exists,
  so they never leave partial output behind.
* Target and generator failures are reported as :class:`Failed` outcomes;
  files written before the failure are left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path

from propmaster.core.formatting import format_machine_listing, format_usage
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
from propmaster.core.naming import normalize_project_name, validate_project_name
from propmaster.core.protocols import (
    ConsentPrompt,
    GenerationTarget,
    OutputSink,
    TargetFactory,
    TelemetryPort,
)
from propmaster.core.recording import RecordingAnalytics
from propmaster.core.registry import GeneratorRegistry
from propmaster.exceptions import TargetError
from propmaster.version import __version__

logger = logging.getLogger(__name__)


class Dispatcher:
    """Single-shot decision tree over one invocation's :class:`Options`.

    Parameters
    ----------
    registry:
        The available generators.
    analytics:
        Telemetry/consent port.  Consent is read and written only through it.
    output:
        Destination for user-facing lines.
    target_factory:
        Builds a fresh target for each generation run.
    prompt_consent:
        Blocking yes/no consent question, asked only when consent is
        unknown and usage is about to be shown.
    synopsis:
        Flag synopsis rendered at the top of the usage text.
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        analytics: TelemetryPort,
        output: OutputSink,
        *,
        target_factory: TargetFactory,
        prompt_consent: ConsentPrompt,
        synopsis: str = "",
    ) -> None:
        self._registry = registry
        self._analytics = analytics
        self._output = output
        self._target_factory = target_factory
        self._prompt_consent = prompt_consent
        self._synopsis = synopsis

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        options: Options,
        target: GenerationTarget | None = None,
    ) -> DispatchOutcome:
        """Dispatch one invocation.

        Parameters
        ----------
        options:
            Parsed command line.
        target:
            Optional pre-built target for this run.  When ``None`` the
            target factory is called with the output directory.
        """
        out = self._output

        if options.parse_error is not None:
            out.stderr(f"Error: {options.parse_error}")
            return Failed(FailureKind.ARGUMENT_ERROR, options.parse_error)

        analytics = self._analytics

        if options.analytics_toggle is not None:
            analytics.opt_in = options.analytics_toggle
            out.stdout(f"Analytics {'enabled' if analytics.opt_in else 'disabled'}.")
            if analytics.opt_in:
                analytics.send_screen_view("analytics")
            return ConsentToggled(analytics.opt_in)

        if options.mock_analytics:
            # Automated environments must never emit real events.
            analytics = RecordingAnalytics()

        if options.version:
            out.stdout(f"propmaster {__version__}")
            return VersionShown(__version__)

        if options.help or not options.arguments:
            if not analytics.has_set_opt_in:
                analytics.opt_in = self._prompt_consent(out)
            self._screen_view(analytics, "help" if options.help else "main")
            out.stdout(self.usage())
            return HelpShown(explicit=options.help)

        if options.machine:
            self._screen_view(analytics, "machine")
            out.stdout(format_machine_listing(self._registry))
            return MachineListingEmitted(len(self._registry))

        if not options.positional:
            return self._fail(FailureKind.NO_GENERATOR_SPECIFIED, "No generator specified.")

        if len(options.positional) >= 2:
            return self._fail(
                FailureKind.TOO_MANY_ARGUMENTS, "Error: too many arguments given."
            )

        generator_id = options.positional[0]
        generator = self._registry.lookup(generator_id)
        if generator is None:
            return self._fail(
                FailureKind.UNKNOWN_GENERATOR,
                f"'{generator_id}' is not a valid generator.",
            )

        if options.output_directory is None:
            return self._fail(
                FailureKind.NO_OUTPUT_DIRECTORY, "No output directory specified."
            )

        output_dir = Path(options.output_directory)
        project_name = output_dir.name
        violation = validate_project_name(project_name)
        if violation is not None:
            return self._fail(FailureKind.INVALID_NAME, violation.message)
        project_name = normalize_project_name(project_name)

        if target is None:
            target = self._target_factory(output_dir, self._report_write)

        out.stdout(f"Creating {generator_id} application '{project_name}':")
        self._screen_view(analytics, "create")
        analytics.send_event("create", generator_id, generator.description)

        try:
            generator.generate(project_name, target)
        except TargetError as exc:
            logger.debug("Target failure during %s", generator_id, exc_info=True)
            return self._fail(FailureKind.TARGET_UNAVAILABLE, f"Error: {exc}", exc)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Generator %s raised", generator_id, exc_info=True)
            return self._fail(
                FailureKind.GENERATION_FAILED,
                f"Error: generator '{generator_id}' failed: {exc}",
                exc,
            )

        file_count = generator.num_files()
        out.stdout(f"{file_count} files written.")
        return GenerationCompleted(generator_id, project_name, file_count)

    def usage(self) -> str:
        """Full usage text for the current registry."""
        return format_usage(self._registry, self._synopsis)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fail(
        self,
        kind: FailureKind,
        message: str,
        cause: BaseException | None = None,
    ) -> Failed:
        self._output.stderr(message)
        self._output.stderr()
        self._output.stderr(self.usage())
        return Failed(kind, message, cause)

    def _report_write(self, relative_path: str) -> None:
        self._output.stdout(f"  {relative_path}")

    @staticmethod
    def _screen_view(analytics: TelemetryPort, view: str) -> None:
        # Non-consenting users only ever report the generic view.
        if not analytics.opt_in:
            view = "main"
        analytics.send_screen_view(view)
