"""CLI application entry point and composition root for propmaster.

This module is the **sole error boundary** for the entire application.
It catches :class:`~propmaster.exceptions.PropmasterError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No decision logic lives here; every branch is taken by
  :class:`~propmaster.core.dispatcher.Dispatcher`.
* This module wires concrete infra implementations into the dispatcher
  and is the only place that translates a ``DispatchOutcome`` into an
  OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from propmaster.cli import exit_codes
from propmaster.cli.console import ConsoleOutput, console
from propmaster.cli.consent_prompt import prompt_consent
from propmaster.cli.options import flag_synopsis, parse_options
from propmaster.config import Settings
from propmaster.core.dispatcher import Dispatcher
from propmaster.core.models import DispatchOutcome, is_success
from propmaster.core.protocols import OutputSink, TelemetryPort
from propmaster.core.registry import GeneratorRegistry
from propmaster.exceptions import PropmasterError
from propmaster.generators import builtin_generators
from propmaster.infra.analytics import FileConsentAnalytics
from propmaster.infra.directory_target import DirectoryTarget
from propmaster.utils.log import configure_logging


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def build_dispatcher(
    settings: Settings,
    *,
    output: OutputSink | None = None,
    analytics: TelemetryPort | None = None,
) -> Dispatcher:
    """Wire the production dispatcher.

    *output* and *analytics* may be overridden for tests.
    """
    return Dispatcher(
        GeneratorRegistry(builtin_generators()),
        analytics if analytics is not None else FileConsentAnalytics(settings.consent_file),
        output if output is not None else ConsoleOutput(),
        target_factory=DirectoryTarget,
        prompt_consent=prompt_consent,
        synopsis=flag_synopsis(),
    )


def exit_code_for(outcome: DispatchOutcome) -> int:
    return exit_codes.SUCCESS if is_success(outcome) else exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    output: OutputSink | None = None,
    analytics: TelemetryPort | None = None,
) -> int:
    """Run the propmaster CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    settings:
        Resolved settings; read from the environment when ``None``.

    Returns
    -------
    int
        OS process exit code.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    options = parse_options(sys.argv[1:] if argv is None else argv)
    dispatcher = build_dispatcher(settings, output=output, analytics=analytics)
    return exit_code_for(dispatcher.run(options))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except PropmasterError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
