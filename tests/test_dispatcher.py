"""Tests for the command dispatcher (core/dispatcher.py).

Every collaborator is in-memory: targets record writes, telemetry
records hits, output is buffered, and the consent prompt is a stub.

Coverage:
* Branch precedence (parse error, version, toggle, help, machine).
* Argument-shape, lookup, output-directory, and name failures.
* Generation wiring, file counts, and write reporting.
* Telemetry screen views and consent handling.
* Failure propagation without rollback.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from conftest import ConsentPromptStub, FakeGenerator
from propmaster.core.dispatcher import Dispatcher
from propmaster.core.models import (
    ConsentToggled,
    Failed,
    FailureKind,
    GenerationCompleted,
    HelpShown,
    MachineListingEmitted,
    Options,
    VersionShown,
)
from propmaster.core.recording import BufferedOutput, RecordingAnalytics, RecordingTarget
from propmaster.exceptions import TargetWriteError
from propmaster.version import __version__

MakeDispatcher = Callable[..., Dispatcher]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _opts(*positional: str, outdir: str | None = None, **overrides: object) -> Options:
    arguments = list(positional)
    if outdir is not None:
        arguments += ["-o", outdir]
    defaults: dict[str, object] = {
        "arguments": tuple(overrides.pop("arguments", arguments)),  # type: ignore[arg-type]
        "output_directory": outdir,
        "positional": tuple(positional),
    }
    defaults.update(overrides)
    return Options(**defaults)  # type: ignore[arg-type]


class _ExplodingTarget:
    def __init__(self, fail_at: int) -> None:
        self.fail_at = fail_at
        self.files: list[str] = []

    def write(self, relative_path: str, contents: bytes) -> None:
        if len(self.files) == self.fail_at:
            raise TargetWriteError(f"disk full while writing {relative_path}")
        self.files.append(relative_path)


# ---------------------------------------------------------------------------
# Parse failures and version
# ---------------------------------------------------------------------------

class TestParseFailure:
    def test_parse_error_short_circuits(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        options = Options(
            arguments=("--bogus",),
            parse_error="unrecognized arguments: --bogus",
            help=True,
            analytics_toggle=True,
        )
        outcome = make_dispatcher().run(options)

        assert outcome == Failed(FailureKind.ARGUMENT_ERROR, "unrecognized arguments: --bogus")
        assert output.err == ["Error: unrecognized arguments: --bogus"]
        assert output.out == []

    def test_parse_error_prints_no_usage(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        make_dispatcher().run(Options(arguments=("-x",), parse_error="bad"))
        assert "Available generators:" not in output.err_text


class TestVersion:
    def test_version_shown(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        analytics: RecordingAnalytics,
    ) -> None:
        outcome = make_dispatcher().run(_opts(arguments=("--version",), version=True))
        assert outcome == VersionShown(__version__)
        assert output.out == [f"propmaster {__version__}"]
        assert analytics.screen_views == []

    def test_explicit_toggle_wins_over_version(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        port = RecordingAnalytics(opt_in=True)
        outcome = make_dispatcher(analytics=port).run(
            _opts(
                arguments=("--version", "--no-analytics"),
                version=True,
                analytics_toggle=False,
            )
        )

        assert outcome == ConsentToggled(opt_in=False)
        assert port.opt_in is False
        assert output.out == ["Analytics disabled."]

    def test_version_wins_over_help(self, make_dispatcher: MakeDispatcher) -> None:
        prompt = ConsentPromptStub()
        port = RecordingAnalytics(has_set_opt_in=False)
        outcome = make_dispatcher(analytics=port, prompt_consent=prompt).run(
            _opts(arguments=("--version", "-h"), version=True, help=True)
        )

        assert outcome == VersionShown(__version__)
        assert prompt.calls == 0


# ---------------------------------------------------------------------------
# Consent toggle
# ---------------------------------------------------------------------------

class TestConsentToggle:
    def test_opt_in_sets_consent_and_sends_view(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        port = RecordingAnalytics(opt_in=False, has_set_opt_in=False)
        outcome = make_dispatcher(analytics=port).run(
            _opts(arguments=("--analytics",), analytics_toggle=True)
        )

        assert outcome == ConsentToggled(opt_in=True)
        assert port.opt_in is True
        assert port.screen_views == ["analytics"]
        assert output.out == ["Analytics enabled."]

    def test_opt_out_sends_nothing(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        port = RecordingAnalytics(opt_in=True)
        outcome = make_dispatcher(analytics=port).run(
            _opts(arguments=("--no-analytics",), analytics_toggle=False)
        )

        assert outcome == ConsentToggled(opt_in=False)
        assert port.opt_in is False
        assert port.screen_views == []
        assert output.out == ["Analytics disabled."]

    def test_toggle_wins_over_generation(
        self,
        make_dispatcher: MakeDispatcher,
        targets: list[RecordingTarget],
        generators: list[FakeGenerator],
    ) -> None:
        outcome = make_dispatcher().run(
            _opts("console", outdir="out/myapp", analytics_toggle=True, help=True)
        )
        assert isinstance(outcome, ConsentToggled)
        assert targets == []
        assert all(g.project_names == [] for g in generators)


# ---------------------------------------------------------------------------
# Help and empty invocation
# ---------------------------------------------------------------------------

class TestHelp:
    def test_empty_invocation_shows_usage(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        outcome = make_dispatcher().run(Options())

        assert outcome == HelpShown(explicit=False)
        assert output.out[0] == "usage: propmaster -o <output directory> generator-name"
        assert "Available generators:" in output.out

    def test_usage_lists_generators_sorted_and_aligned(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        make_dispatcher().run(_opts(arguments=("-h",), help=True))

        entries = [line for line in output.out if ": A " in line]
        assert entries == [
            "console: A console app.",
            "library: A library.",
            "web    : A web app.",
        ]

    def test_help_wins_over_machine(
        self, make_dispatcher: MakeDispatcher,
    ) -> None:
        outcome = make_dispatcher().run(
            _opts(arguments=("-h", "--machine"), help=True, machine=True)
        )
        assert outcome == HelpShown(explicit=True)

    def test_help_view_name_when_opted_in(
        self, make_dispatcher: MakeDispatcher, analytics: RecordingAnalytics,
    ) -> None:
        make_dispatcher().run(_opts(arguments=("-h",), help=True))
        assert analytics.screen_views == ["help"]

    def test_empty_invocation_view_is_main(
        self, make_dispatcher: MakeDispatcher, analytics: RecordingAnalytics,
    ) -> None:
        make_dispatcher().run(Options())
        assert analytics.screen_views == ["main"]

    def test_view_demoted_when_not_opted_in(
        self, make_dispatcher: MakeDispatcher,
    ) -> None:
        port = RecordingAnalytics(opt_in=False)
        make_dispatcher(analytics=port).run(_opts(arguments=("-h",), help=True))
        assert port.screen_views == ["main"]


class TestConsentPrompt:
    def test_prompt_when_consent_unknown(
        self, make_dispatcher: MakeDispatcher,
    ) -> None:
        port = RecordingAnalytics(opt_in=False, has_set_opt_in=False)
        prompt = ConsentPromptStub(answer=True)
        make_dispatcher(analytics=port, prompt_consent=prompt).run(
            _opts(arguments=("-h",), help=True)
        )

        assert prompt.calls == 1
        assert port.opt_in is True
        # The fresh decision is visible to the very first screen view.
        assert port.screen_views == ["help"]

    def test_prompt_answer_no(self, make_dispatcher: MakeDispatcher) -> None:
        port = RecordingAnalytics(opt_in=True, has_set_opt_in=False)
        make_dispatcher(analytics=port, prompt_consent=ConsentPromptStub(False)).run(Options())

        assert port.opt_in is False
        assert port.screen_views == ["main"]

    def test_prompt_happens_before_any_output(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        seen: list[list[str]] = []

        def prompt(sink: object) -> bool:
            seen.append(list(output.out))
            return False

        port = RecordingAnalytics(has_set_opt_in=False)
        make_dispatcher(analytics=port, prompt_consent=prompt).run(Options())
        assert seen == [[]]

    def test_no_prompt_when_consent_known(self, make_dispatcher: MakeDispatcher) -> None:
        prompt = ConsentPromptStub()
        make_dispatcher(prompt_consent=prompt).run(Options())
        assert prompt.calls == 0

    def test_no_prompt_outside_help(self, make_dispatcher: MakeDispatcher) -> None:
        port = RecordingAnalytics(has_set_opt_in=False)
        prompt = ConsentPromptStub()
        make_dispatcher(analytics=port, prompt_consent=prompt).run(
            _opts("console", outdir="out/myapp")
        )
        assert prompt.calls == 0


class TestMockAnalytics:
    def test_mock_flag_replaces_port(self, make_dispatcher: MakeDispatcher) -> None:
        port = RecordingAnalytics(opt_in=True, has_set_opt_in=False)
        prompt = ConsentPromptStub()
        outcome = make_dispatcher(analytics=port, prompt_consent=prompt).run(
            _opts(arguments=("--mock-analytics",), help=True, mock_analytics=True)
        )

        assert isinstance(outcome, HelpShown)
        assert prompt.calls == 0
        assert port.screen_views == []

    def test_mock_flag_generation_sends_nothing(
        self, make_dispatcher: MakeDispatcher, analytics: RecordingAnalytics,
    ) -> None:
        outcome = make_dispatcher().run(
            _opts("console", outdir="out/myapp", mock_analytics=True)
        )
        assert isinstance(outcome, GenerationCompleted)
        assert analytics.screen_views == []
        assert analytics.events == []


# ---------------------------------------------------------------------------
# Machine listing
# ---------------------------------------------------------------------------

class TestMachineListing:
    def test_listing_matches_registry(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        analytics: RecordingAnalytics,
    ) -> None:
        outcome = make_dispatcher().run(_opts(arguments=("--machine",), machine=True))

        assert outcome == MachineListingEmitted(count=3)
        assert len(output.out) == 1
        assert json.loads(output.out[0]) == [
            {"name": "console", "description": "A console app.", "entrypoint": "main.py"},
            {"name": "library", "description": "A library."},
            {"name": "web", "description": "A web app.", "entrypoint": "app.py"},
        ]
        assert analytics.screen_views == ["machine"]

    def test_machine_wins_over_generation(
        self, make_dispatcher: MakeDispatcher, targets: list[RecordingTarget],
    ) -> None:
        outcome = make_dispatcher().run(_opts("console", outdir="out/x", machine=True))
        assert isinstance(outcome, MachineListingEmitted)
        assert targets == []


# ---------------------------------------------------------------------------
# Argument and name failures
# ---------------------------------------------------------------------------

class TestFailures:
    def test_no_generator_specified(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        targets: list[RecordingTarget],
    ) -> None:
        outcome = make_dispatcher().run(_opts(outdir="out/myapp"))

        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.NO_GENERATOR_SPECIFIED
        assert output.err[0] == "No generator specified."
        assert "Available generators:" in output.err
        assert targets == []

    def test_too_many_arguments(self, make_dispatcher: MakeDispatcher) -> None:
        outcome = make_dispatcher().run(_opts("console", "web", outdir="out/myapp"))
        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.TOO_MANY_ARGUMENTS

    def test_unknown_generator(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        outcome = make_dispatcher().run(_opts("doesnotexist", outdir="out/myapp"))

        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.UNKNOWN_GENERATOR
        assert output.err[0] == "'doesnotexist' is not a valid generator."

    def test_lookup_is_case_sensitive(self, make_dispatcher: MakeDispatcher) -> None:
        outcome = make_dispatcher().run(_opts("Console", outdir="out/myapp"))
        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.UNKNOWN_GENERATOR

    def test_no_output_directory(
        self, make_dispatcher: MakeDispatcher, output: BufferedOutput,
    ) -> None:
        outcome = make_dispatcher().run(_opts("console"))

        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.NO_OUTPUT_DIRECTORY
        assert output.err[0] == "No output directory specified."

    @pytest.mark.parametrize(
        ("outdir", "message"),
        [
            ("out/my app", "The project name cannot contain spaces."),
            ("out/9app", "The project name must start with a letter."),
            ("out/_app", "The project name must start with a letter."),
        ],
    )
    def test_invalid_name_touches_nothing(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        targets: list[RecordingTarget],
        outdir: str,
        message: str,
    ) -> None:
        outcome = make_dispatcher().run(_opts("console", outdir=outdir))

        assert outcome == Failed(FailureKind.INVALID_NAME, message)
        assert output.err[0] == message
        assert "Available generators:" in output.err
        assert targets == []

    def test_failures_send_no_telemetry(
        self, make_dispatcher: MakeDispatcher, analytics: RecordingAnalytics,
    ) -> None:
        make_dispatcher().run(_opts("doesnotexist", outdir="out/myapp"))
        assert analytics.screen_views == []
        assert analytics.events == []


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class TestGeneration:
    def test_generation_completes(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        targets: list[RecordingTarget],
        generators: list[FakeGenerator],
    ) -> None:
        outcome = make_dispatcher().run(_opts("console", outdir="./out/myapp"))

        assert outcome == GenerationCompleted("console", "myapp", 3)
        assert len(targets) == 1
        assert targets[0].paths == ["main.py", "README.md", "myapp.txt"]
        assert generators[1].project_names == ["myapp"]
        assert output.out == [
            "Creating console application 'myapp':",
            "  main.py",
            "  README.md",
            "  myapp.txt",
            "3 files written.",
        ]

    def test_file_count_matches_writes(
        self, make_dispatcher: MakeDispatcher, targets: list[RecordingTarget],
    ) -> None:
        outcome = make_dispatcher().run(_opts("web", outdir="./out/myapp"))
        assert isinstance(outcome, GenerationCompleted)
        assert outcome.file_count == len(targets[0].files) == 2

    def test_project_name_is_normalized(
        self, make_dispatcher: MakeDispatcher, generators: list[FakeGenerator],
    ) -> None:
        outcome = make_dispatcher().run(_opts("library", outdir="/tmp/x/My-App"))
        assert isinstance(outcome, GenerationCompleted)
        assert outcome.project_name == "my_app"
        assert generators[2].project_names == ["my_app"]

    def test_injected_target_is_used(
        self, make_dispatcher: MakeDispatcher, targets: list[RecordingTarget],
    ) -> None:
        target = RecordingTarget()
        make_dispatcher().run(_opts("library", outdir="out/myapp"), target=target)

        assert targets == []
        assert target.paths == ["README.md"]

    def test_telemetry_on_create(
        self, make_dispatcher: MakeDispatcher, analytics: RecordingAnalytics,
    ) -> None:
        make_dispatcher().run(_opts("web", outdir="out/myapp"))
        assert analytics.screen_views == ["create"]
        assert analytics.events == [("create", "web", "A web app.")]

    def test_create_view_demoted_when_not_opted_in(
        self, make_dispatcher: MakeDispatcher,
    ) -> None:
        port = RecordingAnalytics(opt_in=False)
        make_dispatcher(analytics=port).run(_opts("web", outdir="out/myapp"))
        assert port.screen_views == ["main"]

    def test_repeated_runs_are_independent(
        self, make_dispatcher: MakeDispatcher, targets: list[RecordingTarget],
    ) -> None:
        dispatcher = make_dispatcher()
        options = _opts("console", outdir="./out/myapp")

        first = dispatcher.run(options)
        second = dispatcher.run(options)

        assert first == second
        assert len(targets) == 2
        assert targets[0] is not targets[1]
        assert targets[0].files == targets[1].files

    def test_target_receives_output_directory(
        self, generators: list[FakeGenerator], analytics: RecordingAnalytics,
    ) -> None:
        roots: list[Path] = []

        def factory(root: Path, on_write: Callable[[str], None]) -> RecordingTarget:
            roots.append(root)
            return RecordingTarget(on_write)

        from propmaster.core.registry import GeneratorRegistry

        dispatcher = Dispatcher(
            GeneratorRegistry(generators),
            analytics,
            BufferedOutput(),
            target_factory=factory,
            prompt_consent=ConsentPromptStub(),
        )
        dispatcher.run(_opts("web", outdir="out/myapp"))
        assert roots == [Path("out/myapp")]


class TestGenerationFailures:
    def test_generator_exception_becomes_failed(
        self,
        make_dispatcher: MakeDispatcher,
        output: BufferedOutput,
        targets: list[RecordingTarget],
        generators: list[FakeGenerator],
    ) -> None:
        generators[1].fail_after = 2
        outcome = make_dispatcher().run(_opts("console", outdir="out/myapp"))

        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.GENERATION_FAILED
        assert isinstance(outcome.cause, RuntimeError)
        assert "template exploded" in output.err[0]
        # No rollback: the first two files stay written.
        assert targets[0].paths == ["main.py", "README.md"]

    def test_target_error_becomes_target_unavailable(
        self, make_dispatcher: MakeDispatcher,
    ) -> None:
        target = _ExplodingTarget(fail_at=1)
        outcome = make_dispatcher().run(_opts("console", outdir="out/myapp"), target=target)

        assert isinstance(outcome, Failed)
        assert outcome.kind is FailureKind.TARGET_UNAVAILABLE
        assert isinstance(outcome.cause, TargetWriteError)
        assert target.files == ["main.py"]
