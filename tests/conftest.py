"""Shared pytest fixtures and configuration for the propmaster test suite.

Guidelines
----------
* No internet access in any test.
* Never read or write the real consent file; settings point at ``tmp_path``.
* Core tests use in-memory targets, telemetry, and output.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from propmaster.config import Settings
from propmaster.core.dispatcher import Dispatcher
from propmaster.core.protocols import GenerationTarget, OutputSink
from propmaster.core.recording import BufferedOutput, RecordingAnalytics, RecordingTarget
from propmaster.core.registry import GeneratorRegistry


class FakeGenerator:
    """Minimal generator writing a fixed list of files."""

    def __init__(
        self,
        id: str,
        description: str = "A fake generator.",
        entrypoint: str | None = None,
        files: Sequence[tuple[str, bytes]] = (("README.md", b"hello\n"),),
        fail_after: int | None = None,
    ) -> None:
        self.id = id
        self.description = description
        self.entrypoint = entrypoint
        self.files = list(files)
        self.fail_after = fail_after
        self.project_names: list[str] = []
        self._written = 0

    def generate(self, project_name: str, target: GenerationTarget) -> None:
        self.project_names.append(project_name)
        self._written = 0
        for index, (path, contents) in enumerate(self.files):
            if self.fail_after is not None and index >= self.fail_after:
                raise RuntimeError("template exploded")
            target.write(path.replace("NAME", project_name), contents)
            self._written += 1

    def num_files(self) -> int:
        return self._written


class ConsentPromptStub:
    """Records prompt calls and answers with a fixed decision."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.calls = 0

    def __call__(self, output: OutputSink) -> bool:
        self.calls += 1
        return self.answer


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(config_dir=tmp_path / "config")


@pytest.fixture
def output() -> BufferedOutput:
    return BufferedOutput()


@pytest.fixture
def analytics() -> RecordingAnalytics:
    return RecordingAnalytics(opt_in=True, has_set_opt_in=True)


@pytest.fixture
def generators() -> list[FakeGenerator]:
    return [
        FakeGenerator(
            "web",
            "A web app.",
            entrypoint="app.py",
            files=(("app.py", b"app"), ("web/index.html", b"<html>")),
        ),
        FakeGenerator(
            "console",
            "A console app.",
            entrypoint="main.py",
            files=(("main.py", b"print()"), ("README.md", b"# NAME"), ("NAME.txt", b"x")),
        ),
        FakeGenerator("library", "A library."),
    ]


@pytest.fixture
def targets() -> list[RecordingTarget]:
    """Every target created by the dispatcher's factory, in order."""
    return []


@pytest.fixture
def make_dispatcher(
    generators: list[FakeGenerator],
    analytics: RecordingAnalytics,
    output: BufferedOutput,
    targets: list[RecordingTarget],
) -> Callable[..., Dispatcher]:
    def _factory(root: Path, on_write: Callable[[str], None]) -> RecordingTarget:
        target = RecordingTarget(on_write)
        targets.append(target)
        return target

    def _make(**overrides: object) -> Dispatcher:
        kwargs: dict[str, object] = {
            "target_factory": _factory,
            "prompt_consent": ConsentPromptStub(),
            "synopsis": "-o, --outdir <path>    Where to put the files.",
        }
        kwargs.update(overrides)
        return Dispatcher(
            GeneratorRegistry(generators),
            kwargs.pop("analytics", analytics),  # type: ignore[arg-type]
            output,
            **kwargs,  # type: ignore[arg-type]
        )

    return _make
