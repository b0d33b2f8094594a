"""Base class for built-in generators.

A generator is an ordered list of template files.  Both the relative
path and the body of each file are jinja2 templates rendered with the
project context, so paths such as ``src/{{ project_name }}/__init__.py``
land in the right package directory.
"""

from __future__ import annotations

import datetime
import functools
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from propmaster.core.protocols import GenerationTarget
from propmaster.exceptions import GenerationError


@dataclass(frozen=True, slots=True)
class TemplateFile:
    """One file of a generated project, before rendering."""

    path: str
    source: str


_ENV = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


@functools.total_ordering
class Generator:
    """Concrete base satisfying the :class:`~propmaster.core.protocols.Generator` protocol.

    Subclasses set :attr:`id`, :attr:`description` and optionally
    :attr:`entrypoint`, then register files with :meth:`add_template`.
    Generators compare and sort by ``id``.
    """

    id: str = ""
    description: str = ""
    entrypoint: str | None = None

    def __init__(self) -> None:
        self._templates: list[TemplateFile] = []
        self._written: int = 0

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def add_template(self, path: str, source: str) -> TemplateFile:
        template = TemplateFile(path, source)
        self._templates.append(template)
        return template

    @property
    def templates(self) -> tuple[TemplateFile, ...]:
        return tuple(self._templates)

    def context(self, project_name: str) -> dict[str, Any]:
        """Variables available to every template of this generator."""
        return {
            "project_name": project_name,
            "year": datetime.date.today().year,
            "description": self.description,
        }

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, project_name: str, target: GenerationTarget) -> None:
        """Render and write every template, in registration order.

        Target errors propagate unchanged; template errors are wrapped in
        :class:`~propmaster.exceptions.GenerationError`.  Files written
        before a failure stay counted.
        """
        self._written = 0
        context = self.context(project_name)
        for template in self._templates:
            try:
                path = _ENV.from_string(template.path).render(context)
                body = _ENV.from_string(template.source).render(context)
            except TemplateError as exc:
                raise GenerationError(
                    f"Cannot render {template.path!r} for {self.id}: {exc}"
                ) from exc
            target.write(path, body.encode("utf-8"))
            self._written += 1

    def num_files(self) -> int:
        return self._written

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Generator):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: Generator) -> bool:
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
