"""Built-in generators.

New generators subclass :class:`~propmaster.generators.base.Generator`
and are added to :func:`builtin_generators`.
"""

from __future__ import annotations

from propmaster.generators.base import Generator, TemplateFile
from propmaster.generators.console_simple import ConsoleSimpleGenerator
from propmaster.generators.package_simple import PackageSimpleGenerator
from propmaster.generators.web_simple import WebSimpleGenerator


def builtin_generators() -> list[Generator]:
    """Fresh instances of every built-in generator (unsorted)."""
    return [
        WebSimpleGenerator(),
        ConsoleSimpleGenerator(),
        PackageSimpleGenerator(),
    ]


__all__: list[str] = [
    "ConsoleSimpleGenerator",
    "Generator",
    "PackageSimpleGenerator",
    "TemplateFile",
    "WebSimpleGenerator",
    "builtin_generators",
]
