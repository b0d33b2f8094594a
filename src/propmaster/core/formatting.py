"""Usage text and machine listing rendering (pure transforms)."""

from __future__ import annotations

import json
import textwrap
from typing import Any

from propmaster.core.registry import GeneratorRegistry

APP_NAME: str = "propmaster"
LINE_WIDTH: int = 80
MIN_WRAP_WIDTH: int = 20


def format_usage(registry: GeneratorRegistry, synopsis: str) -> str:
    """Render the full usage text.

    Layout::

        usage: propmaster -o <output directory> generator-name
        <flag synopsis>

        Available generators:

        <id padded to longest id>: <wrapped description>
    """
    lines = [f"usage: {APP_NAME} -o <output directory> generator-name"]
    lines.append(synopsis.rstrip("\n"))
    lines.append("")
    lines.append("Available generators:")
    lines.append("")
    lines.extend(format_generator_list(registry))
    return "\n".join(lines)


def format_generator_list(registry: GeneratorRegistry) -> list[str]:
    """One entry per generator, descriptions wrapped and aligned."""
    width = max((len(g.id) for g in registry), default=0)
    indent = " " * (width + 2)
    wrap_width = max(LINE_WIDTH - width, MIN_WRAP_WIDTH)
    entries: list[str] = []
    for generator in registry:
        wrapped = textwrap.wrap(generator.description, wrap_width) or [""]
        body = "\n".join([wrapped[0], *(indent + line for line in wrapped[1:])])
        entries.append(f"{generator.id.ljust(width)}: {body}")
    return entries


def machine_listing(registry: GeneratorRegistry) -> list[dict[str, Any]]:
    """Structured listing; ``entrypoint`` is omitted when absent."""
    listing: list[dict[str, Any]] = []
    for generator in registry:
        entry: dict[str, Any] = {
            "name": generator.id,
            "description": generator.description,
        }
        if generator.entrypoint is not None:
            entry["entrypoint"] = generator.entrypoint
        listing.append(entry)
    return listing


def format_machine_listing(registry: GeneratorRegistry) -> str:
    """Single-line JSON encoding of :func:`machine_listing`."""
    return json.dumps(machine_listing(registry))
