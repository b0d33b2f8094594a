"""Ordered, read-only registry of available generators."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from propmaster.core.protocols import Generator

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Immutable collection of generators sorted by ``id``.

    The sort happens once, at construction, so help output, machine
    listings, and lookups all observe the same deterministic order.
    Duplicate ids are rejected.

    Parameters
    ----------
    generators:
        Any iterable of objects satisfying the :class:`Generator`
        protocol, in any order.
    """

    def __init__(self, generators: Iterable[Generator]) -> None:
        ordered = sorted(generators, key=lambda g: g.id)
        seen: set[str] = set()
        for generator in ordered:
            if generator.id in seen:
                raise ValueError(f"Duplicate generator id: {generator.id!r}")
            seen.add(generator.id)
        self._generators: tuple[Generator, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[Generator]:
        return iter(self._generators)

    def __len__(self) -> int:
        return len(self._generators)

    @property
    def generators(self) -> tuple[Generator, ...]:
        return self._generators

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(g.id for g in self._generators)

    def lookup(self, generator_id: str) -> Generator | None:
        """Return the generator whose id equals *generator_id* exactly.

        Returns ``None`` rather than raising so the caller can decide how
        to surface an unknown id.
        """
        for generator in self._generators:
            if generator.id == generator_id:
                return generator
        logger.debug("No generator registered under %r", generator_id)
        return None
