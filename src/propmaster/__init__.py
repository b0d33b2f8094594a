"""propmaster — scaffold new projects from built-in generators.

A small command-line dispatcher that turns ``propmaster -o <dir> <generator>``
into a materialized set of files on disk.
"""

from propmaster.version import __version__

__all__: list[str] = ["__version__"]
