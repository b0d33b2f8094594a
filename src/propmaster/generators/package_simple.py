"""``package-simple`` — an installable library skeleton."""

from __future__ import annotations

from propmaster.generators.base import Generator

_PYPROJECT = """\
[build-system]
requires = ["setuptools>=68"]
build-backend = "setuptools.build_meta"

[project]
name = "{{ project_name }}"
version = "0.1.0"
description = "A starting point for a reusable library."
requires-python = ">=3.10"

[project.optional-dependencies]
test = ["pytest"]
"""

_INIT = '''\
"""{{ project_name }} library."""

__version__ = "0.1.0"


def calculate():
    return 6 * 7
'''

_TEST = """\
from {{ project_name }} import calculate


def test_calculate():
    assert calculate() == 42
"""

_README = """\
# {{ project_name }}

A library package.

Copyright (c) {{ year }}, <your name>.
"""


class PackageSimpleGenerator(Generator):
    id = "package-simple"
    description = (
        "A minimal library package, with a pyproject.toml, a src/ layout "
        "and a pytest test module."
    )

    def __init__(self) -> None:
        super().__init__()
        self.add_template("pyproject.toml", _PYPROJECT)
        self.add_template("src/{{ project_name }}/__init__.py", _INIT)
        self.add_template("tests/test_{{ project_name }}.py", _TEST)
        self.add_template("README.md", _README)
