"""``console-simple`` — a single-module command-line script."""

from __future__ import annotations

from propmaster.generators.base import Generator

_MAIN = '''\
"""{{ project_name }}: a simple command-line application."""

import argparse


def main(argv=None):
    parser = argparse.ArgumentParser(prog="{{ project_name }}")
    parser.add_argument("name", nargs="?", default="world")
    args = parser.parse_args(argv)
    print(f"Hello, {args.name}!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
'''

_README = """\
# {{ project_name }}

A simple command-line application.

Run it with:

    python main.py
"""

_GITIGNORE = """\
__pycache__/
*.pyc
.venv/
"""


class ConsoleSimpleGenerator(Generator):
    id = "console-simple"
    description = "A simple command-line application."
    entrypoint = "main.py"

    def __init__(self) -> None:
        super().__init__()
        self.add_template("main.py", _MAIN)
        self.add_template("README.md", _README)
        self.add_template(".gitignore", _GITIGNORE)
