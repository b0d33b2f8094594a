"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from propmaster.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


class ConsoleOutput:
	"""``OutputSink`` for the real terminal.

	Lines are emitted verbatim: Rich markup and highlighting are disabled
	so user data and the JSON machine listing pass through untouched.
	"""

	def _emit(self, message: str, *, stderr: bool) -> None:
		stream = sys.stderr if stderr else sys.stdout
		try:
			rich_console = get_rich_console(stderr=stderr)
		except EnvironmentError:
			print(message, file=stream)
			return
		rich_console.print(
			message, markup=False, highlight=False, emoji=False, soft_wrap=True,
		)

	def stdout(self, message: str = "") -> None:
		self._emit(message, stderr=False)

	def stderr(self, message: str = "") -> None:
		self._emit(message, stderr=True)
