"""Command-line grammar and conversion to :class:`Options`.

argparse normally prints and exits on a malformed command line; here the
parser raises :class:`~propmaster.exceptions.ArgumentParseError` instead,
and :func:`parse_options` folds the message into ``Options.parse_error``
so the dispatcher decides how to report it.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import NoReturn

from propmaster.core.models import Options
from propmaster.exceptions import ArgumentParseError


class _RaisingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise ArgumentParseError(message)


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    ``--machine`` and ``--mock-analytics`` are deliberately hidden from
    the synopsis.
    """
    parser = _RaisingArgumentParser(
        prog="propmaster",
        usage=argparse.SUPPRESS,
        add_help=False,
    )
    parser.add_argument(
        "-o",
        "--outdir",
        metavar="<path>",
        default=None,
        help="Where to put the files.",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Help!")
    parser.add_argument(
        "--analytics",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Opt-out of anonymous usage and crash reporting.",
    )
    parser.add_argument("--version", action="store_true", help="Print the version.")
    parser.add_argument("--machine", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--mock-analytics", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("generator", nargs="*", help=argparse.SUPPRESS)
    return parser


def flag_synopsis(parser: argparse.ArgumentParser | None = None) -> str:
    """Visible options only, as rendered by argparse.

    The usage line is suppressed on the parser and every hidden argument
    carries ``help=argparse.SUPPRESS``, so the help text is the synopsis.
    """
    parser = parser or build_parser()
    return parser.format_help().strip("\n")


def _split_passthrough(arguments: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split at the first ``--``; everything after it is positional.

    Intermixed parsing does not honour ``--`` on its own.
    """
    if "--" not in arguments:
        return list(arguments), []
    index = list(arguments).index("--")
    return list(arguments[:index]), list(arguments[index + 1 :])


def parse_options(argv: Sequence[str]) -> Options:
    """Parse *argv* into an :class:`Options` snapshot.

    Never raises for a malformed command line; the parser message ends up
    in :attr:`Options.parse_error`.
    """
    arguments = tuple(argv)
    head, passthrough = _split_passthrough(arguments)
    parser = build_parser()
    try:
        ns = parser.parse_intermixed_args(head)
    except ArgumentParseError as exc:
        return Options(arguments=arguments, parse_error=str(exc))
    return Options(
        arguments=arguments,
        output_directory=ns.outdir,
        help=ns.help,
        analytics_toggle=ns.analytics,
        machine=ns.machine,
        mock_analytics=ns.mock_analytics,
        version=ns.version,
        positional=(*ns.generator, *passthrough),
    )
