"""Interactive first-run analytics consent prompt.

Asked at most once, the first time usage is shown.  The welcome text goes
through the dispatcher's ``OutputSink``; the reply is read with
questionary.
"""

from __future__ import annotations

from typing import Any

from propmaster.core.protocols import OutputSink
from propmaster.exceptions import EnvironmentError

QUESTION: str = (
    "Would you like to opt-in to additional analytics to help us improve "
    "propmaster [y/yes/no]?"
)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def parse_consent_reply(reply: str | None) -> bool:
    """``y``/``yes`` (any case, surrounding blanks ignored) opts in."""
    if reply is None:
        return False
    return reply.strip().lower() in ("y", "yes")


def prompt_consent(output: OutputSink) -> bool:
    """Print the welcome text, block on a reply, and return the decision.

    A cancelled prompt (Ctrl+C / Esc, ``None`` from questionary) counts
    as opting out.
    """
    questionary = _import_questionary()

    output.stdout(
        "Welcome to propmaster! We collect anonymous usage statistics and crash reports in"
    )
    output.stdout("order to improve the tool.")
    reply: str | None = questionary.text(QUESTION).ask()
    output.stdout()
    return parse_consent_reply(reply)
