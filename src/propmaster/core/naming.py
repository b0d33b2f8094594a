"""Project-name validation and normalization.

Both functions are pure and total.  :func:`validate_project_name`
reports the *first* rule a name breaks; :func:`normalize_project_name`
turns an accepted name into the form used inside generated content
(a valid Python package name).
"""

from __future__ import annotations

import re
import string
from enum import Enum

_NON_IDENTIFIER = re.compile(r"[^0-9a-z_]")


class NameViolation(str, Enum):
    """Reasons a candidate project name is rejected."""

    CONTAINS_SPACES = "The project name cannot contain spaces."
    MUST_START_WITH_LETTER = "The project name must start with a letter."

    @property
    def message(self) -> str:
        return self.value


def validate_project_name(name: str) -> NameViolation | None:
    """Return the first violated rule for *name*, or ``None`` when valid.

    Rules, in order:

    1. No whitespace anywhere in the name.
    2. The first character must be an ASCII letter.
    """
    if any(ch.isspace() for ch in name):
        return NameViolation.CONTAINS_SPACES
    if not name or name[0] not in string.ascii_letters:
        return NameViolation.MUST_START_WITH_LETTER
    return None


def normalize_project_name(name: str) -> str:
    """Canonicalize *name* to a lower-case, underscore-separated identifier.

    >>> normalize_project_name("My-App.v2")
    'my_app_v2'
    """
    return _NON_IDENTIFIER.sub("_", name.lower())
