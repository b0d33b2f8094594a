"""Relative-path checks shared by every generation target."""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath

from propmaster.exceptions import UnsafeTargetPathError


def checked_relative_path(relative_path: str) -> PurePosixPath:
    """Normalize *relative_path* and refuse anything outside the root.

    Backslashes are treated as separators so Windows-style paths from
    templates behave the same everywhere.

    Raises
    ------
    UnsafeTargetPathError
        For empty or absolute paths, and for ``..`` segments that climb
        above the root once normalized.
    """
    candidate = relative_path.replace("\\", "/")
    if not candidate or candidate.startswith("/"):
        raise UnsafeTargetPathError(f"Refusing to write outside the target: {relative_path!r}")
    normalized = posixpath.normpath(candidate)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        raise UnsafeTargetPathError(f"Refusing to write outside the target: {relative_path!r}")
    if len(normalized) >= 2 and normalized[1] == ":":
        raise UnsafeTargetPathError(f"Refusing to write outside the target: {relative_path!r}")
    return PurePosixPath(normalized)
