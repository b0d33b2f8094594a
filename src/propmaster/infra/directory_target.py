"""Infrastructure: filesystem generation target.

The root directory is created lazily, exactly once, on the first write.
Intermediate directories below the root are created as needed.  Nothing
is rolled back on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from propmaster.core.paths import checked_relative_path
from propmaster.exceptions import TargetUnavailableError, TargetWriteError

logger = logging.getLogger(__name__)


class DirectoryTarget:
    """Writes generated files below a root directory.

    Parameters
    ----------
    root:
        Directory that receives the generated project.
    on_write:
        Optional observer called with each written file path, after the
        bytes are on disk.
    """

    def __init__(
        self,
        root: Path,
        on_write: Callable[[str], None] | None = None,
    ) -> None:
        self.root: Path = Path(root)
        self._on_write = on_write
        self._root_ready: bool = False

    def _ensure_root(self) -> None:
        if self._root_ready:
            return
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TargetUnavailableError(
                f"Cannot create output directory {self.root}: {exc.strerror or exc}",
                hint="Check that the parent directory exists and is writable.",
            ) from exc
        logger.debug("Output directory ready: %s", self.root)
        self._root_ready = True

    def write(self, relative_path: str, contents: bytes) -> None:
        """Write *contents* to ``root / relative_path``.

        Raises
        ------
        UnsafeTargetPathError
            When *relative_path* is absolute or escapes the root.
        TargetUnavailableError
            When the root directory cannot be created.
        TargetWriteError
            When the file or its parent directories cannot be written.
        """
        relative = checked_relative_path(relative_path)
        self._ensure_root()
        destination = self.root.joinpath(*relative.parts)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(contents)
        except OSError as exc:
            raise TargetWriteError(
                f"Failed to write {destination}: {exc.strerror or exc}",
            ) from exc
        logger.debug("Wrote %d bytes to %s", len(contents), destination)
        if self._on_write is not None:
            self._on_write(str(destination))
