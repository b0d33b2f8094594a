"""Infrastructure: persisted analytics consent.

Consent lives in a small JSON document (``{"opt_in": true}``) under the
configured state directory.  A missing file means the user has not been
asked yet.  Hits are only recorded for consenting users; they are written
to the ``propmaster.analytics`` logger, as no network transport exists.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from propmaster.exceptions import ConsentStoreError

logger = logging.getLogger(__name__)


class FileConsentAnalytics:
    """Telemetry port backed by a JSON consent file.

    The file is read once, lazily, on first access to the consent state.
    """

    def __init__(self, consent_file: Path) -> None:
        self._consent_file: Path = Path(consent_file)
        self._loaded: bool = False
        self._opt_in: bool | None = None

    # ------------------------------------------------------------------
    # Consent state
    # ------------------------------------------------------------------

    def _load(self) -> bool | None:
        if not self._loaded:
            self._opt_in = _read_consent(self._consent_file)
            self._loaded = True
        return self._opt_in

    @property
    def has_set_opt_in(self) -> bool:
        return self._load() is not None

    @property
    def opt_in(self) -> bool:
        return bool(self._load())

    @opt_in.setter
    def opt_in(self, value: bool) -> None:
        _write_consent(self._consent_file, bool(value))
        self._opt_in = bool(value)
        self._loaded = True

    # ------------------------------------------------------------------
    # Hits
    # ------------------------------------------------------------------

    def send_screen_view(self, view_name: str) -> None:
        if not self.opt_in:
            return
        logger.debug("screen view: %s", view_name)

    def send_event(self, category: str, action: str, label: str | None = None) -> None:
        if not self.opt_in:
            return
        logger.debug("event: category=%s action=%s label=%s", category, action, label)


def _read_consent(path: Path) -> bool | None:
    """Return the stored decision, or ``None`` when unknown."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Cannot read consent file %s: %s", path, exc)
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring corrupt consent file %s", path)
        return None
    value = data.get("opt_in") if isinstance(data, dict) else None
    if not isinstance(value, bool):
        logger.warning("Ignoring consent file without a boolean 'opt_in': %s", path)
        return None
    return value


def _write_consent(path: Path, opt_in: bool) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"opt_in": opt_in}) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConsentStoreError(
            f"Cannot save analytics preference to {path}: {exc.strerror or exc}",
            hint="Set PROPMASTER_CONFIG_DIR to a writable directory.",
        ) from exc
