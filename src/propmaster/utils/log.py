"""Logging setup for the ``propmaster`` logger hierarchy.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are installed here, once, by the CLI layer.  Rich is preferred for
rendering but is imported lazily so a missing install never breaks
bootstrap paths.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME: str = "propmaster"
_HANDLER_MARKER: str = "_propmaster_handler"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        return handler
    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the ``propmaster`` logger (idempotent).

    Returns the configured logger so callers can tweak it further.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(h, _HANDLER_MARKER, False) for h in logger.handlers):
        handler = _build_handler()
        setattr(handler, _HANDLER_MARKER, True)
        logger.addHandler(handler)
    return logger
