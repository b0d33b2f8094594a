"""Infrastructure layer — filesystem and persisted-state integration.

Every raw ``OSError`` must be caught here and re-raised as a
:class:`~propmaster.exceptions.PropmasterError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from propmaster.infra.analytics import FileConsentAnalytics
from propmaster.infra.directory_target import DirectoryTarget

__all__: list[str] = [
    "DirectoryTarget",
    "FileConsentAnalytics",
]
