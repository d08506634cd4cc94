"""
Base Repository.

Minimal base class standardizing the logger pattern and the conversion
of a caught failure into an ``Error`` result.
"""

from __future__ import annotations

from sellerhub.logger import StructuredLogger
from sellerhub.models.service_result import Error


class BaseRepository:
    """Base class for repositories. Receives dependencies via __init__."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger

    def _failure(self, operation: str, exc: BaseException) -> Error:
        """Log *exc* with its traceback and turn it into an ``Error`` result."""
        self._logger.error(
            "%s failed: %s", operation, exc, exc_info=exc,
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        return Error.from_exception(exc)
