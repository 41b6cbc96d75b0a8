"""In-memory logging adapter for testing.

Provides a no-op logging initializer with the same signature as
:func:`configo.adapters.logging.init_logging`.
"""

from __future__ import annotations

from ..logging.setup import LoggingSettings


def init_logging_in_memory(settings: LoggingSettings) -> None:
    """No-op -- accepts settings without touching the lib_log_rich runtime."""


__all__ = ["init_logging_in_memory"]
