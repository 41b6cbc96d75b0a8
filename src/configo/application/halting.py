"""Conversion of fatal errors into a process halt."""

from __future__ import annotations

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)

HALT_EXIT_CODE = 1


def halt(message: str, exc: BaseException) -> NoReturn:
    """Log ``exc`` at CRITICAL and stop the process with ``SystemExit``."""
    logger.critical("%s: %s", message, exc)
    raise SystemExit(HALT_EXIT_CODE) from exc


__all__ = ["HALT_EXIT_CODE", "halt"]
