"""Logging adapter - lib_log_rich setup.

Provides centralized logging initialization for applications using configo.

Contents:
    * :class:`.setup.LoggingSettings` - Logging settings as a configo shape
    * :func:`.setup.init_logging` - Idempotent logging initialization
"""

from __future__ import annotations

from .setup import LoggingSettings, init_logging

__all__ = ["LoggingSettings", "init_logging"]
