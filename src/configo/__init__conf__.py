"""Static package metadata used by logging and diagnostics."""

from __future__ import annotations

name = "configo"
title = "Layered structured configuration loader"
version = "0.3.0"
url = "https://github.com/configo/configo"
author = "configo maintainers"

LOG_ENV_PREFIX = "CONFIGO_LOG"
"""Environment prefix for the library's own logging settings."""


def info_lines() -> list[str]:
    """Return human-readable metadata lines.

    Example:
        >>> info_lines()[0]
        'configo 0.3.0'
    """
    return [f"{name} {version}", title, url]


__all__ = ["LOG_ENV_PREFIX", "author", "info_lines", "name", "title", "url", "version"]
