"""Snapshot of the process environment."""

from __future__ import annotations

import os


def read_environ() -> dict[str, str]:
    """Return a copy of ``os.environ`` taken at call time.

    Example:
        >>> isinstance(read_environ(), dict)
        True
    """
    return dict(os.environ)


__all__ = ["read_environ"]
