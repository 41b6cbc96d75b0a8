"""Process environment source."""

from __future__ import annotations

from .env import read_environ

__all__ = ["read_environ"]
