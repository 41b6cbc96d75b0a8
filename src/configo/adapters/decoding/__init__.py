"""Decoding adapter - hierarchical map into a typed target shape."""

from __future__ import annotations

from .decoder import decode

__all__ = ["decode"]
