"""Adapters - file formats, environment, decoding, logging and in-memory doubles.

Contents:
    * :mod:`.formats` - YAML, JSON, dotenv and TOML readers and writers
    * :mod:`.sources` - Process environment snapshot
    * :mod:`.decoding` - pydantic-backed decoder into target shapes
    * :mod:`.logging` - lib_log_rich runtime setup
    * :mod:`.memory` - In-memory adapters for tests
"""

from __future__ import annotations
