"""File-format adapters.

Contents:
    * :func:`.readers.read_config_file` - Load a config file into a map
    * :func:`.writers.dump_document` - Render a map as YAML or JSON
"""

from __future__ import annotations

from .readers import SUPPORTED_FORMATS, read_config_file
from .writers import dump_document

__all__ = [
    "SUPPORTED_FORMATS",
    "dump_document",
    "read_config_file",
]
