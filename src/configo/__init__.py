"""Public package surface: structured configuration loading and rendering.

Routes imports through the architectural layers:
- Domain exports: shape declaration, options, formats and errors
- Entry points: ``parse``, ``must_parse``, ``marshal_conf`` wired to
  production adapters
- Metadata: package information

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Http:
    ...     address: str = conf("address", default="127.0.0.1")
    ...     port: int = conf("port", default="80")
    >>> parse(Http, Option(env_include=False))
    Http(address='127.0.0.1', port=80)
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import info_lines

# Entry points (wired adapters)
from .api import configure_logging, marshal_conf, must_parse, parse

# Domain exports
from .domain.enums import Format
from .domain.errors import (
    ConfigoError,
    DecodeError,
    MarshalError,
    MergeError,
    ShapeError,
    SourceReadError,
)
from .domain.options import Option
from .domain.schema import conf

FormatYaml = Format.YAML
FormatJson = Format.JSON
FormatEnv = Format.ENV

__all__ = [
    "ConfigoError",
    "DecodeError",
    "Format",
    "FormatEnv",
    "FormatJson",
    "FormatYaml",
    "MarshalError",
    "MergeError",
    "Option",
    "ShapeError",
    "SourceReadError",
    "conf",
    "configure_logging",
    "info_lines",
    "marshal_conf",
    "must_parse",
    "parse",
]
