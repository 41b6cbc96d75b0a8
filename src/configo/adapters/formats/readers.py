"""Configuration file readers keyed by format token.

Every failure - unsupported format, missing file, syntax error, a document
that is not a mapping - surfaces as :class:`SourceReadError` so the merger
can absorb it uniformly.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import orjson
import rtoml
import yaml
from dotenv import dotenv_values

from ...domain.errors import SourceReadError


def _load_yaml(text: str) -> object:
    return yaml.safe_load(text)


def _load_json(text: str) -> object:
    return orjson.loads(text)


def _load_dotenv(text: str) -> object:
    return dict(dotenv_values(stream=io.StringIO(text)))


def _load_toml(text: str) -> object:
    return rtoml.loads(text)


_LOADERS: dict[str, Callable[[str], object]] = {
    "yaml": _load_yaml,
    "yml": _load_yaml,
    "json": _load_json,
    "env": _load_dotenv,
    "dotenv": _load_dotenv,
    "toml": _load_toml,
}

SUPPORTED_FORMATS: frozenset[str] = frozenset(_LOADERS)
"""Format tokens (lower-cased file extensions) that can be read."""

_PARSE_ERRORS: tuple[type[Exception], ...] = (yaml.YAMLError, rtoml.TomlParsingError, ValueError)


def read_config_file(path: str, fmt: str) -> dict[str, Any]:
    """Read and parse the configuration file at ``path``.

    Args:
        path: File to read.
        fmt: Lower-cased format token, usually the file extension.

    Returns:
        The document as a hierarchical map with string keys. An empty
        document yields an empty map.

    Raises:
        SourceReadError: On unsupported format, I/O error, parse error, or a
            top-level value that is not a mapping.
    """
    loader = _LOADERS.get(fmt)
    if loader is None:
        raise SourceReadError(f"unsupported config type {fmt!r}", path=path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(f"cannot read {path}: {exc.strerror or exc}", path=path) from exc
    try:
        document = loader(text)
    except _PARSE_ERRORS as exc:
        raise SourceReadError(f"cannot parse {path} as {fmt}: {exc}", path=path) from exc

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise SourceReadError(f"{path} does not contain a mapping at the top level", path=path)
    return _string_keys(document)


def _string_keys(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    """Return a copy of ``mapping`` with every nested key cast to ``str``.

    Example:
        >>> _string_keys({1: {"a": 2}})
        {'1': {'a': 2}}
    """
    return {str(key): _string_keys(value) if isinstance(value, Mapping) else value for key, value in mapping.items()}


__all__ = [
    "SUPPORTED_FORMATS",
    "read_config_file",
]
