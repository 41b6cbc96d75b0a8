"""Application ports - callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Production and in-memory
adapters satisfy these protocols via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. The parse and marshal pipelines only
    see these narrow interfaces, so file-format parsers, the environment and
    the decoding engine stay replaceable.
    Adapter types are imported under ``TYPE_CHECKING`` only so the layer
    contract (application never imports adapters at runtime) holds.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from ..domain.enums import Format

if TYPE_CHECKING:
    from ..adapters.logging.setup import LoggingSettings

T = TypeVar("T")


class ReadFile(Protocol):
    """Read a configuration file into a hierarchical map.

    Implementations raise :class:`~configo.domain.errors.SourceReadError`
    when the file is missing, unreadable or not a mapping.
    """

    def __call__(self, path: str, fmt: str) -> Mapping[str, Any]: ...


class ReadEnviron(Protocol):
    """Return a snapshot of the process environment."""

    def __call__(self) -> Mapping[str, str]: ...


class Decode(Protocol):
    """Decode a merged map onto a default-populated shape instance."""

    def __call__(self, data: Mapping[str, Any], target: T, *, key: str | None = ...) -> T: ...


class DumpDocument(Protocol):
    """Render a hierarchical map as a YAML or JSON document."""

    def __call__(self, fmt: Format, mapping: Mapping[str, Any]) -> str: ...


class InitLogging(Protocol):
    """Initialize the logging runtime from parsed logging settings."""

    def __call__(self, settings: LoggingSettings) -> None: ...


__all__ = [
    "Decode",
    "DumpDocument",
    "InitLogging",
    "ReadEnviron",
    "ReadFile",
]
