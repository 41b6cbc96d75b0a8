"""Parse pipeline: defaults, layered merge, typed decode.

Two entry points share one implementation. :func:`parse_with` propagates
every :class:`~configo.domain.errors.ConfigoError`; :func:`must_parse_with`
halts the process instead.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from ..domain.defaults import provide_defaults, to_mapping
from ..domain.errors import ConfigoError
from ..domain.options import Option
from ..domain.schema import new_instance
from .halting import halt
from .merging import merge_sources
from .ports import Decode, ReadEnviron, ReadFile

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_with(
    shape: type[T],
    option: Option | None = None,
    *,
    read_file: ReadFile,
    read_environ: ReadEnviron,
    decode: Decode,
) -> T:
    """Build a fully populated ``shape`` instance from all configured sources.

    Args:
        shape: Dataclass describing the configuration.
        option: Sources and key scope. Defaults to ``Option()`` (defaults only).
        read_file: Port loading the configuration file.
        read_environ: Port returning the environment snapshot.
        decode: Port decoding the merged map into the instance.

    Returns:
        A fresh instance of ``shape``.

    Raises:
        ShapeError: If ``shape`` is not a usable dataclass.
        MergeError: If the layers cannot be merged.
        DecodeError: If merged data does not fit the shape.
    """
    option = option or Option()
    instance = provide_defaults(new_instance(shape))
    merged = merge_sources(to_mapping(instance), option, read_file=read_file, read_environ=read_environ)
    logger.debug(
        "decoding configuration",
        extra={"shape": shape.__qualname__, "key": option.key or None, "env_include": option.env_include},
    )
    return decode(merged, instance, key=option.key or None)


def must_parse_with(
    shape: type[T],
    option: Option | None = None,
    *,
    read_file: ReadFile,
    read_environ: ReadEnviron,
    decode: Decode,
) -> T:
    """Like :func:`parse_with` but halt the process on any configo error.

    Raises:
        SystemExit: With exit code 1 when parsing fails.
    """
    try:
        return parse_with(shape, option, read_file=read_file, read_environ=read_environ, decode=decode)
    except ConfigoError as exc:
        halt(f"unable to parse configuration into {getattr(shape, '__qualname__', shape)!s}", exc)


__all__ = [
    "must_parse_with",
    "parse_with",
]
