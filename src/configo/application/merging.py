"""Layered merge of defaults, file contents and environment variables.

Precedence from lowest to highest:

1. defaults derived from the shape, nested under ``Option.key`` when set
2. the file at ``Option.path``
3. environment variables, when ``Option.env_include`` is set

File problems never fail the call: they are logged as warnings and the
file contributes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..domain.errors import MergeError, SourceReadError
from ..domain.keys import env_name, fold_env, leaf_paths, set_path
from ..domain.merge import deep_merge, merge_layers, nest_under
from ..domain.options import Option
from .ports import ReadEnviron, ReadFile

logger = logging.getLogger(__name__)

ENV_FILE_FORMATS = frozenset({"env", "dotenv"})


def merge_sources(
    defaults: Mapping[str, Any],
    option: Option,
    *,
    read_file: ReadFile,
    read_environ: ReadEnviron,
) -> dict[str, Any]:
    """Merge every configured layer into one hierarchical map.

    Each call builds its own map; nothing is shared between calls.

    Args:
        defaults: Map derived from the default-populated shape instance.
        option: Parse options naming the file, key scope and environment.
        read_file: Port used to load ``option.path``.
        read_environ: Port returning the environment snapshot.

    Returns:
        The merged map, ready for decoding.

    Raises:
        MergeError: If an intermediate layer is not a mapping.
    """
    base = nest_under(option.key, defaults)
    try:
        merged = merge_layers([base, _file_layer(option, read_file, list(leaf_paths(base)))])
        if option.env_include:
            merged = deep_merge(merged, env_layer(merged, option.env_prefix, read_environ()))
    except (TypeError, ValueError) as exc:
        raise MergeError(f"unable to merge configuration layers: {exc}") from exc
    return merged


def _file_layer(option: Option, read_file: ReadFile, known_paths: list[str]) -> Mapping[str, Any]:
    if not option.path:
        return {}
    fmt = option.format or ""
    try:
        data = read_file(option.path, fmt)
    except SourceReadError as exc:
        logger.warning("unable to read config, %s", exc, extra={"path": option.path})
        return {}
    if fmt in ENV_FILE_FORMATS:
        data = fold_env(data, option.env_prefix, known_paths)
    logger.debug("merged configuration file", extra={"path": option.path, "format": fmt})
    return data


def env_layer(merged: Mapping[str, Any], prefix: str | None, environ: Mapping[str, str]) -> dict[str, Any]:
    """Build the overlay of environment values for the known leaf paths.

    A variable that is set to the empty string still counts as present.

    Example:
        >>> env_layer({"test": {"env": "x"}}, "app", {"APP_TEST_ENV": "y", "TEST_ENV": "z"})
        {'test': {'env': 'y'}}
    """
    overlay: dict[str, Any] = {}
    for path in leaf_paths(merged):
        name = env_name(path, prefix)
        if name in environ:
            set_path(overlay, path, environ[name])
    return overlay


__all__ = [
    "ENV_FILE_FORMATS",
    "env_layer",
    "merge_sources",
]
