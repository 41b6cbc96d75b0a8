"""Serializer: typed value to YAML, JSON or ENV text.

The value is converted to its hierarchical map, wrapped under a single root
key and rendered. ENV output is one ``PREFIX_ROOT_KEY=value`` line per leaf,
sorted by variable name so the output is reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..domain.defaults import plain_value, to_mapping
from ..domain.enums import Format
from ..domain.errors import MarshalError
from ..domain.keys import flatten_env
from ..domain.schema import is_shape
from .halting import halt
from .ports import DumpDocument

logger = logging.getLogger(__name__)


def marshal_with(
    fmt: Format | str,
    env_prefix: str,
    root_key: str,
    value: Any,
    *,
    dump: DumpDocument,
) -> str:
    """Render ``value`` under ``root_key`` in format ``fmt``.

    Unknown formats render as JSON. Encoder failures halt the process.

    Raises:
        SystemExit: If ``value`` is neither a shape instance nor a mapping,
            or the YAML/JSON encoder fails.
    """
    try:
        selected = Format(fmt)
    except ValueError:
        logger.debug("unknown format %r, rendering JSON", fmt)
        selected = Format.JSON

    try:
        raw = {root_key: _as_mapping(value)}
        if selected is Format.ENV:
            return render_env(raw, env_prefix)
        return dump(selected, raw)
    except MarshalError as exc:
        halt(f"unable to marshal configuration as {selected.value}", exc)


def render_env(mapping: Mapping[str, Any], env_prefix: str | None = None) -> str:
    """Render ``mapping`` as sorted ``NAME=value`` lines.

    Example:
        >>> print(render_env({"svc": {"port": 80, "debug": False}}, "app"), end="")
        APP_SVC_DEBUG=false
        APP_SVC_PORT=80
    """
    return "".join(f"{name}={env_text(item)}\n" for name, item in flatten_env(mapping, env_prefix))


def env_text(value: Any) -> str:
    """Format a leaf value the way it would be written in an environment.

    Example:
        >>> env_text(True), env_text(None), env_text(["a", "b"]), env_text(1.5)
        ('true', '', 'a,b', '1.5')
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(env_text(item) for item in value)
    return str(value)


def _as_mapping(value: Any) -> dict[str, Any]:
    if is_shape(type(value)):
        return to_mapping(value)
    if isinstance(value, Mapping):
        return plain_value(value)
    raise MarshalError(f"cannot marshal value of type {type(value).__name__}")


__all__ = [
    "env_text",
    "marshal_with",
    "render_env",
]
