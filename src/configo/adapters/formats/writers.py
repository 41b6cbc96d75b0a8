"""YAML and JSON document writers.

Both writers sort keys so the same value always renders the same text.
JSON uses a 4-space indent.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import orjson
import yaml

from ...domain.enums import Format
from ...domain.errors import MarshalError

_LEADING_SPACES = re.compile(r"^( +)", re.MULTILINE)


def dump_document(fmt: Format, mapping: Mapping[str, Any]) -> str:
    """Render ``mapping`` as a YAML or JSON document.

    Raises:
        MarshalError: If the encoder rejects a value or ``fmt`` has no
            document writer.

    Example:
        >>> print(dump_document(Format.JSON, {"svc": {"port": 80}}))
        {
            "svc": {
                "port": 80
            }
        }
    """
    try:
        if fmt is Format.YAML:
            return yaml.safe_dump(dict(mapping), sort_keys=True, allow_unicode=True, default_flow_style=False)
        if fmt is Format.JSON:
            return _dump_json(mapping)
    except (yaml.YAMLError, orjson.JSONEncodeError) as exc:
        raise MarshalError(f"cannot encode {fmt.value}: {exc}") from exc
    raise MarshalError(f"no document writer for format {fmt.value!r}")


def _dump_json(mapping: Mapping[str, Any]) -> str:
    # orjson only indents by two; JSON strings never hold raw newlines,
    # so every leading run of spaces is indentation.
    text = orjson.dumps(dict(mapping), option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode("utf-8")
    return _LEADING_SPACES.sub(lambda match: match.group(1) * 2, text)


__all__ = ["dump_document"]
