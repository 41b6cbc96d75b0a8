"""Type-safe domain enums for serialization formats and field kinds."""

from __future__ import annotations

from enum import Enum


class Format(str, Enum):
    """Text formats understood by the serializer.

    Inherits from str so plain strings compare equal to members.

    Attributes:
        YAML: Nested YAML document.
        JSON: Nested JSON document, pretty-printed with a 4-space indent.
        ENV: Flat ``PREFIX_KEY_SUBKEY=value`` assignment lines.

    Example:
        >>> Format.JSON == "json"
        True
        >>> Format("env") is Format.ENV
        True
    """

    YAML = "yaml"
    JSON = "json"
    ENV = "env"


class FieldKind(str, Enum):
    """Runtime kind of a shape field, used to pick the default coercion.

    Attributes:
        INT: Integer family, parsed as base-10 signed 64-bit.
        STRING: Assigned verbatim.
        BOOL: ``"true"`` maps to True, anything else to False.
        RECORD: Nested dataclass, recursed into.
        OTHER: Floats, containers and anything else; defaults are skipped.

    Example:
        >>> FieldKind.RECORD.value
        'record'
    """

    INT = "int"
    STRING = "string"
    BOOL = "bool"
    RECORD = "record"
    OTHER = "other"


__all__ = [
    "FieldKind",
    "Format",
]
