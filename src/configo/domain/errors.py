"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigoError(Exception):
    """Base class for every error raised by configo.

    ``parse`` propagates subclasses of this error to the caller;
    ``must_parse`` converts them into a process halt.

    Example:
        >>> str(ConfigoError("boom"))
        'boom'
    """


class ShapeError(ConfigoError, TypeError):
    """Target shape cannot be described.

    Raised when the target is not a dataclass or its annotations cannot be
    resolved. Inherits from TypeError because it signals a programming error
    in the shape definition rather than bad configuration data.

    Example:
        >>> isinstance(ShapeError("not a dataclass"), TypeError)
        True
    """


class SourceReadError(ConfigoError):
    """A configuration file could not be read or parsed.

    Absorbed by the merger: the failing file contributes nothing and a
    warning is logged.

    Example:
        >>> err = SourceReadError("unsupported config type 'ini'", path="app.ini")
        >>> err.path
        'app.ini'
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class MergeError(ConfigoError):
    """Merging the configuration layers failed on malformed intermediate state."""


class DecodeError(ConfigoError, ValueError):
    """Merged data cannot be decoded into the target shape.

    Carries the dotted path of the offending value when known.

    Example:
        >>> err = DecodeError("expected an integer", path="http.port")
        >>> str(err)
        'http.port: expected an integer'
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class MarshalError(ConfigoError):
    """A typed value could not be rendered into the requested format."""


__all__ = [
    "ConfigoError",
    "DecodeError",
    "MarshalError",
    "MergeError",
    "ShapeError",
    "SourceReadError",
]
