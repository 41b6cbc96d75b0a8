"""Public entry points with production wiring.

Sits at package level (outside adapters) so it can wire the composition
root into the application pipelines without breaking layer constraints.
Every function accepts an optional ``services`` container; tests pass
``build_testing(...)`` to swap the file system and environment for
in-memory doubles.
"""

from __future__ import annotations

from typing import Any, TypeVar

from . import __init__conf__
from .application.marshalling import marshal_with
from .application.parsing import must_parse_with, parse_with
from .composition import AppServices, build_production
from .domain.enums import Format
from .domain.options import Option

T = TypeVar("T")


def parse(shape: type[T], option: Option | None = None, *, services: AppServices | None = None) -> T:
    """Parse configuration into a fresh instance of ``shape``.

    Sources, lowest precedence first: ``default`` tags on the shape, the
    file at ``option.path``, environment variables (``option.env_include``).

    Args:
        shape: Dataclass whose fields are declared with :func:`configo.conf`.
        option: Sources and key scope; ``None`` means defaults only.
        services: Port implementations; production adapters when None.

    Returns:
        A populated ``shape`` instance.

    Raises:
        ShapeError: ``shape`` is not a usable dataclass.
        MergeError: The layers could not be merged.
        DecodeError: Merged data does not fit ``shape``.

    Example:
        >>> from dataclasses import dataclass
        >>> from configo import conf
        >>> @dataclass
        ... class MyConf:
        ...     address: str = conf("address", default="localhost")
        ...     port: int = conf("port", default="80")
        >>> parse(MyConf)
        MyConf(address='localhost', port=80)
    """
    services = services or build_production()
    return parse_with(
        shape,
        option,
        read_file=services.read_file,
        read_environ=services.read_environ,
        decode=services.decode,
    )


def must_parse(shape: type[T], option: Option | None = None, *, services: AppServices | None = None) -> T:
    """Parse configuration or halt the process.

    Use :func:`parse` when the caller needs to recover from bad
    configuration.

    Raises:
        SystemExit: With exit code 1 on any configo error.
    """
    services = services or build_production()
    return must_parse_with(
        shape,
        option,
        read_file=services.read_file,
        read_environ=services.read_environ,
        decode=services.decode,
    )


def marshal_conf(
    fmt: Format | str,
    env_prefix: str,
    root_key: str,
    value: Any,
    *,
    services: AppServices | None = None,
) -> str:
    """Render ``value`` wrapped under ``root_key`` as YAML, JSON or ENV text.

    Example:
        >>> from dataclasses import dataclass
        >>> from configo import conf
        >>> @dataclass
        ... class Http:
        ...     port: int = conf("port")
        >>> print(marshal_conf(Format.ENV, "app", "svc", Http(port=80)), end="")
        APP_SVC_PORT=80

    Raises:
        SystemExit: When the YAML or JSON encoder fails.
    """
    services = services or build_production()
    return marshal_with(fmt, env_prefix, root_key, value, dump=services.dump_document)


def configure_logging(option: Option | None = None, *, services: AppServices | None = None) -> None:
    """Load :class:`~configo.adapters.logging.LoggingSettings` and initialize logging.

    Without ``option`` the settings come from their defaults and the
    ``CONFIGO_LOG_*`` environment variables.
    """
    from .adapters.logging import LoggingSettings

    services = services or build_production()
    option = option or Option(env_prefix=__init__conf__.LOG_ENV_PREFIX, env_include=True)
    services.init_logging(parse(LoggingSettings, option, services=services))


__all__ = [
    "configure_logging",
    "marshal_conf",
    "must_parse",
    "parse",
]
