"""Centralized logging initialization backed by lib_log_rich.

configo itself only emits records through standard ``logging`` loggers
(``configo.application.merging`` warns about unreadable files, the default
extractor reports skipped literals at DEBUG). Applications that want those
records rendered by lib_log_rich call :func:`init_logging` once.

Contents:
    * :class:`LoggingSettings` - logging settings, declared as a configo shape
      so they load from defaults, a file and ``CONFIGO_LOG_*`` variables.
    * :func:`init_logging` - idempotent lib_log_rich initialization.
    * :func:`_build_runtime_config` - constructs RuntimeConfig from settings.
"""

from __future__ import annotations

from dataclasses import dataclass

import lib_log_rich.config
import lib_log_rich.runtime

from configo import __init__conf__

from ...domain.schema import conf


@dataclass
class LoggingSettings:
    """Settings forwarded to lib_log_rich's RuntimeConfig.

    Example:
        >>> from configo.domain.defaults import provide_defaults
        >>> from configo.domain.schema import new_instance
        >>> settings = provide_defaults(new_instance(LoggingSettings))
        >>> settings.environment, settings.console_level
        ('prod', 'INFO')
    """

    service: str = conf("service", default=__init__conf__.name)
    environment: str = conf("environment", default="prod")
    console_level: str = conf("console_level", default="INFO")


def _build_runtime_config(settings: LoggingSettings) -> lib_log_rich.runtime.RuntimeConfig:
    """Build RuntimeConfig from parsed settings.

    An empty service name falls back to the package name.
    """
    return lib_log_rich.runtime.RuntimeConfig(
        service=settings.service or __init__conf__.name,
        environment=settings.environment,
        console_level=settings.console_level,
    )


def init_logging(settings: LoggingSettings) -> None:
    """Initialize lib_log_rich runtime with the provided settings.

    Loads ``.env`` files (to make LOG_* variables available), checks if
    lib_log_rich is already initialized, and configures it. Bridges
    standard Python logging to lib_log_rich so configo's module loggers are
    rendered by it.

    Args:
        settings: Parsed logging settings.

    Side Effects:
        Loads .env files into the process environment on first invocation.
        May initialize the global lib_log_rich runtime on first invocation.
        Subsequent calls have no effect.
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(settings))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingSettings",
    "init_logging",
]
