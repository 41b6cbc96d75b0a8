"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Decoding engine
from ..adapters.decoding import decode

# File formats
from ..adapters.formats import dump_document, read_config_file

# Logging services
from ..adapters.logging import init_logging

# Environment
from ..adapters.sources import read_environ

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory import InMemorySources
    from ..application.ports import Decode, DumpDocument, InitLogging, ReadEnviron, ReadFile

    _assert_read_file: ReadFile = read_config_file
    _assert_read_environ: ReadEnviron = read_environ
    _assert_decode: Decode = decode
    _assert_dump_document: DumpDocument = dump_document
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    read_file: ReadFile
    read_environ: ReadEnviron
    decode: Decode
    dump_document: DumpDocument
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        read_file=read_config_file,
        read_environ=read_environ,
        decode=decode,
        dump_document=dump_document,
        init_logging=init_logging,
    )


def build_testing(*, sources: InMemorySources | None = None) -> AppServices:
    """Wire in-memory sources into an AppServices container.

    Decoding and document rendering stay real; only the file system, the
    environment and the logging runtime are replaced.

    Args:
        sources: Optional InMemorySources holding files and environment.
            When None, an empty one is created. Pass your own to register
            files and assert on recorded reads.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import InMemorySources, init_logging_in_memory

    sources = sources if sources is not None else InMemorySources()
    return AppServices(
        read_file=sources.read_file,
        read_environ=sources.read_environ,
        decode=decode,
        dump_document=dump_document,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
]
