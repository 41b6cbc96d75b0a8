"""Shared pytest fixtures for configo tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from configo.adapters.memory import InMemorySources
from configo.composition import AppServices, build_testing


@pytest.fixture
def in_memory_sources() -> InMemorySources:
    """Provide an empty InMemorySources spy.

    Register files with ``in_memory_sources.files[path] = {...}`` and
    environment variables with ``in_memory_sources.environ[name] = value``.
    """
    return InMemorySources()


@pytest.fixture
def testing_services(in_memory_sources: InMemorySources) -> AppServices:
    """Provide AppServices wired to the ``in_memory_sources`` spy.

    Example:
        def test_env(testing_services, in_memory_sources) -> None:
            in_memory_sources.environ["PORT"] = "9090"
            conf = parse(Server, Option(env_include=True), services=testing_services)
    """
    return build_testing(sources=in_memory_sources)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], str]:
    """Return a helper that writes ``content`` to ``tmp_path / name``.

    Returns:
        Callable[[str, str], str]: ``write_config(name, content)`` returning
        the written file path as a string.
    """

    def _write(name: str, content: str) -> str:
        target = tmp_path / name
        target.write_text(content, encoding="utf-8")
        return str(target)

    return _write
