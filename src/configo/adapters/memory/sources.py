"""In-memory file and environment sources.

Files are registered as already-parsed maps keyed by path; reads are
recorded so tests can assert which paths the pipeline touched.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from ...domain.errors import SourceReadError


@dataclass
class InMemorySources:
    """Spy providing ``read_file`` and ``read_environ`` from dictionaries.

    Example:
        >>> sources = InMemorySources(files={"app.yaml": {"port": 8080}}, environ={"PORT": "9090"})
        >>> sources.read_file("app.yaml", "yaml")
        {'port': 8080}
        >>> sources.reads
        [('app.yaml', 'yaml')]
        >>> sources.read_environ()
        {'PORT': '9090'}
    """

    files: dict[str, Mapping[str, Any]] = field(default_factory=dict)
    environ: dict[str, str] = field(default_factory=dict)
    reads: list[tuple[str, str]] = field(default_factory=list)

    def read_file(self, path: str, fmt: str) -> dict[str, Any]:
        """Return a deep copy of the map registered for ``path``.

        Raises:
            SourceReadError: If nothing is registered for ``path``.
        """
        self.reads.append((path, fmt))
        if path not in self.files:
            raise SourceReadError(f"open {path}: no such file or directory", path=path)
        return deepcopy(dict(self.files[path]))

    def read_environ(self) -> dict[str, str]:
        """Return a copy of the configured environment."""
        return dict(self.environ)


__all__ = ["InMemorySources"]
