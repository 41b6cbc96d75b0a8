"""In-memory adapters for testing.

Provide the same Protocols as production adapters without touching the
filesystem or the process environment.
"""

from __future__ import annotations

from .logging import init_logging_in_memory
from .sources import InMemorySources

__all__ = [
    "InMemorySources",
    "init_logging_in_memory",
]
