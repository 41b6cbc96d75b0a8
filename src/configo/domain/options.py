"""The ``Option`` value object steering one parse call."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True, slots=True)
class Option:
    """Parameters of a single parse call.

    Attributes:
        path: Configuration file to merge over the defaults. Its lower-cased
            extension selects the format (``yaml``, ``yml``, ``json``,
            ``env``, ``dotenv``, ``toml``).
        key: Name of the sub-tree to bind to the target shape. For a shape
            with ``address`` and ``port`` fields read from
            ``{"http": {"address": "localhost", "port": 23}}`` use
            ``key="http"``. Empty binds the whole tree.
        env_prefix: Prefix of the environment variables to read, e.g.
            ``"MY_ENV"`` (or ``"my_env"``) for ``MY_ENV_ADDRESS``. Read from
            the process only when ``env_include`` is set; a dotenv file at
            ``path`` is folded with it either way.
        env_include: Overlay process environment variables on top of the
            defaults and the file.

    Example:
        >>> Option(path="conf.yaml").format
        'yaml'
        >>> Option(path="/srv/app/.env").format
        'env'
        >>> Option().format is None
        True
    """

    path: str = ""
    key: str = ""
    env_prefix: str = ""
    env_include: bool = False

    @property
    def format(self) -> str | None:
        """Lower-cased extension token of ``path``, or None without a path."""
        if not self.path:
            return None
        pure = PurePath(self.path)
        token = pure.suffix or (pure.name if pure.name.startswith(".") else "")
        return token[1:].lower() or None


__all__ = ["Option"]
