"""Translation between dotted paths and environment variable names.

``http.tls.enabled`` with prefix ``app`` becomes ``APP_HTTP_TLS_ENABLED``.
The reverse direction is ambiguous when keys contain underscores, so
:func:`env_path` resolves against the known leaf paths first.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

SEPARATOR = "_"


def normalize_prefix(prefix: str | None) -> str:
    """Upper-case ``prefix`` and make sure it ends with the separator.

    Examples:
        >>> normalize_prefix("my_env")
        'MY_ENV_'
        >>> normalize_prefix("APP_")
        'APP_'
        >>> normalize_prefix(None)
        ''
    """
    if not prefix:
        return ""
    prefix = prefix.upper()
    return prefix if prefix.endswith(SEPARATOR) else prefix + SEPARATOR


def env_name(path: str, prefix: str | None = None) -> str:
    """Return the environment variable name for a dotted ``path``.

    Examples:
        >>> env_name("test.env", "configo")
        'CONFIGO_TEST_ENV'
        >>> env_name("http.port")
        'HTTP_PORT'
    """
    return normalize_prefix(prefix) + path.replace(".", SEPARATOR).replace("-", SEPARATOR).upper()


def env_path(name: str, prefix: str | None = None, known_paths: Iterable[str] = ()) -> str | None:
    """Return the dotted path for an environment variable ``name``.

    Resolves against ``known_paths`` first. Without a match the name is
    lower-cased and every separator becomes a dot. Returns None when ``name``
    does not carry ``prefix``.

    Examples:
        >>> env_path("APP_HTTP_MAX_CONNS", "app", ["http.max_conns"])
        'http.max_conns'
        >>> env_path("APP_HTTP_PORT", "app")
        'http.port'
        >>> env_path("OTHER_PORT", "app") is None
        True
    """
    normalized = normalize_prefix(prefix)
    upper = name.upper()
    if normalized and not upper.startswith(normalized):
        return None
    stripped = upper[len(normalized) :]
    if not stripped:
        return None
    for candidate in known_paths:
        if env_name(candidate) == stripped:
            return candidate
    return stripped.lower().replace(SEPARATOR, ".")


def leaf_paths(mapping: Mapping[str, Any], parents: tuple[str, ...] = ()) -> Iterator[str]:
    """Yield the dotted path of every non-map value in ``mapping``.

    Empty maps yield nothing.

    Example:
        >>> sorted(leaf_paths({"http": {"port": 80, "tls": {}}, "name": "x"}))
        ['http.port', 'name']
    """
    for key, value in mapping.items():
        segments = (*parents, str(key))
        if isinstance(value, Mapping):
            yield from leaf_paths(value, segments)
        else:
            yield ".".join(segments)


def set_path(target: dict[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` at dotted ``path``, creating or replacing intermediate maps.

    Example:
        >>> data: dict[str, Any] = {}
        >>> set_path(data, "http.tls.enabled", True)
        >>> data
        {'http': {'tls': {'enabled': True}}}
    """
    parts = path.split(".")
    node = target
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def fold_env(data: Mapping[str, Any], prefix: str | None, known_paths: Iterable[str]) -> dict[str, Any]:
    """Fold flat ``NAME=value`` pairs into a hierarchical map.

    Names resolving to one of ``known_paths`` are nested at that path; the
    rest stay top-level under their lower-cased name. ``None`` values (names
    without an assignment) are dropped.

    Example:
        >>> fold_env({"APP_HTTP_PORT": "81", "EXTRA": "x"}, "app", ["http.port"])
        {'http': {'port': '81'}, 'extra': 'x'}
    """
    known = list(known_paths)
    folded: dict[str, Any] = {}
    for name, value in data.items():
        if value is None:
            continue
        path = env_path(str(name), prefix, known)
        if path is not None and path in known:
            set_path(folded, path, value)
        else:
            folded[str(name).lower()] = value
    return folded


def flatten_env(mapping: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, Any]]:
    """Flatten ``mapping`` into sorted ``(VARIABLE, value)`` pairs.

    Example:
        >>> flatten_env({"svc": {"port": 80, "tls": {"enabled": True}}}, "app")
        [('APP_SVC_PORT', 80), ('APP_SVC_TLS_ENABLED', True)]
    """
    pairs: list[tuple[str, Any]] = []
    pending: list[tuple[str, Any]] = [(str(key), value) for key, value in mapping.items()]
    while pending:
        key, value = pending.pop(0)
        if isinstance(value, Mapping):
            pending.extend((f"{key}.{child}", item) for child, item in value.items())
            continue
        pairs.append((env_name(key, prefix), value))
    return sorted(pairs, key=lambda pair: pair[0])


__all__ = [
    "SEPARATOR",
    "env_name",
    "env_path",
    "flatten_env",
    "fold_env",
    "leaf_paths",
    "normalize_prefix",
    "set_path",
]
