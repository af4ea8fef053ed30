"""Process environment — ingest pre-split pairs and look keys up.

The operating system already hands a process its environment as a list
of clean ``KEY=VALUE`` strings, so no trimming or comment handling is
needed: ``parse_slice`` feeds each one straight to ``parse_pair``.

The process environment is global, read-only state.  Nothing in this
module reaches for it implicitly: ``environ()`` and ``lookup_env()``
take the data as an argument and only fall back to ``os.environ`` when
none is given, which keeps the parsing logic testable without touching
the real environment.
"""

import os
from collections.abc import Iterable, Mapping

from envmap.logging import Logger, LogLevel, record
from envmap.mapping import EnvMap
from envmap.pair import parse_pair

_SOURCE = "environ"


def parse_slice(
    tokens: Iterable[str],
    dest: EnvMap,
    *,
    logger: Logger | None = None,
    source: str = _SOURCE,
) -> int:
    """Parse a list of clean ``KEY=VALUE`` tokens into *dest*.

    Tokens are not trimmed or checked for comments.  Only pairs with a
    non-empty key and a non-empty value are stored.

    Returns:
        The number of pairs stored.

    """
    count = 0
    for token in tokens:
        pair = parse_pair(token)
        if pair is None or not pair.value:
            record(logger, LogLevel.DEBUG, "skipped entry without a value", source=source)
            continue
        dest.set(pair.key, pair.value)
        count += 1
    return count


def _process_entries() -> list[str]:
    """Render the current process environment as ``KEY=VALUE`` strings."""
    return [f"{key}={value}" for key, value in os.environ.items()]


def environ(
    entries: Iterable[str] | None = None,
    *,
    logger: Logger | None = None,
) -> tuple[EnvMap, int]:
    """Build a map from environment entries.

    Args:
        entries: Raw ``KEY=VALUE`` strings.  Defaults to the current
            process environment.
        logger: Optional audit log.

    Returns:
        The new map and the number of pairs stored in it.

    """
    if entries is None:
        entries = _process_entries()
    env = EnvMap()
    count = parse_slice(entries, env, logger=logger)
    record(logger, LogLevel.INFO, f"stored {count} pairs", source=_SOURCE)
    return env, count


def lookup_env(
    key: str,
    *maps: EnvMap | Mapping[str, str],
    fallback: Mapping[str, str] | None = None,
) -> str | None:
    """Find *key* in the first map that has it.

    Maps are searched in the order given; when none has the key,
    *fallback* (default: ``os.environ``) is consulted.

    Returns:
        The value, or None if the key is set nowhere.

    """
    for env in maps:
        if key in env:
            return env[key]
    if fallback is None:
        fallback = os.environ
    return fallback.get(key)


def getenv(
    key: str,
    *maps: EnvMap | Mapping[str, str],
    fallback: Mapping[str, str] | None = None,
) -> str:
    """Like ``lookup_env`` but return ``""`` for a missing key."""
    value = lookup_env(key, *maps, fallback=fallback)
    return value if value is not None else ""
