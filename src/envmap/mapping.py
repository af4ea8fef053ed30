"""Environment maps — the destination every parser writes into.

An ``EnvMap`` is a set of ``KEY=VALUE`` string pairs, just like a
process environment block:

    - **Strings only** — both keys and values are strings (no types).
    - **Last write wins** — setting an existing key replaces its value.
    - **Caller owned** — parsers add to a map you hand them and never
      keep a reference to it afterwards.  Nothing here is locked; share
      a map between threads only with your own synchronization.

Maps built from different sources are combined with ``merge``, which
copies every pair across and overwrites on conflict.  Merging in order
(environment, then file, then command line) gives the usual "later
source overrides earlier" behaviour.
"""

from collections.abc import Iterator, Mapping


class EnvMap:
    """A key-value store for environment variables.

    Each instance is independent: ``copy()`` and the constructor both
    copy their input rather than referencing it.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Create a map, optionally pre-populated.

        Args:
            initial: Starting pairs (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def delete(self, key: str) -> None:
        """Remove *key* from the map.

        Raises:
            KeyError: If *key* does not exist.

        """
        del self._vars[key]

    def merge(self, source: "EnvMap | Mapping[str, str]") -> None:
        """Copy every pair from *source* into this map, overwriting on conflict.

        Args:
            source: Another ``EnvMap`` or any string-to-string mapping.

        """
        # Snapshot first so merging a map into itself is safe.
        pairs = list(source.items())
        self._vars.update(pairs)

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs."""
        return list(self._vars.items())

    def to_dict(self) -> dict[str, str]:
        """Return the pairs as a plain dict (a copy)."""
        return dict(self._vars)

    def copy(self) -> "EnvMap":
        """Return an independent copy of this map."""
        return EnvMap(initial=self._vars)

    def __getitem__(self, key: str) -> str:
        """Return the value for *key*, raising KeyError if it is not set."""
        return self._vars[key]

    def __contains__(self, key: object) -> bool:
        """Return True if *key* is set."""
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        """Iterate over the keys."""
        return iter(self._vars)

    def __len__(self) -> int:
        """Return the number of pairs."""
        return len(self._vars)

    def __eq__(self, other: object) -> bool:
        """Compare by contents, against another map or a plain dict."""
        if isinstance(other, EnvMap):
            return self._vars == other._vars
        if isinstance(other, dict):
            return self._vars == other
        return NotImplemented

    def __repr__(self) -> str:
        """Show the keys only; values may be secrets."""
        return f"EnvMap(keys={sorted(self._vars)!r})"
