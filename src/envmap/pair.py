"""Pair parsing — split one ``KEY=VALUE`` token into its two halves.

Every source this package reads (a dotenv file, the process
environment, ``-e key=value`` flags) eventually hands single tokens to
``parse_pair``.  The rules are small but have a few sharp edges:

    - **First separator wins** — ``A=b=c`` is key ``A``, value ``b=c``.
    - **Index 0 is never a separator** — Windows keeps entries such as
      ``=::=::`` in its environment, so a key may itself start with ``=``.
    - **One layer of quotes** — ``KEY='v'`` and ``KEY="v"`` both give
      ``v``; mismatched quotes (``KEY='v"``) are kept as-is.  There is
      no escape processing.
    - **Empty is valid** — ``KEY=`` parses to an empty value.  Whether an
      empty value is *stored* is up to the caller.

A token without a separator is not an error, it just does not parse:
``parse_pair`` returns None and the caller skips it.
"""

from dataclasses import dataclass

_SEPARATOR = "="
_QUOTES = ("'", '"')
_MIN_QUOTED_LEN = 2


def _is_quoted(value: str) -> bool:
    """Return True if *value* is wrapped in one matching pair of quotes."""
    return len(value) >= _MIN_QUOTED_LEN and value[0] in _QUOTES and value[0] == value[-1]


@dataclass(frozen=True)
class Pair:
    """A parsed key/value pair.

    Attributes:
        key: Everything before the first separator (may start with ``=``).
        value: Everything after it, with one layer of quotes removed.

    """

    key: str
    value: str

    def __str__(self) -> str:
        """Re-encode as ``key=value`` so that parsing it again is lossless.

        The value is double-quoted only when it would otherwise change
        on the way back in: when it looks quoted itself, or when it has
        leading/trailing whitespace that a line reader would trim.
        """
        value = self.value
        if _is_quoted(value) or value != value.strip():
            value = f'"{value}"'
        return f"{self.key}{_SEPARATOR}{value}"


def parse_pair(raw: str) -> Pair | None:
    """Parse a raw ``KEY=VALUE`` token.

    Args:
        raw: The token to parse.  No trimming is applied.

    Returns:
        The parsed pair, or None when *raw* has no separator after its
        first character.

    """
    sep = raw.find(_SEPARATOR, 1)
    if sep == -1:
        return None

    key = raw[:sep]
    value = raw[sep + 1 :]
    if _is_quoted(value):
        value = value[1:-1]
    return Pair(key=key, value=value)
