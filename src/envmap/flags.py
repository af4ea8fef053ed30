"""Flag extraction — pull ``-e key=value`` pairs out of an argument list.

Command-line tools often let users pass environment overrides as a
repeatable flag, next to their own options::

    mytool --verbose -e DEBUG=1 --e=COLOR=never build -e "NAME=my app"

``parse_flag_args`` finds every occurrence of one named flag, stores its
pairs in a map, and hands back everything else untouched and in order,
ready for the tool's real argument parser::

    ["--verbose", "build"]

For flag name ``e`` four spellings are recognised:

    ======================  =================
    ``-e key=value``        short, two tokens
    ``-e=key=value``        short, inline
    ``--e key=value``       long, two tokens
    ``--e=key=value``       long, inline
    ======================  =================

The scan is a single left-to-right pass with one bit of state: "the
previous token was a bare flag, so this one should be a pair".  A few
rules keep it predictable:

    - Markers match on the full flag name: ``-env`` is not ``-e``.
    - A token that looks like ``key=value`` is only parsed when a flag
      claims it.  Loose ``name=value`` tokens belong to the tool.
    - A token starting with ``-`` is never swallowed as a pair; the bare
      flag before it is dropped and the token is handled on its own.
    - A flagged token that fails to parse (``-e=oops``) stays in the
      residual list so the tool can complain about it.
    - A bare flag at the very end is dropped silently.
"""

from collections.abc import Sequence

from envmap.logging import Logger, LogLevel, record
from envmap.mapping import EnvMap
from envmap.pair import parse_pair

_SOURCE = "flags"
_DASH = "-"
_INLINE = "="


def _markers(flag: str) -> tuple[str, str]:
    """Return the short and long marker for *flag*.

    Raises:
        ValueError: If *flag* is empty or already starts with a dash.

    """
    if not flag or flag.startswith(_DASH):
        msg = f"Flag name must be non-empty and given without dashes: {flag!r}"
        raise ValueError(msg)
    return f"{_DASH}{flag}", f"{_DASH}{_DASH}{flag}"


def parse_flag_args(
    flag: str,
    args: Sequence[str],
    dest: EnvMap,
    *,
    logger: Logger | None = None,
) -> tuple[list[str], int]:
    """Extract the pairs passed with *flag* from *args* into *dest*.

    Unlike file and environment input, pairs with an empty value
    (``-e KEY=``) are stored: on the command line an explicit empty
    value is deliberate.

    Args:
        flag: The bare flag name, e.g. ``"e"`` or ``"env"``.
        args: The argument list, without the program name.
        dest: Map that receives the pairs.
        logger: Optional audit log.

    Returns:
        The residual arguments (original order) and the number of pairs
        stored.

    Raises:
        ValueError: If *flag* is not a bare flag name.

    """
    markers = _markers(flag)
    residual: list[str] = []
    count = 0

    expecting = False
    for index, arg in enumerate(args):
        if expecting and not arg.startswith(_DASH):
            expecting = False
            pair = parse_pair(arg)
            if pair is None:
                record(logger, LogLevel.WARNING, f"argument {index} is not a pair", source=_SOURCE)
                residual.append(arg)
                continue
            dest.set(pair.key, pair.value)
            count += 1
            continue

        if expecting:
            message = f"flag before argument {index} has no pair"
            record(logger, LogLevel.DEBUG, message, source=_SOURCE)
        expecting = False

        if arg in markers:
            expecting = True
            continue

        marker = next((m for m in markers if arg.startswith(m + _INLINE)), None)
        if marker is None:
            residual.append(arg)
            continue

        pair = parse_pair(arg[len(marker) + 1 :])
        if pair is None:
            record(logger, LogLevel.WARNING, f"argument {index} has no pair", source=_SOURCE)
            residual.append(arg)
            continue
        dest.set(pair.key, pair.value)
        count += 1

    if expecting:
        record(logger, LogLevel.DEBUG, "trailing flag has no pair", source=_SOURCE)

    record(logger, LogLevel.INFO, f"stored {count} pairs", source=_SOURCE)
    return residual, count
