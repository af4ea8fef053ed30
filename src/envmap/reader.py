"""Dotenv reader — parse ``KEY=VALUE`` lines from a text stream or file.

A dotenv file is the simplest possible config format::

    # database settings
    DB_HOST=localhost
    DB_USER='admin'

    GREETING="hello world"

Reading follows a lazy pipeline:

    stream → ``iter_lines`` (trim, drop blanks and comments) → ``parse_pair`` → map

Two kinds of failure are kept strictly apart:

    - **Parse rejections** — a line without ``=``, or a pair with an
      empty value.  These are skipped and never raise; the only trace
      is a smaller count (and an audit log entry, if you pass a logger).
    - **Transport failures** — the file is missing, a read fails, or the
      bytes are not valid UTF-8.  These raise ``EnvReadError``.  Pairs
      parsed before the failure stay in the destination map, and the
      exception carries how many there were.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from envmap.logging import Logger, LogLevel, record
from envmap.mapping import EnvMap
from envmap.pair import parse_pair

_COMMENT = "#"


class EnvReadError(RuntimeError):
    """Raise when an input stream cannot be read.

    Attributes:
        source: Name of the input (a file path or a stream label).
        count: Number of pairs stored before the failure.

    """

    def __init__(self, message: str, *, source: str, count: int = 0) -> None:
        """Create the error with the partial *count* reached so far."""
        super().__init__(message)
        self.source = source
        self.count = count


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for every line worth parsing.

    Lines are stripped of surrounding whitespace.  Blank lines and
    lines starting with ``#`` are skipped, but still advance the
    1-based line number so it matches what an editor shows.

    Args:
        stream: Any iterable of text lines (an open file, ``StringIO``,
            a list of strings).

    """
    for number, raw in enumerate(stream, start=1):
        line = raw.strip()
        if not line or line.startswith(_COMMENT):
            continue
        yield number, line


def read(
    stream: Iterable[str],
    dest: EnvMap,
    *,
    logger: Logger | None = None,
    source: str = "stream",
) -> int:
    """Parse every pair in *stream* into *dest*.

    A pair is stored only when both its key and its value are
    non-empty; ``KEY=`` in a file means "leave unset".

    Args:
        stream: Text lines to parse.
        dest: Map that receives the pairs.
        logger: Optional audit log for skipped lines.
        source: Name used for log entries and errors.

    Returns:
        The number of pairs stored.

    Raises:
        EnvReadError: If iterating *stream* fails.

    """
    count = 0
    try:
        for number, line in iter_lines(stream):
            pair = parse_pair(line)
            if pair is None:
                record(
                    logger, LogLevel.WARNING, "skipped line without '='", source=source, line=number
                )
                continue
            if not pair.value:
                message = f"ignored empty value for {pair.key}"
                record(logger, LogLevel.DEBUG, message, source=source, line=number)
                continue
            dest.set(pair.key, pair.value)
            count += 1
    except (OSError, UnicodeDecodeError) as e:
        record(logger, LogLevel.ERROR, f"read failed after {count} pairs: {e}", source=source)
        msg = f"Failed to read {source}: {e}"
        raise EnvReadError(msg, source=source, count=count) from e

    record(logger, LogLevel.INFO, f"stored {count} pairs", source=source)
    return count


def open_file(
    path: str | Path,
    dest: EnvMap,
    *,
    logger: Logger | None = None,
    encoding: str = "utf-8",
) -> int:
    """Open a dotenv file and parse it into *dest*.

    Args:
        path: The file to read.
        dest: Map that receives the pairs.
        logger: Optional audit log.
        encoding: Text encoding of the file.

    Returns:
        The number of pairs stored.

    Raises:
        EnvReadError: If the file cannot be opened or read.  A file that
            cannot be opened leaves *dest* untouched (``count == 0``).

    """
    source = str(path)
    try:
        handle = Path(path).open(encoding=encoding)  # noqa: SIM115
    except OSError as e:
        record(logger, LogLevel.ERROR, f"cannot open: {e.strerror or e}", source=source)
        msg = f"Cannot open {source}: {e}"
        raise EnvReadError(msg, source=source) from e

    with handle:
        return read(handle, dest, logger=logger, source=source)
