"""Parse audit log — a record of what each ingest routine did.

Parsing is deliberately best effort: a malformed line or a dangling
``-e`` flag never raises, it is simply skipped.  That keeps hand-edited
config files usable, but it also hides mistakes.  The audit log makes
them visible again without changing the parse results:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, line).
- **Logger** — an append-only log with filtering and clearing.

Entries name keys and line numbers, never values, so a log can be
printed even when the parsed data holds secrets.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: Where the data came from (a file path, "environ", "flags").
        line: The 1-based line number in a stream (0 = not line based).

    """

    level: LogLevel
    message: str
    source: str
    line: int = 0

    def __str__(self) -> str:
        """Format as ``[LEVEL] source:line: message``."""
        where = f"{self.source}:{self.line}" if self.line else self.source
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    One logger can be shared by several ingest calls; the ``source``
    field tells their entries apart.
    """

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        line: int = 0,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Name of the input being parsed.
            line: Line number within the input, if any.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, line=line))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)


def record(
    logger: Logger | None,
    level: LogLevel,
    message: str,
    *,
    source: str,
    line: int = 0,
) -> None:
    """Log to *logger* if one was given; do nothing otherwise."""
    if logger is not None:
        logger.log(level, message, source=source, line=line)
