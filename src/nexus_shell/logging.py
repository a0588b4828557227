"""Session audit log.

Every terminal session keeps a structured record of what happened in it:
which commands ran, which admin commands were refused, which handlers
failed and which packages were installed or removed.  The admin-only
``logs`` and ``audit`` commands render this buffer.

- **LogLevel**: severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry**: one immutable record (level, message, source, user, time).
- **Logger**: an append-only buffer with filtering.

The log lives in memory and dies with the session, like the rest of the
virtual machine.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

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
        source: The subsystem that produced the event (``shell``, ``auth``,
            ``apt``).
        user: The session user the event is attributed to.
        timestamp: When the event was recorded.

    """

    level: LogLevel
    message: str
    source: str
    user: str = "user"
    timestamp: datetime = field(default_factory=datetime.now)


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        """Create an empty logger.

        Args:
            clock: Source of entry timestamps.

        """
        self._clock = clock
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
        user: str = "user",
    ) -> None:
        """Append a new entry to the log."""
        self._entries.append(
            LogEntry(level=level, message=message, source=source, user=user, timestamp=self._clock())
        )

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

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result
