"""Simulation event log.

Each component of a run reports what it did under its own source name:

    kernel      the system was built and every process admitted
    pager       a process was swapped out (WARNING) or back in (INFO)
    workload    a process started a search (DEBUG, one per search)
    scheduler   an idle machine resumed a queued process, or a run starved

The final report is what a run is judged on.  The log only explains
how the counters got there, so entries below the logger's threshold
are dropped when they are appended rather than stored and filtered
later: a default-sized workload emits thousands of DEBUG lines.

Entries carry the pid they concern, so one process's history can be
pulled out with ``Logger.filter(pid=...)``.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One event of a run, tagged with the process it concerns.

    Attributes:
        level: WARNING for swap-outs, INFO for swap-ins, and so on.
        message: The console text, e.g. ``Swapping out process   3 [...]``.
        source: "kernel", "pager", "workload" or "scheduler".
        pid: The process involved, or None for machine-wide events.

    """

    level: LogLevel
    message: str
    source: str
    pid: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Collects the events of one run, dropping those below a threshold."""

    def __init__(self, *, threshold: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger.

        Args:
            threshold: Entries below this level are discarded on append.

        """
        self._threshold = threshold
        self._entries: list[LogEntry] = []

    @property
    def threshold(self) -> LogLevel:
        """Return the minimum level that is kept."""
        return self._threshold

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def enabled_for(self, level: LogLevel) -> bool:
        """Return True if an entry at *level* would be kept."""
        return level >= self._threshold

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        pid: int | None = None,
    ) -> None:
        """Append a new entry to the log (unless below the threshold).

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            pid: Simulated process the event concerns.

        """
        if level < self._threshold:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source, pid=pid))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        pid: int | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.
            pid: If set, only return entries about this process.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if pid is not None:
            result = [e for e in result if e.pid == pid]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
