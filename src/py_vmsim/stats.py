"""Statistics — the counters a run accumulates and the final report.

Four numbers summarise a run:

- **page accesses** — every probe of every binary search.
- **page faults** — probes that found their page non-resident.
- **swaps** — full swap cycles.  Swap-outs and swap-ins are counted as
  separate events, and a cycle is one of each, so the reported value
  is the event count divided by two.
- **degree of multiprogramming** — the fewest processes that were
  simultaneously active at any point of the run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

_REPORT_WIDTH = 7


@dataclass(frozen=True)
class Report:
    """Immutable summary of a finished (or interrupted) run."""

    page_accesses: int
    page_faults: int
    swaps: int
    degree_of_multiprogramming: int

    def to_dict(self) -> dict[str, int]:
        """Return the report as a plain dict for JSON output."""
        return asdict(self)


class Statistics:
    """Running counters of a simulation.

    Counters only ever grow, except ``min_active`` which only ever
    shrinks.
    """

    def __init__(self, *, num_processes: int) -> None:
        """Start every counter at zero and the minimum at *num_processes*."""
        self.page_accesses = 0
        self.page_faults = 0
        self.swap_events = 0
        self.min_active = num_processes

    @property
    def swaps(self) -> int:
        """Return the number of completed swap cycles."""
        return self.swap_events // 2

    def record_access(self) -> None:
        """Count one page reference."""
        self.page_accesses += 1

    def record_fault(self) -> None:
        """Count one page fault."""
        self.page_faults += 1

    def record_swap(self) -> None:
        """Count one swap-out or swap-in event."""
        self.swap_events += 1

    def observe_active(self, active: int) -> bool:
        """Record the live active-process count.

        Returns:
            True if *active* is a new minimum.

        """
        if active < self.min_active:
            self.min_active = active
            return True
        return False

    def report(self) -> Report:
        """Snapshot the counters as a ``Report``."""
        return Report(
            page_accesses=self.page_accesses,
            page_faults=self.page_faults,
            swaps=self.swaps,
            degree_of_multiprogramming=self.min_active,
        )


def format_report(report: Report) -> str:
    """Render the page access summary block."""
    w = _REPORT_WIDTH
    return (
        "+++ Page access summary\n"
        f"\tTotal number of page accesses  = {report.page_accesses:{w}d}\n"
        f"\tTotal number of page faults    = {report.page_faults:{w}d}\n"
        f"\tTotal number of swaps          = {report.swaps:{w}d}\n"
        f"\tDegree of multiprogramming     = {report.degree_of_multiprogramming:{w}d}"
    )
