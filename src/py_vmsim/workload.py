"""Workload generator — binary searches that touch virtual memory.

Each process repeatedly runs a lower-bound binary search over its
virtual array.  Every probe of the search reads one array element,
which lives on some page; that read is a page reference::

    L, R = 0, array_size - 1
    while L < R:
        M = (L + R) // 2            # probe element M → page_for(M)
        if key <= M: R = M          # keep the lower half, M included
        else:        L = M + 1      # keep the upper half, M excluded

The exact probe order decides which pages are touched, and so every
access and fault count of a run.

One call to ``run_search`` is one scheduling turn: a whole search, or
less if a fault swaps the process out.  A swapped-out process loses its
resident set, and with it its progress, so the interrupted search is
retried from the start on a later turn.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from py_vmsim.logging import LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterator

    from py_vmsim.process import Process
    from py_vmsim.system import SystemState


class SearchOutcome(StrEnum):
    """What happened during one turn of a process."""

    COMPLETED = "completed"
    FINISHED = "finished"
    SUSPENDED = "suspended"
    IDLE = "idle"


def probe_offsets(array_size: int, key: int) -> Iterator[int]:
    """Yield the array offsets a lower-bound search for *key* probes."""
    low, high = 0, array_size - 1
    while low < high:
        mid = (low + high) // 2
        yield mid
        if key <= mid:
            high = mid
        else:
            low = mid + 1


def run_search(system: SystemState, process: Process) -> SearchOutcome:
    """Give *process* one turn: run its pending search.

    Returns:
        ``IDLE`` if the process cannot run, ``SUSPENDED`` if a fault
        swapped it out, ``COMPLETED`` if a search finished, and
        ``FINISHED`` if that was its last search.

    """
    if not process.runnable or process.finished:
        return SearchOutcome.IDLE

    key = process.current_key
    if system.logger.enabled_for(LogLevel.DEBUG):
        system.logger.log(
            LogLevel.DEBUG,
            f"Search {process.current_search + 1} by Process {process.pid}",
            source="workload",
            pid=process.pid,
        )

    page_for = system.config.page_for
    for offset in probe_offsets(process.array_size, key):
        if not system.pager.reference(process, page_for(offset)):
            return SearchOutcome.SUSPENDED

    process.current_search += 1
    if not process.finished:
        return SearchOutcome.COMPLETED

    finish(system, process)
    return SearchOutcome.FINISHED


def finish(system: SystemState, process: Process) -> list[int]:
    """Retire a process that has run its last search.

    Its frames go back to the pool and the swap queue is drained.
    Safe to call more than once.

    Returns:
        The pids swapped in by the drain.

    """
    system.pager.release_all(process)
    if process.runnable:
        process.complete()
    return system.pager.drain()
