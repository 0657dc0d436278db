"""Scheduler — round-robin over the processes of a run.

The scheduler visits every process in strict cyclic order (0, 1, ...,
P-1, 0, ...).  A visit is one turn: a RUNNABLE process with searches
left runs one search; anything else — a suspended process, a finished
one — just passes the turn.  Suspended processes never move forward on
their own; they come back only when the pager swaps them in.

Per-process state machine::

    RUNNABLE ──fault, no frame──▶ SWAPPED ──drain──▶ RUNNABLE
        │
        └──last search──▶ COMPLETED   (terminal)

Two situations need the scheduler's help:

- **Idle machine** — every unfinished process is waiting in the swap
  queue (the last runnable one finished, or was itself swapped out).
  Nobody will ever finish to trigger a drain, so the scheduler resumes
  the front of the queue itself, then drains as usual.
- **Starvation** — a process was swapped out while it held every frame
  of the pool, and its pending search needs more pages than a fresh
  start (essential set plus the pages the search probes) can get.
  Retrying can only repeat the same fault, so ``run()`` raises
  ``MemoryStarvationError`` instead of spinning forever.  A process
  that only ran dry because stale pages from earlier searches filled
  the pool is retried as usual.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_vmsim.logging import LogLevel
from py_vmsim.workload import SearchOutcome, finish, probe_offsets, run_search

if TYPE_CHECKING:
    from py_vmsim.process import Process
    from py_vmsim.stats import Report
    from py_vmsim.system import SystemState


class MemoryStarvationError(RuntimeError):
    """Raised when a process cannot complete a search even with every frame."""


class SchedulerLimitError(RuntimeError):
    """Raised when a run exceeds its turn limit."""


class Scheduler:
    """Drive a ``SystemState`` to completion in round-robin order."""

    def __init__(self, system: SystemState, *, max_turns: int | None = None) -> None:
        """Create a scheduler positioned at process 0.

        Args:
            system: The system to run.
            max_turns: Optional cap on the number of turns ``run()`` takes.

        """
        self._system = system
        self._cursor = 0
        self._turns = 0
        self._max_turns = max_turns

    @property
    def cursor(self) -> int:
        """Return the pid whose turn is next."""
        return self._cursor

    @property
    def turns(self) -> int:
        """Return how many turns have been taken."""
        return self._turns

    def _idle(self) -> bool:
        """Return True if nothing unfinished can run but somebody is waiting."""
        system = self._system
        if system.swap_queue.is_empty():
            return False
        return not any(p.runnable and not p.finished for p in system.processes)

    def _fresh_start_needs(self, process: Process) -> int:
        """Return the frames *process* needs to finish its pending search after a swap-in."""
        config = self._system.config
        essential = min(config.essential_pages, self._system.frames.total)
        probed = {
            config.page_for(offset)
            for offset in probe_offsets(process.array_size, process.current_key)
        }
        return len(set(range(essential)) | probed)

    def step(self) -> SearchOutcome:
        """Take one turn and advance the round-robin cursor.

        Returns:
            The outcome of the turn for the process at the cursor.

        """
        system = self._system
        if not system.processes:
            return SearchOutcome.IDLE

        if self._idle():
            pid = system.pager.resume_front()
            if pid is not None:
                system.logger.log(
                    LogLevel.DEBUG,
                    f"No runnable process; resuming process {pid}",
                    source="scheduler",
                    pid=pid,
                )
                system.pager.drain()

        process = system.processes[self._cursor]
        if process.finished and process.frames_resident:
            finish(system, process)
            outcome = SearchOutcome.IDLE
        else:
            outcome = run_search(system, process)

        self._cursor = (self._cursor + 1) % len(system.processes)
        self._turns += 1
        return outcome

    def run(self) -> Report:
        """Run until every process has exhausted its searches.

        Returns:
            The final statistics report.

        Raises:
            MemoryStarvationError: If a process needs more frames than
                the pool holds.
            SchedulerLimitError: If ``max_turns`` is reached first.

        """
        system = self._system
        while not system.all_finished():
            if self._max_turns is not None and self._turns >= self._max_turns:
                msg = f"Run stopped after {self._turns} turns"
                raise SchedulerLimitError(msg)
            pid = self._cursor
            outcome = self.step()
            if outcome is not SearchOutcome.SUSPENDED:
                continue
            # Swap-out only happens on an empty pool, so a full pool now
            # means the suspended process alone held every frame.
            if system.frames.free_count != system.frames.total:
                continue
            process = system.process(pid)
            if self._fresh_start_needs(process) > system.frames.total:
                msg = (
                    f"Process {pid} cannot finish search {process.current_search + 1}: "
                    f"it needs more than the {system.frames.total} frames available"
                )
                system.logger.log(LogLevel.ERROR, msg, source="scheduler", pid=pid)
                raise MemoryStarvationError(msg)
        return system.stats.report()


def simulate(system: SystemState, *, max_turns: int | None = None) -> Report:
    """Run *system* to completion and return its report."""
    return Scheduler(system, max_turns=max_turns).run()
