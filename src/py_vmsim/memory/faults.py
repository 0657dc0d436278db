"""Page-fault handler — demand paging with whole-process swapping.

Every page reference goes through ``reference()``:

    1. Count the access.
    2. Resident?  Done (a hit).
    3. Otherwise it is a **page fault**: count it and take a free frame.
    4. No free frame?  The faulting process is **swapped out** — all of
       its frames return to the pool and it waits in the swap queue.
       The reference fails and the caller abandons its current step.

There is no replacement policy choosing a victim page: under pressure
the whole faulting process steps aside so the others can finish.  When
a process finishes and returns its frames, the queue is **drained**:
waiting processes are swapped back in, oldest first, as long as the
pool can cover a full essential set.

Swap-outs and swap-ins are each counted as one swap event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_vmsim.logging import LogLevel
from py_vmsim.memory.frames import OutOfFramesError

if TYPE_CHECKING:
    from py_vmsim.process import Process
    from py_vmsim.system import SystemState

_SOURCE = "pager"


class PageFaultHandler:
    """Resolve page references and move processes in and out of memory."""

    def __init__(self, system: SystemState) -> None:
        """Bind the handler to the system whose frames it manages."""
        self._system = system

    def _load_essential(self, process: Process) -> int:
        """Map essential pages while frames last; return how many were mapped."""
        frames = self._system.frames
        loaded = 0
        for page in range(self._system.config.essential_pages):
            if process.page_table.is_resident(page):
                continue
            if not frames.has_free():
                break
            process.page_table.map(page, frames.allocate())
            loaded += 1
        return loaded

    def admit(self, process: Process) -> None:
        """Give a new process its essential set (the initial load).

        The initial load is not a swap.  A process that gets no frame
        at all cannot run, so it is suspended right away and waits in
        the swap queue like any other swapped-out process.
        """
        self._load_essential(process)
        if process.frames_resident == 0:
            self.swap_out(process)

    def reference(self, process: Process, page: int) -> bool:
        """Touch *page* on behalf of *process*.

        Returns:
            True if the page is now resident, False if the process was
            swapped out instead.

        """
        stats = self._system.stats
        stats.record_access()
        if process.page_table.is_resident(page):
            return True

        stats.record_fault()
        try:
            frame = self._system.frames.allocate()
        except OutOfFramesError:
            self.swap_out(process)
            return False
        process.page_table.map(page, frame)
        return True

    def swap_out(self, process: Process) -> None:
        """Suspend *process*, reclaiming every frame it holds.

        No-op unless the process is RUNNABLE.
        """
        if not process.runnable:
            return
        system = self._system
        system.frames.release_all(process.page_table.unmap_all())
        process.suspend()
        system.swap_queue.enqueue(process.pid)
        system.stats.record_swap()

        active = system.active_count()
        system.stats.observe_active(active)
        system.logger.log(
            LogLevel.WARNING,
            f"Swapping out process {process.pid:3d} [{active:3d} active processes]",
            source=_SOURCE,
            pid=process.pid,
        )

    def swap_in(self, process: Process) -> bool:
        """Resume a suspended *process* with a fresh essential set.

        The process becomes runnable as soon as at least one essential
        page is resident; a partial set is accepted and the missing
        pages fault in later.  No-op if the process is not SWAPPED or
        the pool is empty.

        Returns:
            True if the process was resumed.

        """
        if process.active:
            return False
        system = self._system
        if not system.frames.has_free():
            return False
        self._load_essential(process)
        process.resume()
        system.stats.record_swap()

        active = system.active_count()
        system.logger.log(
            LogLevel.INFO,
            f"Swapping in process {process.pid:3d} [{active:3d} active processes]",
            source=_SOURCE,
            pid=process.pid,
        )
        return True

    def drain(self) -> list[int]:
        """Swap in waiting processes, oldest first, while a full essential set fits.

        Returns:
            The pids that were resumed (empty if nothing changed).

        """
        system = self._system
        resumed: list[int] = []
        while not system.swap_queue.is_empty() and system.frames.has_free(
            system.config.essential_pages
        ):
            pid = system.swap_queue.dequeue()
            if pid is not None and self.swap_in(system.process(pid)):
                resumed.append(pid)
        return resumed

    def resume_front(self) -> int | None:
        """Swap in the longest-waiting process with whatever frames are free.

        Used when nothing else can run: the front of the queue is
        resumed even if the pool cannot cover its whole essential set.

        Returns:
            The resumed pid, or None if the queue is empty or no frame is free.

        """
        system = self._system
        pid = system.swap_queue.peek()
        if pid is None or not system.frames.has_free():
            return None
        system.swap_queue.dequeue()
        self.swap_in(system.process(pid))
        return pid

    def release_all(self, process: Process) -> int:
        """Return every frame of a finished process to the pool.

        Idempotent: a process holding no frames releases nothing.

        Returns:
            The number of frames released.

        """
        freed = process.page_table.unmap_all()
        self._system.frames.release_all(freed)
        return len(freed)
