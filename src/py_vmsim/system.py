"""System state — the one aggregate every component operates on.

There is no global simulation state.  A ``SystemState`` owns the
processes, the frame pool, the swap queue, the statistics, and the
event log, and is passed explicitly to the components that act on it.
That keeps each piece testable on its own: a test can build a tiny
system, poke the fault handler, and inspect the result.

``SystemState.create`` performs the initial load: every process, in
workload order, receives its essential pages while frames last.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_vmsim.config import MachineConfig
from py_vmsim.logging import Logger, LogLevel
from py_vmsim.memory.faults import PageFaultHandler
from py_vmsim.memory.frames import FramePool
from py_vmsim.memory.swap import SwapQueue
from py_vmsim.process import Process
from py_vmsim.stats import Statistics

if TYPE_CHECKING:
    from py_vmsim.loader import Workload


class SystemState:
    """Processes, frames, swap queue, counters, and log of one run."""

    def __init__(
        self,
        *,
        config: MachineConfig,
        processes: list[Process],
        logger: Logger | None = None,
    ) -> None:
        """Assemble a system without performing the initial load.

        Most callers want ``SystemState.create``; this constructor is
        the seam tests use to set up unusual states by hand.
        """
        self.config = config
        self.processes = processes
        self.frames = FramePool(total_frames=config.user_frames)
        self.swap_queue = SwapQueue(capacity=max(1, len(processes)))
        self.stats = Statistics(num_processes=len(processes))
        self.logger = logger if logger is not None else Logger()
        self.pager = PageFaultHandler(self)

    @classmethod
    def create(
        cls,
        workload: Workload,
        *,
        config: MachineConfig | None = None,
        logger: Logger | None = None,
    ) -> SystemState:
        """Build the system for *workload* and load every essential set."""
        cfg = config if config is not None else MachineConfig()
        processes = [
            Process(
                pid=pid,
                array_size=spec.array_size,
                search_keys=spec.search_keys,
                page_table_size=cfg.page_table_size,
            )
            for pid, spec in enumerate(workload.processes)
        ]
        system = cls(config=cfg, processes=processes, logger=logger)
        for process in processes:
            system.pager.admit(process)
        system.logger.log(
            LogLevel.INFO,
            f"Kernel data initialized: {len(processes)} processes, "
            f"{system.frames.free_count} of {system.frames.total} frames free",
            source="kernel",
        )
        return system

    def process(self, pid: int) -> Process:
        """Return the process with identifier *pid*."""
        return self.processes[pid]

    def active_count(self) -> int:
        """Return the number of processes not waiting in the swap queue."""
        return sum(1 for p in self.processes if p.active)

    def all_finished(self) -> bool:
        """Return True once every process has exhausted its searches."""
        return all(p.finished for p in self.processes)

    def resident_total(self) -> int:
        """Return the number of frames held by all page tables together."""
        return sum(p.frames_resident for p in self.processes)

    def check_invariants(self) -> None:
        """Verify the frame, state, and swap-queue invariants.

        Raises:
            AssertionError: Naming the first invariant found broken.

        """
        held: set[int] = set()
        for p in self.processes:
            mapped = p.page_table.resident_pages()
            if len(mapped) != p.frames_resident:
                msg = f"Process {p.pid}: resident count {p.frames_resident} != {len(mapped)}"
                raise AssertionError(msg)
            for frame in mapped.values():
                if frame in held or self.frames.is_free(frame):
                    msg = f"Frame {frame} is double-assigned"
                    raise AssertionError(msg)
                held.add(frame)
            if p.runnable != (p.frames_resident > 0):
                msg = f"Process {p.pid} is {p.state} with {p.frames_resident} frame(s)"
                raise AssertionError(msg)
            if (p.pid in self.swap_queue) != (not p.active):
                msg = f"Process {p.pid} is {p.state} but queued={p.pid in self.swap_queue}"
                raise AssertionError(msg)
        if len(held) + self.frames.free_count != self.frames.total:
            msg = (
                f"Frames lost: {len(held)} held + {self.frames.free_count} free "
                f"!= {self.frames.total}"
            )
            raise AssertionError(msg)
