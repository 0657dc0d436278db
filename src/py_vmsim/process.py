"""Simulated process — the control block the memory manager works on.

Each process owns a page table, a virtual array to search, and the list
of keys it will look up, one per completed search.  The memory manager
moves it through a small state machine::

    RUNNABLE ──swap-out──▶ SWAPPED ──swap-in──▶ RUNNABLE
        │
        └──last search done──▶ COMPLETED

A RUNNABLE process holds at least one resident frame; a SWAPPED or
COMPLETED process holds none.  A COMPLETED process still counts as
*active* when measuring the degree of multiprogramming — it was never
suspended, it simply has nothing left to do.
"""

from __future__ import annotations

from enum import StrEnum

from py_vmsim.memory.page_table import PageTable


class ProcessState(StrEnum):
    """Lifecycle states of a simulated process."""

    RUNNABLE = "runnable"
    SWAPPED = "swapped"
    COMPLETED = "completed"


class Process:
    """A simulated process and its address space."""

    def __init__(
        self,
        *,
        pid: int,
        array_size: int,
        search_keys: tuple[int, ...],
        page_table_size: int,
    ) -> None:
        """Create a RUNNABLE process with an empty page table.

        Args:
            pid: The process identifier (its index in the workload).
            array_size: Number of elements in the searched array.
            search_keys: Keys to look up, in order.
            page_table_size: Entries in the process's page table.

        """
        self._pid = pid
        self._array_size = array_size
        self._search_keys = tuple(search_keys)
        self._page_table = PageTable(size=page_table_size)
        self._state = ProcessState.RUNNABLE
        self.current_search = 0

    @property
    def pid(self) -> int:
        """Return the process identifier."""
        return self._pid

    @property
    def array_size(self) -> int:
        """Return the size of the searched array."""
        return self._array_size

    @property
    def search_keys(self) -> tuple[int, ...]:
        """Return the keys this process searches for."""
        return self._search_keys

    @property
    def num_searches(self) -> int:
        """Return how many searches this process performs in total."""
        return len(self._search_keys)

    @property
    def page_table(self) -> PageTable:
        """Return the process's page table."""
        return self._page_table

    @property
    def frames_resident(self) -> int:
        """Return how many pages are currently resident."""
        return self._page_table.frames_resident

    @property
    def state(self) -> ProcessState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def active(self) -> bool:
        """Return True unless the process is suspended in the swap queue."""
        return self._state is not ProcessState.SWAPPED

    @property
    def runnable(self) -> bool:
        """Return True if the process can be given a turn."""
        return self._state is ProcessState.RUNNABLE

    @property
    def finished(self) -> bool:
        """Return True once every search has completed."""
        return self.current_search >= len(self._search_keys)

    @property
    def current_key(self) -> int:
        """Return the key of the pending search.

        Raises:
            IndexError: If every search has already completed.

        """
        if self.finished:
            msg = f"Process {self._pid} has no pending search"
            raise IndexError(msg)
        return self._search_keys[self.current_search]

    def suspend(self) -> None:
        """Move RUNNABLE → SWAPPED.

        Raises:
            RuntimeError: If the process is not RUNNABLE or still holds frames.

        """
        if self._state is not ProcessState.RUNNABLE:
            msg = f"Cannot suspend process {self._pid} in state {self._state}"
            raise RuntimeError(msg)
        if self.frames_resident:
            msg = f"Process {self._pid} still holds {self.frames_resident} frame(s)"
            raise RuntimeError(msg)
        self._state = ProcessState.SWAPPED

    def resume(self) -> None:
        """Move SWAPPED → RUNNABLE.

        Raises:
            RuntimeError: If the process is not SWAPPED or holds no frames.

        """
        if self._state is not ProcessState.SWAPPED:
            msg = f"Cannot resume process {self._pid} in state {self._state}"
            raise RuntimeError(msg)
        if not self.frames_resident:
            msg = f"Process {self._pid} cannot run without resident pages"
            raise RuntimeError(msg)
        self._state = ProcessState.RUNNABLE

    def complete(self) -> None:
        """Move RUNNABLE → COMPLETED once the last search is done.

        Raises:
            RuntimeError: If searches remain or the process is not RUNNABLE.

        """
        if self._state is not ProcessState.RUNNABLE or not self.finished:
            msg = f"Process {self._pid} cannot complete (state {self._state})"
            raise RuntimeError(msg)
        self._state = ProcessState.COMPLETED

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return (
            f"Process(pid={self._pid}, state={self._state}, "
            f"search={self.current_search}/{self.num_searches}, "
            f"resident={self.frames_resident})"
        )
