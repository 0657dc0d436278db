"""Memory subsystem — frames, page tables, the swap queue, and the pager.

Re-exports public symbols so callers can write::

    from py_vmsim.memory import FramePool, PageTable, SwapQueue
"""

from py_vmsim.memory.frames import FrameError, FramePool, OutOfFramesError
from py_vmsim.memory.page_table import PageTable, PageTableEntry, PageTableError
from py_vmsim.memory.swap import QueueFullError, RingQueue, SwapQueue
from py_vmsim.memory.faults import PageFaultHandler  # noqa: I001

__all__ = [
    "FrameError",
    "FramePool",
    "OutOfFramesError",
    "PageFaultHandler",
    "PageTable",
    "PageTableEntry",
    "PageTableError",
    "QueueFullError",
    "RingQueue",
    "SwapQueue",
]
