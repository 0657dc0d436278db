"""Frame pool — the free list of physical memory.

Physical memory is divided into fixed-size **frames** (the physical
counterpart of virtual pages).  The pool tracks which frames nobody
holds; the page tables of the processes track the rest.  Together the
two always partition the frame space exactly: no frame is handed out
twice and none is lost.

Why a set instead of a stack or a bitmap?
    A set gives O(1) pop for allocation and O(1) membership testing,
    which is what catches a frame being released twice.  No ordering is
    promised to callers — any free frame can satisfy any fault.
"""


class OutOfFramesError(Exception):
    """Raise when a frame is requested from an empty pool."""


class FrameError(RuntimeError):
    """Raise when a frame is released that the pool cannot take back."""


class FramePool:
    """Grant and reclaim physical frames."""

    def __init__(self, *, total_frames: int) -> None:
        """Create a pool in which every frame starts free.

        Args:
            total_frames: Number of frames the pool manages.

        """
        self._total = total_frames
        self._free: set[int] = set(range(total_frames))

    @property
    def total(self) -> int:
        """Return the number of frames the pool manages."""
        return self._total

    @property
    def free_count(self) -> int:
        """Return the number of currently unallocated frames."""
        return len(self._free)

    @property
    def in_use(self) -> int:
        """Return the number of frames held by processes."""
        return self._total - len(self._free)

    def has_free(self, count: int = 1) -> bool:
        """Return True if at least *count* frames are free."""
        return len(self._free) >= count

    def is_free(self, frame: int) -> bool:
        """Return True if *frame* is currently in the pool."""
        return frame in self._free

    def allocate(self) -> int:
        """Remove and return one free frame.

        Raises:
            OutOfFramesError: If no frames are free.

        """
        if not self._free:
            msg = f"No free frames (pool of {self._total})"
            raise OutOfFramesError(msg)
        return self._free.pop()

    def release(self, frame: int) -> None:
        """Return a frame to the pool.

        Raises:
            FrameError: If the frame is already free or not one of ours.

        """
        if not 0 <= frame < self._total:
            msg = f"Frame {frame} does not belong to a pool of {self._total}"
            raise FrameError(msg)
        if frame in self._free:
            msg = f"Frame {frame} is already free"
            raise FrameError(msg)
        self._free.add(frame)

    def release_all(self, frames: list[int]) -> None:
        """Return every frame in *frames* to the pool."""
        for frame in frames:
            self.release(frame)
