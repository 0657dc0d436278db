"""Page table — per-process map from virtual pages to physical frames.

Each simulated process owns a single-level table with a fixed number of
entries.  An entry either names the frame holding the page (the page
is *resident*, the entry is *valid*) or names nothing (touching the
page is a *page fault*).

Address geometry::

    array offset  →  byte address = offset * element_size
    byte address  →  page = address // page_size + essential_pages

The first ``essential_pages`` entries are reserved for the pages a
process needs merely to be runnable (code, stack, bookkeeping); the
searched array starts right after them.

Design choices:
    - **PageTableEntry** is a tiny frozen record with an optional frame
      instead of a frame number with a validity bit packed into it.
    - **frames_resident** is maintained incrementally so the resident
      count is O(1); it always equals the number of valid entries.
    - Out-of-range page numbers raise ``PageTableError`` — they mean a
      bug elsewhere, not a condition to recover from.
"""

from dataclasses import dataclass


class PageTableError(IndexError):
    """Raised on an out-of-range page or an inconsistent mapping."""


@dataclass(frozen=True)
class PageTableEntry:
    """One slot of a page table.

    Attributes:
        frame: The physical frame holding the page, or None.

    """

    frame: int | None = None

    @property
    def valid(self) -> bool:
        """Return True if the page is resident."""
        return self.frame is not None


_INVALID = PageTableEntry()


class PageTable:
    """Map virtual page numbers to physical frame numbers."""

    def __init__(self, *, size: int) -> None:
        """Create a table of *size* invalid entries."""
        self._entries: list[PageTableEntry] = [_INVALID] * size
        self._frames_resident = 0

    @property
    def size(self) -> int:
        """Return the number of entries in the table."""
        return len(self._entries)

    @property
    def frames_resident(self) -> int:
        """Return how many entries are currently valid."""
        return self._frames_resident

    def _check(self, page: int) -> None:
        if not 0 <= page < len(self._entries):
            msg = f"Page {page} outside table of {len(self._entries)} entries"
            raise PageTableError(msg)

    def is_resident(self, page: int) -> bool:
        """Return True if *page* has a valid mapping."""
        self._check(page)
        return self._entries[page].valid

    def frame_of(self, page: int) -> int | None:
        """Return the frame backing *page*, or None if not resident."""
        self._check(page)
        return self._entries[page].frame

    def map(self, page: int, frame: int) -> None:
        """Install a valid mapping from *page* to *frame*.

        Raises:
            PageTableError: If the page is out of range or already valid.

        """
        self._check(page)
        if self._entries[page].valid:
            msg = f"Page {page} is already mapped to frame {self._entries[page].frame}"
            raise PageTableError(msg)
        self._entries[page] = PageTableEntry(frame=frame)
        self._frames_resident += 1

    def unmap_all(self) -> list[int]:
        """Invalidate every entry and return the frames that were held."""
        freed: list[int] = []
        for page, entry in enumerate(self._entries):
            if entry.frame is not None:
                freed.append(entry.frame)
                self._entries[page] = _INVALID
        self._frames_resident = 0
        return freed

    def resident_pages(self) -> dict[int, int]:
        """Return all page→frame mappings that are currently valid."""
        return {
            page: entry.frame
            for page, entry in enumerate(self._entries)
            if entry.frame is not None
        }

    def __len__(self) -> int:
        """Return the number of resident pages."""
        return self._frames_resident
