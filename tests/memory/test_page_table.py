"""Tests for the per-process page table."""

import pytest

from py_vmsim.memory.page_table import PageTable, PageTableEntry, PageTableError

TABLE_SIZE = 16
FRAME_A = 7
FRAME_B = 3


class TestPageTableEntry:
    """Verify the entry record."""

    def test_default_entry_is_invalid(self) -> None:
        """An entry without a frame is not valid."""
        assert not PageTableEntry().valid

    def test_entry_with_frame_is_valid(self) -> None:
        """Frame 0 is a real frame, so the entry is valid."""
        assert PageTableEntry(frame=0).valid


class TestMapping:
    """Verify installing mappings."""

    def test_new_table_is_empty(self) -> None:
        """A new table has no resident pages."""
        table = PageTable(size=TABLE_SIZE)
        assert table.size == TABLE_SIZE
        assert table.frames_resident == 0
        assert not table.is_resident(0)

    def test_map_makes_page_resident(self) -> None:
        """Mapping a page should make it resident on that frame."""
        table = PageTable(size=TABLE_SIZE)
        table.map(4, FRAME_A)
        assert table.is_resident(4)
        assert table.frame_of(4) == FRAME_A
        assert table.frames_resident == 1

    def test_frame_of_unmapped_is_none(self) -> None:
        """An unmapped page has no frame."""
        table = PageTable(size=TABLE_SIZE)
        assert table.frame_of(2) is None

    def test_double_map_raises(self) -> None:
        """Mapping a page that is already valid is a defect."""
        table = PageTable(size=TABLE_SIZE)
        table.map(1, FRAME_A)
        with pytest.raises(PageTableError):
            table.map(1, FRAME_B)

    @pytest.mark.parametrize("page", [-1, TABLE_SIZE])
    def test_out_of_range_page_raises(self, page: int) -> None:
        """Pages outside the table are programming errors."""
        table = PageTable(size=TABLE_SIZE)
        with pytest.raises(PageTableError):
            table.is_resident(page)
        with pytest.raises(PageTableError):
            table.map(page, FRAME_A)


class TestUnmapAll:
    """Verify invalidating a whole table."""

    def test_unmap_all_returns_frames(self) -> None:
        """unmap_all should hand back every frame that was held."""
        table = PageTable(size=TABLE_SIZE)
        table.map(0, FRAME_A)
        table.map(9, FRAME_B)
        assert sorted(table.unmap_all()) == sorted([FRAME_A, FRAME_B])

    def test_unmap_all_resets_table(self) -> None:
        """After unmap_all nothing is resident."""
        table = PageTable(size=TABLE_SIZE)
        table.map(0, FRAME_A)
        table.unmap_all()
        assert table.frames_resident == 0
        assert table.resident_pages() == {}
        assert not table.is_resident(0)

    def test_unmap_all_on_empty_table(self) -> None:
        """Unmapping an empty table frees nothing."""
        table = PageTable(size=TABLE_SIZE)
        assert table.unmap_all() == []

    def test_resident_pages_matches_count(self) -> None:
        """The resident count should always equal the valid entries."""
        table = PageTable(size=TABLE_SIZE)
        table.map(2, FRAME_A)
        table.map(5, FRAME_B)
        assert table.resident_pages() == {2: FRAME_A, 5: FRAME_B}
        assert len(table) == table.frames_resident == 2
