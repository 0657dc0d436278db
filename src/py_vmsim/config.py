"""Machine configuration — the geometry of the simulated computer.

The defaults describe a 64 MB machine with 4 KB pages, of which 48 MB
are available to user processes::

    total frames  = 64 MB / 4 KB = 16384
    user frames   = 48 MB / 4 KB = 12288   (the frame pool)

Every process has a 2048-entry page table whose first 10 entries are
its *essential pages*; the searched array (4-byte elements) is laid out
from page 10 onward.

The configuration is a frozen dataclass so a running simulation can
never see its machine change under it.  ``MachineConfig.from_dict``
builds one from JSON-style data and rejects unknown keys; every
constructor path ends in ``validate()``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

DEFAULT_PAGE_SIZE = 4096
DEFAULT_ELEMENT_SIZE = 4
DEFAULT_TOTAL_FRAMES = 16384
DEFAULT_USER_FRAMES = 12288
DEFAULT_PAGE_TABLE_SIZE = 2048
DEFAULT_ESSENTIAL_PAGES = 10
DEFAULT_MAX_PROCESSES = 500
DEFAULT_MAX_SEARCHES = 100


class ConfigError(ValueError):
    """Raise when a workload or machine configuration is malformed.

    Configuration errors are fatal: the simulation never starts with a
    partially built state.
    """


@dataclass(frozen=True)
class MachineConfig:
    """Sizes and limits of the simulated machine.

    Attributes:
        page_size: Bytes per page (and per frame).
        element_size: Bytes per element of the searched array.
        total_frames: Frames of physical memory, kernel included.
        user_frames: Frames available to processes (the frame pool).
        page_table_size: Entries in every process's page table.
        essential_pages: Pages a process must hold to be runnable.
        max_processes: Upper bound on the process count of a workload.
        max_searches: Upper bound on searches per process.

    """

    page_size: int = DEFAULT_PAGE_SIZE
    element_size: int = DEFAULT_ELEMENT_SIZE
    total_frames: int = DEFAULT_TOTAL_FRAMES
    user_frames: int = DEFAULT_USER_FRAMES
    page_table_size: int = DEFAULT_PAGE_TABLE_SIZE
    essential_pages: int = DEFAULT_ESSENTIAL_PAGES
    max_processes: int = DEFAULT_MAX_PROCESSES
    max_searches: int = DEFAULT_MAX_SEARCHES

    def __post_init__(self) -> None:
        """Reject impossible machines as soon as they are built."""
        self.validate()

    def validate(self) -> None:
        """Check the configuration for consistency.

        Raises:
            ConfigError: If any size is non-positive or the sizes
                contradict each other.

        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{f.name} must be an integer, got {value!r}"
                raise ConfigError(msg)
            if value <= 0:
                msg = f"{f.name} must be positive, got {value}"
                raise ConfigError(msg)
        if self.user_frames > self.total_frames:
            msg = (
                f"user_frames ({self.user_frames}) exceeds "
                f"total_frames ({self.total_frames})"
            )
            raise ConfigError(msg)
        if self.essential_pages >= self.page_table_size:
            msg = (
                f"essential_pages ({self.essential_pages}) leaves no room in a "
                f"page table of {self.page_table_size} entries"
            )
            raise ConfigError(msg)

    @property
    def max_array_size(self) -> int:
        """Return the largest array whose every element maps into the table."""
        data_pages = self.page_table_size - self.essential_pages
        return data_pages * self.page_size // self.element_size

    def page_for(self, offset: int) -> int:
        """Return the page holding array element *offset*."""
        return (offset * self.element_size) // self.page_size + self.essential_pages

    def with_overrides(self, **overrides: Any) -> MachineConfig:
        """Return a copy with some fields replaced (validated)."""
        return MachineConfig.from_dict({**asdict(self), **overrides})

    def to_dict(self) -> dict[str, int]:
        """Return the configuration as a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MachineConfig:
        """Build a configuration from a mapping of field names.

        Missing keys take their defaults.

        Raises:
            ConfigError: On unknown keys or invalid values.

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown machine setting(s): {', '.join(unknown)}"
            raise ConfigError(msg)
        return cls(**data)
