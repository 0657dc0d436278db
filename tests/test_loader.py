"""Tests for workload parsing and machine configuration."""

import json
from pathlib import Path

import pytest

from py_vmsim.config import ConfigError, MachineConfig
from py_vmsim.loader import load_machine_config, load_workload, parse_workload

SAMPLE = """\
3 2
100 5 99
2000 1999 0
1 0 0
"""


class TestParseWorkload:
    """Verify the search.txt format."""

    def test_parses_processes_and_keys(self) -> None:
        """Every process gets its array size and its keys in order."""
        workload = parse_workload(SAMPLE)
        assert workload.num_processes == 3
        assert workload.searches_per_process == 2
        assert workload.processes[0].array_size == 100
        assert workload.processes[1].search_keys == (1999, 0)

    def test_line_breaks_are_irrelevant(self) -> None:
        """Tokens may be spread over lines in any way."""
        assert parse_workload(SAMPLE) == parse_workload(" ".join(SAMPLE.split()))

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "1",
            "0 1 5 0",
            "1 0 5",
            "501 1",
            "1 101",
            "-1 1",
        ],
    )
    def test_bad_header_rejected(self, text: str) -> None:
        """Counts must be present, positive, and within bounds."""
        with pytest.raises(ConfigError):
            parse_workload(text)

    def test_missing_key_rejected(self) -> None:
        """A truncated process record is an error."""
        with pytest.raises(ConfigError, match="search key 1 of process 0"):
            parse_workload("1 2 100 5")

    def test_non_integer_rejected(self) -> None:
        """Every token must be an integer."""
        with pytest.raises(ConfigError, match="'x'"):
            parse_workload("1 1 100 x")

    def test_trailing_tokens_rejected(self) -> None:
        """Extra data after the last process is an error."""
        with pytest.raises(ConfigError, match="trailing"):
            parse_workload("1 1 100 5 7")

    @pytest.mark.parametrize("size", [0, -4])
    def test_non_positive_array_rejected(self, size: int) -> None:
        """An array needs at least one element."""
        with pytest.raises(ConfigError, match="array size"):
            parse_workload(f"1 1 {size} 0")

    def test_array_beyond_page_table_rejected(self) -> None:
        """Every element must map into the page table."""
        limit = MachineConfig().max_array_size
        parse_workload(f"1 1 {limit} 0")
        with pytest.raises(ConfigError, match="array size"):
            parse_workload(f"1 1 {limit + 1} 0")

    def test_limits_follow_config(self) -> None:
        """Bounds come from the machine configuration."""
        config = MachineConfig(max_processes=2)
        with pytest.raises(ConfigError):
            parse_workload("3 1 1 0 1 0 1 0", config=config)


class TestLoadFiles:
    """Verify reading from disk."""

    def test_load_workload(self, tmp_path: Path) -> None:
        """A workload file parses like its text."""
        path = tmp_path / "search.txt"
        path.write_text(SAMPLE)
        assert load_workload(path) == parse_workload(SAMPLE)

    def test_missing_workload(self, tmp_path: Path) -> None:
        """An unreadable file is a configuration error."""
        with pytest.raises(ConfigError, match="Cannot read"):
            load_workload(tmp_path / "nope.txt")

    def test_load_machine_config(self, tmp_path: Path) -> None:
        """JSON keys override the defaults."""
        path = tmp_path / "machine.json"
        path.write_text(json.dumps({"user_frames": 40, "essential_pages": 4}))
        config = load_machine_config(path)
        assert config.user_frames == 40
        assert config.essential_pages == 4
        assert config.page_size == MachineConfig().page_size

    def test_machine_config_must_be_object(self, tmp_path: Path) -> None:
        """A JSON list is not a configuration."""
        path = tmp_path / "machine.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="object"):
            load_machine_config(path)

    def test_corrupt_machine_config(self, tmp_path: Path) -> None:
        """Invalid JSON is a configuration error."""
        path = tmp_path / "machine.json"
        path.write_text("{")
        with pytest.raises(ConfigError, match="Cannot load"):
            load_machine_config(path)


class TestMachineConfig:
    """Verify machine geometry and validation."""

    def test_defaults(self) -> None:
        """The default machine has 48 MB of 4 KB user frames."""
        config = MachineConfig()
        assert config.user_frames == 12288
        assert config.total_frames == 16384
        assert config.essential_pages == 10

    def test_page_for(self) -> None:
        """Element offsets map past the essential pages."""
        config = MachineConfig()
        assert config.page_for(0) == 10
        assert config.page_for(1023) == 10
        assert config.page_for(1024) == 11

    def test_max_array_size_fits_table(self) -> None:
        """The last element of the largest array lands on the last entry."""
        config = MachineConfig()
        assert config.page_for(config.max_array_size - 1) == config.page_table_size - 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"page_size": 0},
            {"user_frames": -1},
            {"user_frames": 20000},
            {"essential_pages": 2048},
            {"page_size": "4096"},
            {"essential_pages": True},
        ],
    )
    def test_invalid_configs(self, overrides: dict[str, object]) -> None:
        """Impossible machines are rejected."""
        with pytest.raises(ConfigError):
            MachineConfig.from_dict(overrides)

    def test_unknown_key_rejected(self) -> None:
        """Typos in a config file should not pass silently."""
        with pytest.raises(ConfigError, match="frames_user"):
            MachineConfig.from_dict({"frames_user": 4})

    def test_with_overrides(self) -> None:
        """Overrides produce a new validated config."""
        config = MachineConfig().with_overrides(user_frames=8)
        assert config.user_frames == 8
        assert config.to_dict()["user_frames"] == 8
