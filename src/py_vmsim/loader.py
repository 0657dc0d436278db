"""Loaders — read a workload and a machine configuration from disk.

Workload format (whitespace separated integers, the ``search.txt`` of
the classic assignment)::

    P S
    n_0  k_0,0 k_0,1 ... k_0,S-1
    n_1  k_1,0 ...
    ...

``P`` processes each perform ``S`` searches; process *i* searches an
array of ``n_i`` elements for the keys ``k_i,*`` in order.  Line breaks
carry no meaning.

Machine configuration is an optional JSON object whose keys are the
fields of ``MachineConfig``.

Every problem raises ``ConfigError`` before any simulation state
exists.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from py_vmsim.config import ConfigError, MachineConfig

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ProcessSpec:
    """One process of a workload: its array size and search keys."""

    array_size: int
    search_keys: tuple[int, ...]


@dataclass(frozen=True)
class Workload:
    """A parsed workload: the shared search count and every process."""

    searches_per_process: int
    processes: tuple[ProcessSpec, ...]

    @property
    def num_processes(self) -> int:
        """Return the number of processes in the workload."""
        return len(self.processes)


class _Tokens:
    """Cursor over the integer tokens of a workload text."""

    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def next_int(self, what: str) -> int:
        if self._pos >= len(self._tokens):
            msg = f"Unexpected end of workload while reading {what}"
            raise ConfigError(msg)
        token = self._tokens[self._pos]
        self._pos += 1
        try:
            return int(token)
        except ValueError:
            msg = f"Expected an integer for {what}, got {token!r}"
            raise ConfigError(msg) from None

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos


def parse_workload(text: str, *, config: MachineConfig | None = None) -> Workload:
    """Parse workload text into a ``Workload``.

    Args:
        text: The workload in ``search.txt`` format.
        config: Machine limits to validate against (defaults if None).

    Raises:
        ConfigError: On malformed or out-of-range input.

    """
    cfg = config if config is not None else MachineConfig()
    tokens = _Tokens(text)

    num_processes = tokens.next_int("the process count")
    num_searches = tokens.next_int("the search count")
    if not 0 < num_processes <= cfg.max_processes:
        msg = f"Invalid number of processes: {num_processes} (allowed 1..{cfg.max_processes})"
        raise ConfigError(msg)
    if not 0 < num_searches <= cfg.max_searches:
        msg = f"Invalid number of searches: {num_searches} (allowed 1..{cfg.max_searches})"
        raise ConfigError(msg)

    specs: list[ProcessSpec] = []
    for pid in range(num_processes):
        array_size = tokens.next_int(f"the array size of process {pid}")
        if not 0 < array_size <= cfg.max_array_size:
            msg = (
                f"Invalid array size {array_size} for process {pid} "
                f"(allowed 1..{cfg.max_array_size})"
            )
            raise ConfigError(msg)
        keys = tuple(
            tokens.next_int(f"search key {j} of process {pid}") for j in range(num_searches)
        )
        specs.append(ProcessSpec(array_size=array_size, search_keys=keys))

    if tokens.remaining:
        msg = f"{tokens.remaining} unexpected trailing token(s) in workload"
        raise ConfigError(msg)

    return Workload(searches_per_process=num_searches, processes=tuple(specs))


def load_workload(path: Path, *, config: MachineConfig | None = None) -> Workload:
    """Read and parse a workload file.

    Raises:
        ConfigError: If the file cannot be read or is malformed.

    """
    try:
        text = path.read_text()
    except OSError as e:
        msg = f"Cannot read workload {path}: {e}"
        raise ConfigError(msg) from e
    return parse_workload(text, config=config)


def load_machine_config(path: Path) -> MachineConfig:
    """Read a JSON machine configuration.

    Raises:
        ConfigError: If the file is unreadable, not a JSON object, or
            contains unknown or invalid settings.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load machine config: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = "Machine config must be a JSON object"
        raise ConfigError(msg)
    return MachineConfig.from_dict(data)
