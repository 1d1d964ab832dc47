"""Layered bloom filter - main public API.

Orchestrates the shared hash family, the per-level bit arrays, and
snapshot persistence.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import FilterConfig, is_int
from .errors import ConfigurationError
from .types import FilterStats, Item, SnapshotDict
from ..components.hash_function import MultiplicativeHash, hash_family
from ..components.level import BloomLevel
from ..components.snapshot import read_snapshot, validate_snapshot, write_snapshot
from ..interfaces.level import Level

logger = logging.getLogger(__name__)


class LayeredBloomFilter:
    """Stack of bloom filter levels sharing one hash family and array size.

    Args:
        num_levels: Number of levels to create
        array_size: Number of flags per level
        num_hash_functions: Number of multipliers taken from the pool

    Public API:
        - insert(item): Add item to every level
        - query(item, num_levels_to_search): Search the first N levels
        - save(path): Persist a snapshot
        - load(path): Build a filter from a snapshot
        - restore(path): Replace this filter's state from a snapshot

    Invariants:
        - Every level holds exactly array_size flags
        - The hash family is fixed at construction and never empty
        - Levels are never added or removed after construction
    """

    def __init__(self, num_levels: int, array_size: int, num_hash_functions: int):
        logger.info(
            f"Creating LayeredBloomFilter: levels={num_levels}, array_size={array_size}, "
            f"hash_functions={num_hash_functions}"
        )
        for name, value in (
            ("num_levels", num_levels),
            ("array_size", array_size),
            ("num_hash_functions", num_hash_functions),
        ):
            if not is_int(value) or value < 1:
                logger.error(f"Invalid {name}: {value}")
                raise ConfigurationError(f"{name} must be a positive integer, got {value}")

        self.hash_functions: tuple[MultiplicativeHash, ...] = hash_family(num_hash_functions)
        self.array_size = array_size
        self.levels: list[Level] = [BloomLevel(array_size) for _ in range(num_levels)]

    @classmethod
    def from_config(cls, config: FilterConfig) -> LayeredBloomFilter:
        """Create an empty filter with the dimensions in config."""
        return cls(config.num_levels, config.array_size, config.num_hash_functions)

    @property
    def num_levels(self) -> int:
        return len(self.levels)

    @property
    def num_hash_functions(self) -> int:
        return len(self.hash_functions)

    @property
    def multipliers(self) -> list[int]:
        return [hf.multiplier for hf in self.hash_functions]

    def insert(self, item: Item) -> None:
        """Insert item into every level."""
        logger.info(f"Inserting item: {item}")
        for level in self.levels:
            level.insert(item, self.hash_functions, self.array_size)

    def query(self, item: Item, num_levels_to_search: int) -> bool:
        """Return True if any of the first num_levels_to_search levels may hold item.

        Requests beyond the number of levels are clamped; requests below one
        search nothing and return False.
        """
        logger.info(f"Querying item: {item} across {num_levels_to_search} levels")
        levels_to_search = min(num_levels_to_search, len(self.levels))
        for level in self.levels[:max(levels_to_search, 0)]:
            if level.query(item, self.hash_functions, self.array_size):
                return True
        return False

    def __contains__(self, item: Item) -> bool:
        return self.query(item, len(self.levels))

    def stats(self) -> FilterStats:
        """Return dimensions and the number of set flags per level."""
        return {
            "num_levels": self.num_levels,
            "array_size": self.array_size,
            "multipliers": self.multipliers,
            "bits_set": [level.bits_set() for level in self.levels],
        }

    def to_dict(self) -> SnapshotDict:
        return {
            "levels": [level.to_dict() for level in self.levels],
            "hash_functions": [hf.to_dict() for hf in self.hash_functions],
            "array_size": self.array_size,
        }

    @classmethod
    def from_dict(cls, data: SnapshotDict) -> LayeredBloomFilter:
        """Build a filter from a snapshot tree, rejecting inconsistent trees."""
        validate_snapshot(data)
        bf = cls.__new__(cls)
        bf.hash_functions = tuple(MultiplicativeHash.from_dict(hf) for hf in data["hash_functions"])
        bf.array_size = data["array_size"]
        bf.levels = [BloomLevel.from_dict(level) for level in data["levels"]]
        return bf

    def save(self, path: str | Path) -> None:
        """Save the filter to path, overwriting any existing snapshot."""
        logger.info(f"Saving LayeredBloomFilter to file: {path}")
        write_snapshot(path, self.to_dict())

    @classmethod
    def load(cls, path: str | Path) -> LayeredBloomFilter:
        """Load a filter from the snapshot at path."""
        logger.info(f"Loading LayeredBloomFilter from file: {path}")
        return cls.from_dict(read_snapshot(path))

    def restore(self, path: str | Path) -> None:
        """Replace this filter's state with the snapshot at path.

        The snapshot is fully decoded before any attribute is touched, so a
        failed restore leaves the current state intact.
        """
        loaded = self.load(path)
        self.levels, self.hash_functions, self.array_size = (
            loaded.levels,
            loaded.hash_functions,
            loaded.array_size,
        )
