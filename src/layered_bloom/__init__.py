"""Layered bloom filter - stacked bit-array levels sharing one hash family."""

from .core.config import FilterConfig, load_config
from .core.errors import (
    BloomError,
    ConfigurationError,
    InsufficientHashFunctionsError,
    SnapshotError,
    SnapshotEncodeError,
    SnapshotDecodeError,
)
from .core.filter import LayeredBloomFilter
from .core.types import Item, BitArray, SnapshotDict, FilterStats
from .components.hash_function import MULTIPLIER_POOL, MultiplicativeHash, hash_family
from .components.level import BloomLevel

__all__ = [
    "FilterConfig",
    "load_config",
    "BloomError",
    "ConfigurationError",
    "InsufficientHashFunctionsError",
    "SnapshotError",
    "SnapshotEncodeError",
    "SnapshotDecodeError",
    "LayeredBloomFilter",
    "Item",
    "BitArray",
    "SnapshotDict",
    "FilterStats",
    "MULTIPLIER_POOL",
    "MultiplicativeHash",
    "hash_family",
    "BloomLevel",
]
