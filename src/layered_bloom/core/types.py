"""Common type definitions for the layered bloom filter.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from typing import TypedDict

# Core primitive types
Item = str
BitArray = list[bool]


class HashFunctionDict(TypedDict):
    """Persisted form of a single hash function."""
    multiplier: int


class LevelDict(TypedDict):
    """Persisted form of a single level."""
    bit_array: BitArray


class SnapshotDict(TypedDict):
    """Persisted form of a whole filter."""
    levels: list[LevelDict]
    hash_functions: list[HashFunctionDict]
    array_size: int


class FilterStats(TypedDict):
    """Summary of a filter's dimensions and occupancy."""
    num_levels: int
    array_size: int
    multipliers: list[int]
    bits_set: list[int]
