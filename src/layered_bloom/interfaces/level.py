"""Protocol definition for a filter level."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..core.types import Item, LevelDict
from .hash_function import HashFunction


class Level(Protocol):
    """One fixed-size bit array of a layered filter."""

    def insert(self, item: Item, hash_functions: Sequence[HashFunction], array_size: int) -> None:
        """Set every flag indexed by item."""
        ...

    def query(self, item: Item, hash_functions: Sequence[HashFunction], array_size: int) -> bool:
        """Return True if item may be present; False if definitely absent."""
        ...

    def bits_set(self) -> int:
        """Return the number of flags currently set."""
        ...

    def to_dict(self) -> LevelDict:
        """Return the persisted form of the level."""
        ...
