"""Single bit-array level of a layered bloom filter."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.types import BitArray, Item, LevelDict
from ..interfaces.hash_function import HashFunction


class BloomLevel:
    """Fixed-size array of flags populated by a shared hash family.

    Args:
        array_size: Number of flags in the level

    Invariants:
        - Flags start False and are only ever set to True
        - Length of bit_array never changes after creation
        - The hash family is passed in by the owner, never stored
    """

    def __init__(self, array_size: int):
        self.bit_array: BitArray = [False] * array_size

    def insert(self, item: Item, hash_functions: Sequence[HashFunction], array_size: int) -> None:
        """Set the flag at every index the hash family assigns to item."""
        for hf in hash_functions:
            self.bit_array[hf.index(item, array_size)] = True

    def query(self, item: Item, hash_functions: Sequence[HashFunction], array_size: int) -> bool:
        """Return True if item may be present; False if definitely absent."""
        for hf in hash_functions:
            if not self.bit_array[hf.index(item, array_size)]:
                return False
        return True

    def bits_set(self) -> int:
        return sum(self.bit_array)

    def __len__(self) -> int:
        return len(self.bit_array)

    def to_dict(self) -> LevelDict:
        return {"bit_array": list(self.bit_array)}

    @classmethod
    def from_dict(cls, data: LevelDict) -> BloomLevel:
        level = cls(0)
        level.bit_array = list(data["bit_array"])
        return level
