"""Multiplicative string hash family.

Each hash folds over the UTF-8 bytes of an item with a fixed multiplier,
wrapping at 64 bits so values are identical on every platform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.errors import InsufficientHashFunctionsError
from ..core.types import HashFunctionDict, Item

logger = logging.getLogger(__name__)

# Ordered pool of multipliers; a family of size k uses the first k entries.
MULTIPLIER_POOL: tuple[int, ...] = (31, 37, 41, 43, 47, 53, 59, 61, 67, 71)

MASK_64 = (1 << 64) - 1


@dataclass(frozen=True)
class MultiplicativeHash:
    """Hash computed as acc = acc * multiplier + byte (mod 2**64).

    Args:
        multiplier: Constant applied at every byte; not validated here
    """

    multiplier: int

    def hash(self, item: Item) -> int:
        """Return the 64-bit hash of item."""
        acc = 0
        for byte in item.encode("utf-8"):
            acc = (acc * self.multiplier + byte) & MASK_64
        return acc

    def index(self, item: Item, array_size: int) -> int:
        """Return the bit position of item in an array of array_size flags."""
        return self.hash(item) % array_size

    def to_dict(self) -> HashFunctionDict:
        return {"multiplier": self.multiplier}

    @classmethod
    def from_dict(cls, data: HashFunctionDict) -> MultiplicativeHash:
        return cls(data["multiplier"])


def hash_family(count: int) -> tuple[MultiplicativeHash, ...]:
    """Return the first count hash functions of the pool, in pool order."""
    available = len(MULTIPLIER_POOL)
    if count > available:
        logger.error(f"Requested hash functions ({count}) exceed available ({available})")
        raise InsufficientHashFunctionsError(requested=count, available=available)
    return tuple(MultiplicativeHash(m) for m in MULTIPLIER_POOL[:count])
