"""Protocol definition for a hash function."""

from __future__ import annotations

from typing import Protocol

from ..core.types import Item


class HashFunction(Protocol):
    """Deterministic string-to-integer hash."""

    def hash(self, item: Item) -> int:
        """Return the unsigned hash of item."""
        ...

    def index(self, item: Item, array_size: int) -> int:
        """Return the bit position of item in an array of array_size flags."""
        ...
