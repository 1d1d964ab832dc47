"""Exception hierarchy for the layered bloom filter.

Defines all custom exceptions used throughout the implementation.
I/O failures are not wrapped; they surface as the built-in OSError family.
"""

from __future__ import annotations


class BloomError(Exception):
    """Base exception for all layered bloom filter errors."""
    pass


class ConfigurationError(BloomError):
    """Raised when filter dimensions or configuration values are invalid."""
    pass


class InsufficientHashFunctionsError(ConfigurationError):
    """Raised when more hash functions are requested than the pool holds."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Invalid number of hash functions. Requested: {requested}, Available: {available}"
        )


class SnapshotError(BloomError):
    """Raised when a persisted snapshot cannot be produced or consumed."""
    pass


class SnapshotEncodeError(SnapshotError):
    """Raised when filter state cannot be encoded."""
    pass


class SnapshotDecodeError(SnapshotError):
    """Raised when snapshot content is malformed or inconsistent."""
    pass
