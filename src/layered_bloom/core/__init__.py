"""Layered bloom filter core."""

from .filter import LayeredBloomFilter

__all__ = ["LayeredBloomFilter"]
