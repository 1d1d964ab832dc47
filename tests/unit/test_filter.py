"""Unit tests for the layered bloom filter."""

import pytest

from layered_bloom import FilterConfig, LayeredBloomFilter
from layered_bloom.core.errors import (
    ConfigurationError,
    InsufficientHashFunctionsError,
    SnapshotDecodeError,
)


def test_filter_construction():
    """Test dimensions and hash family of a new filter."""
    bf = LayeredBloomFilter(4, 128, 3)

    assert bf.num_levels == 4
    assert bf.array_size == 128
    assert bf.num_hash_functions == 3
    assert bf.multipliers == [31, 37, 41]
    assert all(len(level) == 128 for level in bf.levels)
    assert all(level.bits_set() == 0 for level in bf.levels)


def test_filter_levels_are_independent():
    """Test that levels do not share their bit arrays."""
    bf = LayeredBloomFilter(3, 16, 1)

    bf.levels[0].bit_array[0] = True

    assert not bf.levels[1].bit_array[0]
    assert not bf.levels[2].bit_array[0]


def test_filter_shares_one_hash_family():
    """Test that two filters with the same count get the same family."""
    bf1 = LayeredBloomFilter(1, 10, 5)
    bf2 = LayeredBloomFilter(2, 20, 5)

    assert bf1.hash_functions == bf2.hash_functions


def test_filter_too_many_hash_functions():
    """Test that requesting 11 hash functions fails with requested/available."""
    with pytest.raises(InsufficientHashFunctionsError, match="Requested: 11, Available: 10") as exc_info:
        LayeredBloomFilter(1, 100, 11)

    assert exc_info.value.requested == 11
    assert exc_info.value.available == 10


def test_filter_accepts_full_pool():
    """Test that the whole pool can be used."""
    bf = LayeredBloomFilter(1, 100, 10)
    assert bf.num_hash_functions == 10


@pytest.mark.parametrize(
    "num_levels,array_size,num_hash_functions,name",
    [
        (0, 100, 3, "num_levels"),
        (1, 0, 3, "array_size"),
        (1, 100, 0, "num_hash_functions"),
        (-1, 100, 3, "num_levels"),
    ],
)
def test_filter_rejects_non_positive_dimensions(num_levels, array_size, num_hash_functions, name):
    """Test that zero or negative dimensions are configuration errors."""
    with pytest.raises(ConfigurationError, match=name):
        LayeredBloomFilter(num_levels, array_size, num_hash_functions)


def test_filter_from_config():
    """Test construction from a FilterConfig."""
    config = FilterConfig(num_levels=2, array_size=50, num_hash_functions=4)
    bf = LayeredBloomFilter.from_config(config)

    assert bf.num_levels == 2
    assert bf.array_size == 50
    assert bf.num_hash_functions == 4


def test_filter_single_level_scenario():
    """Test insert and query on a single 100-flag level with 3 hashes."""
    bf = LayeredBloomFilter(1, 100, 3)
    bf.insert("test")

    assert bf.query("test", 1)
    assert not bf.query("nonexistent", 1)


def test_filter_two_level_scenario():
    """Test insert and query on two 50-flag levels with 2 hashes."""
    bf = LayeredBloomFilter(2, 50, 2)
    bf.insert("alpha")

    # Insert reaches every level
    assert bf.levels[0].bit_array == bf.levels[1].bit_array
    assert bf.levels[0].bits_set() > 0

    assert bf.query("alpha", 1)
    assert bf.query("alpha", 2)
    assert not bf.query("beta", 2)


def test_filter_inserted_found_at_every_depth():
    """Test that an inserted item is found for every search depth."""
    bf = LayeredBloomFilter(5, 200, 4)
    bf.insert("epoch-item")

    for n in range(1, bf.num_levels + 1):
        assert bf.query("epoch-item", n)


def test_filter_query_clamps_depth():
    """Test that over-large depths are clamped and never raise."""
    bf = LayeredBloomFilter(2, 100, 3)
    bf.insert("test")

    assert bf.query("test", 1000)
    assert not bf.query("nonexistent", 1000)


def test_filter_query_non_positive_depth():
    """Test that depths below one search nothing."""
    bf = LayeredBloomFilter(2, 100, 3)
    bf.insert("test")

    assert not bf.query("test", 0)
    assert not bf.query("test", -3)


def test_filter_query_hits_later_level():
    """Test that a hit in a deeper level is only seen when searched."""
    bf = LayeredBloomFilter(3, 100, 3)

    # Populate only the last level
    bf.levels[2].insert("test", bf.hash_functions, bf.array_size)

    assert not bf.query("test", 1)
    assert not bf.query("test", 2)
    assert bf.query("test", 3)


def test_filter_query_monotonic_in_depth():
    """Test that searching more levels never turns a hit into a miss."""
    bf = LayeredBloomFilter(4, 64, 2)
    for i in range(20):
        bf.insert(f"key{i}")
    bf.levels[3].insert("late", bf.hash_functions, bf.array_size)

    items = [f"key{i}" for i in range(40)] + ["late", "absent"]
    for item in items:
        results = [bf.query(item, n) for n in range(1, bf.num_levels + 1)]
        for shallow, deep in zip(results, results[1:]):
            assert deep or not shallow


def test_filter_no_false_negatives():
    """Test that every inserted item is always found."""
    bf = LayeredBloomFilter(3, 1000, 5)
    items = [f"item-{i}" for i in range(300)]
    for item in items:
        bf.insert(item)

    for item in items:
        for n in range(1, 4):
            assert bf.query(item, n), f"False negative for {item} at depth {n}"


def test_filter_insert_idempotent():
    """Test that inserting twice gives the same state as inserting once."""
    once = LayeredBloomFilter(2, 80, 3)
    twice = LayeredBloomFilter(2, 80, 3)

    once.insert("repeat")
    twice.insert("repeat")
    twice.insert("repeat")

    assert once.to_dict() == twice.to_dict()


def test_filter_contains_searches_all_levels():
    """Test the membership operator."""
    bf = LayeredBloomFilter(2, 100, 3)
    bf.levels[1].insert("test", bf.hash_functions, bf.array_size)

    assert "test" in bf
    assert "nonexistent" not in bf


def test_filter_stats():
    """Test dimensions and occupancy summary."""
    bf = LayeredBloomFilter(2, 100, 3)
    bf.insert("test")

    stats = bf.stats()
    assert stats == {
        "num_levels": 2,
        "array_size": 100,
        "multipliers": [31, 37, 41],
        "bits_set": [3, 3],
    }


def test_filter_dict_round_trip():
    """Test that from_dict(to_dict()) preserves state and behavior."""
    bf = LayeredBloomFilter(3, 60, 4)
    for word in ["red", "green", "blue"]:
        bf.insert(word)

    data = bf.to_dict()
    assert list(data) == ["levels", "hash_functions", "array_size"]

    bf2 = LayeredBloomFilter.from_dict(data)
    assert bf2.to_dict() == data
    for word in ["red", "green", "blue", "cyan", "magenta"]:
        for n in range(1, 4):
            assert bf.query(word, n) == bf2.query(word, n)


@pytest.mark.parametrize(
    "num_levels,array_size,num_hash_functions,name",
    [
        (True, 100, 3, "num_levels"),
        (1, 10.0, 3, "array_size"),
        (1, 100, "3", "num_hash_functions"),
        (None, 100, 3, "num_levels"),
    ],
)
def test_filter_rejects_non_integer_dimensions(num_levels, array_size, num_hash_functions, name):
    """Test that booleans, floats and other non-integers are configuration errors."""
    with pytest.raises(ConfigurationError, match=name):
        LayeredBloomFilter(num_levels, array_size, num_hash_functions)


def test_filter_from_dict_rejects_size_mismatch():
    """Test that bit arrays shorter than array_size are rejected up front."""
    data = {
        "levels": [{"bit_array": [False] * 3}],
        "hash_functions": [{"multiplier": 31}],
        "array_size": 100,
    }
    with pytest.raises(SnapshotDecodeError, match="expected array_size=100"):
        LayeredBloomFilter.from_dict(data)


def test_filter_from_dict_rejects_malformed_tree():
    """Test that from_dict validates structure, not only sizes."""
    with pytest.raises(SnapshotDecodeError):
        LayeredBloomFilter.from_dict({"levels": [], "hash_functions": [], "array_size": 0})
