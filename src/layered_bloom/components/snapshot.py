"""Snapshot codec for persisting a layered bloom filter.

Snapshots are pretty-printed UTF-8 JSON documents:

    {
      "levels": [{"bit_array": [false, true, ...]}, ...],
      "hash_functions": [{"multiplier": 31}, ...],
      "array_size": 100
    }

Decoding validates the whole tree before anything is returned, so callers
never adopt a partially valid structure.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.config import is_int
from ..core.errors import SnapshotDecodeError, SnapshotEncodeError
from ..core.types import SnapshotDict
from .hash_function import MULTIPLIER_POOL

logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = frozenset({"levels", "hash_functions", "array_size"})


def encode_snapshot(data: SnapshotDict) -> bytes:
    """Encode a snapshot tree to bytes."""
    try:
        text = json.dumps(data, indent=2)
    except (TypeError, ValueError) as e:
        raise SnapshotEncodeError(f"Failed to encode snapshot: {e}") from e
    return text.encode("utf-8")


def decode_snapshot(raw: bytes) -> SnapshotDict:
    """Decode and validate snapshot bytes."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise SnapshotDecodeError(f"Snapshot is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}") from e
    except RecursionError as e:
        raise SnapshotDecodeError("Snapshot is nested too deeply") from e

    validate_snapshot(data)
    return data


def validate_snapshot(data: Any) -> None:
    """Raise SnapshotDecodeError unless data is a consistent snapshot tree."""
    if not isinstance(data, dict):
        raise SnapshotDecodeError("Snapshot root must be an object")
    if set(data) != SNAPSHOT_FIELDS:
        raise SnapshotDecodeError(
            f"Snapshot fields must be {sorted(SNAPSHOT_FIELDS)}, got {sorted(data)}"
        )

    array_size = data["array_size"]
    if not is_int(array_size) or array_size < 1:
        raise SnapshotDecodeError(f"array_size must be a positive integer, got {array_size!r}")

    hash_functions = data["hash_functions"]
    if not isinstance(hash_functions, list) or not hash_functions:
        raise SnapshotDecodeError("hash_functions must be a non-empty list")
    if len(hash_functions) > len(MULTIPLIER_POOL):
        raise SnapshotDecodeError(
            f"Snapshot holds {len(hash_functions)} hash functions, at most {len(MULTIPLIER_POOL)} allowed"
        )
    for i, hf in enumerate(hash_functions):
        if not isinstance(hf, dict) or set(hf) != {"multiplier"}:
            raise SnapshotDecodeError(f"hash_functions[{i}] must be an object with a single 'multiplier'")
        if not is_int(hf["multiplier"]) or hf["multiplier"] < 1:
            raise SnapshotDecodeError(
                f"hash_functions[{i}].multiplier must be a positive integer, got {hf['multiplier']!r}"
            )

    levels = data["levels"]
    if not isinstance(levels, list) or not levels:
        raise SnapshotDecodeError("levels must be a non-empty list")
    for i, level in enumerate(levels):
        if not isinstance(level, dict) or set(level) != {"bit_array"}:
            raise SnapshotDecodeError(f"levels[{i}] must be an object with a single 'bit_array'")
        bit_array = level["bit_array"]
        if not isinstance(bit_array, list):
            raise SnapshotDecodeError(f"levels[{i}].bit_array must be a list")
        if len(bit_array) != array_size:
            raise SnapshotDecodeError(
                f"levels[{i}].bit_array has {len(bit_array)} flags, expected array_size={array_size}"
            )
        if not all(isinstance(bit, bool) for bit in bit_array):
            raise SnapshotDecodeError(f"levels[{i}].bit_array must contain only booleans")


def write_snapshot(path: str | Path, data: SnapshotDict) -> None:
    """Write a snapshot atomically, replacing any existing file at path."""
    path = Path(path)
    payload = encode_snapshot(data)

    # Write to temp file
    temp_path = path.with_name(path.name + ".tmp")
    try:
        with open(temp_path, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename
        os.replace(temp_path, path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote snapshot to {path} ({len(payload)} bytes)")


def read_snapshot(path: str | Path) -> SnapshotDict:
    """Read and validate the snapshot stored at path."""
    path = Path(path)
    raw = path.read_bytes()
    logger.debug(f"Read snapshot from {path} ({len(raw)} bytes)")
    return decode_snapshot(raw)
