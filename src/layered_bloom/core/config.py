"""Configuration for the layered bloom filter.

Defines the filter dimensions and loads them from TOML files.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def is_int(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class FilterConfig:
    """Construction parameters for a layered bloom filter.

    Attributes:
        num_levels: Number of independent bit-array levels
        array_size: Number of flags in every level
        num_hash_functions: Size of the shared hash family (at most the pool size)
        snapshot_path: Default location of the persisted snapshot, if any
    """

    num_levels: int = 3
    array_size: int = 1024
    num_hash_functions: int = 3
    snapshot_path: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "FilterConfig":
        """Build a config from a mapping, preferring a nested ``filter`` table."""
        section = d.get("filter", d)
        if not isinstance(section, dict):
            raise ConfigurationError("The 'filter' section must be a table")

        defaults = FilterConfig()
        values: dict[str, Any] = {}
        for name in ("num_levels", "array_size", "num_hash_functions"):
            value = section.get(name, getattr(defaults, name))
            if not is_int(value):
                raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
            values[name] = value

        snapshot_path = section.get("snapshot_path")
        if snapshot_path is not None and not isinstance(snapshot_path, str):
            raise ConfigurationError(f"'snapshot_path' must be a string, got {snapshot_path!r}")

        return FilterConfig(snapshot_path=snapshot_path, **values)


def load_config(path: str | Path) -> FilterConfig:
    """Load a FilterConfig from a TOML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = path.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    config = FilterConfig.from_dict(data)
    logger.info(f"Loaded config from {path}: {config}")
    return config
