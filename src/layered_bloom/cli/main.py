# Minimal CLI using argparse that keeps a layered bloom filter in a snapshot file.
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from layered_bloom.core.config import FilterConfig, load_config
from layered_bloom.core.errors import BloomError
from layered_bloom.core.filter import LayeredBloomFilter

logger = logging.getLogger(__name__)


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def non_empty(text: str) -> str:
    item = text.strip()
    if not item:
        raise argparse.ArgumentTypeError("item cannot be empty")
    return item


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="layered-bloom", description="Insert into and query a layered bloom filter snapshot"
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an empty filter snapshot")
    create.add_argument(
        "snapshot", type=Path, nargs="?", help="Snapshot file to write (default: snapshot_path from --config)"
    )
    create.add_argument("--config", type=Path, help="TOML file with a [filter] table")
    create.add_argument("--levels", type=positive_int, help="Number of levels")
    create.add_argument("--array-size", type=positive_int, help="Flags per level")
    create.add_argument("--hashes", type=positive_int, help="Number of hash functions")

    insert = sub.add_parser("insert", help="Insert items into a snapshot")
    insert.add_argument("snapshot", type=Path, help="Snapshot file to update")
    insert.add_argument("items", nargs="+", type=non_empty, help="Items to insert")

    query = sub.add_parser("query", help="Query an item in a snapshot")
    query.add_argument("snapshot", type=Path, help="Snapshot file to read")
    query.add_argument("item", type=non_empty, help="Item to query")
    query.add_argument(
        "--levels", type=positive_int, help="Number of levels to search (default: all)"
    )

    info = sub.add_parser("info", help="Show snapshot dimensions and occupancy")
    info.add_argument("snapshot", type=Path, help="Snapshot file to read")
    return p


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def cmd_create(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else FilterConfig()
    if args.levels is not None:
        config.num_levels = args.levels
    if args.array_size is not None:
        config.array_size = args.array_size
    if args.hashes is not None:
        config.num_hash_functions = args.hashes

    snapshot = args.snapshot
    if snapshot is None:
        if config.snapshot_path is None:
            print("Error: no snapshot path given and the config has no snapshot_path")
            return 2
        # Relative paths are resolved against the config file's directory
        snapshot = args.config.parent / config.snapshot_path

    bf = LayeredBloomFilter.from_config(config)
    bf.save(snapshot)
    print(f"Bloom Filter created at {snapshot}")
    return 0


def cmd_insert(args: argparse.Namespace) -> int:
    bf = LayeredBloomFilter.load(args.snapshot)
    for item in args.items:
        bf.insert(item)
    bf.save(args.snapshot)
    print(f"Inserted {len(args.items)} item(s) into {args.snapshot}")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    bf = LayeredBloomFilter.load(args.snapshot)
    levels = args.levels if args.levels is not None else bf.num_levels
    if levels > bf.num_levels:
        print(f"Number of levels to search must be between 1 and {bf.num_levels}.")
        return 2

    if bf.query(args.item, levels):
        print("Item may be present.")
        return 0
    print("Item is not present.")
    return 1


def cmd_info(args: argparse.Namespace) -> int:
    stats = LayeredBloomFilter.load(args.snapshot).stats()
    print(f"Levels: {stats['num_levels']}")
    print(f"Array size: {stats['array_size']}")
    print(f"Multipliers: {', '.join(str(m) for m in stats['multipliers'])}")
    for i, count in enumerate(stats["bits_set"]):
        print(f"Level {i}: {count}/{stats['array_size']} bits set")
    return 0


COMMANDS = {
    "create": cmd_create,
    "insert": cmd_insert,
    "query": cmd_query,
    "info": cmd_info,
}


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        return COMMANDS[args.command](args)
    except (BloomError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
