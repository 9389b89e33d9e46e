"""avsize command-line interface.

Usage:
    echo '{"key": {"S": "Hello World"}}' | python3 -m avsize size
    python3 -m avsize size --input item.json
    python3 -m avsize attrs --input item.json --max-depth 8
    python3 -m avsize version
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from . import (
    MAX_DEPTH,
    SizerError,
    __version__,
    attribute_sizes,
    parse_json_item,
    size_of,
)


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", "-i", metavar="FILE",
                   help="Read the JSON item from FILE instead of stdin")
    p.add_argument("--max-depth", type=int, default=MAX_DEPTH, metavar="N",
                   help="Maximum list/map nesting depth (default: %(default)s)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="avsize",
        description="avsize: approximate stored size of attribute-value items",
    )
    sub = parser.add_subparsers(dest="command")

    # ── size ──
    size_p = sub.add_parser("size", help="Print the total item size in bytes")
    _add_input_args(size_p)

    # ── attrs ──
    attrs_p = sub.add_parser("attrs", help="Print per-attribute sizes as JSON")
    _add_input_args(attrs_p)

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read JSON bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("avsize: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _cmd_size(args: argparse.Namespace) -> None:
    item = parse_json_item(_read_input(args.input))
    print(size_of(item, max_depth=args.max_depth))


def _cmd_attrs(args: argparse.Namespace) -> None:
    item = parse_json_item(_read_input(args.input))
    sizes = attribute_sizes(item, max_depth=args.max_depth)
    print(json.dumps(sizes, ensure_ascii=False, sort_keys=True))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"avsize {__version__}")
        return

    try:
        if args.command == "size":
            _cmd_size(args)
        elif args.command == "attrs":
            _cmd_attrs(args)
    except SizerError as e:
        print(f"avsize: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"avsize: cannot read input: {e.strerror}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
