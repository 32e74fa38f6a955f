"""Command-line entry point: epoch listing, object parsing and sat range listing."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Iterable

from .object import Object
from .rarity import Rarity
from .sat import Sat, starting_sats
from .sat_point import OutPoint


def list_ranges(
    outpoint: OutPoint, ranges: Iterable[tuple[int, int]]
) -> list[tuple[OutPoint, int, int, Rarity, str]]:
    """Describe each ``(start, end)`` sat range held by an output.

    Each entry is ``(outpoint, start, size, rarity, name)`` where rarity and
    name are those of the first sat in the range.
    """
    return [
        (outpoint, start, end - start, Sat(start).rarity(), Sat(start).name())
        for start, end in ranges
    ]


def epochs_output() -> dict[str, list[int]]:
    """The first sat of each reward epoch, as the ``epochs`` command prints it."""
    return {"starting_sats": [int(sat) for sat in starting_sats()]}


def parse_output(text: str) -> dict[str, str]:
    """Parse an object from ordinal notation, as the ``parse`` command prints it."""
    return {"object": str(Object.parse(text))}


def _print_json(output) -> None:
    print(json.dumps(output, indent=2, ensure_ascii=False))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ord", description="Ordinal theory utilities")
    subcommands = parser.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")
    subcommands.required = True

    subcommands.add_parser("epochs", help="List the first satoshis of each reward epoch")

    parse = subcommands.add_parser("parse", help="Parse a satoshi from ordinal notation")
    parse.add_argument("object", metavar="OBJECT", help="Parse <OBJECT>.")

    return parser


def _report(err: BaseException) -> None:
    print(f"error: {err}", file=sys.stderr)
    cause = err.__cause__ or err.__context__
    while cause is not None:
        print(f"because: {cause}", file=sys.stderr)
        cause = cause.__cause__ or cause.__context__


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.subcommand == "epochs":
            _print_json(epochs_output())
        elif args.subcommand == "parse":
            _print_json(parse_output(args.object))
    except (ValueError, OSError) as err:
        _report(err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())