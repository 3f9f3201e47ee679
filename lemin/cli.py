"""Command line entry: read a farm on standard input and print the moves."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .farm import FarmError, parse_farm, read_input
from .solver import solve
from .validation import ValidationError, validate


def run(text: str) -> str:
    """The farm description, a blank line, then the move lines."""
    validate(text)
    farm = parse_farm(text)
    moves = solve(farm)
    return text + "\n" + moves


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Solve the farm read from standard input; print Error if it is bad."""
    parser = argparse.ArgumentParser(
        prog="lem-in", description="Move ants across a farm described on stdin."
    )
    parser.parse_args(argv)
    try:
        output = run(read_input(sys.stdin))
    except (ValidationError, FarmError):
        print("Error")
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())