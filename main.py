# main.py

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure that the src/ directory is on sys.path when running
# `python main.py` from the project root.
ROOT_DIR = Path(__file__).resolve().parent
SRC_DIR = ROOT_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from ride_recap.pipeline import run_recap  # type: ignore[import]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build yearly ride / food-delivery stats from a data export."
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("Uber Data"),
        help="Root folder of the export (default: 'Uber Data').",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: data.js, or data.json with --format json).",
    )
    parser.add_argument(
        "--format",
        choices=("js", "json"),
        default="js",
        help="js: window.UBER_DATA script, json: plain JSON.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Read the export folder, aggregate it and write the stats file
    loaded by the front-end.
    """
    args = parse_args(argv)
    output = args.output
    if output is None:
        output = Path("data.json") if args.format == "json" else Path("data.js")

    print(f"Reading data from: {args.data_dir}")
    print("Looking for split files (e.g., -0.csv, -1.csv, -2.csv)...\n")

    try:
        run_recap(data_dir=args.data_dir, output=output, fmt=args.format)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
