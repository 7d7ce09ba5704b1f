#!/usr/bin/env python3
"""
List every raw color in a theme file as CSV (category, color, tag, source, rgb).
With --duplicates, only RGB values shared by more than one element are listed:
those are the collisions a recolor pass would separate.

Usage:
  python scripts/list_theme_colors.py Dark.vstheme
  python scripts/list_theme_colors.py Dark.vstheme --duplicates
"""
import argparse
import csv
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from theme_recolor.config import load_config
from theme_recolor.driver import read_document
from theme_recolor.errors import RecolorError
from theme_recolor.inventory import duplicate_colors, list_colors


def main() -> int:
    parser = argparse.ArgumentParser(description="List raw colors in a theme document.")
    parser.add_argument("input", type=Path, help="Theme document to read.")
    parser.add_argument(
        "--duplicates",
        action="store_true",
        help="Only list colors used by more than one element.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    try:
        document = read_document(args.input, config)
    except (RecolorError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    records = list_colors(document, config)
    if args.duplicates:
        groups = duplicate_colors(records)
        records = [r for group in groups.values() for r in group]
    writer = csv.writer(sys.stdout, lineterminator="\n")
    writer.writerow(["category", "color", "tag", "source", "rgb"])
    for record in records:
        writer.writerow(record.to_row())
    malformed = sum(1 for r in records if r.key is None)
    print(f"{len(records)} element(s){f', {malformed} malformed' if malformed else ''}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
