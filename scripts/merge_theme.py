#!/usr/bin/env python3
"""
Merge Category/Color nodes from one theme file into another (node level, no recoloring).
A missing category is created; a same-named color is replaced; anything else is appended.

Usage:
  python scripts/merge_theme.py Base.vstheme Additions.vstheme -o Merged.vstheme
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lxml import etree

from theme_recolor.nodes import merge_categories


def main() -> int:
    parser = argparse.ArgumentParser(description="Merge Category/Color nodes into a theme document.")
    parser.add_argument("base", type=Path, help="Theme document to merge into.")
    parser.add_argument("update", type=Path, help="Theme document whose categories/colors are copied.")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output path (default: overwrite base).",
    )
    args = parser.parse_args()

    for path in (args.base, args.update):
        if not path.is_file():
            print(f"Error: not found: {path}", file=sys.stderr)
            return 1
    try:
        merged, stats = merge_categories(args.base.read_bytes(), args.update.read_bytes())
    except etree.XMLSyntaxError as e:
        print(f"Error: invalid theme XML: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out = args.output or args.base
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(merged)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(
        f"Merged into {out}: {stats.categories_created} categories created, "
        f"{stats.colors_replaced} colors replaced, {stats.colors_added} colors added."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
