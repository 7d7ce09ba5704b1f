#!/usr/bin/env python3
"""
Append to an original theme the colors that an updated theme adds (by Color name,
per category). Existing colors are never touched.

Usage:
  python scripts/diff_theme.py Original.vstheme Updated.vstheme -o Original.new.vstheme
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lxml import etree

from theme_recolor.nodes import append_new_colors


def main() -> int:
    parser = argparse.ArgumentParser(description="Append colors present in an updated theme but missing from the original.")
    parser.add_argument("original", type=Path, help="Theme document to extend.")
    parser.add_argument("updated", type=Path, help="Newer theme document.")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output path (default: overwrite original).",
    )
    args = parser.parse_args()

    for path in (args.original, args.updated):
        if not path.is_file():
            print(f"Error: not found: {path}", file=sys.stderr)
            return 1
    try:
        result, stats = append_new_colors(args.original.read_bytes(), args.updated.read_bytes())
    except etree.XMLSyntaxError as e:
        print(f"Error: invalid theme XML: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out = args.output or args.original
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(result)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    for category, color in stats.added:
        print(f"  + {category} / {color}")
    print(f"Wrote {out}: {len(stats.added)} colors added, {stats.categories_created} categories created.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
