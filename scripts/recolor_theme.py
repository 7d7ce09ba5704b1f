#!/usr/bin/env python3
"""
CLI: replace raw colors in a theme file with the nearest unused colors.
Usage:
  python scripts/recolor_theme.py Dark.vstheme -o out/Dark.vstheme -s "#1E1E1E" --log /var/tmp/recolor.log
  python scripts/recolor_theme.py Dark.vstheme -o out/Dark.vstheme -s "#1E1E1E" --dry-run --log /var/tmp/recolor.log
  python scripts/recolor_theme.py Dark.vstheme --interactive --log /var/tmp/recolor.log
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from theme_recolor.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
