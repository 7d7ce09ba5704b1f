"""
CLI: recolor one theme document.
Usage:
  theme-recolor Dark.vstheme -o out/Dark.vstheme -s "#1E1E1E" --log /tmp/recolor.log
  theme-recolor Dark.vstheme -o out/Dark.vstheme -s "#1E1E1E" -t "#202020" --log /tmp/recolor.log
  theme-recolor Dark.vstheme --interactive --log /tmp/recolor.log
"""
import argparse
import logging
import sys
from pathlib import Path

import yaml

from .codec import encode6
from .config import load_config
from .driver import run_batch, run_interactive
from .errors import RecolorError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="theme-recolor",
        description="Replace raw colors in a theme file with the nearest colors not already in use.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Theme document to read.",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Where to write the edited document (batch mode; parents created).",
    )
    parser.add_argument(
        "--source",
        "-s",
        default=None,
        help="Color to replace, #RRGGBB (batch mode).",
    )
    parser.add_argument(
        "--target",
        "-t",
        default=None,
        help="Color to allocate near, #RRGGBB (default: the source color).",
    )
    parser.add_argument(
        "--log",
        type=Path,
        required=True,
        help="Change log to append to (absolute path).",
    )
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Prompt for source colors repeatedly and edit the input file in place.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Batch only: print planned replacements; write neither document nor log.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        if args.output is not None or args.source is not None or args.target is not None:
            parser.error("--interactive edits the input in place and prompts for colors; "
                         "--output/--source/--target are batch-only")
        if args.dry_run:
            parser.error("--dry-run is batch-only")
    else:
        if args.output is None:
            parser.error("--output is required in batch mode")
        if args.source is None:
            parser.error("--source is required in batch mode")

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: could not load config {args.config}: {e}", file=sys.stderr)
        return 1
    level = logging.DEBUG if args.verbose else getattr(logging, str(config["logging"]["level"]).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        if args.interactive:
            summary = run_interactive(args.input, args.log, config=config)
        else:
            summary = run_batch(
                args.input,
                args.output,
                args.source,
                args.log,
                target=args.target,
                config=config,
                dry_run=args.dry_run,
            )
    except (RecolorError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        for entry in summary.entries:
            print(f"  {entry.category} / {entry.element}: {encode6(entry.original)} -> {encode6(entry.replacement)}")
        print(f"Dry run: {summary.replaced} color value(s) would be replaced.")
        return 0
    print(f"Done. {summary.replaced} color value(s) replaced in {summary.passes} pass(es).")
    print(f"Document: {summary.output_path}")
    print(f"Log: {summary.log_path} (+{len(summary.entries)} line(s))")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
