"""
Driver: batch and interactive recoloring of one theme document.

Batch: one source/target pair, one pass, result written to the output path.
Interactive: repeated prompts, target forced to the entered source; registry and
spans are rebuilt from the current in-memory document before every pass. The
document is written back to the input path once, when the loop ends.
In both modes the change log is appended once, after the document is written.
"""
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from .changelog import LogEntry, append_log, require_log_path
from .codec import RGB, decode6, encode6
from .config import document_settings, load_config
from .errors import ColorSpaceExhausted, InvalidColor, PathNotFound, PathNotWritable
from .locator import ElementLocator
from .patch import PatchResult, apply_replacement
from .registry import UsedColorRegistry

logger = logging.getLogger(__name__)

INTERACTIVE_PROMPT = "Source color (#RRGGBB, blank to finish): "


def _print_error(message: str) -> None:
    print(message, file=sys.stderr)


@dataclass
class RunSummary:
    replaced: int = 0
    passes: int = 0
    entries: list[LogEntry] = field(default_factory=list)
    output_path: Path | None = None
    log_path: Path | None = None


def read_document(path: str | Path, config: dict[str, Any] | None = None) -> str:
    """Read the whole document; undecodable bytes survive via surrogateescape."""
    p = Path(path)
    if not p.is_file():
        raise PathNotFound(f"Input document not found: {path}", path=str(path))
    encoding = document_settings(config)["encoding"]
    return p.read_bytes().decode(encoding, "surrogateescape")


def require_file_target(path: str | Path, what: str) -> Path:
    """A path we are about to write must not be an existing directory."""
    p = Path(path)
    if p.is_dir():
        raise PathNotWritable(f"{what} path is a directory: {path}", path=str(path))
    return p


def write_document(path: str | Path, text: str, config: dict[str, Any] | None = None) -> Path:
    """Write the whole document with the same codec it was read with. Creates parents."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    encoding = document_settings(config)["encoding"]
    p.write_bytes(text.encode(encoding, "surrogateescape"))
    return p


def recolor_pass(
    document: str,
    source: RGB,
    target: RGB,
    config: dict[str, Any] | None = None,
) -> PatchResult:
    """One pass against a fresh snapshot: scan, build the registry, patch."""
    locator = ElementLocator(document, config)
    registry = UsedColorRegistry.build(document, config, locator=locator)
    return apply_replacement(document, source, target, registry, config=config, locator=locator)


def run_batch(
    input_path: str | Path,
    output_path: str | Path,
    source: str,
    log_path: str | Path,
    target: str | None = None,
    *,
    config: dict[str, Any] | None = None,
    dry_run: bool = False,
) -> RunSummary:
    """
    Replace source with colors near target (default: source) and write the result.
    All validation happens before anything is written.
    """
    if config is None:
        config = load_config()
    log_file = require_file_target(require_log_path(log_path), "Log")
    out_file = require_file_target(output_path, "Output")
    source_rgb = decode6(source)
    target_rgb = decode6(target) if target else source_rgb
    document = read_document(input_path, config)

    result = recolor_pass(document, source_rgb, target_rgb, config)
    logger.info("Batch: %s -> near %s, %d replaced", encode6(source_rgb), encode6(target_rgb), result.replaced)
    summary = RunSummary(replaced=result.replaced, passes=1, entries=list(result.entries))
    if dry_run:
        return summary
    summary.output_path = write_document(out_file, result.text, config)
    summary.log_path = append_log(log_file, result.entries)
    return summary


def run_interactive(
    input_path: str | Path,
    log_path: str | Path,
    *,
    config: dict[str, Any] | None = None,
    prompt: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
    err: Callable[[str], None] = _print_error,
) -> RunSummary:
    """
    Prompt for source colors until a blank line (or EOF). Each pass reads the
    document as left by the previous passes. Writes in place once at the end.
    """
    if config is None:
        config = load_config()
    log_file = require_file_target(require_log_path(log_path), "Log")
    document = read_document(input_path, config)
    summary = RunSummary()

    while True:
        try:
            line = prompt(INTERACTIVE_PROMPT).strip()
        except EOFError:
            break
        if not line:
            break
        try:
            source_rgb = decode6(line)
        except InvalidColor as e:
            err(f"Error: {e}")
            continue
        try:
            result = recolor_pass(document, source_rgb, source_rgb, config)
        except ColorSpaceExhausted as e:
            err(f"Error: {e}")
            continue
        document = result.text
        summary.passes += 1
        summary.replaced += result.replaced
        summary.entries.extend(result.entries)
        for entry in result.entries:
            out(f"  {entry.category} / {entry.element}: {encode6(entry.original)} -> {encode6(entry.replacement)}")
        out(f"{encode6(source_rgb)}: {result.replaced} replaced")

    summary.output_path = write_document(input_path, document, config)
    summary.log_path = append_log(log_file, summary.entries)
    logger.info("Interactive: %d pass(es), %d replaced", summary.passes, summary.replaced)
    return summary
