# Theme recolor: collision-free, format-preserving color replacement for theme files

from .codec import decode6, decode8, encode6, encode8, rgb_key
from .errors import (
    RecolorError,
    InvalidColor,
    PathNotFound,
    PathNotQualified,
    PathNotWritable,
    ColorSpaceExhausted,
    MalformedElement,
)
from .registry import UsedColorRegistry
from .finder import find_nearest_available
from .locator import ElementLocator, SpanIndex, Span, ColorOccurrence, lookup
from .patch import PatchResult, apply_replacement
from .changelog import LogEntry, append_log, read_log
from .driver import run_batch, run_interactive, read_document, write_document

__all__ = [
    "decode6",
    "decode8",
    "encode6",
    "encode8",
    "rgb_key",
    "RecolorError",
    "InvalidColor",
    "PathNotFound",
    "PathNotQualified",
    "PathNotWritable",
    "ColorSpaceExhausted",
    "MalformedElement",
    "UsedColorRegistry",
    "find_nearest_available",
    "ElementLocator",
    "SpanIndex",
    "Span",
    "ColorOccurrence",
    "lookup",
    "PatchResult",
    "apply_replacement",
    "LogEntry",
    "append_log",
    "read_log",
    "run_batch",
    "run_interactive",
    "read_document",
    "write_document",
]
