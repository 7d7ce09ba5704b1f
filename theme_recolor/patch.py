"""
Patch engine: rewrite the Source value of every color-bearing element whose RGB
equals the source color, splicing the new AARRGGBB into exactly the byte range the
old value occupied. Everything else in the document is left untouched.
"""
import logging
from typing import Any, NamedTuple

from .changelog import LogEntry
from .codec import RGB, encode6, encode8
from .config import max_radius
from .errors import MalformedElement
from .finder import find_nearest_available
from .locator import ElementLocator
from .registry import UsedColorRegistry

logger = logging.getLogger(__name__)


class PatchResult(NamedTuple):
    text: str
    replaced: int
    entries: list[LogEntry]


def apply_replacement(
    document: str,
    source: RGB,
    target: RGB,
    registry: UsedColorRegistry,
    *,
    config: dict[str, Any] | None = None,
    locator: ElementLocator | None = None,
) -> PatchResult:
    """
    Replace every occurrence of source (alpha preserved) with the nearest unused
    color to target. Each replacement is reserved before the next match is
    considered, so repeated matches never share a new value.

    Raises ColorSpaceExhausted; the input text is never mutated, so an aborted pass
    leaves the caller's document as it was. The registry is mutated in place.
    """
    if locator is None:
        locator = ElementLocator(document, config)
    radius = max_radius(config)
    pieces: list[str] = []
    entries: list[LogEntry] = []
    cursor = 0
    for occ in locator.occurrences:
        try:
            alpha, rgb = occ.decode()
        except MalformedElement as e:
            logger.debug("Patch: skipping %s", e)
            continue
        if rgb != tuple(source):
            continue
        new_rgb = find_nearest_available(target, registry, max_radius=radius)
        registry.reserve(new_rgb)
        pieces.append(document[cursor:occ.value_start])
        pieces.append(encode8(alpha, new_rgb))
        cursor = occ.value_end
        entry = LogEntry(locator.category_at(occ.offset), locator.color_name_at(occ.offset), rgb, new_rgb)
        entries.append(entry)
        logger.debug("Patch: %s/%s %s %s -> %s", entry.category, entry.element, occ.tag, encode6(rgb), encode6(new_rgb))
    if not entries:
        return PatchResult(document, 0, [])
    pieces.append(document[cursor:])
    return PatchResult("".join(pieces), len(entries), entries)
