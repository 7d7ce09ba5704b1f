"""
Inventory of color-bearing elements: what a recolor pass would see, in document order.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from .codec import rgb_key
from .errors import MalformedElement
from .locator import ElementLocator


@dataclass(frozen=True)
class ColorRecord:
    category: str
    color: str
    tag: str
    offset: int
    source: str
    key: str | None  # None when Source is malformed

    def to_row(self) -> list[str]:
        return [self.category, self.color, self.tag, self.source, f"#{self.key}" if self.key else ""]


def list_colors(document: str, config: dict[str, Any] | None = None) -> list[ColorRecord]:
    """Every color-bearing occurrence with its attribution."""
    locator = ElementLocator(document, config)
    records = []
    for occ in locator.occurrences:
        try:
            _, rgb = occ.decode()
            key = rgb_key(rgb)
        except MalformedElement:
            key = None
        records.append(ColorRecord(
            category=locator.category_at(occ.offset),
            color=locator.color_name_at(occ.offset),
            tag=occ.tag,
            offset=occ.offset,
            source=occ.source,
            key=key,
        ))
    return records


def duplicate_colors(records: list[ColorRecord]) -> dict[str, list[ColorRecord]]:
    """RGB keys used by more than one element, in first-seen order."""
    by_key: dict[str, list[ColorRecord]] = defaultdict(list)
    for record in records:
        if record.key is not None:
            by_key[record.key].append(record)
    return {key: group for key, group in by_key.items() if len(group) > 1}
