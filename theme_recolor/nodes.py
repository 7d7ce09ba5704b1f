"""
Node-level merge and diff of theme documents (Category / Color nodes).
These work on a parsed tree with lxml and re-serialize it; unlike the recolor
pass they do not preserve formatting byte for byte, and they never allocate colors.
"""
import copy
import logging
from dataclasses import dataclass, field

from lxml import etree

logger = logging.getLogger(__name__)


@dataclass
class MergeStats:
    categories_created: int = 0
    colors_replaced: int = 0
    colors_added: int = 0


@dataclass
class DiffStats:
    categories_created: int = 0
    added: list[tuple[str, str]] = field(default_factory=list)  # (category, color)


def parse_theme(xml: bytes) -> etree._Element:
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    return etree.fromstring(xml, parser)


def serialize_theme(root: etree._Element) -> bytes:
    return etree.tostring(root, xml_declaration=True, encoding="utf-8")


def theme_node(root: etree._Element) -> etree._Element:
    """The first <Theme> (or the root itself when it is a Theme or holds Categories directly)."""
    if root.tag == "Theme":
        return root
    theme = root.find("Theme")
    return theme if theme is not None else root


def find_category(theme: etree._Element, name: str | None, guid: str | None = None) -> etree._Element | None:
    """Match by GUID when both sides carry one, otherwise by Name."""
    for category in theme.iterfind("Category"):
        if guid and category.get("GUID"):
            if category.get("GUID").lower() == guid.lower():
                return category
        elif name is not None and category.get("Name") == name:
            return category
    return None


def _ensure_category(theme: etree._Element, template: etree._Element) -> tuple[etree._Element, bool]:
    existing = find_category(theme, template.get("Name"), template.get("GUID"))
    if existing is not None:
        return existing, False
    created = etree.SubElement(theme, "Category", dict(template.attrib))
    return created, True


def merge_categories(base_xml: bytes, update_xml: bytes) -> tuple[bytes, MergeStats]:
    """
    Copy every Color of every Category in update into base: create the Category if
    absent, replace a same-named Color, else append it.
    """
    base = parse_theme(base_xml)
    update = parse_theme(update_xml)
    theme = theme_node(base)
    stats = MergeStats()
    for source_category in theme_node(update).iterfind("Category"):
        category, created = _ensure_category(theme, source_category)
        if created:
            stats.categories_created += 1
            logger.info("Merge: created category %s", category.get("Name"))
        for color in source_category.iterfind("Color"):
            incoming = copy.deepcopy(color)
            current = next((c for c in category.iterfind("Color") if c.get("Name") == color.get("Name")), None)
            if current is not None:
                category.replace(current, incoming)
                stats.colors_replaced += 1
            else:
                category.append(incoming)
                stats.colors_added += 1
    return serialize_theme(base), stats


def append_new_colors(original_xml: bytes, updated_xml: bytes) -> tuple[bytes, DiffStats]:
    """
    Append to original only the Colors whose names are present in updated but missing
    from the matching Category of original. Categories are created as needed.
    """
    original = parse_theme(original_xml)
    updated = parse_theme(updated_xml)
    theme = theme_node(original)
    stats = DiffStats()
    for source_category in theme_node(updated).iterfind("Category"):
        category, created = _ensure_category(theme, source_category)
        if created:
            stats.categories_created += 1
        present = {c.get("Name") for c in category.iterfind("Color")}
        for color in source_category.iterfind("Color"):
            if color.get("Name") in present:
                continue
            category.append(copy.deepcopy(color))
            present.add(color.get("Name"))
            stats.added.append((category.get("Name") or "", color.get("Name") or ""))
    logger.info("Diff: %d color(s) appended, %d category(ies) created", len(stats.added), stats.categories_created)
    return serialize_theme(original), stats
