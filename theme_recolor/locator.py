"""
Element locator: byte-offset span indexes over the raw theme text.
No parse tree is built, so every byte we do not explicitly replace is preserved
exactly (whitespace, quoting, attribute order, entities, comments).

Three indexes are produced:
  - Category spans (Name or sentinel)
  - Color spans (Name or sentinel)
  - color-bearing occurrences: Background/Foreground with Type == raw marker and a Source
"""
import html
import logging
import re
from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator

from .codec import RGB, decode8
from .config import document_settings
from .errors import InvalidColor, MalformedElement

logger = logging.getLogger(__name__)

# Attribute values may legally contain '>' so quoted runs are consumed whole
_TAG_BODY = r"((?:[^>\"']|\"[^\"]*\"|'[^']*')*)"
_ATTR = re.compile(r"([A-Za-z_:][\w:.\-]*)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
_OPAQUE = re.compile(r"<!--.*?-->|<!\[CDATA\[.*?\]\]>", re.DOTALL)


@lru_cache(maxsize=None)
def _tag_pattern(name: str) -> re.Pattern:
    return re.compile(r"<(/?)" + re.escape(name) + r"(?=[\s/>])" + _TAG_BODY + ">")


@dataclass(frozen=True)
class Span:
    """[start, end) range of one element in the raw text. parent = index of the enclosing span or -1."""
    start: int
    end: int
    name: str
    parent: int = -1


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str
    value_start: int
    value_end: int


@dataclass(frozen=True)
class ColorOccurrence:
    """One color-bearing tag. value_start/value_end delimit the Source text (without quotes)."""
    tag: str
    offset: int
    value_start: int
    value_end: int
    source: str

    def decode(self) -> tuple[int, RGB]:
        """(alpha, rgb) of the Source value; MalformedElement if it is not 8 hex digits."""
        try:
            return decode8(self.source)
        except InvalidColor as e:
            raise MalformedElement(
                f"{self.tag} at offset {self.offset}: bad Source {self.source!r}",
                value=self.source,
                offset=self.offset,
            ) from e


class SpanIndex:
    """
    Sorted interval index. Spans are properly nested (or disjoint), so the innermost
    enclosing span is found by bisecting on start offsets and walking up parents.
    """

    def __init__(self, spans: list[Span]):
        self.spans = spans
        self._starts = [s.start for s in spans]

    def __len__(self) -> int:
        return len(self.spans)

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def enclosing(self, offset: int) -> Span | None:
        i = bisect_right(self._starts, offset) - 1
        while i >= 0:
            span = self.spans[i]
            if span.start <= offset < span.end:
                return span
            i = span.parent
        return None


def lookup(offset: int, spans: SpanIndex, default: str) -> str:
    """Name of the nearest span enclosing offset, or default when outside all spans."""
    span = spans.enclosing(offset)
    return span.name if span is not None else default


def parse_attributes(body: str, base: int) -> dict[str, Attribute]:
    """Attributes of a tag body; base is the absolute offset of body[0]. First occurrence wins."""
    attrs: dict[str, Attribute] = {}
    for m in _ATTR.finditer(body):
        group = 2 if m.group(2) is not None else 3
        if m.group(1) in attrs:
            continue
        attrs[m.group(1)] = Attribute(
            name=m.group(1),
            value=m.group(group),
            value_start=base + m.start(group),
            value_end=base + m.end(group),
        )
    return attrs


class ElementLocator:
    """Scans one document snapshot. Rebuild after the text changes."""

    def __init__(self, text: str, config: dict[str, Any] | None = None):
        settings = document_settings(config)
        self.text = text
        self.unnamed: str = settings["unnamed"]
        self.raw_type: str = settings["raw_type"]
        self.color_tags: list[str] = list(settings["color_tags"])
        self._opaque = [(m.start(), m.end()) for m in _OPAQUE.finditer(text)]
        self._opaque_starts = [start for start, _ in self._opaque]
        self.categories = SpanIndex(self._element_spans("Category"))
        self.colors = SpanIndex(self._element_spans("Color"))
        self.occurrences: list[ColorOccurrence] = self._color_occurrences()

    def _in_opaque(self, offset: int) -> bool:
        """True if offset falls inside a comment or CDATA section."""
        i = bisect_right(self._opaque_starts, offset) - 1
        return i >= 0 and offset < self._opaque[i][1]

    def _tags(self, name: str) -> Iterator[re.Match]:
        for m in _tag_pattern(name).finditer(self.text):
            if not self._in_opaque(m.start()):
                yield m

    def _element_spans(self, name: str) -> list[Span]:
        opened: list[dict[str, Any]] = []
        stack: list[int] = []
        for m in self._tags(name):
            closing, body = m.group(1), m.group(2)
            if closing:
                if stack:
                    opened[stack.pop()]["end"] = m.end()
                continue
            attrs = parse_attributes(body, m.start(2))
            label = attrs["Name"].value if "Name" in attrs else ""
            label = html.unescape(label) if label else self.unnamed
            parent = stack[-1] if stack else -1
            opened.append({"start": m.start(), "end": None, "name": label, "parent": parent})
            if body.rstrip().endswith("/"):
                opened[-1]["end"] = m.end()
            else:
                stack.append(len(opened) - 1)
        if stack:
            logger.debug("%d unclosed <%s> element(s); extending to end of document", len(stack), name)
        return [
            Span(o["start"], o["end"] if o["end"] is not None else len(self.text), o["name"], o["parent"])
            for o in opened
        ]

    def _color_occurrences(self) -> list[ColorOccurrence]:
        found: list[ColorOccurrence] = []
        for tag in self.color_tags:
            for m in self._tags(tag):
                if m.group(1):
                    continue
                attrs = parse_attributes(m.group(2), m.start(2))
                kind, source = attrs.get("Type"), attrs.get("Source")
                if kind is None or source is None or kind.value != self.raw_type:
                    continue
                found.append(ColorOccurrence(tag, m.start(), source.value_start, source.value_end, source.value))
        found.sort(key=lambda o: o.offset)
        return found

    def lookup(self, offset: int, spans: SpanIndex) -> str:
        return lookup(offset, spans, self.unnamed)

    def category_at(self, offset: int) -> str:
        return lookup(offset, self.categories, self.unnamed)

    def color_name_at(self, offset: int) -> str:
        return lookup(offset, self.colors, self.unnamed)
