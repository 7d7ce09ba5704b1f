"""
Registry of colors in use. Built fresh from a document scan at the start of each
pass, then grows as replacements are committed so no two replacements collide.
"""
import logging
from typing import Any, Iterable

from .codec import RGB, rgb_key
from .errors import MalformedElement
from .locator import ElementLocator

logger = logging.getLogger(__name__)


class UsedColorRegistry:
    """Set of reserved RGB keys (lower-case 6 hex digits)."""

    def __init__(self, colors: Iterable[RGB] = ()):
        self._keys: set[str] = {rgb_key(c) for c in colors}

    @classmethod
    def build(
        cls,
        document: str,
        config: dict[str, Any] | None = None,
        *,
        locator: ElementLocator | None = None,
    ) -> "UsedColorRegistry":
        """Reserve the RGB of every color-bearing element. Malformed entries are skipped."""
        if locator is None:
            locator = ElementLocator(document, config)
        registry = cls()
        skipped = 0
        for occ in locator.occurrences:
            try:
                _, rgb = occ.decode()
            except MalformedElement as e:
                skipped += 1
                logger.debug("Registry: skipping %s", e)
                continue
            registry.reserve(rgb)
        if skipped:
            logger.info("Registry: %d malformed color element(s) ignored", skipped)
        return registry

    def contains(self, rgb: RGB) -> bool:
        return rgb_key(rgb) in self._keys

    def reserve(self, rgb: RGB) -> None:
        self._keys.add(rgb_key(rgb))

    def keys(self) -> set[str]:
        return set(self._keys)

    def __contains__(self, rgb: RGB) -> bool:
        return self.contains(rgb)

    def __len__(self) -> int:
        return len(self._keys)
