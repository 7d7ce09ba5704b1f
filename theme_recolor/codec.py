"""
Hex color codec for theme Source values (AARRGGBB) and user input (#RRGGBB).
"""
import re

from .errors import InvalidColor

RGB = tuple[int, int, int]

_HEX6 = re.compile(r"#?([0-9A-Fa-f]{6})")
_HEX8 = re.compile(r"[0-9A-Fa-f]{8}")


def decode6(text: str) -> RGB:
    """Parse 'RRGGBB' or '#RRGGBB' into an (R, G, B) tuple."""
    m = _HEX6.fullmatch(text or "")
    if not m:
        raise InvalidColor(f"Invalid color {text!r}: expected #RRGGBB", value=text)
    h = m.group(1)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def decode8(text: str) -> tuple[int, RGB]:
    """Parse 'AARRGGBB' into (alpha, (R, G, B))."""
    if not _HEX8.fullmatch(text or ""):
        raise InvalidColor(f"Invalid color {text!r}: expected AARRGGBB", value=text)
    return int(text[0:2], 16), (int(text[2:4], 16), int(text[4:6], 16), int(text[6:8], 16))


def encode8(alpha: int, rgb: RGB) -> str:
    """Fixed-width uppercase AARRGGBB."""
    r, g, b = rgb
    return f"{alpha:02X}{r:02X}{g:02X}{b:02X}"


def encode6(rgb: RGB) -> str:
    """Uppercase '#RRGGBB' (used in the change log and CLI output)."""
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_key(rgb: RGB) -> str:
    """Registry key: lower-case 6 hex digits."""
    r, g, b = rgb
    return f"{r:02x}{g:02x}{b:02x}"
