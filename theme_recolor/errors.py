"""
Errors raised while recoloring a theme document.
Library code raises these; only the CLI layer turns them into exit codes.
"""


class RecolorError(Exception):
    """Base error with optional context (offending value, path)."""
    def __init__(self, message: str, value: str | None = None, path: str | None = None):
        super().__init__(message)
        self.value = value
        self.path = path


class InvalidColor(RecolorError, ValueError):
    """Hex color text is not exactly 6 (optionally #-prefixed) or 8 hex digits."""


class PathNotFound(RecolorError):
    """Input document does not exist."""


class PathNotQualified(RecolorError):
    """A path that must be absolute (the change log) is relative."""


class ColorSpaceExhausted(RecolorError):
    """No unreserved RGB found within the search radius."""
    def __init__(self, message: str, target: tuple[int, int, int] | None = None):
        super().__init__(message)
        self.target = target


class MalformedElement(RecolorError):
    """A color-bearing tag whose Source cannot be decoded. Skipped, never fatal."""
    def __init__(self, message: str, value: str | None = None, offset: int | None = None):
        super().__init__(message, value=value)
        self.offset = offset


class PathNotWritable(RecolorError):
    """An output or log path names an existing directory."""
