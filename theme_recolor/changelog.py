"""
Change log: one line per replacement, appended once per invocation.
Line format: category,elementName,#RRGGBB(original),#RRGGBB(new)
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .codec import RGB, decode6, encode6
from .errors import PathNotQualified


@dataclass(frozen=True)
class LogEntry:
    category: str
    element: str
    original: RGB
    replacement: RGB

    def to_line(self) -> str:
        return f"{self.category},{self.element},{encode6(self.original)},{encode6(self.replacement)}"

    @classmethod
    def from_line(cls, line: str) -> "LogEntry":
        # Names may contain commas; the two colors are always the last fields
        category_and_element, original, replacement = line.rsplit(",", 2)
        category, _, element = category_and_element.partition(",")
        return cls(category, element, decode6(original), decode6(replacement))


def require_log_path(log_path: str | Path) -> Path:
    """The log path must be absolute."""
    path = Path(log_path)
    if not path.is_absolute():
        raise PathNotQualified(f"Log path must be fully qualified: {log_path}", path=str(log_path))
    return path


def append_log(log_path: str | Path, entries: Iterable[LogEntry]) -> Path:
    """
    Append entries to the change log, creating the file and parent directories if needed.
    Returns the path to the log file.
    """
    path = require_log_path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8", newline="") as f:
        for entry in entries:
            f.write(entry.to_line() + "\n")
    return path


def read_log(log_path: str | Path) -> list[LogEntry]:
    """Read all entries from a change log. Blank or unparseable lines are skipped."""
    path = Path(log_path)
    if not path.exists():
        return []
    entries = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(LogEntry.from_line(line))
            except ValueError:
                continue
    return entries
