"""
Load and expose tool config (YAML). Used by the driver and scripts to get the
raw-color marker, tag names, document encoding and search limits.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    defaults = _defaults()
    if not path.exists():
        return defaults
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    merged = dict(defaults)
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(defaults.get(section), dict):
            merged[section] = {**defaults[section], **values}
        else:
            merged[section] = values
    return merged


def _defaults() -> dict[str, Any]:
    return {
        "document": {
            "raw_type": "CT_RAW",
            "color_tags": ["Background", "Foreground"],
            "unnamed": "Unknown",
            "encoding": "utf-8",
        },
        "search": {"max_radius": 255},
        "logging": {"level": "WARNING"},
    }


def document_settings(config: dict[str, Any] | None) -> dict[str, Any]:
    """Document section with defaults filled in."""
    doc = dict(_defaults()["document"])
    doc.update((config or {}).get("document", {}) or {})
    return doc


def max_radius(config: dict[str, Any] | None) -> int:
    """Search radius limit, clamped to 1..255."""
    search = (config or {}).get("search", {}) or {}
    return max(1, min(255, int(search.get("max_radius", 255))))
