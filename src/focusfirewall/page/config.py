"""
Configuration management for the host page.

Handles loading and saving of the engine's YAML configuration: which
elements are content items, where their titles live, and the timing of
rescans.
"""

import yaml
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List


DEFAULT_ITEM_SELECTORS = [
    "ytd-rich-item-renderer",          # Home feed grid items
    "ytd-video-renderer",              # Search results
    "ytd-compact-video-renderer",      # Sidebar / related
    "ytd-grid-video-renderer",         # Channel page grids
    "ytd-reel-item-renderer",          # Shorts shelf
]

DEFAULT_TITLE_SELECTORS = [
    "#video-title",
    "#video-title-link",
    "a#video-title",
    '[id="video-title"]',
    "h3 a",
    ".title",
]

DEFAULT_THUMBNAIL_SELECTORS = ["#thumbnail", "ytd-thumbnail", ".ytd-thumbnail"]


@dataclass
class EngineConfig:
    """Host-specific selectors and timing for the filtering engine."""
    item_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_ITEM_SELECTORS))
    title_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_TITLE_SELECTORS))
    thumbnail_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_THUMBNAIL_SELECTORS))
    debounce_ms: int = 300
    poll_ms: int = 1000
    state_timeout_ms: int = 2000

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @property
    def poll_seconds(self) -> float:
        return self.poll_ms / 1000.0

    @property
    def state_timeout_seconds(self) -> float:
        return self.state_timeout_ms / 1000.0


LIST_FIELDS = ("item_selectors", "title_selectors", "thumbnail_selectors")
INT_FIELDS = ("debounce_ms", "poll_ms", "state_timeout_ms")


def config_from_dict(data: Dict[str, Any]) -> EngineConfig:
    """
    Build an EngineConfig from a plain dictionary.

    Absent keys keep their defaults.

    Raises:
        ValueError: If a key is unknown or a value has the wrong shape
    """
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown configuration key(s): {', '.join(unknown)}")

    for name in LIST_FIELDS:
        if name not in data:
            continue

        value = data[name]
        if not isinstance(value, list) or not value:
            raise ValueError(f"'{name}' must be a non-empty list of selectors")

        for idx, selector in enumerate(value):
            if not isinstance(selector, str) or not selector.strip():
                raise ValueError(f"'{name}' entry at index {idx} is not a selector string")

    for name in INT_FIELDS:
        if name not in data:
            continue

        value = data[name]
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"'{name}' must be a non-negative integer (milliseconds)")

    return EngineConfig(**data)


def load_config(path: str) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Args:
        path: Path to the YAML configuration

    Returns:
        EngineConfig with defaults for absent keys

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the file is empty or fields are invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Configuration file is empty: {path}")

    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping of keys to values")

    return config_from_dict(data)


def save_config(path: str, config: EngineConfig) -> None:
    """
    Save engine configuration to a YAML file.

    Args:
        path: Destination path
        config: Configuration to write
    """
    config_path = Path(path)

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(asdict(config), f, default_flow_style=False, allow_unicode=True, sort_keys=False)
