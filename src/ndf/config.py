"""Configuration management for ndf."""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from .errors import ConfigError
from .usage import DEFAULT_ANOMALY_FRACTION, DEFAULT_BAR_WIDTH, DEFAULT_HIGH_USAGE_RATIO

MODES = ("normal", "compact", "table", "json")


@dataclass
class NdfConfig:
    """ndf configuration."""

    mode: str = "normal"
    bar_width: int = DEFAULT_BAR_WIDTH
    high_usage_ratio: float = DEFAULT_HIGH_USAGE_RATIO
    anomaly_fraction: float = DEFAULT_ANOMALY_FRACTION
    excluded_prefixes: List[str] = field(default_factory=list)
    excluded_filesystems: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.mode not in MODES:
            raise ConfigError(f"mode must be one of {', '.join(MODES)}, got {self.mode!r}")
        if isinstance(self.bar_width, bool) or not isinstance(self.bar_width, int) or self.bar_width <= 0:
            raise ConfigError(f"bar_width must be a positive integer, got {self.bar_width!r}")
        if not _is_number(self.high_usage_ratio) or not 0.0 < self.high_usage_ratio <= 1.0:
            raise ConfigError(f"high_usage_ratio must be in (0, 1], got {self.high_usage_ratio!r}")
        if not _is_number(self.anomaly_fraction) or not 0.0 <= self.anomaly_fraction <= 1.0:
            raise ConfigError(f"anomaly_fraction must be in [0, 1], got {self.anomaly_fraction!r}")
        for key in ("excluded_prefixes", "excluded_filesystems"):
            value = getattr(self, key)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key} must be a list of strings")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def default_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "ndf" / "config.json"


class ConfigManager:
    """Loads ndf configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else default_config_path()

    def load(self) -> NdfConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Cannot read {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path}: expected a JSON object")

        known = {f.name for f in fields(NdfConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{self.config_path}: unknown keys: {', '.join(unknown)}")

        return NdfConfig(**data)

    def load_or_default(self) -> NdfConfig:
        """Load configuration, falling back to defaults if there is no file."""
        if not self.exists():
            return NdfConfig()
        return self.load()

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()
