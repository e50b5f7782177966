"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import AppConfig, load_config


class ConfigManager:
    """YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name; a bare name gets a ``.yaml`` suffix."""
        path = self._base_path / name
        if not path.suffix:
            path = path.with_suffix(".yaml")
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    def load_app_config(self, name: str) -> AppConfig:
        """Load and validate a configuration into :class:`AppConfig`."""
        return load_config(self.load(name))


__all__ = ["ConfigManager"]
