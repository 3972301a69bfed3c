"""
Indicator instance configs loaded from YAML.

An instance config names a registered plugin and the params it runs with:

    id: es_vwap_weekly
    indicator: vwap_bands
    description: "Weekly VWAP with one band"
    params:
      timeframe: weekly
      band2Enabled: false

Loading is pure: (config_id, dir) -> PluginConfig. Plugin creation
validates the params against the plugin's metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .base import IndicatorPlugin
from .registry import create_plugin


class PluginConfigNotFoundError(Exception):
    """Raised when an indicator instance config cannot be found."""

    def __init__(self, config_id: str, searched_paths: list[Path] | None = None):
        self.config_id = config_id
        self.searched_paths = searched_paths or []
        paths_str = ", ".join(str(p) for p in self.searched_paths)
        super().__init__(f"Indicator config '{config_id}' not found. Searched: {paths_str}")


@dataclass(frozen=True)
class PluginConfig:
    """
    A named indicator instance.

    Attributes:
        id: Unique identifier (file name without extension)
        indicator: Registered plugin key
        params: Param overrides applied on top of the plugin defaults
        description: Optional description
    """
    id: str
    indicator: str
    params: dict[str, Any] = field(default_factory=dict)
    description: str | None = None

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValueError(f"Invalid indicator config '{self.id}': {'; '.join(errors)}")

    def validate(self) -> list[str]:
        errors = []
        if not self.id:
            errors.append("id is required")
        if not self.indicator:
            errors.append("indicator is required")
        if not isinstance(self.params, dict):
            errors.append("params must be a mapping")
        return errors

    def to_dict(self) -> dict[str, Any]:
        d = {"id": self.id, "indicator": self.indicator, "params": dict(self.params)}
        if self.description:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PluginConfig:
        return cls(
            id=d.get("id", ""),
            indicator=d.get("indicator", ""),
            params=d.get("params") or {},
            description=d.get("description"),
        )

    def create(self) -> IndicatorPlugin:
        """Instantiate the configured plugin."""
        return create_plugin(self.indicator, self.params)


def _find_config_file(config_id: str, configs_dir: Path) -> Path | None:
    for suffix in (".yml", ".yaml"):
        path = configs_dir / f"{config_id}{suffix}"
        if path.exists():
            return path
    return None


def load_plugin_config(config_id: str, configs_dir: Path | str) -> PluginConfig:
    """
    Load an indicator instance config from YAML.

    Raises:
        PluginConfigNotFoundError: If no file exists for config_id
        ValueError: If the YAML is empty or invalid
    """
    configs_dir = Path(configs_dir)
    yaml_path = _find_config_file(config_id, configs_dir)
    if yaml_path is None:
        raise PluginConfigNotFoundError(
            config_id,
            [configs_dir / f"{config_id}.yml", configs_dir / f"{config_id}.yaml"],
        )

    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Indicator config file is empty: {yaml_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Indicator config must be a mapping: {yaml_path}")

    data.setdefault("id", config_id)
    return PluginConfig.from_dict(data)


def list_plugin_configs(configs_dir: Path | str) -> list[str]:
    """List config IDs (file names without extension) in a directory."""
    configs_dir = Path(configs_dir)
    if not configs_dir.exists():
        return []
    return sorted(
        p.stem for p in configs_dir.iterdir()
        if p.suffix in (".yml", ".yaml")
    )
