"""
Configuration management for NOM Tools.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"

    def __post_init__(self):
        """Validate and normalize configuration."""
        self.level = self.level.upper().strip()
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got '{self.level}'"
            )


@dataclass
class IndicatorConfig:
    """
    Indicator runtime settings.

    timezone:
        IANA zone that calendar fields (day of week, month end) are read in
        when bar timestamps are timezone-aware. Empty string keeps the
        timestamps as given.
    configs_dir:
        Directory holding YAML indicator instance files.
    """
    timezone: str = ""
    configs_dir: str = "configs/indicators"

    def __post_init__(self):
        """Validate and normalize configuration."""
        self.timezone = self.timezone.strip()
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(
                    f"NOM_TIMEZONE must be an IANA zone name, got '{self.timezone}'\n"
                    f"\n"
                    f"Fix: NOM_TIMEZONE=America/Chicago"
                ) from e

    @property
    def tz(self) -> Optional[tzinfo]:
        """Resolved tzinfo, or None when no zone is configured."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def configs_path(self) -> Path:
        return Path(self.configs_dir)


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        # Later files override earlier ones
        for env_name in [".env", env_file]:
            env_path = Path(env_name)
            if env_path.exists():
                load_dotenv(env_path, override=True)

        self.log = self._load_log_config()
        self.indicators = self._load_indicator_config()

        self._initialized = True

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs"),
        )

    def _load_indicator_config(self) -> IndicatorConfig:
        """Load indicator runtime configuration from environment."""
        return IndicatorConfig(
            timezone=os.getenv("NOM_TIMEZONE", ""),
            configs_dir=os.getenv("NOM_CONFIGS_DIR", "configs/indicators"),
        )

    @classmethod
    def reset(cls):
        """Drop the cached instance so the next get_config() reloads."""
        cls._instance = None


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)
