"""Configuration module."""

from .config import Config, IndicatorConfig, LogConfig, get_config

__all__ = ["Config", "IndicatorConfig", "LogConfig", "get_config"]
