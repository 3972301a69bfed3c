"""Utility modules for NOM Tools."""

from .logger import get_logger, setup_logger, ToolsLogger

__all__ = ["get_logger", "setup_logger", "ToolsLogger"]
