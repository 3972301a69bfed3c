"""
Logging system for NOM Tools.
Provides human-readable logs with colored console output and a dated log file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class ToolsLogger:
    """
    Central logger for NOM Tools.

    Features:
    - Console output with colors
    - Plain-text file output, one file per day
    - Library loggers (``nom_tools.*``) share the same handlers
    """

    _instance: Optional['ToolsLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = True):
        if ToolsLogger._initialized:
            return

        self.log_dir = Path(log_dir)
        self.log_to_file = log_to_file
        if log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._create_logger("nom_tools", log_level)

        ToolsLogger._initialized = True

    def _create_logger(self, name: str, level: str) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()
        logger.propagate = False

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

        if self.log_to_file:
            log_file = self.log_dir / f"nom_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)

    def indicator(self, action: str, indicator: str, **kwargs):
        """
        Log an indicator lifecycle event with structured format.

        Args:
            action: CREATED, RUN_STARTED, RUN_FINISHED
            indicator: Registered indicator key (e.g., vwap_bands)
            **kwargs: Additional fields
        """
        parts = [f"[{action}]", f"indicator={indicator}"]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")
        self.main_logger.info(" | ".join(parts))


# Global logger instance
_logger: Optional[ToolsLogger] = None


def get_logger(log_dir: str = "logs", log_level: str = "INFO") -> ToolsLogger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = ToolsLogger(log_dir, log_level)
    return _logger


def setup_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = True) -> ToolsLogger:
    """Initialize the logger with custom settings."""
    global _logger
    ToolsLogger._initialized = False
    ToolsLogger._instance = None
    _logger = ToolsLogger(log_dir, log_level, log_to_file)
    return _logger
