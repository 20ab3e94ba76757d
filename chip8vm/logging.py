"""Console logging utilities for the emulator and its front end.

A small leveled logger with optional ANSI colours and elapsed-time stamps.
The default level comes from the ``CHIP8_LOG`` environment variable.
"""

import os
import sys
import time
from typing import Dict, Optional

LOG_LEVEL_ENV = "CHIP8_LOG"
DEFAULT_LOG_LEVEL = "WARNING"

LEVEL_ORDER = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}


def default_log_level() -> str:
    """Log level from the environment, falling back to WARNING."""
    level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return level if level in LEVEL_ORDER else DEFAULT_LOG_LEVEL


class ConsoleLogger:
    """Flexible console logger with levels, colours and timestamps."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: Optional[str] = None,
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = (log_level or default_log_level()).upper()
        if self.log_level not in LEVEL_ORDER:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVEL_ORDER)}")
        self.stream = stream or sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors: Dict[str, str] = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*LEVEL_ORDER, "RESET"]}
        )

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVEL_ORDER.get(level.upper(), 1) >= LEVEL_ORDER[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chip8vm", log_level: Optional[str] = None) -> ConsoleLogger:
    """Shared logger per name; passing a level updates it."""
    logger = _loggers.get(name)
    if logger is None:
        logger = _loggers[name] = ConsoleLogger(name, log_level)
    elif log_level is not None:
        if log_level.upper() not in LEVEL_ORDER:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVEL_ORDER)}")
        logger.log_level = log_level.upper()
    return logger
