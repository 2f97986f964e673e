"""
Logging utility module for readability_dom.
"""

import logging
import os
import sys
import time
from typing import Dict, Optional

# Define logging levels dictionary for easy reference
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

ROOT_LOGGER_NAME = "readability_dom"


class LogFormatter(logging.Formatter):
    """Log formatter with colored level names for console output."""

    COLORS = {
        'RESET': '\033[0m',
        'RED': '\033[31m',
        'GREEN': '\033[32m',
        'YELLOW': '\033[33m',
        'BLUE': '\033[34m',
        'BOLD': '\033[1m'
    }

    LEVEL_COLORS = {
        'DEBUG': COLORS['BLUE'],
        'INFO': COLORS['GREEN'],
        'WARNING': COLORS['YELLOW'],
        'ERROR': COLORS['RED'],
        'CRITICAL': COLORS['RED'] + COLORS['BOLD']
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        formatted_msg = super().format(record)

        if self.colored:
            level_name = record.levelname
            if level_name in self.LEVEL_COLORS:
                colored_level = f"{self.LEVEL_COLORS[level_name]}{level_name}{self.COLORS['RESET']}"
                formatted_msg = formatted_msg.replace(level_name, colored_level, 1)

        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for readability_dom.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name for the logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = ROOT_LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    # If handlers already exist, assume logger is already configured
    if logger.handlers:
        return logger

    console_level = console_level.upper()
    file_level = file_level.upper()

    levels = [LOG_LEVELS.get(console_level, logging.WARNING)]
    if log_file:
        levels.append(LOG_LEVELS.get(file_level, logging.DEBUG))
    logger.setLevel(min(levels))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVELS.get(console_level, logging.WARNING))
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=True, fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(LOG_LEVELS.get(file_level, logging.DEBUG))

        # File output is more detailed than console
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception with its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Utility class for logging how long named operations take."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name
        """
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        """
        Start timing an operation.

        Args:
            name: Operation name
        """
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        End timing an operation and log the duration.

        Args:
            name: Operation name
            level: Log level

        Returns:
            float: Duration in seconds
        """
        start = self.start_times.pop(name, None)
        if start is None:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - start
        self.log(name, duration, level)
        return duration

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        log_func = getattr(self.logger, level.lower())
        log_func(f"{self.component} {name} took {duration:.4f} seconds")

    def clear(self) -> None:
        """Clear all start times."""
        self.start_times.clear()
