"""
Logging utility module for dom-document.

The package logger is configured once on import. Documents time their parses
through PerformanceLogger at DEBUG level.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from dom_document.utils.config import get_config

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

LOGGER_NAME = "dom_document"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


class LogFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    RESET = '\033[0m'

    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Colour level names (never on Windows consoles)
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        color = self.LEVEL_COLORS.get(record.levelname) if self.colored else None
        if color:
            message = message.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)

        return message


def _level(name: Optional[str], default: int) -> int:
    return LOG_LEVELS.get((name or '').upper(), default)


def setup_logging(log_file: Optional[str] = None,
                  console_level: Optional[str] = None,
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up the package logger, or a component logger below it.

    Loggers that already have handlers are returned unchanged.

    Args:
        log_file: Also write records to this file
        console_level: Console level, logging.console_level from the shared
            configuration by default
        file_level: Level of the file handler
        component: Configure dom_document.<component> instead of the package logger

    Returns:
        logging.Logger: The configured logger
    """
    name = f"{LOGGER_NAME}.{component}" if component else LOGGER_NAME
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if console_level is None:
        console_level = get_config().get('logging.console_level', 'WARNING')

    console = logging.StreamHandler()
    console.setLevel(_level(console_level, logging.WARNING))
    console.setFormatter(LogFormatter(colored=True, fmt=CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console)

    lowest = console.level
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(_level(file_level, logging.DEBUG))
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)
        lowest = min(lowest, file_handler.level)

    logger.setLevel(lowest)
    return logger


def set_console_level(level: str) -> None:
    """
    Change the console level of the package logger after setup.

    Args:
        level: One of the names in LOG_LEVELS, in any case
    """
    logger = logging.getLogger(LOGGER_NAME)
    numeric = _level(level, logging.WARNING)

    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(numeric)

    if logger.level > numeric or logger.level == logging.NOTSET:
        logger.setLevel(numeric)


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """Log an exception with its traceback at ERROR level."""
    logger.error(f"{message}: {exception}",
                 exc_info=(type(exception), exception, exception.__traceback__))


class PerformanceLogger:
    """Times named operations of a component and logs their duration."""

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        """Start timing an operation."""
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        Stop timing an operation and log how long it took.

        Args:
            name: Operation name passed to start()
            level: Level of the log record

        Returns:
            float: Duration in seconds, 0 if the operation was never started
        """
        started = self.start_times.pop(name, None)
        if started is None:
            self.logger.warning(f"No start time found for {name}")
            return 0

        duration = time.perf_counter() - started
        self.logger.log(_level(level, logging.DEBUG),
                        f"{self.component} {name} took {duration:.4f} seconds")
        return duration

    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """Time the body of a with block, also when it raises."""
        self.start(name)
        try:
            yield
        finally:
            self.end(name, level)
