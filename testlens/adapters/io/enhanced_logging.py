"""
Logging setup with Rich integration.

This module provides:
- One-time configuration of the root logger with a RichHandler
- Log level selection from verbose/quiet flags and the debug setting
- Suppression of noisy third-party loggers outside debug mode
- Operation timing through a context manager
"""

import logging
import os
import threading
import time
from contextlib import contextmanager
from enum import Enum

from rich.console import Console
from rich.logging import RichHandler


class LogMode(str, Enum):
    """Logging verbosity modes."""

    NORMAL = "normal"
    VERBOSE = "verbose"
    QUIET = "quiet"


class LoggerManager:
    """Manager for configuring the root logger once per process."""

    _console: Console | None = None
    log_mode: LogMode = LogMode.NORMAL
    _setup_complete: bool = False
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls, console: Console | None = None, level: int = logging.INFO
    ) -> None:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            if cls._setup_complete:
                return

            cls._console = console or Console(stderr=True)
            root_logger = logging.getLogger()

            # Replace any RichHandler that isn't ours, keep other handlers
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            rich_handler = RichHandler(
                console=cls._console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            rich_handler.setFormatter(logging.Formatter(fmt="%(message)s"))

            root_logger.addHandler(rich_handler)
            root_logger.setLevel(level)
            cls._setup_complete = True

    @classmethod
    def set_log_mode(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        suppress_modules: list[str] | None = None,
    ) -> LogMode:
        """Configure the root level; quiet wins over verbose."""
        if quiet or os.getenv("TESTLENS_QUIET", "").lower() in {"1", "true", "yes"}:
            mode, level = LogMode.QUIET, logging.WARNING
        elif verbose:
            mode, level = LogMode.VERBOSE, logging.DEBUG
        else:
            mode, level = LogMode.NORMAL, logging.INFO

        cls.log_mode = mode
        logging.getLogger().setLevel(level)

        # Third-party debug output only when verbose
        for module in suppress_modules or []:
            logging.getLogger(module).setLevel(
                logging.DEBUG if mode == LogMode.VERBOSE else logging.WARNING
            )
        return mode

    @classmethod
    def reset(cls) -> None:
        """Forget previous setup so the next call reconfigures the root logger."""
        with cls._setup_lock:
            cls._setup_complete = False
            cls._console = None
            cls.log_mode = LogMode.NORMAL


@contextmanager
def operation_context(logger: logging.Logger, operation: str):
    """Log the duration of an operation, or its failure."""
    start_time = time.time()
    logger.debug(f"Starting {operation}")
    try:
        yield
    except Exception as e:
        duration = time.time() - start_time
        logger.error(f"{operation} failed after {duration:.2f}s: {e}")
        raise
    duration = time.time() - start_time
    logger.debug(f"{operation} completed in {duration:.3f}s")


def setup_enhanced_logging(
    console: Console | None = None, level: int = logging.INFO
) -> logging.Logger:
    """Set up the logging system and return the main testlens logger."""
    LoggerManager.setup_global_logging(console, level)
    logger = logging.getLogger("testlens.main")
    logger.propagate = True
    return logger
