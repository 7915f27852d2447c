"""
Unified Logging Configuration for Paperless Summarizer

This module provides a centralized logging system that combines:
- Console output with timestamps (stderr, so streamed summaries on stdout stay clean)
- File output to logs/processing.log under the application data directory
- Timing of long operations via the Timer context manager

All modules should import logging functions from this module:
    from paperless_summarizer.logging_config import debug_log, info, warning, error, Timer

The module respects DEBUG_MODE from config:
- DEBUG_MODE=True: Debug messages shown on console, verbose timing
- DEBUG_MODE=False: Info, warnings and errors shown on console

Log Levels:
- debug_log(): Detailed flow messages; console only in DEBUG_MODE
- info(): Standard progress messages
- warning(): Warning messages (always shown)
- error(): Error messages with optional exception info
- critical(): Critical errors (always shown with traceback)
"""

import logging
import sys
import time

from paperless_summarizer.config import DEBUG_MODE, LOG_DATE_FORMAT, LOG_FILE, LOG_FORMAT


# =============================================================================
# Standard Python Logging Setup
# =============================================================================

def _setup_standard_logging() -> logging.Logger:
    """
    Configure the standard Python logging framework.

    Returns:
        Configured logger instance for Paperless Summarizer
    """
    logger = logging.getLogger('PaperlessSummarizer')
    logger.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)

    # Prevent duplicate handlers if called multiple times
    if logger.handlers:
        return logger

    # File handler (always active for production logs)
    try:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)
    except OSError:
        pass  # Read-only home or container: console logging only

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if DEBUG_MODE else logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(console_handler)

    return logger


# Global standard logger instance
_logger = _setup_standard_logging()


# =============================================================================
# Timer Context Manager
# =============================================================================

class Timer:
    """
    Context manager for timing code blocks with automatic logging.

    Usage:
        with Timer("Summarize document 42"):
            # code to time
            pass

    Output (DEBUG_MODE=True):
        [DEBUG 14:32:01] Starting Summarize document 42...
        [DEBUG 14:32:09] Summarize document 42 took 8.1 seconds

    Attributes:
        operation_name: Name of the operation being timed
        duration_ms: Duration in milliseconds (available after exit)
    """

    def __init__(self, operation_name: str, auto_log: bool = True):
        """
        Initialize the timer.

        Args:
            operation_name: Descriptive name for the operation
            auto_log: If True, automatically log start/end at debug level
        """
        self.operation_name = operation_name
        self.auto_log = auto_log
        self.start_time: float | None = None
        self.end_time: float | None = None
        self.duration_ms: float | None = None

    def __enter__(self):
        if self.auto_log:
            debug_log(f"Starting {self.operation_name}...")
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        self.duration_ms = (self.end_time - self.start_time) * 1000

        if self.auto_log:
            if self.duration_ms < 1000:
                duration_str = f"{self.duration_ms:.0f} ms"
            else:
                duration_str = f"{self.duration_ms / 1000:.1f} seconds"

            debug_log(f"{self.operation_name} took {duration_str}")

        return False  # Don't suppress exceptions


# =============================================================================
# Public Logging Functions
# =============================================================================

def debug_log(message: str):
    """
    Log a debug message.

    Always reaches the log file; reaches the console only in DEBUG_MODE.

    Args:
        message: The message to log (prefix with [COMPONENT] for clarity)

    Example:
        debug_log("[SCAN] Fetching https://paperless.local/api/documents/?page=2")
    """
    _logger.debug(message)


def info(message: str):
    """Log an informational message."""
    _logger.info(message)


def warning(message: str):
    """Log a warning message."""
    _logger.warning(message)


def error(message: str, exc_info: bool = False):
    """
    Log an error message with optional exception traceback.

    Args:
        message: The error message to log
        exc_info: If True, include exception traceback (only in DEBUG_MODE)
    """
    _logger.error(message, exc_info=exc_info and DEBUG_MODE)


def critical(message: str, exc_info: bool = True):
    """
    Log a critical error with exception traceback.

    Args:
        message: The critical error message
        exc_info: If True, include exception traceback (only in DEBUG_MODE)
    """
    _logger.critical(message, exc_info=exc_info and DEBUG_MODE)


__all__ = [
    'debug_log',
    'info',
    'warning',
    'error',
    'critical',
    'Timer',
    'DEBUG_MODE',
]
