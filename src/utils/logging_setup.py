"""
Encoding-Safe Logging Utility

Configures console and file logging for the triage engine. Rendered
response drafts and scenario data contain bullets, box rules and en
dashes; on consoles with limited encoding support those characters are
replaced with ASCII equivalents before the record is written.
"""

import logging
import os
import platform
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class SafeFormatter(logging.Formatter):
    """
    Log formatter with encoding-safe character substitution.

    Substitution applies when FORCE_ASCII_LOGGING is set, when running
    in a legacy Windows console, or when the output stream encoding cannot
    represent the characters.
    """

    SYMBOL_MAP = {
        "•": "*",
        "–": "-",
        "—": "-",
        "━": "=",
        "═": "=",
        "→": "->",
        "←": "<-",
        "’": "'",
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 stream_encoding: Optional[str] = None):
        super().__init__(fmt or DEFAULT_FORMAT, datefmt)
        self.is_windows = platform.system() == "Windows"
        self.force_ascii = os.environ.get("FORCE_ASCII_LOGGING", "0").lower() in ("1", "true", "yes")
        self.stream_encoding = stream_encoding or getattr(sys.stderr, "encoding", None) or "utf-8"
        self.limited_encoding = self._has_limited_encoding()

    def _has_limited_encoding(self) -> bool:
        if self.force_ascii:
            return True

        if self.is_windows:
            if "WT_SESSION" in os.environ:
                return False
            if os.environ.get("PYTHONIOENCODING", "").lower() == "utf-8":
                return False
            return True

        return self.stream_encoding.lower().replace("-", "") not in ("utf8", "utf16", "utf32")

    def format(self, record: logging.LogRecord) -> str:
        formatted_message = super().format(record)
        if self.limited_encoding:
            for unicode_char, ascii_char in self.SYMBOL_MAP.items():
                formatted_message = formatted_message.replace(unicode_char, ascii_char)
        return formatted_message


def configure_safe_logging(
    name: Optional[str] = None,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    format_str: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with encoding-safe formatting.

    Args:
        name: Logger name (defaults to root logger if None)
        level: Logging level
        log_file: Optional log file path
        format_str: Custom format string for log messages

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = SafeFormatter(format_str)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(format_str or DEFAULT_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to create log file handler: {str(e)}")

    return logger


def resolve_level(level_name: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as "DEBUG" to its numeric value."""
    if not level_name:
        return default
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else default
