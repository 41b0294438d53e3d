# common/core_utils.py
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the console logging setup used by the installer:
level symbols, optional ANSI colours, and the stdout/stderr split.
"""

import logging
import os
import sys
from typing import Dict, List, Optional

from config.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

SIMPLE_LOG_FORMAT = "{log_prefix}[%(asctime)s] %(symbol)s %(message)s"
DETAILED_LOG_FORMAT = (
    "{log_prefix}[%(asctime)s] %(symbol)s %(levelname)s %(name)s - %(message)s"
)
LOG_DATE_FORMAT = "%H:%M:%S"

ANSI_RESET = "\033[0m"
ANSI_COLORS: Dict[str, str] = {
    "info": "\033[0;34m",
    "success": "\033[0;32m",
    "warning": "\033[1;33m",
    "error": "\033[0;31m",
    "critical": "\033[0;31m",
    "debug": "",
}


class SymbolFormatter(logging.Formatter):
    """
    A custom formatter that adds symbols (and optionally colours) to log
    messages based on the log level.

    INFO records logged with ``extra={"success": True}`` are rendered as
    success lines.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols=None,
        use_color=False,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT
        self.use_color = use_color

    @staticmethod
    def _kind(record: logging.LogRecord) -> str:
        if record.levelno >= logging.CRITICAL:
            return "critical"
        if record.levelno >= logging.ERROR:
            return "error"
        if record.levelno >= logging.WARNING:
            return "warning"
        if record.levelno >= logging.INFO:
            return "success" if getattr(record, "success", False) else "info"
        return "debug"

    def format(self, record):
        kind = self._kind(record)
        record.symbol = self.symbols.get(kind, "")
        formatted = super().format(record)
        color = ANSI_COLORS.get(kind, "") if self.use_color else ""
        if color:
            return f"{color}{formatted}{ANSI_RESET}"
        return formatted


class MaxLevelFilter(logging.Filter):
    """Passes only records strictly below `max_level`."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def stream_supports_color(stream) -> bool:
    """True when `stream` is a terminal and NO_COLOR is not set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def resolve_log_level(level_name: Optional[str]) -> int:
    """Maps a level name such as "debug" to its numeric value, defaulting to INFO."""
    if not level_name:
        return logging.INFO
    numeric_level = getattr(logging, level_name.upper(), None)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def setup_logging(
    log_level: int = logging.INFO,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
    use_color: bool = True,
    stdout=None,
    stderr=None,
) -> None:
    """
    Configures root logging for the installer console.

    Records below ERROR are written to stdout and ERROR or above to stderr.
    Each line carries a timestamp and the level symbol; DEBUG level switches
    to a format that also shows the logger name.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_prefix: Optional[str]
        An optional string to prefix log messages with.
    symbols: Optional[Dict[str, str]]
        Level symbols; SYMBOLS_DEFAULT when omitted.
    use_color: bool
        Colour lines when the target stream is a terminal and NO_COLOR is unset.
    stdout, stderr:
        Streams to write to. Default to sys.stdout and sys.stderr.

    Returns:
    None
    """
    out_stream = stdout if stdout is not None else sys.stdout
    err_stream = stderr if stderr is not None else sys.stderr

    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )
    template = (
        DETAILED_LOG_FORMAT if log_level <= logging.DEBUG else SIMPLE_LOG_FORMAT
    )
    final_format_str = template.format(log_prefix=actual_prefix)

    out_handler = logging.StreamHandler(out_stream)
    out_handler.addFilter(MaxLevelFilter(logging.ERROR))
    out_handler.setFormatter(
        SymbolFormatter(
            fmt=final_format_str,
            datefmt=LOG_DATE_FORMAT,
            symbols=symbols,
            use_color=use_color and stream_supports_color(out_stream),
        )
    )

    err_handler = logging.StreamHandler(err_stream)
    err_handler.setLevel(logging.ERROR)
    err_handler.setFormatter(
        SymbolFormatter(
            fmt=final_format_str,
            datefmt=LOG_DATE_FORMAT,
            symbols=symbols,
            use_color=use_color and stream_supports_color(err_stream),
        )
    )

    handlers: List[logging.Handler] = [out_handler, err_handler]

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
