"""
Logging Setup
=============

One place that decides where Echo Chamber log records go. The console menu
and the HTTP server both call ``setup_logging`` once at startup; modules then
take their logger from ``get_logger(__name__)``.

Records are written to stderr so they never interleave with the menu or the
answers printed on stdout. Level names are coloured only when stderr is a
terminal, unless the caller forces it either way.

Usage:
    from echo_chamber.utils import setup_logging, get_logger

    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Echo chamber started")
"""

import copy
import logging
import sys
from typing import List, Optional, TextIO


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "multipart", "watchfiles")


class ColoredFormatter(logging.Formatter):
    """
    Formatter that paints the level name with an ANSI colour.

    The record is copied before it is decorated, so a file handler on the
    same logger still receives the plain level name.
    """

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname)
        if self.use_colors and color:
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


def _wants_colors(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _console_handler(stream: TextIO, level: int, use_colors: Optional[bool]) -> logging.Handler:
    if use_colors is None:
        use_colors = _wants_colors(stream)
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(use_colors=use_colors))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> List[logging.Handler]:
    """
    Configure the root logger for the whole application.

    Calling it again replaces the previous handlers instead of stacking
    new ones on top.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        log_file: Optional path of a plain-text log file.
        use_colors: Force coloured level names on or off. None means
            colour only when the console stream is a terminal.
        stream: Console stream, stderr by default.

    Returns:
        The handlers now attached to the root logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers = [_console_handler(stream or sys.stderr, numeric_level, use_colors)]
    if log_file:
        handlers.append(_file_handler(log_file, numeric_level))

    root_logger = logging.getLogger()
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        old.close()
    root_logger.setLevel(numeric_level)
    for handler in handlers:
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handlers


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; records reach the handlers set by ``setup_logging``."""
    return logging.getLogger(name)
