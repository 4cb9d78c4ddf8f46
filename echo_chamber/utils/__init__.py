"""
Utils Module
============

Contains utility functions and classes:
- Logging configuration
- Custom exceptions
"""

from .logging_config import setup_logging, get_logger
from .exceptions import (
    ChamberBaseException,
    SequenceParseError,
    ConfigurationError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "ChamberBaseException",
    "SequenceParseError",
    "ConfigurationError",
]
