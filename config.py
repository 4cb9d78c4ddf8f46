"""
Configuration file for Echo Chamber
Contains the demo sequence, built-in test cases and runtime settings
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from echo_chamber.utils.exceptions import ConfigurationError

APP_TITLE = "Echo Chamber"
APP_VERSION = "1.0.0"

# Sequence used by "demo" in the console and by GET /api/test
DEMO_SEQUENCE = [3, 6, 9, 12]

# Built-in regression cases (expected=None means the sequence must be rejected)
SELF_TEST_CASES = [
    {"name": "Simple Arithmetic Progression", "sequence": [3, 6, 9, 12], "expected": 15},
    {"name": "Negative Differences", "sequence": [10, 7, 4, 1], "expected": -2},
    {"name": "Large Numbers", "sequence": [100, 200, 300, 400], "expected": 500},
    {"name": "Negative Numbers", "sequence": [-5, -3, -1, 1], "expected": 3},
    {"name": "Single Difference", "sequence": [1, 2], "expected": 3},
    {"name": "Not an Arithmetic Progression", "sequence": [1, 2, 4, 8], "expected": None},
]

# Example sequences offered on the web page
EXAMPLE_SEQUENCES = [case["sequence"] for case in SELF_TEST_CASES if case["expected"] is not None]

# Runtime defaults (overridable from .env / environment)
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build Settings from a .env file and the process environment.

    Variables: ECHO_HOST, PORT, LOG_LEVEL, LOG_FILE. Values already present
    in the environment win over the .env file.

    Raises:
        ConfigurationError: If PORT is not an integer in 1-65535 or
            LOG_LEVEL is not a known level name.
    """
    load_dotenv(dotenv_path)

    raw_port = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError("PORT must be an integer", key="PORT", details={"provided": raw_port})
    if not 0 < port < 65536:
        raise ConfigurationError("PORT must be between 1 and 65535", key="PORT", details={"provided": port})

    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            "Unknown LOG_LEVEL",
            key="LOG_LEVEL",
            details={"provided": log_level, "expected": list(LOG_LEVELS)},
        )

    return Settings(
        host=os.getenv("ECHO_HOST", DEFAULT_HOST),
        port=port,
        log_level=log_level,
        log_file=os.getenv("LOG_FILE") or None,
    )
