"""
Result Schema
=============

Every answer the predictor gives is wrapped in one of these dataclasses.
Keeps the output contract explicit so the adapters (console menu, HTTP API)
always know what to expect.

``to_dict()`` produces the JSON shape served by the API, with camelCase keys
matching the web page.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

Number = Union[int, float]


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    difference: Optional[Number] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "difference": self.difference,
            "message": self.message,
        }


@dataclass(frozen=True)
class Prediction:
    success: bool
    next_number: Optional[Number] = None
    common_difference: Optional[Number] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "nextNumber": self.next_number,
            "commonDifference": self.common_difference,
            "message": self.message,
        }


@dataclass(frozen=True)
class Memory:
    """One stored echo: a successful prediction and when it happened."""

    sequence: Tuple[Number, ...]
    next_number: Number
    common_difference: Number
    timestamp: datetime
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": list(self.sequence),
            "nextNumber": self.next_number,
            "commonDifference": self.common_difference,
            "timestamp": self.timestamp.isoformat(),
            "index": self.index,
        }

    def summary(self) -> str:
        """One-liner for logging."""
        return (
            f"echo #{self.index}: {format_sequence(self.sequence)} "
            f"-> {format_number(self.next_number)} (d={format_number(self.common_difference)})"
        )


# Whole floats at or above this print in repr form (1e+16) instead of fake digits
WHOLE_FLOAT_LIMIT = 1e16


def format_number(value: Number) -> str:
    """Render small whole floats without the trailing ``.0``."""
    if isinstance(value, float) and value.is_integer() and abs(value) < WHOLE_FLOAT_LIMIT:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_sequence(sequence) -> str:
    return "[" + ", ".join(format_number(v) for v in sequence) + "]"
