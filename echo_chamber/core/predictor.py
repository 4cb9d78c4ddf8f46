"""
SequencePredictor - Arithmetic Progression Core
===============================================

This module contains the SequencePredictor class, which validates candidate
sequences, predicts the next term of an arithmetic progression and keeps an
ordered history of past predictions ("echoes").

SequencePredictor is the only stateful piece of the application. The console
menu and the HTTP API are thin adapters that call into it and format its
results.

Usage example:
    from echo_chamber.core import SequencePredictor

    predictor = SequencePredictor()
    result = predictor.predict([3, 6, 9, 12])
    result.next_number        # 15
    predictor.list_memories() # [Memory(index=1, ...)]
"""

import math
import numbers
import threading
from datetime import datetime, timezone
from typing import Any, List

from echo_chamber.core.schema import (
    Memory,
    Prediction,
    ValidationResult,
    format_number,
    format_sequence,
)
from echo_chamber.utils import get_logger

logger = get_logger(__name__)

# Validation messages, one per failure kind
MSG_NOT_A_SEQUENCE = "Error: Input must be a list of numbers"
MSG_TOO_SHORT = "Error: Sequence must contain at least 2 numbers"
MSG_NOT_NUMERIC = "Error: All elements must be valid numbers"
MSG_NOT_ARITHMETIC = (
    "Error: This is not an arithmetic progression. "
    "The differences between consecutive numbers are not constant."
)
MSG_VALID = "Valid arithmetic progression detected!"
MSG_OUT_OF_RANGE = "Error: Numbers are too large to predict the next term"

MIN_LENGTH = 2


def _is_finite(value) -> bool:
    # math.isfinite overflows on ints too large for a float
    return isinstance(value, numbers.Integral) or math.isfinite(value)


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but True/False are not sequence terms
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return _is_finite(value)


class SequencePredictor:
    """
    Predicts the next term of arithmetic progressions and remembers each one.

    Validation and prediction never raise for bad input: every failure is
    reported through a result object with ``is_valid``/``success`` set to
    False and a human-readable message.

    Differences are compared with exact equality, so float sequences whose
    steps differ only by representation error (``[0.1, 0.2, 0.3]``) are
    rejected.

    Attributes:
        prediction_count (int): Number of successful predictions since
            creation or the last clear.
    """

    def __init__(self):
        self._memories: List[Memory] = []
        self._prediction_count = 0
        # FastAPI runs sync work on a threadpool; guards append/clear
        self._lock = threading.Lock()

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self, sequence: Any) -> ValidationResult:
        """
        Check whether ``sequence`` is an arithmetic progression.

        Checks run in order: the input is a list or tuple, it has at least
        two elements, every element is a finite real number, and every
        consecutive difference equals the first one.

        Args:
            sequence: Candidate sequence. Anything is accepted; non-sequences
                are reported as invalid.

        Returns:
            ValidationResult with the common difference when valid.
        """
        if not isinstance(sequence, (list, tuple)):
            return ValidationResult(is_valid=False, message=MSG_NOT_A_SEQUENCE)

        if len(sequence) < MIN_LENGTH:
            return ValidationResult(is_valid=False, message=MSG_TOO_SHORT)

        if not all(_is_finite_number(v) for v in sequence):
            return ValidationResult(is_valid=False, message=MSG_NOT_NUMERIC)

        try:
            differences = [sequence[i] - sequence[i - 1] for i in range(1, len(sequence))]
        except OverflowError:
            # huge int mixed with a float
            return ValidationResult(is_valid=False, message=MSG_OUT_OF_RANGE)
        first = differences[0]
        if not _is_finite(first):
            return ValidationResult(is_valid=False, message=MSG_OUT_OF_RANGE)
        if any(d != first for d in differences):
            return ValidationResult(is_valid=False, message=MSG_NOT_ARITHMETIC)

        return ValidationResult(is_valid=True, difference=first, message=MSG_VALID)

    # =========================================================================
    # PREDICTION
    # =========================================================================

    def predict(self, sequence: Any) -> Prediction:
        """
        Predict the next number and record the prediction as a memory.

        Args:
            sequence: Candidate sequence, see validate().

        Returns:
            Prediction with ``next_number = last + difference`` on success,
            or the validation message on failure.
        """
        validation = self.validate(sequence)
        if not validation.is_valid:
            logger.debug(f"Rejected sequence: {validation.message}")
            return Prediction(success=False, message=validation.message)

        difference = validation.difference
        try:
            next_number = sequence[-1] + difference
        except OverflowError:
            next_number = math.inf
        if not _is_finite(next_number):
            logger.debug(f"Next term overflows: {sequence[-1]} + {difference}")
            return Prediction(success=False, message=MSG_OUT_OF_RANGE)

        with self._lock:
            memory = Memory(
                sequence=tuple(sequence),
                next_number=next_number,
                common_difference=difference,
                timestamp=datetime.now(timezone.utc),
                index=self._prediction_count + 1,
            )
            self._memories.append(memory)
            self._prediction_count += 1

        logger.info(f"Stored {memory.summary()}")

        return Prediction(
            success=True,
            next_number=next_number,
            common_difference=difference,
            message=f"The next number in the sequence is: {format_number(next_number)}",
        )

    # =========================================================================
    # MEMORY / HISTORY
    # =========================================================================

    @property
    def prediction_count(self) -> int:
        return self._prediction_count

    def list_memories(self) -> List[Memory]:
        """Return every stored memory, oldest first, as a new list."""
        with self._lock:
            return list(self._memories)

    def clear(self) -> None:
        """Forget all memories and restart indexing at 1."""
        with self._lock:
            dropped = len(self._memories)
            self._memories = []
            self._prediction_count = 0
        logger.info(f"Cleared {dropped} memories")

    def format_memories(self) -> str:
        """
        Render the history as a human-readable block for the console.

        Returns:
            Multi-line string, or a single line when the history is empty.
        """
        memories = self.list_memories()
        if not memories:
            return "No echoes stored in the chamber yet."

        lines = ["===== ECHO CHAMBER MEMORIES ====="]
        for memory in memories:
            lines.extend([
                "",
                f"Echo {memory.index}:",
                f"   Sequence: {format_sequence(memory.sequence)}",
                f"   Common Difference: {format_number(memory.common_difference)}",
                f"   Next Number: {format_number(memory.next_number)}",
                f"   Time: {memory.timestamp.astimezone().strftime('%H:%M:%S')}",
            ])
        lines.extend(["", "=" * 33])
        return "\n".join(lines)


__all__ = ["SequencePredictor"]
