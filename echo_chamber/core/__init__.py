"""
Core Module
===========

Contains the sequence predictor, its result types and the built-in self tests.
"""

from .schema import Memory, Prediction, ValidationResult
from .predictor import SequencePredictor
from .self_test import SelfTestReport, run_self_tests

__all__ = [
    "SequencePredictor",
    "ValidationResult",
    "Prediction",
    "Memory",
    "SelfTestReport",
    "run_self_tests",
]
