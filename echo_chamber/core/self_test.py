"""
Built-in Self Tests
===================

Runs a fixed list of sequences through a fresh SequencePredictor and checks
each answer. Used by the console menu ("Run automated tests") so users can
confirm the predictor works without touching their own history.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from echo_chamber.core.predictor import SequencePredictor
from echo_chamber.core.schema import Number, Prediction
from echo_chamber.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelfTestOutcome:
    name: str
    sequence: List[Number]
    expected: Optional[Number]
    result: Prediction

    @property
    def passed(self) -> bool:
        # expected=None means the sequence must be rejected
        if self.expected is None:
            return not self.result.success
        return self.result.success and self.result.next_number == self.expected


@dataclass
class SelfTestReport:
    outcomes: List[SelfTestOutcome] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.passed

    @property
    def ok(self) -> bool:
        return self.failed == 0


def run_self_tests(cases: Iterable[Dict]) -> SelfTestReport:
    """
    Run each case against a throwaway predictor.

    Args:
        cases: Dicts with ``name``, ``sequence`` and ``expected`` keys.

    Returns:
        SelfTestReport with one outcome per case, in input order.
    """
    predictor = SequencePredictor()
    report = SelfTestReport()
    for case in cases:
        result = predictor.predict(case["sequence"])
        report.outcomes.append(
            SelfTestOutcome(
                name=case["name"],
                sequence=list(case["sequence"]),
                expected=case["expected"],
                result=result,
            )
        )

    logger.info(f"Self tests finished: {report.passed} passed, {report.failed} failed")
    return report
