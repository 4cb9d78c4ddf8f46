"""
Interactive Console Interface
=============================

Menu-driven text loop over a SequencePredictor. Lets the user predict the
next number of a typed sequence, browse stored echoes, run the built-in
tests and clear the history.

Usage example:
    from echo_chamber.core import SequencePredictor
    from echo_chamber.interface import ConsoleInterface

    ConsoleInterface(SequencePredictor(), demo_sequence=[3, 6, 9, 12]).start()
"""

from typing import Callable, Dict, List, Optional, Sequence

from echo_chamber.core import SequencePredictor, run_self_tests
from echo_chamber.core.schema import Number, format_number, format_sequence
from echo_chamber.utils import SequenceParseError, get_logger

logger = get_logger(__name__)

RULE = "=" * 60
DEMO_TOKEN = "demo"


def parse_number(token: str) -> Number:
    """Parse one token as int when possible, float otherwise."""
    text = token.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise SequenceParseError(f"Invalid number: {text}", token=text)


def parse_sequence(line: str) -> List[Number]:
    """
    Turn a comma-separated line into a list of numbers.

    Raises:
        SequenceParseError: If any token is not a number.
    """
    return [parse_number(token) for token in line.split(",")]


class ConsoleInterface:
    """
    Text menu for the Echo Chamber.

    Attributes:
        predictor (SequencePredictor): Component that owns the history.
        demo_sequence (List[Number]): Sequence used when the user types "demo".
        test_cases (List[Dict]): Cases for the "Run automated tests" option.
    """

    MENU = (
        "CHOOSE YOUR ACTION:",
        "1. Predict the next number in a sequence",
        "2. View all stored echoes (memories)",
        "3. Run automated tests",
        "4. Clear all memories",
        "5. Exit the chamber",
    )

    def __init__(
        self,
        predictor: SequencePredictor,
        demo_sequence: Sequence[Number] = (),
        test_cases: Optional[List[Dict]] = None,
        input_func: Callable[[str], str] = input,
    ):
        """
        Initialize the console.

        Args:
            predictor: Predictor instance whose history the menu manages.
            demo_sequence: Sequence substituted for the "demo" token.
            test_cases: Built-in test cases, see run_self_tests().
            input_func: Line reader, ``input`` unless scripted (tests).
        """
        self.predictor = predictor
        self.demo_sequence = list(demo_sequence)
        self.test_cases = test_cases or []
        self._input = input_func

    # =========================================================================
    # SCREENS
    # =========================================================================

    def show_welcome(self) -> None:
        print(RULE)
        print("  WELCOME TO THE CHAMBER OF ECHOES")
        print(RULE)
        print("Numbers in this chamber form patterns that echo endlessly.")
        print("Predict the next number of each arithmetic progression;")
        print("the chamber remembers every echo.")
        print(RULE)
        print()

    def show_menu(self) -> None:
        for line in self.MENU:
            print(line)
        print()

    def predict_mode(self) -> None:
        """Read one sequence from the user and print the prediction."""
        print("\nPREDICTION MODE")
        print("Enter numbers separated by commas (e.g. 3,6,9,12)")
        if self.demo_sequence:
            print(f'Or type "{DEMO_TOKEN}" to use {format_sequence(self.demo_sequence)}\n')

        line = self._input("Enter sequence: ").strip()

        if line.lower() == DEMO_TOKEN and self.demo_sequence:
            sequence = list(self.demo_sequence)
            print(f"\nUsing sample sequence: {format_sequence(sequence)}")
        else:
            try:
                sequence = parse_sequence(line)
            except SequenceParseError as e:
                print(f"\nError parsing input: {e.message}")
                return

        result = self.predictor.predict(sequence)
        print(f"\n{result.message}")
        if result.success:
            print(f"Common Difference: {format_number(result.common_difference)}")
        print(RULE + "\n")

    def show_memories(self) -> None:
        print()
        print(self.predictor.format_memories())
        print()

    def run_tests(self) -> None:
        """Run the built-in cases on a throwaway predictor and print a summary."""
        print("\nRunning automated tests...\n")
        report = run_self_tests(self.test_cases)

        for outcome in report.outcomes:
            print(f"Test: {outcome.name}")
            print(f"Input: {format_sequence(outcome.sequence)}")
            if outcome.expected is None:
                verdict = "correctly rejected" if outcome.passed else "should have been rejected"
                print(f"{'PASSED' if outcome.passed else 'FAILED'} ({verdict})")
            elif outcome.passed:
                print(f"Output: {format_number(outcome.result.next_number)}")
                print("PASSED")
            else:
                got = outcome.result.next_number
                print(f"Expected: {outcome.expected}, Got: {got if got is None else format_number(got)}")
                print("FAILED")
            print()

        print(f"TEST RESULTS: {report.passed} passed, {report.failed} failed")
        print(RULE + "\n")

    def clear_memories(self) -> None:
        self.predictor.clear()
        print("\nAll memories have been cleared from the chamber.\n")

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    def start(self) -> None:
        """Show the menu until the user exits or input runs out."""
        self.show_welcome()
        actions = {
            "1": self.predict_mode,
            "2": self.show_memories,
            "3": self.run_tests,
            "4": self.clear_memories,
        }

        while True:
            self.show_menu()
            try:
                choice = self._input("Enter your choice (1-5): ").strip()
                if choice == "5":
                    break
                action = actions.get(choice)
                if action is None:
                    print("\nInvalid choice. Please enter a number between 1 and 5.\n")
                    continue
                action()
            except (EOFError, KeyboardInterrupt):
                logger.debug("Console input closed")
                break

        print("\nThank you for visiting the Chamber of Echoes!\n")
