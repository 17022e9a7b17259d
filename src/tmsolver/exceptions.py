"""Custom exceptions for tmsolver.

All exceptions subclass ValueError and signal a caller passing arguments that
break the solver's contract:

- OutcomeVectorLengthError: Raised when candidates' outcome vectors differ in length.
- InvalidRoundSizeError: Raised when the number of tests per round is not positive.
- UnknownRuleError: Raised when a rule number outside the rule catalogue is requested.
- RuleCountError: Raised when the number of supplied rules is outside the accepted range.

A search that simply finds no tree is not an error; ``build_optimal_tree``
returns ``None`` in that case.
"""

from __future__ import annotations


class OutcomeVectorLengthError(ValueError):
    """Raised when candidates' outcome vectors differ in length.

    Every candidate of one run must report a result for every active test.

    Attributes:
        expected_length (int): Length of the first candidate's outcome vector.
        actual_length (int): Length of the offending candidate's outcome vector.
        index (int): Position of the offending candidate in the batch.

    Examples:
        >>> err = OutcomeVectorLengthError(expected_length=4, actual_length=3, index=7)
        >>> str(err)
        'Candidate 7 has an outcome vector of length 3, expected 4'
    """

    expected_length: int
    actual_length: int
    index: int

    def __init__(self, *, expected_length: int, actual_length: int, index: int) -> None:
        """Initialize OutcomeVectorLengthError.

        Args:
            expected_length (int): Length of the first candidate's outcome vector.
            actual_length (int): Length of the offending candidate's outcome vector.
            index (int): Position of the offending candidate in the batch.
        """
        super().__init__(
            f"Candidate {index} has an outcome vector of length {actual_length}, expected {expected_length}"
        )
        self.expected_length = expected_length
        self.actual_length = actual_length
        self.index = index

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including the expected and actual lengths.
        """
        return (
            f"{self.__class__.__name__}("
            f"expected_length={self.expected_length!r}, actual_length={self.actual_length!r}, index={self.index!r})"
        )


class InvalidRoundSizeError(ValueError):
    """Raised when the number of tests per round is less than 1.

    Attributes:
        tests_per_round (int): The rejected value.

    Examples:
        >>> InvalidRoundSizeError(0).tests_per_round
        0
    """

    tests_per_round: int

    def __init__(self, tests_per_round: int) -> None:
        """Initialize InvalidRoundSizeError.

        Args:
            tests_per_round (int): The rejected value.
        """
        super().__init__(f"tests_per_round must be at least 1, got {tests_per_round}")
        self.tests_per_round = tests_per_round

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including the rejected value.
        """
        return f"{self.__class__.__name__}(tests_per_round={self.tests_per_round!r})"


class UnknownRuleError(ValueError):
    """Raised when a rule number outside 1..rule_count is requested.

    Attributes:
        rule_number (int): The requested rule number.
        rule_count (int): Number of rules in the catalogue; valid numbers are
            1 through `rule_count`.

    Examples:
        >>> err = UnknownRuleError(rule_number=22, rule_count=21)
        >>> str(err)
        'Unknown rule 22, expected a number between 1 and 21'
    """

    rule_number: int
    rule_count: int

    def __init__(self, *, rule_number: int, rule_count: int) -> None:
        """Initialize UnknownRuleError.

        Args:
            rule_number (int): The requested rule number.
            rule_count (int): Number of rules in the catalogue.
        """
        super().__init__(f"Unknown rule {rule_number}, expected a number between 1 and {rule_count}")
        self.rule_number = rule_number
        self.rule_count = rule_count

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including the rule number and catalogue size.
        """
        return f"{self.__class__.__name__}(rule_number={self.rule_number!r}, rule_count={self.rule_count!r})"


class RuleCountError(ValueError):
    """Raised when the number of supplied rules falls outside the accepted range.

    Attributes:
        provided (int): Number of rules supplied.
        minimum (int): Fewest rules accepted.
        maximum (int): Most rules accepted.

    Examples:
        >>> str(RuleCountError(provided=3, minimum=4, maximum=6))
        'Got 3 rules, expected between 4 and 6'
    """

    provided: int
    minimum: int
    maximum: int

    def __init__(self, *, provided: int, minimum: int, maximum: int) -> None:
        """Initialize RuleCountError.

        Args:
            provided (int): Number of rules supplied.
            minimum (int): Fewest rules accepted.
            maximum (int): Most rules accepted.
        """
        super().__init__(f"Got {provided} rules, expected between {minimum} and {maximum}")
        self.provided = provided
        self.minimum = minimum
        self.maximum = maximum

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including the provided count and the accepted range.
        """
        return (
            f"{self.__class__.__name__}("
            f"provided={self.provided!r}, minimum={self.minimum!r}, maximum={self.maximum!r})"
        )
