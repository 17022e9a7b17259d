"""The criteria a verifier can check, numbered as on the game's criteria cards.

Each rule maps a code to a small outcome class. Two codes get the same check
mark from a verifier exactly when the rule puts them in the same class, so a
rule's outcome for the hidden code is what the deduction tries to pin down.
A rule returns `None` for codes it cannot classify (e.g. a tie for "smallest
digit"); such codes can never be the solution of a puzzle using that rule.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from tmsolver.exceptions import UnknownRuleError
from tmsolver.game.codes import Code

type RuleFunction = Callable[[Code], int | None]


class Rule(NamedTuple):
    """A numbered verifier criterion.

    Attributes:
        number (int): 1-based rule number.
        description (str): Short human-readable summary of what is checked.
        evaluate (RuleFunction): Maps a code to its outcome class.
    """

    number: int
    description: str
    evaluate: RuleFunction


# ---------------------------------------------------------------------------
# Private helpers -- shared criteria
# ---------------------------------------------------------------------------


def _compare(value: int, target: int) -> int:
    """Return 0 if `value < target`, 1 if equal, 2 if greater."""
    if value < target:
        return 0
    if value == target:
        return 1
    return 2


def _parity(value: int) -> int:
    """Return 0 for even values and 1 for odd ones."""
    return value % 2


def _count_digit(code: Code, digit: int) -> int:
    return code.digits.count(digit)


def _strict_extreme(code: Code, *, largest: bool) -> int | None:
    """Return the position of the strictly smallest or largest digit, `None` on a tie."""
    digits = code.digits
    extreme = max(digits) if largest else min(digits)
    if digits.count(extreme) > 1:
        return None
    return digits.index(extreme)


def _repetition(code: Code) -> int:
    """Return 2 if all digits differ, 1 if exactly one pair repeats, 0 for a triple."""
    pairs = (code.blue == code.yellow) + (code.blue == code.purple) + (code.yellow == code.purple)
    if pairs == 0:
        return 2
    if pairs == 1:
        return 1
    return 0


def _odd_count(code: Code) -> int:
    return sum(digit % 2 for digit in code.digits)


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

RULES: tuple[Rule, ...] = (
    Rule(1, "blue compared to 1", lambda code: _compare(code.blue, 1)),
    Rule(2, "blue compared to 3", lambda code: _compare(code.blue, 3)),
    Rule(3, "yellow compared to 3", lambda code: _compare(code.yellow, 3)),
    Rule(4, "yellow compared to 4", lambda code: _compare(code.yellow, 4)),
    Rule(5, "blue is even or odd", lambda code: _parity(code.blue)),
    Rule(6, "yellow is even or odd", lambda code: _parity(code.yellow)),
    Rule(7, "purple is even or odd", lambda code: _parity(code.purple)),
    Rule(8, "how many 1s the code contains", lambda code: _count_digit(code, 1)),
    Rule(9, "how many 3s the code contains", lambda code: _count_digit(code, 3)),
    Rule(10, "how many 4s the code contains", lambda code: _count_digit(code, 4)),
    Rule(11, "blue compared to yellow", lambda code: _compare(code.blue, code.yellow)),
    Rule(12, "blue compared to purple", lambda code: _compare(code.blue, code.purple)),
    Rule(13, "yellow compared to purple", lambda code: _compare(code.yellow, code.purple)),
    Rule(14, "which colour is strictly smallest", lambda code: _strict_extreme(code, largest=False)),
    Rule(15, "which colour is strictly largest", lambda code: _strict_extreme(code, largest=True)),
    Rule(16, "even or odd digits are the majority", lambda code: int(_odd_count(code) >= 2)),
    Rule(17, "how many even digits the code contains", lambda code: 3 - _odd_count(code)),
    Rule(18, "sum of all digits is even or odd", lambda code: _parity(sum(code.digits))),
    Rule(19, "blue + yellow compared to 6", lambda code: _compare(code.blue + code.yellow, 6)),
    Rule(20, "whether a digit repeats", _repetition),
    Rule(21, "whether exactly one pair of digits repeats", lambda code: _repetition(code) % 2),
)


def get_rule(number: int) -> Rule:
    """Look up a rule by its 1-based number.

    Args:
        number (int): The rule number as printed on the criteria card.

    Returns:
        Rule: The matching rule.

    Raises:
        UnknownRuleError: If `number` is outside 1..len(RULES).

    Examples:
        >>> rule = get_rule(11)
        >>> rule.description
        'blue compared to yellow'
        >>> rule.evaluate(Code(blue=4, yellow=2, purple=2))
        2
    """
    if not 1 <= number <= len(RULES):
        raise UnknownRuleError(rule_number=number, rule_count=len(RULES))
    return RULES[number - 1]
