"""Precomputing the candidates and the solution catalogue for a puzzle's rules.

Every code is run through the puzzle's rules once. Codes are then grouped by
the outcome vector they produce: the groups form the solution catalogue used to
pick round codes, and the vectors produced by exactly one code become the
candidates the decision tree has to tell apart.
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from typing import Final

import polars as pl
from loguru import logger

from tmsolver.decision_tree.models import Candidate, OutcomeVector
from tmsolver.game.codes import Code, all_codes
from tmsolver.game.rules import get_rule

CODE_COLUMNS: Final[tuple[str, str, str]] = ("blue", "yellow", "purple")

_TEST_LABELS: Final[str] = string.ascii_uppercase[:6]


def verifier_label(test_id: int) -> str:
    """Return the verifier letter for a 0-based test id.

    Args:
        test_id (int): 0-based index into the active tests.

    Returns:
        str: "A" through "F", or "?" for ids outside the game's six verifiers.

    Examples:
        >>> verifier_label(0), verifier_label(5), verifier_label(6)
        ('A', 'F', '?')
    """
    if 0 <= test_id < len(_TEST_LABELS):
        return _TEST_LABELS[test_id]
    return "?"


def outcome_column_names(test_count: int) -> list[str]:
    """Return the outcome column names used by `evaluate_codes` for `test_count` tests."""
    return [
        f"test_{verifier_label(test_id)}" if test_id < len(_TEST_LABELS) else f"test_{test_id}"
        for test_id in range(test_count)
    ]


def evaluate_codes(rule_numbers: Sequence[int]) -> pl.DataFrame:
    """Evaluate every code against the puzzle's rules.

    Args:
        rule_numbers (Sequence[int]): 1-based rule numbers, one per verifier,
            in verifier order.

    Returns:
        pl.DataFrame: One row per code for which every rule is defined, with
            the columns `blue`, `yellow`, `purple` followed by one outcome
            column per rule (see `outcome_column_names`).

    Raises:
        UnknownRuleError: If any rule number is unknown.

    Examples:
        >>> df = evaluate_codes([1, 5])
        >>> df.columns
        ['blue', 'yellow', 'purple', 'test_A', 'test_B']
        >>> df.height
        125
    """
    rules = [get_rule(number) for number in rule_numbers]
    outcome_columns = outcome_column_names(len(rules))
    codes = all_codes()
    data: dict[str, list[int | None]] = {column: [getattr(code, column) for code in codes] for column in CODE_COLUMNS}
    for column, rule in zip(outcome_columns, rules, strict=True):
        data[column] = [rule.evaluate(code) for code in codes]

    schema = dict.fromkeys([*CODE_COLUMNS, *outcome_columns], pl.Int64)
    evaluated = pl.DataFrame(data, schema=schema).drop_nulls(subset=outcome_columns)
    logger.debug(
        "Codes evaluated",
        rules=list(rule_numbers),
        codes=len(codes),
        defined=evaluated.height,
    )
    return evaluated


def build_solution_catalogue(evaluated: pl.DataFrame) -> dict[OutcomeVector, list[Code]]:
    """Group evaluated codes by the full outcome vector they produce.

    Args:
        evaluated (pl.DataFrame): Output of `evaluate_codes`.

    Returns:
        dict[OutcomeVector, list[Code]]: Every outcome vector mapped to the codes
            producing it, both in order of first appearance.

    Examples:
        >>> catalogue = build_solution_catalogue(evaluate_codes([5, 6, 7]))
        >>> len(catalogue), [str(code) for code in catalogue[(1, 1, 1)][:2]]
        (8, ['111', '311'])
    """
    outcome_columns = [column for column in evaluated.columns if column not in CODE_COLUMNS]
    grouped = evaluated.group_by(outcome_columns, maintain_order=True).agg(pl.col(column) for column in CODE_COLUMNS)

    catalogue: dict[OutcomeVector, list[Code]] = {}
    for row in grouped.iter_rows(named=True):
        vector = tuple(row[column] for column in outcome_columns)
        catalogue[vector] = [
            Code(blue=blue, yellow=yellow, purple=purple)
            for blue, yellow, purple in zip(*(row[column] for column in CODE_COLUMNS), strict=True)
        ]
    return catalogue


def unique_candidates(catalogue: dict[OutcomeVector, list[Code]]) -> list[Candidate[Code]]:
    """Return the candidates whose outcome vector identifies a single code.

    Only those can be a puzzle's solution: a puzzle always has exactly one code
    satisfying all of its verifiers.

    Args:
        catalogue (dict[OutcomeVector, list[Code]]): Output of `build_solution_catalogue`.

    Returns:
        list[Candidate[Code]]: One candidate per uniquely produced outcome vector,
            in catalogue order.
    """
    candidates = [Candidate(vector, codes[0]) for vector, codes in catalogue.items() if len(codes) == 1]
    logger.debug("Unique candidates found", vectors=len(catalogue), candidates=len(candidates))
    return candidates


def candidates_frame(candidates: Sequence[Candidate[Code]]) -> pl.DataFrame:
    """Tabulate candidates with their code digits and outcome vectors.

    Args:
        candidates (Sequence[Candidate[Code]]): Candidates to tabulate. Must
            share one outcome vector length.

    Returns:
        pl.DataFrame: Columns `code`, then one outcome column per test.
    """
    test_count = len(candidates[0].outcome) if candidates else 0
    outcome_columns = outcome_column_names(test_count)
    data: dict[str, list[str] | list[int]] = {"code": [str(candidate.solution) for candidate in candidates]}
    for test_id, column in enumerate(outcome_columns):
        data[column] = [candidate.outcome[test_id] for candidate in candidates]
    return pl.DataFrame(data)
