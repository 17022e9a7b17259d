"""Resolving a single input code that serves every test of a round.

All tests of one round are evaluated against the same code, chosen before any
of the round's results are known. The tree may branch inside a round, so the
code has to produce the committed value for every split the round could
possibly use, whichever branch play ends up taking.
"""

from __future__ import annotations

import itertools
from collections.abc import Collection, Iterator, Sequence

from tmsolver.decision_tree.models import Candidate, OutcomeVector, SolutionCatalogue, TestSplit

type OutcomeUniverse = tuple[tuple[int, ...], ...]


def observed_outcomes[S](candidates: Sequence[Candidate[S]]) -> OutcomeUniverse:
    """Collect the outcome values observed for each test across a batch.

    Args:
        candidates (Sequence[Candidate[S]]): The candidate population. Must be non-empty.

    Returns:
        OutcomeUniverse: One ascending tuple of distinct values per test id.

    Examples:
        >>> observed_outcomes([Candidate((0, 2), "a"), Candidate((1, 2), "b"), Candidate((0, 1), "c")])
        ((0, 1), (1, 2))
    """
    test_count = len(candidates[0].outcome)
    return tuple(
        tuple(sorted({candidate.outcome[test_id] for candidate in candidates})) for test_id in range(test_count)
    )


def iter_outcome_vectors(universe: OutcomeUniverse, committed: Collection[TestSplit]) -> Iterator[OutcomeVector]:
    """Enumerate complete outcome vectors compatible with the committed splits.

    Tests named by a committed split are fixed to the committed value; every
    other test ranges over its observed values, since it has not been assigned
    to this round yet and any value is acceptable.

    Args:
        universe (OutcomeUniverse): Observed values per test id.
        committed (Collection[TestSplit]): Splits already committed for the round.

    Yields:
        OutcomeVector: Candidate vectors in lexicographic order of the choices.
            Nothing is yielded when two committed splits disagree on one test.

    Examples:
        >>> list(iter_outcome_vectors(((0, 1), (0, 1, 2)), [TestSplit(1, 2)]))
        [(0, 2), (1, 2)]
    """
    choices = [list(values) for values in universe]
    fixed: dict[int, int] = {}
    for test_id, value in committed:
        if fixed.setdefault(test_id, value) != value:
            return
        choices[test_id] = [value]
    yield from itertools.product(*choices)


def resolve_round_code[S](
    universe: OutcomeUniverse,
    committed: Collection[TestSplit],
    catalogue: SolutionCatalogue[S],
) -> S | None:
    """Find an input code reproducing every committed split of a round.

    Args:
        universe (OutcomeUniverse): Observed values per test id across the
            original candidate population.
        committed (Collection[TestSplit]): Splits the round may use, typically
            `branch.splits_within(tests_per_round - 1)` of a round-start node.
        catalogue (SolutionCatalogue[S]): Every legal code grouped by the full
            outcome vector it produces. Codes sharing a vector are just as
            usable as unique ones.

    Returns:
        S | None: The first catalogued code whose outcome vector is
            compatible, or `None` when no legal code exists.

    Examples:
        >>> catalogue = {(0, 0): ["x"], (1, 2): ["y", "z"]}
        >>> resolve_round_code(((0, 1), (0, 2)), {TestSplit(1, 2)}, catalogue)
        'y'
        >>> resolve_round_code(((0, 1), (0, 2)), {TestSplit(0, 0), TestSplit(1, 2)}, catalogue) is None
        True
    """
    for vector in iter_outcome_vectors(universe, committed):
        codes = catalogue.get(vector)
        if codes:
            return codes[0]
    return None
