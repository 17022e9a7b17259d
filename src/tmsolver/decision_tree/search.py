"""Branch-and-bound search for optimal round-constrained decision trees.

The search enumerates candidate trees recursively: every informative split of
a batch is tried, most balanced first, both partitions are solved, and the
resulting subtrees are recombined pairwise. Recombinations that would need two
different values for one test inside a round are rejected, as are round-start
nodes for which no single code can serve the whole round. At the last level of
a round each partition is handed back to the selector as a fresh problem, which
is how consecutive rounds compose.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from loguru import logger

from tmsolver.decision_tree.models import (
    Branch,
    Candidate,
    DecisionTree,
    Leaf,
    OutcomeVector,
    SolutionCatalogue,
    TestSplit,
)
from tmsolver.decision_tree.round_code import OutcomeUniverse, observed_outcomes, resolve_round_code
from tmsolver.decision_tree.splitting import SplitResult, iter_informative_splits, rank_splits
from tmsolver.exceptions import InvalidRoundSizeError, OutcomeVectorLengthError
from tmsolver.logging import SEARCH_LEVEL

# ---------------------------------------------------------------------------
# Public interface -- Tree selection
# ---------------------------------------------------------------------------


def build_optimal_tree[S](
    candidates: Sequence[Candidate[S]],
    catalogue: SolutionCatalogue[S],
    tests_per_round: int,
) -> DecisionTree[S] | None:
    """Build the decision tree identifying each candidate with the fewest tests.

    Trees are ranked by worst-case depth first and summed depth second. Every
    round-start node of the returned tree carries the code to use for the
    whole round.

    Args:
        candidates (Sequence[Candidate[S]]): Remaining candidates. Their outcome
            vectors must have equal length and identify each solution uniquely.
        catalogue (SolutionCatalogue[S]): Every legal input code grouped by the
            outcome vector it produces, used to pick round codes.
        tests_per_round (int): Number of consecutive tests sharing one code.

    Returns:
        DecisionTree[S] | None: The best tree, or `None` when `candidates` is
            empty or no round-consistent tree exists.

    Raises:
        InvalidRoundSizeError: If `tests_per_round` is less than 1.
        OutcomeVectorLengthError: If the outcome vectors differ in length.

    Examples:
        >>> candidates = [Candidate((0,), "a"), Candidate((1,), "b")]
        >>> tree = build_optimal_tree(candidates, {(0,): ["a"], (1,): ["b"]}, tests_per_round=1)
        >>> tree.worst_case_depth(), tree.round_code
        (1, 'a')
    """
    if tests_per_round < 1:
        raise InvalidRoundSizeError(tests_per_round)
    if not candidates:
        logger.warning("No candidates given, cannot build a decision tree")
        return None
    _validate_outcome_lengths(candidates)

    logger.log(
        SEARCH_LEVEL,
        "Searching for an optimal decision tree",
        candidates=len(candidates),
        tests_per_round=tests_per_round,
    )
    search = TreeSearch(
        universe=observed_outcomes(candidates),
        catalogue=catalogue,
        tests_per_round=tests_per_round,
    )
    tree = search.select(candidates)
    if tree is None:
        logger.warning("No round-consistent decision tree exists", candidates=len(candidates))
        return None
    logger.log(
        SEARCH_LEVEL,
        "Decision tree found",
        worst_case_depth=tree.worst_case_depth(),
        summed_depth=tree.summed_depth(),
        subproblems=search.subproblem_count,
    )
    return tree


def information_lower_bound(candidate_count: int) -> int:
    """Return the summed depth of a perfectly balanced tree over `candidate_count` leaves.

    No binary tree over that many leaves has a smaller summed depth, and any
    tree reaching it also has the smallest possible worst-case depth.

    Args:
        candidate_count (int): Number of leaves. Must be at least 1.

    Returns:
        int: The minimal summed depth.

    Raises:
        ValueError: If `candidate_count` is less than 1.

    Examples:
        >>> [information_lower_bound(n) for n in (1, 2, 3, 4, 5)]
        [0, 2, 5, 8, 12]
    """
    if candidate_count < 1:
        raise ValueError(f"candidate_count must be at least 1, got {candidate_count}")
    exponent = candidate_count.bit_length() - 1
    full_level = 1 << exponent
    deep_leaves = 2 * (candidate_count - full_level)
    shallow_leaves = candidate_count - deep_leaves
    return shallow_leaves * exponent + deep_leaves * (exponent + 1)


def tree_rank[S](tree: DecisionTree[S]) -> tuple[int, int]:
    """Sort key ordering trees from best to worst.

    Args:
        tree (DecisionTree[S]): The tree to rank.

    Returns:
        tuple[int, int]: `(worst_case_depth, summed_depth)`.
    """
    return tree.worst_case_depth(), tree.summed_depth()


# ---------------------------------------------------------------------------
# Public interface -- Recursive search
# ---------------------------------------------------------------------------


class TreeSearch[S]:
    """Recursive tree enumeration over one fixed problem instance.

    Holds everything that stays constant while the search recurses: the
    observed outcome values of the original population, the catalogue of legal
    codes and the round size. Sub-problems solved at round boundaries are
    memoised, keyed by the outcome vectors of their batch.

    Examples:
        >>> candidates = [Candidate((0, 0), "a"), Candidate((0, 1), "b"), Candidate((1, 1), "c")]
        >>> catalogue = {c.outcome: [c.solution] for c in candidates}
        >>> search = TreeSearch(universe=observed_outcomes(candidates), catalogue=catalogue, tests_per_round=2)
        >>> tree_rank(search.select(candidates))
        (2, 5)
    """

    def __init__(
        self,
        *,
        universe: OutcomeUniverse,
        catalogue: SolutionCatalogue[S],
        tests_per_round: int,
    ) -> None:
        """Initialize the search.

        Args:
            universe (OutcomeUniverse): Observed values per test across the
                original candidate population.
            catalogue (SolutionCatalogue[S]): Legal codes grouped by outcome vector.
            tests_per_round (int): Number of consecutive tests sharing one code.
        """
        self.universe = universe
        self.catalogue = catalogue
        self.tests_per_round = tests_per_round
        self._selected: dict[tuple[OutcomeVector, ...], DecisionTree[S] | None] = {}

    @property
    def subproblem_count(self) -> int:
        """Number of distinct batches solved by `select` so far."""
        return len(self._selected)

    def select(self, candidates: Sequence[Candidate[S]]) -> DecisionTree[S] | None:
        """Solve a batch as a fresh problem starting a new round.

        Args:
            candidates (Sequence[Candidate[S]]): The batch to solve.

        Returns:
            DecisionTree[S] | None: The best tree for the batch, or `None` when
                the batch is empty or no round-consistent tree exists.
        """
        if not candidates:
            return None
        key = tuple(candidate.outcome for candidate in candidates)
        if key in self._selected:
            return self._selected[key]

        trees = self.search(
            candidates,
            level=0,
            abort_depth=None,
            claimed=(),
            lower_bound=information_lower_bound(len(candidates)),
        )
        best = min(trees, key=tree_rank, default=None)
        self._selected[key] = best
        logger.debug(
            "Sub-problem solved",
            candidates=len(candidates),
            trees=len(trees),
            worst_case_depth=None if best is None else best.worst_case_depth(),
        )
        return best

    def search(
        self,
        candidates: Sequence[Candidate[S]],
        *,
        level: int,
        abort_depth: int | None,
        claimed: tuple[TestSplit, ...],
        lower_bound: int,
    ) -> list[DecisionTree[S]]:
        """Enumerate the candidate trees for a batch at a given depth.

        Args:
            candidates (Sequence[Candidate[S]]): The batch to distinguish. Must
                be non-empty.
            level (int): Depth of the batch's root below the current selector
                root. `level % tests_per_round == 0` marks a round start.
            abort_depth (int | None): Worst-case depth the enclosing root has
                already achieved. Splits that cannot match it are skipped.
            claimed (tuple[TestSplit, ...]): Splits performed earlier in the
                current round on the path to this batch. Their tests cannot be
                used again before the round ends.
            lower_bound (int): Summed depth of a perfectly balanced tree over
                the selector root's batch. Reaching it ends the search at the root.

        Returns:
            list[DecisionTree[S]]: Every tree kept while searching, in the
                order found. Empty when no round-consistent tree exists.
        """
        if len(candidates) == 1:
            return [Leaf(candidates[0].solution)]

        position = level % self.tests_per_round
        starts_round = position == 0
        ends_round = position == self.tests_per_round - 1
        # splits_within window covering the child levels still inside this round
        child_window = self.tests_per_round - position - 2

        claimed_tests = {split.test_id for split in claimed}
        ranked = rank_splits(iter_informative_splits(candidates, excluded_tests=claimed_tests))

        trees: list[DecisionTree[S]] = []
        best_depth: int | None = None
        for result in ranked:
            bound = best_depth if level == 0 else abort_depth
            if bound is not None and not _fits_within(result, bound - 1 - level):
                continue

            passed_trees, failed_trees = self._solve_partitions(
                result,
                level=level,
                bound=bound,
                claimed=claimed,
                ends_round=ends_round,
                lower_bound=lower_bound,
            )
            if not passed_trees or not failed_trees:
                continue

            failed_options = [(tree, _splits_or_empty(tree, child_window)) for tree in failed_trees]
            for passed_tree in passed_trees:
                passed_splits = _splits_or_empty(passed_tree, child_window)
                for failed_tree, failed_splits in failed_options:
                    if _conflicting(passed_splits, failed_splits):
                        logger.trace("Rejected inconsistent round usage", split=result.split, level=level)
                        continue
                    branch = Branch(result.split, passed_tree, failed_tree)
                    depth = branch.worst_case_depth()
                    if best_depth is not None and depth > best_depth:
                        continue
                    if starts_round:
                        round_code = resolve_round_code(
                            self.universe,
                            branch.splits_within(self.tests_per_round - 1),
                            self.catalogue,
                        )
                        if round_code is None:
                            logger.trace("Rejected round without a legal code", split=result.split, level=level)
                            continue
                        branch = branch.with_round_code(round_code)
                    trees.append(branch)
                    best_depth = depth
                    if level == 0 and branch.summed_depth() == lower_bound:
                        return trees
        return trees

    def _solve_partitions(
        self,
        result: SplitResult[S],
        *,
        level: int,
        bound: int | None,
        claimed: tuple[TestSplit, ...],
        ends_round: bool,
        lower_bound: int,
    ) -> tuple[list[DecisionTree[S]], list[DecisionTree[S]]]:
        """Solve both partitions of a split, either within the round or as new problems.

        Returns:
            tuple[list[DecisionTree[S]], list[DecisionTree[S]]]: Candidate trees
                for the passed and failed partitions. The failed partition is
                not searched when the passed one has no tree.
        """
        if ends_round:
            passed_tree = self.select(result.passed)
            if passed_tree is None:
                return [], []
            failed_tree = self.select(result.failed)
            return [passed_tree], [] if failed_tree is None else [failed_tree]

        next_claimed = (*claimed, result.split)
        passed_trees = self.search(
            result.passed,
            level=level + 1,
            abort_depth=bound,
            claimed=next_claimed,
            lower_bound=lower_bound,
        )
        if not passed_trees:
            return [], []
        failed_trees = self.search(
            result.failed,
            level=level + 1,
            abort_depth=bound,
            claimed=next_claimed,
            lower_bound=lower_bound,
        )
        return passed_trees, failed_trees


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _validate_outcome_lengths[S](candidates: Sequence[Candidate[S]]) -> None:
    """Raise `OutcomeVectorLengthError` if the outcome vectors differ in length.

    Args:
        candidates (Sequence[Candidate[S]]): The non-empty candidate batch.

    Raises:
        OutcomeVectorLengthError: On the first candidate whose vector length
            differs from the first candidate's.
    """
    expected_length = len(candidates[0].outcome)
    for index, candidate in enumerate(candidates):
        if len(candidate.outcome) != expected_length:
            raise OutcomeVectorLengthError(
                expected_length=expected_length,
                actual_length=len(candidate.outcome),
                index=index,
            )


def _fits_within[S](result: SplitResult[S], remaining_levels: int) -> bool:
    """Return whether both partitions could still be told apart in `remaining_levels` tests.

    Within `d` levels a binary tree distinguishes at most `2 ** d` candidates.
    """
    if remaining_levels < 0:
        return False
    capacity = 1 << remaining_levels
    return len(result.passed) <= capacity and len(result.failed) <= capacity


def _splits_or_empty[S](tree: DecisionTree[S], window: int) -> frozenset[TestSplit]:
    """Return `tree.splits_within(window)`; a negative window means no child levels are left in the round."""
    if window < 0:
        return frozenset()
    return tree.splits_within(window)


def _conflicting(first: Collection[TestSplit], second: Collection[TestSplit]) -> bool:
    """Return whether two split sets commit one test to different values."""
    committed = {split.test_id: split.value for split in first}
    return any(committed.get(split.test_id, split.value) != split.value for split in second)
