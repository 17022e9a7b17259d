"""Partitioning candidate batches by test outcome and ranking the resulting splits."""

from __future__ import annotations

from collections.abc import Collection, Iterator, Sequence
from typing import NamedTuple

from tmsolver.decision_tree.models import Candidate, TestSplit


class SplitResult[S](NamedTuple):
    """A batch partitioned by one test split.

    Attributes:
        split (TestSplit): The split that produced the partition.
        passed (list[Candidate[S]]): Candidates whose outcome matches the split.
        failed (list[Candidate[S]]): All remaining candidates.
    """

    split: TestSplit
    passed: list[Candidate[S]]
    failed: list[Candidate[S]]

    @property
    def is_informative(self) -> bool:
        """Whether both partitions are non-empty, i.e. the test tells candidates apart."""
        return bool(self.passed) and bool(self.failed)

    @property
    def balance(self) -> int:
        """Heuristic value of the split: the size of the smaller partition.

        The more candidates a test is guaranteed to rule out, the more promising
        it is, so evenly balanced splits score highest.
        """
        return min(len(self.passed), len(self.failed))


def split_batch[S](candidates: Sequence[Candidate[S]], split: TestSplit) -> SplitResult[S]:
    """Partition a batch by whether each candidate matches a split.

    Both partitions keep the relative order of `candidates`; nothing is
    deduplicated.

    Args:
        candidates (Sequence[Candidate[S]]): The batch to partition.
        split (TestSplit): The test and the value defining the passed branch.

    Returns:
        SplitResult[S]: The split with its passed and failed partitions.

    Examples:
        >>> batch = [Candidate((0, 1), "a"), Candidate((1, 1), "b"), Candidate((0, 0), "c")]
        >>> result = split_batch(batch, TestSplit(test_id=0, value=0))
        >>> [c.solution for c in result.passed], [c.solution for c in result.failed]
        (['a', 'c'], ['b'])
    """
    passed: list[Candidate[S]] = []
    failed: list[Candidate[S]] = []
    for candidate in candidates:
        if split.matches(candidate.outcome):
            passed.append(candidate)
        else:
            failed.append(candidate)
    return SplitResult(split, passed, failed)


def iter_informative_splits[S](
    candidates: Sequence[Candidate[S]],
    *,
    excluded_tests: Collection[int] = (),
) -> Iterator[SplitResult[S]]:
    """Yield every split of the batch that separates at least two candidates.

    Tests are visited in id order and, per test, the outcome values present in
    the batch in ascending order.

    Args:
        candidates (Sequence[Candidate[S]]): The batch to partition. Must be non-empty.
        excluded_tests (Collection[int]): Test ids that may not be used, e.g.
            tests already performed earlier in the current round.

    Yields:
        SplitResult[S]: Splits whose passed and failed partitions are both non-empty.
    """
    test_count = len(candidates[0].outcome)
    for test_id in range(test_count):
        if test_id in excluded_tests:
            continue
        for value in sorted({candidate.outcome[test_id] for candidate in candidates}):
            result = split_batch(candidates, TestSplit(test_id, value))
            if result.is_informative:
                yield result


def rank_splits[S](splits: Iterator[SplitResult[S]] | Sequence[SplitResult[S]]) -> list[SplitResult[S]]:
    """Order splits from most to least balanced.

    The sort is stable, so splits with equal balance keep their generation order.

    Args:
        splits (Iterator[SplitResult[S]] | Sequence[SplitResult[S]]): Splits to rank.

    Returns:
        list[SplitResult[S]]: The splits, best first.
    """
    return sorted(splits, key=lambda result: result.balance, reverse=True)
