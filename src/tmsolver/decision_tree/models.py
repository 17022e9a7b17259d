"""Value types for decision tree construction and pydantic report models for the presentation layer."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import NamedTuple

from pydantic import BaseModel, Field, model_validator

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type OutcomeVector = tuple[int, ...]

type SolutionCatalogue[S] = Mapping[OutcomeVector, Sequence[S]]

type DecisionTree[S] = Leaf[S] | Branch[S]

# ---------------------------------------------------------------------------
# Public value types
# ---------------------------------------------------------------------------


class TestSplit(NamedTuple):
    """A test together with the outcome value that defines its "passed" branch.

    Attributes:
        test_id (int): 0-based index into the active test catalogue.
        value (int): The outcome value a candidate must produce at `test_id`
            to land in the passed branch.

    Examples:
        >>> split = TestSplit(test_id=1, value=2)
        >>> split.matches((0, 2, 1))
        True
        >>> split.matches((0, 1, 1))
        False
    """

    __test__ = False  # keeps pytest from collecting this class

    test_id: int
    value: int

    def matches(self, outcome: OutcomeVector) -> bool:
        """Return whether an outcome vector falls into this split's passed branch.

        Args:
            outcome (OutcomeVector): Full outcome vector of one solution.

        Returns:
            bool: `True` if `outcome[test_id] == value`.
        """
        return outcome[self.test_id] == self.value


@dataclass(frozen=True)
class Candidate[S]:
    """A surviving hypothesis paired with the outcome vector it produces.

    Attributes:
        outcome (OutcomeVector): Results the solution yields for every active test.
        solution (S): The hidden solution this candidate stands for.
    """

    outcome: OutcomeVector
    solution: S


class _TreeMetrics(NamedTuple):
    worst_case_depth: int
    summed_depth: int
    node_count: int
    leaf_count: int


@dataclass(frozen=True)
class Leaf[S]:
    """Terminal node identifying a unique solution.

    Attributes:
        solution (S): The solution reached at this leaf.
    """

    solution: S

    def worst_case_depth(self) -> int:
        """Return 0; a leaf needs no further tests."""
        return 0

    def summed_depth(self) -> int:
        """Return 0; a leaf contributes no path length of its own."""
        return 0

    def node_count(self) -> int:
        """Return 1."""
        return 1

    def leaf_count(self) -> int:
        """Return 1."""
        return 1

    def splits_within(self, window: int) -> frozenset[TestSplit]:  # noqa: ARG002
        """Return the empty set; a leaf performs no test."""
        return frozenset()

    def solutions(self) -> Iterator[S]:
        """Yield the single solution held by this leaf."""
        yield self.solution


@dataclass(frozen=True)
class Branch[S]:
    """Internal node naming one test and the two subtrees for its outcomes.

    A branch exclusively owns both children. Structural metrics are computed
    once per node on first access and reused afterwards, since the search
    queries them repeatedly while recombining subtrees.

    Attributes:
        split (TestSplit): The test to perform and the value defining "passed".
        passed (DecisionTree[S]): Subtree for candidates matching `split`.
        failed (DecisionTree[S]): Subtree for all remaining candidates.
        round_code (S | None): Input value to use for every test of the round
            starting at this node. Only set on round-start nodes.
    """

    split: TestSplit
    passed: DecisionTree[S]
    failed: DecisionTree[S]
    round_code: S | None = None

    @cached_property
    def _metrics(self) -> _TreeMetrics:
        leaf_count = self.passed.leaf_count() + self.failed.leaf_count()
        return _TreeMetrics(
            worst_case_depth=1 + max(self.passed.worst_case_depth(), self.failed.worst_case_depth()),
            # every leaf below this node is one level deeper than it is in its subtree
            summed_depth=self.passed.summed_depth() + self.failed.summed_depth() + leaf_count,
            node_count=1 + self.passed.node_count() + self.failed.node_count(),
            leaf_count=leaf_count,
        )

    def worst_case_depth(self) -> int:
        """Return the length of the longest root-to-leaf path.

        Returns:
            int: `1 + max(passed, failed)` worst-case depth.
        """
        return self._metrics.worst_case_depth

    def summed_depth(self) -> int:
        """Return the sum of all root-to-leaf path lengths.

        Dividing by `leaf_count()` gives the average number of tests needed to
        identify a solution, which makes this the tie-breaker among trees of
        equal worst-case depth.

        Returns:
            int: Total path length over all leaves.
        """
        return self._metrics.summed_depth

    def node_count(self) -> int:
        """Return the number of nodes, branches and leaves alike."""
        return self._metrics.node_count

    def leaf_count(self) -> int:
        """Return the number of leaves, i.e. distinguishable solutions."""
        return self._metrics.leaf_count

    def splits_within(self, window: int) -> frozenset[TestSplit]:
        """Collect the splits used from this node down `window` additional levels.

        Args:
            window (int): Number of levels below this node to include. `0`
                returns only this node's own split.

        Returns:
            frozenset[TestSplit]: Every split appearing in the window.

        Examples:
            >>> tree = Branch(TestSplit(0, 1), Leaf("a"), Branch(TestSplit(1, 0), Leaf("b"), Leaf("c")))
            >>> sorted(tree.splits_within(0))
            [TestSplit(test_id=0, value=1)]
            >>> sorted(tree.splits_within(1))
            [TestSplit(test_id=0, value=1), TestSplit(test_id=1, value=0)]
        """
        if window <= 0:
            return frozenset((self.split,))
        return frozenset((self.split,)) | self.passed.splits_within(window - 1) | self.failed.splits_within(window - 1)

    def solutions(self) -> Iterator[S]:
        """Yield every leaf solution, passed subtree first."""
        yield from self.passed.solutions()
        yield from self.failed.solutions()

    def child(self, *, passed: bool) -> DecisionTree[S]:
        """Return the subtree to continue with after performing this node's test.

        Args:
            passed (bool): Whether the test yielded `split.value`.

        Returns:
            DecisionTree[S]: `self.passed` or `self.failed`.
        """
        return self.passed if passed else self.failed

    def with_round_code(self, round_code: S) -> Branch[S]:
        """Return a copy of this branch carrying `round_code`."""
        return dataclasses.replace(self, round_code=round_code)


# ---------------------------------------------------------------------------
# Public report models
# ---------------------------------------------------------------------------


class PathStep(BaseModel):
    """One test performed on the way from the root to a leaf.

    Attributes:
        test_id (int): 0-based index of the test performed.
        value (int): Outcome value defining the passed branch of that test.
        passed (bool): Whether this path follows the passed branch.
        round_code (str | None): Rendered round code when this step starts a
            round, otherwise `None`.
    """

    test_id: int = Field(ge=0, description="0-based index of the test performed at this step.")
    value: int = Field(ge=0, description="Outcome value that defines the passed branch of the test.")
    passed: bool = Field(description="Whether this path follows the passed branch of the test.")
    round_code: str | None = Field(
        default=None,
        description="Code to use for all tests of the round starting at this step; null mid-round.",
    )


class DecisionPath(BaseModel):
    """The sequence of test results leading to one solution.

    Attributes:
        steps (list[PathStep]): Tests in the order they are performed. Empty
            when the tree is a single leaf.
        solution (str): Rendered solution identified at the end of the path.
    """

    steps: list[PathStep] = Field(description="Tests in the order they are performed, root first.")
    solution: str = Field(description="Solution identified at the end of the path.")

    @property
    def depth(self) -> int:
        """Number of tests needed to reach this solution."""
        return len(self.steps)


class TreeReport(BaseModel):
    """Serializable summary of a decision tree.

    Attributes:
        worst_case_depth (int): Longest root-to-leaf path length.
        summed_depth (int): Sum of all root-to-leaf path lengths.
        node_count (int): Number of nodes in the tree.
        leaf_count (int): Number of solutions the tree distinguishes.
        paths (list[DecisionPath]): One path per leaf, passed branches first.

    Examples:
        >>> report = TreeReport(
        ...     worst_case_depth=1,
        ...     summed_depth=2,
        ...     node_count=3,
        ...     leaf_count=2,
        ...     paths=[
        ...         DecisionPath(steps=[PathStep(test_id=0, value=1, passed=True, round_code="111")], solution="a"),
        ...         DecisionPath(steps=[PathStep(test_id=0, value=1, passed=False, round_code="111")], solution="b"),
        ...     ],
        ... )
        >>> report.paths[1].depth
        1
    """

    worst_case_depth: int = Field(ge=0, description="Longest root-to-leaf path length.")
    summed_depth: int = Field(ge=0, description="Sum of all root-to-leaf path lengths.")
    node_count: int = Field(ge=1, description="Number of nodes, branches and leaves alike.")
    leaf_count: int = Field(ge=1, description="Number of solutions distinguished by the tree.")
    paths: list[DecisionPath] = Field(description="One path per leaf, passed branches first.")

    @model_validator(mode="after")
    def _validate_paths_match_metrics(self) -> TreeReport:
        """Validate that the per-leaf paths agree with the aggregate metrics.

        Returns:
            TreeReport: The validated model instance.

        Raises:
            ValueError: If the number of paths differs from `leaf_count`, the
                longest path differs from `worst_case_depth`, the path lengths
                do not add up to `summed_depth`, or `node_count` is not
                `2 * leaf_count - 1`.
        """
        errors: list[str] = []
        if len(self.paths) != self.leaf_count:
            errors.append(f"paths length ({len(self.paths)}) must equal leaf_count ({self.leaf_count})")
        depths = [path.depth for path in self.paths]
        if depths and max(depths) != self.worst_case_depth:
            errors.append(f"longest path ({max(depths)}) must equal worst_case_depth ({self.worst_case_depth})")
        if sum(depths) != self.summed_depth:
            errors.append(f"path lengths sum to {sum(depths)}, expected summed_depth {self.summed_depth}")
        if self.node_count != 2 * self.leaf_count - 1:
            errors.append(f"node_count ({self.node_count}) must equal 2 * leaf_count - 1")
        if errors:
            raise ValueError("; ".join(errors))
        return self
