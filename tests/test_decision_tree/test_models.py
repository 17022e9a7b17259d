"""Tests for the decision tree models: TestSplit, Leaf, Branch, and the pydantic report models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from tmsolver.decision_tree.models import (
    Branch,
    Candidate,
    DecisionPath,
    Leaf,
    PathStep,
    TestSplit,
    TreeReport,
)


def _three_leaf_tree() -> Branch[str]:
    """Return `(0, 1) -> a | ((1, 0) -> b | c)` with a round code on the root."""
    return Branch(
        TestSplit(0, 1),
        Leaf("a"),
        Branch(TestSplit(1, 0), Leaf("b"), Leaf("c")),
        round_code="z",
    )


class TestTestSplit:
    """Tests for TestSplit matching."""

    @pytest.mark.parametrize(
        ("outcome", "expected"),
        [((0, 2, 1), True), ((0, 1, 1), False), ((2, 2, 2), True)],
        ids=["match", "other_value", "all_equal"],
    )
    def test_matches_compares_only_its_own_test(self, outcome: tuple[int, ...], expected: bool) -> None:
        """A split should look only at the outcome at its own test id.

        Args:
            outcome (tuple[int, ...]): The outcome vector to check.
            expected (bool): Whether the vector falls into the passed branch.
        """
        # Arrange
        split = TestSplit(test_id=1, value=2)

        # Act / Assert
        assert split.matches(outcome) is expected

    def test_splits_are_hashable_and_comparable(self) -> None:
        """Splits should work as set members and compare by value."""
        # Arrange / Act
        splits = {TestSplit(0, 1), TestSplit(0, 1), TestSplit(1, 0)}

        # Assert
        with check:
            assert len(splits) == 2
        with check:
            assert TestSplit(0, 1) == (0, 1)


class TestLeaf:
    """Tests for the Leaf node queries."""

    def test_leaf_metrics(self) -> None:
        """A leaf should have zero depth and count as one node and one leaf."""
        # Arrange
        leaf = Leaf("a")

        # Act / Assert
        with check:
            assert leaf.worst_case_depth() == 0
        with check:
            assert leaf.summed_depth() == 0
        with check:
            assert leaf.node_count() == 1
        with check:
            assert leaf.leaf_count() == 1
        with check:
            assert leaf.splits_within(3) == frozenset()
        with check:
            assert list(leaf.solutions()) == ["a"]

    def test_leaf_is_immutable(self) -> None:
        """Assigning to a leaf's solution should fail."""
        # Arrange
        leaf = Leaf("a")

        # Act / Assert
        with pytest.raises(AttributeError):
            leaf.solution = "b"  # type: ignore[misc]


class TestBranch:
    """Tests for the Branch node queries."""

    def test_single_split_metrics(self) -> None:
        """A branch over two leaves should have depth 1 and summed depth 2."""
        # Arrange
        tree = Branch(TestSplit(0, 0), Leaf("a"), Leaf("b"))

        # Act / Assert
        with check:
            assert tree.worst_case_depth() == 1
        with check:
            assert tree.summed_depth() == 2
        with check:
            assert tree.node_count() == 3
        with check:
            assert tree.leaf_count() == 2

    def test_unbalanced_tree_metrics(self) -> None:
        """Summed depth should add up the path length of every leaf (1 + 2 + 2)."""
        # Arrange
        tree = _three_leaf_tree()

        # Act / Assert
        with check:
            assert tree.worst_case_depth() == 2
        with check:
            assert tree.summed_depth() == 5
        with check:
            assert tree.node_count() == 5
        with check:
            assert tree.leaf_count() == 3

    @pytest.mark.parametrize(
        ("window", "expected"),
        [
            (-1, {TestSplit(0, 1)}),
            (0, {TestSplit(0, 1)}),
            (1, {TestSplit(0, 1), TestSplit(1, 0)}),
            (5, {TestSplit(0, 1), TestSplit(1, 0)}),
        ],
        ids=["negative", "own_split", "one_level", "whole_tree"],
    )
    def test_splits_within_window(self, window: int, expected: set[TestSplit]) -> None:
        """The window should include the node's own split plus `window` levels below it.

        Args:
            window (int): Additional levels to include.
            expected (set[TestSplit]): The splits that should be collected.
        """
        # Arrange
        tree = _three_leaf_tree()

        # Act
        splits = tree.splits_within(window)

        # Assert
        assert splits == frozenset(expected)

    def test_solutions_yields_passed_branch_first(self) -> None:
        """Solutions should be listed depth-first, passed subtree before failed subtree."""
        # Arrange
        tree = _three_leaf_tree()

        # Act / Assert
        assert list(tree.solutions()) == ["a", "b", "c"]

    @pytest.mark.parametrize(("passed", "expected"), [(True, "a"), (False, "b")])
    def test_child_follows_test_outcome(self, passed: bool, expected: str) -> None:
        """`child` should return the subtree matching the reported outcome.

        Args:
            passed (bool): Whether the test yielded the split value.
            expected (str): Solution of the expected child leaf.
        """
        # Arrange
        tree = Branch(TestSplit(0, 0), Leaf("a"), Leaf("b"))

        # Act
        child = tree.child(passed=passed)

        # Assert
        assert child == Leaf(expected)

    def test_with_round_code_returns_copy(self) -> None:
        """`with_round_code` should not modify the original branch."""
        # Arrange
        tree = Branch(TestSplit(0, 0), Leaf("a"), Leaf("b"))

        # Act
        coded = tree.with_round_code("a")

        # Assert
        with check:
            assert coded.round_code == "a"
        with check:
            assert tree.round_code is None
        with check:
            assert coded.split == tree.split
        with check:
            assert coded.passed is tree.passed

    def test_candidate_holds_outcome_and_solution(self) -> None:
        """Candidates should compare by value."""
        # Arrange / Act
        candidate = Candidate((0, 1), "a")

        # Assert
        with check:
            assert candidate.outcome == (0, 1)
        with check:
            assert candidate == Candidate((0, 1), "a")


class TestTreeReport:
    """Tests for the TreeReport validator."""

    @staticmethod
    def _paths() -> list[DecisionPath]:
        root_step = PathStep(test_id=0, value=1, passed=True, round_code="z")
        return [
            DecisionPath(steps=[root_step], solution="a"),
            DecisionPath(
                steps=[root_step.model_copy(update={"passed": False}), PathStep(test_id=1, value=0, passed=True)],
                solution="b",
            ),
            DecisionPath(
                steps=[root_step.model_copy(update={"passed": False}), PathStep(test_id=1, value=0, passed=False)],
                solution="c",
            ),
        ]

    def test_valid_report_is_accepted(self) -> None:
        """A report whose metrics agree with its paths should validate."""
        # Arrange / Act
        report = TreeReport(worst_case_depth=2, summed_depth=5, node_count=5, leaf_count=3, paths=self._paths())

        # Assert
        with check:
            assert [path.depth for path in report.paths] == [1, 2, 2]
        with check:
            assert report.paths[1].steps[1].round_code is None

    @pytest.mark.parametrize(
        ("overrides", "match"),
        [
            ({"leaf_count": 4, "node_count": 7}, "leaf_count"),
            ({"worst_case_depth": 3}, "worst_case_depth"),
            ({"summed_depth": 4}, "summed_depth"),
            ({"node_count": 6}, "node_count"),
        ],
        ids=["leaf_count", "worst_case_depth", "summed_depth", "node_count"],
    )
    def test_inconsistent_metrics_raise_validation_error(self, overrides: dict[str, int], match: str) -> None:
        """Each metric disagreeing with the paths should be reported.

        Args:
            overrides (dict[str, int]): Metric values replacing the correct ones.
            match (str): Text expected in the validation error.
        """
        # Arrange
        fields = {"worst_case_depth": 2, "summed_depth": 5, "node_count": 5, "leaf_count": 3} | overrides

        # Act / Assert
        with pytest.raises(ValidationError, match=match):
            TreeReport(**fields, paths=self._paths())

    def test_negative_test_id_rejected(self) -> None:
        """Path steps should reject negative test ids."""
        # Arrange / Act / Assert
        with pytest.raises(ValidationError):
            PathStep(test_id=-1, value=0, passed=True)
