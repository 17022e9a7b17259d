"""Tests for text rendering and path reports of decision trees."""

from __future__ import annotations

import json

from pytest_check import check

from tmsolver.decision_tree.models import Branch, Leaf, TestSplit
from tmsolver.decision_tree.report import render_tree, summarize_tree

TREE = Branch(
    TestSplit(0, 1),
    Leaf("a"),
    Branch(TestSplit(1, 0), Leaf("b"), Leaf("c")),
    round_code="z",
)


class TestRenderTree:
    """Tests for render_tree."""

    def test_plain_rendering(self) -> None:
        """Without colour the rendering should be plain indented text."""
        # Arrange / Act
        text = render_tree(TREE, color=False)

        # Assert
        assert text.splitlines() == [
            "Test: (0, 1) [code: z]",
            "  ✓: a",
            "  ✗: Test: (1, 0)",
            "    ✓: b",
            "    ✗: c",
        ]

    def test_colored_marks(self) -> None:
        """With colour the marks should be wrapped in green and red escape codes."""
        # Arrange / Act
        text = render_tree(TREE)

        # Assert
        with check:
            assert "\x1b[32m✓\x1b[0m: a" in text
        with check:
            assert "\x1b[31m✗\x1b[0m: c" in text

    def test_describe_formats_solutions_and_codes(self) -> None:
        """The formatter should be applied to leaves and round codes alike."""
        # Arrange / Act
        text = render_tree(TREE, describe=str.upper, color=False)

        # Assert
        with check:
            assert text.startswith("Test: (0, 1) [code: Z]")
        with check:
            assert text.endswith("✗: C")

    def test_single_leaf(self) -> None:
        """A leaf renders as just its solution."""
        # Arrange / Act / Assert
        assert render_tree(Leaf("only"), color=False) == "only"


class TestSummarizeTree:
    """Tests for summarize_tree."""

    def test_report_metrics_and_paths(self) -> None:
        """The report should list one path per leaf with the steps taken."""
        # Arrange / Act
        report = summarize_tree(TREE)

        # Assert
        with check:
            assert (report.worst_case_depth, report.summed_depth, report.node_count, report.leaf_count) == (2, 5, 5, 3)
        with check:
            assert [path.solution for path in report.paths] == ["a", "b", "c"]
        with check:
            assert [(step.test_id, step.passed) for step in report.paths[2].steps] == [(0, False), (1, False)]
        with check:
            assert [step.round_code for step in report.paths[2].steps] == ["z", None]

    def test_single_leaf_report(self) -> None:
        """A leaf gives a single empty path."""
        # Arrange / Act
        report = summarize_tree(Leaf("only"))

        # Assert
        with check:
            assert report.worst_case_depth == 0
        with check:
            assert len(report.paths) == 1
        with check:
            assert report.paths[0].steps == []

    def test_json_export(self) -> None:
        """The report should serialize to JSON with the metric fields at the top level."""
        # Arrange
        report = summarize_tree(TREE)

        # Act
        data = json.loads(report.model_dump_json())

        # Assert
        with check:
            assert data["leaf_count"] == 3
        with check:
            assert data["paths"][0] == {
                "steps": [{"test_id": 0, "value": 1, "passed": True, "round_code": "z"}],
                "solution": "a",
            }
