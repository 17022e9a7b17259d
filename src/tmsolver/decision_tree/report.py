"""Read-only views of a decision tree for the presentation layer: text rendering and path reports."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from tmsolver.decision_tree.models import Branch, DecisionPath, DecisionTree, PathStep, TreeReport

_PASSED_MARK: Final[str] = "✓"
_FAILED_MARK: Final[str] = "✗"
_GREEN: Final[str] = "\x1b[32m"
_RED: Final[str] = "\x1b[31m"
_RESET: Final[str] = "\x1b[0m"

# ---------------------------------------------------------------------------
# Public interface -- Rendering
# ---------------------------------------------------------------------------


def render_tree[S](
    tree: DecisionTree[S],
    *,
    describe: Callable[[S], str] = str,
    color: bool = True,
) -> str:
    """Render a tree as indented text, one node per line.

    Branches print their split and, at round starts, the code to use; each
    child follows on its own line behind a ✓ (passed) or ✗ (failed) mark.

    Args:
        tree (DecisionTree[S]): The tree to render.
        describe (Callable[[S], str]): Formats solutions and round codes.
        color (bool): Whether to colour the marks with ANSI escape codes.

    Returns:
        str: The rendering, without a trailing newline.

    Examples:
        >>> from tmsolver.decision_tree.models import Leaf, TestSplit
        >>> tree = Branch(TestSplit(0, 1), Leaf("a"), Leaf("b"), round_code="c")
        >>> print(render_tree(tree, color=False))
        Test: (0, 1) [code: c]
          ✓: a
          ✗: b
    """
    passed_mark = f"{_GREEN}{_PASSED_MARK}{_RESET}" if color else _PASSED_MARK
    failed_mark = f"{_RED}{_FAILED_MARK}{_RESET}" if color else _FAILED_MARK
    lines: list[str] = []
    _render_node(tree, prefix="", indent=0, lines=lines, describe=describe, marks=(passed_mark, failed_mark))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Public interface -- Path reports
# ---------------------------------------------------------------------------


def summarize_tree[S](tree: DecisionTree[S], *, describe: Callable[[S], str] = str) -> TreeReport:
    """Summarize a tree as aggregate metrics plus one decision path per leaf.

    Args:
        tree (DecisionTree[S]): The tree to summarize.
        describe (Callable[[S], str]): Formats solutions and round codes.

    Returns:
        TreeReport: The validated report.
    """
    paths: list[DecisionPath] = []
    _collect_paths(tree, steps=[], paths=paths, describe=describe)
    return TreeReport(
        worst_case_depth=tree.worst_case_depth(),
        summed_depth=tree.summed_depth(),
        node_count=tree.node_count(),
        leaf_count=tree.leaf_count(),
        paths=paths,
    )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _render_node(
    tree: DecisionTree[Any],
    *,
    prefix: str,
    indent: int,
    lines: list[str],
    describe: Callable[[Any], str],
    marks: tuple[str, str],
) -> None:
    if not isinstance(tree, Branch):
        lines.append(f"{prefix}{describe(tree.solution)}")
        return
    header = f"{prefix}Test: ({tree.split.test_id}, {tree.split.value})"
    if tree.round_code is not None:
        header = f"{header} [code: {describe(tree.round_code)}]"
    lines.append(header)
    padding = "  " * (indent + 1)
    for mark, child in zip(marks, (tree.passed, tree.failed), strict=True):
        _render_node(
            child,
            prefix=f"{padding}{mark}: ",
            indent=indent + 1,
            lines=lines,
            describe=describe,
            marks=marks,
        )


def _collect_paths(
    tree: DecisionTree[Any],
    *,
    steps: list[PathStep],
    paths: list[DecisionPath],
    describe: Callable[[Any], str],
) -> None:
    """Recursively walk a tree and append one path per leaf.

    Args:
        tree (DecisionTree[Any]): The current node.
        steps (list[PathStep]): Steps taken from the root to `tree`.
        paths (list[DecisionPath]): Accumulator; leaf paths are appended in place.
        describe (Callable[[Any], str]): Formats solutions and round codes.
    """
    if not isinstance(tree, Branch):
        paths.append(DecisionPath(steps=steps, solution=describe(tree.solution)))
        return
    round_code = None if tree.round_code is None else describe(tree.round_code)
    for passed, child in ((True, tree.passed), (False, tree.failed)):
        step = PathStep(test_id=tree.split.test_id, value=tree.split.value, passed=passed, round_code=round_code)
        _collect_paths(child, steps=[*steps, step], paths=paths, describe=describe)
