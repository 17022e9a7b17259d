"""tmsolver: Optimal round-constrained decision trees for deduction puzzles."""

from loguru import logger

from tmsolver.decision_tree import Candidate, DecisionTree, build_optimal_tree, render_tree, summarize_tree
from tmsolver.logging import PACKAGE_NAME, enable_logging
from tmsolver.settings import SolverSettings

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the tmsolver package by default

__all__ = [
    "Candidate",
    "DecisionTree",
    "SolverSettings",
    "build_optimal_tree",
    "enable_logging",
    "render_tree",
    "summarize_tree",
]
