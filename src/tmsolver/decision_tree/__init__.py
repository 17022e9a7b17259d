"""Decision tree sub-package: tree model, splitting, round codes, search, and reports."""

from __future__ import annotations

from tmsolver.decision_tree.models import (
    Branch,
    Candidate,
    DecisionPath,
    DecisionTree,
    Leaf,
    OutcomeVector,
    PathStep,
    SolutionCatalogue,
    TestSplit,
    TreeReport,
)
from tmsolver.decision_tree.report import render_tree, summarize_tree
from tmsolver.decision_tree.round_code import observed_outcomes, resolve_round_code
from tmsolver.decision_tree.search import TreeSearch, build_optimal_tree, information_lower_bound
from tmsolver.decision_tree.splitting import SplitResult, split_batch

__all__ = [
    "Branch",
    "Candidate",
    "DecisionPath",
    "DecisionTree",
    "Leaf",
    "OutcomeVector",
    "PathStep",
    "SolutionCatalogue",
    "SplitResult",
    "TestSplit",
    "TreeReport",
    "TreeSearch",
    "build_optimal_tree",
    "information_lower_bound",
    "observed_outcomes",
    "render_tree",
    "resolve_round_code",
    "split_batch",
    "summarize_tree",
]
