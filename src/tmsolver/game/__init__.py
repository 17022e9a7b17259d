"""Game sub-package: codes, verifier rules, and the solution catalogue."""

from __future__ import annotations

from tmsolver.game.catalogue import (
    build_solution_catalogue,
    candidates_frame,
    evaluate_codes,
    unique_candidates,
    verifier_label,
)
from tmsolver.game.codes import Code, all_codes
from tmsolver.game.rules import RULES, Rule, get_rule

__all__ = [
    "RULES",
    "Code",
    "Rule",
    "all_codes",
    "build_solution_catalogue",
    "candidates_frame",
    "evaluate_codes",
    "get_rule",
    "unique_candidates",
    "verifier_label",
]
