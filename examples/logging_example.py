"""Demonstrates how to enable and configure logging in tmsolver.

tmsolver logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, tmsolver logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``SEARCH`` level
  (numeric value 25, between INFO and WARNING) marks the start and the result
  of every tree search and is the default. ``DEBUG`` adds one line per
  sub-problem solved at a round boundary.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- A search without result is logged as a warning and returns ``None``.
"""

from tmsolver import build_optimal_tree, enable_logging, render_tree
from tmsolver.game import build_solution_catalogue, evaluate_codes, unique_candidates

with enable_logging(level="DEBUG", log_format="full"):
    # Precompute the outcome of every code under the puzzle's rules
    catalogue = build_solution_catalogue(evaluate_codes([4, 9, 11, 14]))
    candidates = unique_candidates(catalogue)
    print(f"\nFeasible solutions: {len(candidates)}\n")

    tree = build_optimal_tree(candidates, catalogue, tests_per_round=3)
    if tree is not None:
        print(render_tree(tree))

    # No code is legal, so no round can be played: logged as a warning
    build_optimal_tree(candidates, {}, tests_per_round=3)

# Logging is disabled again here
handle = enable_logging()
build_optimal_tree(candidates[:2], catalogue, tests_per_round=1)
handle.disable()
