"""Interactive command-line front end: solve a puzzle and guide the player through it.

Usage:
    tmsolver 4 9 11 14
    tmsolver -v --tests-per-round 2 2 5 12 17 20
    tmsolver --json 4 9 11 14
    tmsolver --list-rules
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from typing import TextIO, get_args

from loguru import logger

from tmsolver.background import run_with_spinner
from tmsolver.decision_tree import Branch, DecisionTree, build_optimal_tree, render_tree, summarize_tree
from tmsolver.exceptions import RuleCountError, UnknownRuleError
from tmsolver.game import (
    RULES,
    Code,
    build_solution_catalogue,
    candidates_frame,
    evaluate_codes,
    get_rule,
    unique_candidates,
    verifier_label,
)
from tmsolver.logging import LogLevel, enable_logging
from tmsolver.polars_utils import to_markdown_table
from tmsolver.settings import SolverSettings

EXIT_OK = 0
EXIT_FAILURE = 1

# ---------------------------------------------------------------------------
# Public interface -- Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Run the solver for the rules given on the command line.

    Args:
        argv (Sequence[str] | None): Arguments without the program name.
            Defaults to `sys.argv[1:]`.

    Returns:
        int: 0 on success, 1 when the puzzle has no solution, no decision tree
            exists, or input ends before a solution is reached.

    Raises:
        SystemExit: With status 2 on invalid arguments.
    """
    settings = SolverSettings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if args.list_rules:
        for rule in RULES:
            print(f"{rule.number:>2}: {rule.description}")
        return EXIT_OK
    if not args.rules:
        parser.error("at least one RULE is required")
    try:
        validate_rule_numbers(args.rules, minimum=settings.min_rules, maximum=settings.max_rules)
    except (UnknownRuleError, RuleCountError) as exc:
        parser.error(str(exc))

    handle = enable_logging(level=args.log_level) if args.log_level is not None else None
    try:
        return _solve(
            args.rules,
            tests_per_round=args.tests_per_round or settings.tests_per_round,
            color=settings.color and not args.no_color,
            verbose=args.verbose,
            as_json=args.json,
            spinner_interval=settings.spinner_interval,
        )
    finally:
        if handle is not None:
            handle.disable()


def build_parser(settings: SolverSettings | None = None) -> argparse.ArgumentParser:
    """Build the argument parser.

    Args:
        settings (SolverSettings | None): Settings used for defaults shown in help texts.

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    settings = settings or SolverSettings()
    parser = argparse.ArgumentParser(
        prog="tmsolver",
        description="Find the fewest tests that identify the solution of a deduction puzzle.",
    )
    parser.add_argument("rules", metavar="RULE", type=int, nargs="*", help="Rule number of each verifier, in order")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print the feasible solutions and the tree")
    parser.add_argument(
        "--tests-per-round",
        type=_positive_int,
        default=None,
        metavar="N",
        help=f"Tests performed with one code per round (default: {settings.tests_per_round})",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("--json", action="store_true", help="Print the decision tree report as JSON and exit")
    parser.add_argument(
        "--log-level",
        choices=get_args(LogLevel.__value__),
        default=None,
        help="Show tmsolver log records at this level and above on stderr",
    )
    parser.add_argument("--list-rules", action="store_true", help="List the available rules and exit")
    return parser


def validate_rule_numbers(rule_numbers: Sequence[int], *, minimum: int, maximum: int) -> None:
    """Check the number of rules and every rule number.

    Args:
        rule_numbers (Sequence[int]): 1-based rule numbers.
        minimum (int): Fewest rules accepted.
        maximum (int): Most rules accepted.

    Raises:
        RuleCountError: If the number of rules is outside `minimum..maximum`.
        UnknownRuleError: If a rule number is unknown.
    """
    if not minimum <= len(rule_numbers) <= maximum:
        raise RuleCountError(provided=len(rule_numbers), minimum=minimum, maximum=maximum)
    for number in rule_numbers:
        get_rule(number)


# ---------------------------------------------------------------------------
# Public interface -- Interactive walk
# ---------------------------------------------------------------------------


def play_tree(
    tree: DecisionTree[Code],
    *,
    tests_per_round: int,
    read_answer: Callable[[], str] = input,
    write: Callable[[str], None] = print,
    color: bool = False,
) -> Code:
    """Guide the player from the root of `tree` to the solution.

    At every round start the code to enter is announced; then the player is
    asked for the outcome of each test until a leaf is reached.

    Args:
        tree (DecisionTree[Code]): The decision tree to walk.
        tests_per_round (int): Number of tests performed per round.
        read_answer (Callable[[], str]): Reads one answer line.
        write (Callable[[str], None]): Prints one line.
        color (bool): Whether to colour the codes.

    Returns:
        Code: The solution identified by the player's answers.

    Raises:
        EOFError: If `read_answer` runs out of input.
    """
    describe = _code_formatter(color=color)
    node = tree
    level = 0
    while isinstance(node, Branch):
        if level % tests_per_round == 0:
            write("------")
            write(f"Start of round {level // tests_per_round + 1}")
            if node.round_code is not None:
                write(f"Use the following combination: {describe(node.round_code)}")
        write(f"Does test {verifier_label(node.split.test_id)} yield a check mark? (y/n)")
        node = node.child(passed=_ask_yes_no(read_answer, write))
        level += 1

    write("Found a solution!")
    write(f"Your code is: {describe(node.solution)}")
    return node.solution


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _solve(
    rule_numbers: Sequence[int],
    *,
    tests_per_round: int,
    color: bool,
    verbose: bool,
    as_json: bool,
    spinner_interval: float,
) -> int:
    # keep stdout clean for the JSON document
    status: TextIO = sys.stderr if as_json else sys.stdout
    describe = _code_formatter(color=color and not as_json)

    print("Generating codes ...", file=status)
    evaluated = evaluate_codes(rule_numbers)
    print("Looking for feasible solutions ...", file=status)
    catalogue = build_solution_catalogue(evaluated)
    candidates = unique_candidates(catalogue)
    print(f"Found {len(candidates)} feasible solutions.", file=status)
    if not candidates:
        print("This puzzle does not appear to be solvable. Please double-check your inputs.", file=status)
        return EXIT_FAILURE
    if verbose:
        print(to_markdown_table(candidates_frame(candidates)), file=status)

    print("Constructing solution trees ...", file=status)
    tree: DecisionTree[Code] | None = run_with_spinner(
        build_optimal_tree,
        candidates,
        catalogue,
        tests_per_round,
        stream=status,
        interval=spinner_interval,
    )
    if tree is None:
        print("No decision tree can identify the solution within the round limits.", file=status)
        return EXIT_FAILURE
    if verbose:
        print(render_tree(tree, describe=describe, color=color and not as_json), file=status)
    print("Done!", file=status)

    if as_json:
        print(summarize_tree(tree, describe=str).model_dump_json(indent=2))
        return EXIT_OK

    try:
        play_tree(tree, tests_per_round=tests_per_round, color=color)
    except EOFError:
        logger.warning("Input ended before a solution was reached")
        print("\nInput ended before a solution was reached.")
        return EXIT_FAILURE
    return EXIT_OK


def _ask_yes_no(read_answer: Callable[[], str], write: Callable[[str], None]) -> bool:
    """Read answers until one starts with "y" or "n"."""
    while True:
        answer = read_answer().strip().lower()
        if answer.startswith("y"):
            return True
        if answer.startswith("n"):
            return False
        write("Please input y or n.")


def _code_formatter(*, color: bool) -> Callable[[Code], str]:
    return Code.colored if color else Code.__str__


def _positive_int(value: str) -> int:
    """Parse a strictly positive integer for argparse."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


if __name__ == "__main__":
    sys.exit(main())
