"""Runtime configuration for the tmsolver command-line front end."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class SolverSettings(
    BaseSettings,
    env_prefix="TMSOLVER_",
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
):
    """Solver settings read from ``TMSOLVER_*`` environment variables or a ``.env`` file.

    Attributes:
        tests_per_round (int): How many tests may be performed per round with one code.
        min_rules (int): Fewest verifier rules a puzzle may have.
        max_rules (int): Most verifier rules a puzzle may have.
        spinner_interval (float): Seconds between two spinner frames while searching.
        color (bool): Whether to colour codes and ✓/✗ marks with ANSI escape codes.

    Examples:
        >>> settings = SolverSettings(tests_per_round=2)
        >>> settings.tests_per_round, settings.min_rules, settings.max_rules
        (2, 4, 6)
    """

    tests_per_round: int = Field(default=3, ge=1, description="Tests performed per round with one code.")
    min_rules: int = Field(default=4, ge=1, description="Fewest verifier rules a puzzle may have.")
    max_rules: int = Field(default=6, ge=1, description="Most verifier rules a puzzle may have.")
    spinner_interval: float = Field(default=0.1, gt=0, description="Seconds between two spinner frames.")
    color: bool = Field(default=True, description="Colour codes and marks with ANSI escape codes.")

    @model_validator(mode="after")
    def _validate_rule_bounds(self) -> SolverSettings:
        """Ensure the rule count bounds form a non-empty range.

        Returns:
            SolverSettings: The validated settings.

        Raises:
            ValueError: If `max_rules` is smaller than `min_rules`.
        """
        if self.max_rules < self.min_rules:
            msg = f"max_rules ({self.max_rules}) must be >= min_rules ({self.min_rules})"
            raise ValueError(msg)
        return self
