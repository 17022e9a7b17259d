"""Tests for SolverSettings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
from pytest_check import check

from tmsolver.settings import SolverSettings


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test in an empty directory without TMSOLVER_* variables.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture.
        tmp_path (Path): Per-test temporary directory.
    """
    for name in ("TESTS_PER_ROUND", "MIN_RULES", "MAX_RULES", "SPINNER_INTERVAL", "COLOR"):
        monkeypatch.delenv(f"TMSOLVER_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSolverSettings:
    """Tests for defaults, environment overrides, and validation."""

    def test_defaults(self) -> None:
        """Defaults follow the physical game: three tests per round, four to six verifiers."""
        settings = SolverSettings()

        with check:
            assert settings.tests_per_round == 3
        with check:
            assert (settings.min_rules, settings.max_rules) == (4, 6)
        with check:
            assert settings.spinner_interval == pytest.approx(0.1)
        with check:
            assert settings.color is True

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """TMSOLVER_* variables override the defaults.

        Args:
            monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture.
        """
        monkeypatch.setenv("TMSOLVER_TESTS_PER_ROUND", "2")
        monkeypatch.setenv("TMSOLVER_COLOR", "false")

        settings = SolverSettings()

        with check:
            assert settings.tests_per_round == 2
        with check:
            assert settings.color is False

    def test_dotenv_file_is_read(self, tmp_path: Path) -> None:
        """A .env file in the working directory is honoured.

        Args:
            tmp_path (Path): Per-test temporary directory, also the working directory.
        """
        (tmp_path / ".env").write_text("TMSOLVER_MAX_RULES=5\nUNRELATED=1\n", encoding="utf-8")

        settings = SolverSettings()

        assert settings.max_rules == 5

    @pytest.mark.parametrize(
        "overrides",
        [{"tests_per_round": 0}, {"spinner_interval": 0.0}, {"min_rules": 5, "max_rules": 4}],
        ids=["round_size", "interval", "rule_bounds"],
    )
    def test_invalid_values_rejected(self, overrides: dict[str, float]) -> None:
        """Out-of-range values raise a ValidationError.

        Args:
            overrides (dict[str, float]): Invalid field values.
        """
        with pytest.raises(ValidationError):
            SolverSettings(**overrides)
