"""Tests for the three-digit codes."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from tmsolver.game.codes import Code, all_codes


class TestCode:
    """Tests for the Code model."""

    def test_string_and_digits(self) -> None:
        """A code prints as its digits in blue, yellow, purple order."""
        # Arrange
        code = Code(blue=2, yellow=5, purple=3)

        # Act / Assert
        with check:
            assert str(code) == "253"
        with check:
            assert code.digits == (2, 5, 3)

    def test_colored_wraps_each_digit(self) -> None:
        """Each digit should be preceded by its colour escape code and the string reset at the end."""
        # Arrange / Act
        text = Code(blue=1, yellow=2, purple=3).colored()

        # Assert
        with check:
            assert text == "\x1b[34m1\x1b[33m2\x1b[35m3\x1b[0m"

    @pytest.mark.parametrize("digits", [(0, 1, 1), (1, 6, 1), (1, 1, -3)], ids=["blue", "yellow", "purple"])
    def test_out_of_range_digit_rejected(self, digits: tuple[int, int, int]) -> None:
        """Digits must lie between 1 and 5.

        Args:
            digits (tuple[int, int, int]): Blue, yellow and purple digits.
        """
        # Arrange
        blue, yellow, purple = digits

        # Act / Assert
        with pytest.raises(ValidationError):
            Code(blue=blue, yellow=yellow, purple=purple)

    def test_codes_are_frozen_and_hashable(self) -> None:
        """Codes should be usable as dictionary keys and compare by value."""
        # Arrange
        code = Code(blue=1, yellow=2, purple=3)

        # Act / Assert
        with check:
            assert {code: "x"}[Code(blue=1, yellow=2, purple=3)] == "x"
        with pytest.raises(ValidationError):
            code.blue = 4  # type: ignore[misc]


class TestAllCodes:
    """Tests for all_codes."""

    def test_enumerates_every_code_once_blue_fastest(self) -> None:
        """All 125 codes appear exactly once, with the blue digit varying fastest."""
        # Arrange / Act
        codes = all_codes()

        # Assert
        with check:
            assert len(codes) == 125
        with check:
            assert len(set(codes)) == 125
        with check:
            assert [str(code) for code in codes[:6]] == ["111", "211", "311", "411", "511", "121"]
        with check:
            assert str(codes[25]) == "112"
        with check:
            assert str(codes[-1]) == "555"
