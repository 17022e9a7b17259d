"""Three-symbol codes entered into the machine: one digit per colour."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

CODE_DIGITS: Final[range] = range(1, 6)

_BLUE: Final[str] = "\x1b[34m"
_YELLOW: Final[str] = "\x1b[33m"
_PURPLE: Final[str] = "\x1b[35m"
_RESET: Final[str] = "\x1b[0m"


class Code(BaseModel):
    """A proposal code: a blue, a yellow and a purple digit from 1 to 5.

    Attributes:
        blue (int): The blue (first) digit.
        yellow (int): The yellow (second) digit.
        purple (int): The purple (third) digit.

    Examples:
        >>> code = Code(blue=2, yellow=5, purple=3)
        >>> str(code)
        '253'
        >>> code.digits
        (2, 5, 3)
    """

    model_config = ConfigDict(frozen=True)

    blue: int = Field(ge=1, le=5, description="The blue (first) digit.")
    yellow: int = Field(ge=1, le=5, description="The yellow (second) digit.")
    purple: int = Field(ge=1, le=5, description="The purple (third) digit.")

    @property
    def digits(self) -> tuple[int, int, int]:
        """The digits in blue, yellow, purple order."""
        return self.blue, self.yellow, self.purple

    def __str__(self) -> str:
        """Return the three digits without separators, e.g. `"253"`."""
        return f"{self.blue}{self.yellow}{self.purple}"

    def colored(self) -> str:
        """Return the digits wrapped in ANSI colour codes matching the game's colours."""
        return f"{_BLUE}{self.blue}{_YELLOW}{self.yellow}{_PURPLE}{self.purple}{_RESET}"


def all_codes() -> list[Code]:
    """Return all 125 codes, blue digit varying fastest.

    Returns:
        list[Code]: Code `i` has `blue = i % 5 + 1`, `yellow = (i // 5) % 5 + 1`
            and `purple = i // 25 + 1`.

    Examples:
        >>> codes = all_codes()
        >>> len(codes), str(codes[0]), str(codes[1]), str(codes[-1])
        (125, '111', '211', '555')
    """
    base = len(CODE_DIGITS)
    return [
        Code(blue=index % base + 1, yellow=(index // base) % base + 1, purple=index // (base * base) + 1)
        for index in range(base**3)
    ]
