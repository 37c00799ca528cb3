"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

# Standard chess is 8x8. Boards are generated from these dimensions, so other sizes stay possible.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Position:
    """Zero-indexed, board-relative coordinates. x runs along a rank (files a-h), y along a file (ranks 1-8)."""

    x: int
    y: int

    @classmethod
    def from_algebraic(cls, square: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        x = ord(square[0].lower()) - ord("a")
        y = int(square[1:]) - 1
        return cls(x, y)

    def to_algebraic(self) -> str:
        # NOTE: only meaningful for boards with at most 26 files.
        return f"{ascii_lowercase[self.x]}{self.y + 1}"

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def is_within(self, width: int, height: int) -> bool:
        return (0 <= self.x < width) and (0 <= self.y < height)
