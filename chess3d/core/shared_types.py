"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class PieceType(StrEnum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


class TileState(StrEnum):
    """Display state of a tile. Purely presentational: occupancy never lives on a tile."""

    NORMAL = "normal"
    HIGHLIGHTED = "highlighted"
    VALID_MOVE = "valid-move"


class Player(IntEnum):
    """Player 1 plays the white pieces and moves first."""

    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> "Player":
        return Player.TWO if self == Player.ONE else Player.ONE
