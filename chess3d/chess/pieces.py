"""Defines the chess pieces and the standard starting lineup"""

from dataclasses import dataclass, replace
from typing import Self

from chess3d.chess.position import BOARD_DIMENSIONS, Position
from chess3d.core.shared_types import PieceType, Player

# Left to right, as seen from player 1's side of the board
BACK_ROW: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Pieces that exist once per player don't get a sequence number in their id
UNIQUE_PIECES = {PieceType.QUEEN, PieceType.KING}

ID_PREFIX: dict[Player, str] = {Player.ONE: "w", Player.TWO: "b"}


@dataclass(frozen=True)
class Piece:
    id: str
    position: Position
    player: Player
    type: PieceType
    has_moved: bool = False

    def moved_to(self, position: Position) -> Self:
        """The same piece (same id) standing on its new square. Once moved, `has_moved` is never reset."""
        return replace(self, position=position, has_moved=True)

    def is_enemy_of(self, other: "Piece") -> bool:
        return self.player != other.player


def starting_pieces(height: int = BOARD_DIMENSIONS[1]) -> tuple[Piece, ...]:
    """
    Standard starting position.
    ----

    Player 1 (white) fills rows 0 and 1, player 2 (black) fills the two top rows.
    Order: white back row, white pawns, black pawns, black back row.

    ex) 'w-rook-1' stands on (0, 0), 'w-queen' on (3, 0), 'w-pawn-5' on (4, 1), 'b-king' on (4, 7).
    """
    return (
        _back_row(Player.ONE, y=0)
        + _pawn_row(Player.ONE, y=1)
        + _pawn_row(Player.TWO, y=height - 2)
        + _back_row(Player.TWO, y=height - 1)
    )


def _back_row(player: Player, y: int) -> tuple[Piece, ...]:
    prefix = ID_PREFIX[player]
    seen: dict[PieceType, int] = {}
    pieces: list[Piece] = []
    for x, piece_type in enumerate(BACK_ROW):
        seen[piece_type] = seen.get(piece_type, 0) + 1
        piece_id = (
            f"{prefix}-{piece_type}"
            if piece_type in UNIQUE_PIECES
            else f"{prefix}-{piece_type}-{seen[piece_type]}"
        )
        pieces.append(Piece(piece_id, Position(x, y), player, piece_type))
    return tuple(pieces)


def _pawn_row(player: Player, y: int) -> tuple[Piece, ...]:
    prefix = ID_PREFIX[player]
    return tuple(
        Piece(f"{prefix}-pawn-{x + 1}", Position(x, y), player, PieceType.PAWN)
        for x in range(len(BACK_ROW))
    )
