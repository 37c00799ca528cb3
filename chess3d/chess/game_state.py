"""
The GameState is the root value the whole application reads from.

It is immutable: the reducer replaces it wholesale on every accepted intent, so anybody holding a reference
to an older snapshot (a renderer mid-frame, a broadcaster) keeps seeing a consistent board.
"""

from dataclasses import dataclass
from typing import Optional, Self

from chess3d.chess.board import Board
from chess3d.chess.pieces import Piece, starting_pieces
from chess3d.chess.position import BOARD_DIMENSIONS, Position
from chess3d.core.shared_types import Player


@dataclass(frozen=True)
class GameState:
    board: Board
    pieces: tuple[Piece, ...]
    current_player: Player = Player.ONE
    # Weak reference by id: always resolve through `selected_piece`
    selected_piece_id: Optional[str] = None
    valid_moves: tuple[Position, ...] = ()
    # Counts full rounds: goes up after player 2 moves
    turn_number: int = 1
    captured_pieces: tuple[Piece, ...] = ()

    @classmethod
    def initial(cls) -> Self:
        """Standard chess setup, player 1 to move, turn 1."""
        width, height = BOARD_DIMENSIONS
        return cls(board=Board.empty(width, height), pieces=starting_pieces(height))

    # -- LOOKUPS ---
    def piece(self, piece_id: str) -> Optional[Piece]:
        return next((p for p in self.pieces if p.id == piece_id), None)

    def piece_at(self, position: Position) -> Optional[Piece]:
        return next((p for p in self.pieces if p.position == position), None)

    def is_on_board(self, position: Position) -> bool:
        return self.board.is_on_board(position)

    def pieces_of(self, player: Player) -> list[Piece]:
        return [p for p in self.pieces if p.player == player]

    @property
    def selected_piece(self) -> Optional[Piece]:
        """A dangling selection reads as 'nothing selected'."""
        if self.selected_piece_id is None:
            return None
        return self.piece(self.selected_piece_id)
