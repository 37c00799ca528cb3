"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from chess3d.chess.board import Board
from chess3d.chess.game_state import GameState
from chess3d.chess.pieces import Piece
from chess3d.chess.position import Position
from chess3d.core.shared_types import PieceType, Player

PieceFactory = Callable[..., Piece]
StateFactory = Callable[..., GameState]


@pytest.fixture
def make_piece() -> PieceFactory:
    """Call the inner function with the piece type, player and coordinates. The id is derived unless given."""

    def _create_piece(
        piece_type: PieceType,
        player: Player,
        x: int,
        y: int,
        has_moved: bool = False,
        piece_id: str | None = None,
    ) -> Piece:
        piece_id = piece_id or f"p{int(player)}-{piece_type}-{x}-{y}"
        return Piece(piece_id, Position(x, y), player, piece_type, has_moved)

    return _create_piece


@pytest.fixture
def make_state() -> StateFactory:
    """Empty 8x8 board with only the given pieces on it."""

    def _create_state(
        *pieces: Piece,
        current_player: Player = Player.ONE,
        turn_number: int = 1,
    ) -> GameState:
        return GameState(
            board=Board.empty(),
            pieces=tuple(pieces),
            current_player=current_player,
            turn_number=turn_number,
        )

    return _create_state


@pytest.fixture
def initial_state() -> GameState:
    return GameState.initial()
