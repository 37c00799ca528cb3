"""Unit tests for chess3d/chess/game_state.py"""

from dataclasses import FrozenInstanceError, replace
from typing import Callable

import pytest

from chess3d.chess.game_state import GameState
from chess3d.chess.pieces import Piece
from chess3d.chess.position import Position
from chess3d.core.shared_types import PieceType, Player, TileState


# -- CREATION LOGIC ---
def test_initial_state(initial_state: GameState) -> None:
    """Standard setup: 32 pieces, player 1 to move in turn 1, nothing selected or captured"""
    assert len(initial_state.pieces) == 32
    assert initial_state.current_player == Player.ONE
    assert initial_state.turn_number == 1
    assert initial_state.selected_piece_id is None
    assert initial_state.valid_moves == ()
    assert initial_state.captured_pieces == ()
    assert len(initial_state.board.tiles) == 64
    assert all(tile.state == TileState.NORMAL for tile in initial_state.board.tiles)


def test_initial_states_are_equal_values() -> None:
    assert GameState.initial() == GameState.initial()


def test_state_is_immutable(initial_state: GameState) -> None:
    with pytest.raises(FrozenInstanceError):
        initial_state.turn_number = 2  # type: ignore[misc]


# -- LOOKUPS ---
def test_piece_lookup_by_id(initial_state: GameState) -> None:
    piece = initial_state.piece("w-king")
    assert piece is not None
    assert piece.position == Position(4, 0)
    assert initial_state.piece("w-king-2") is None


def test_piece_lookup_by_position(initial_state: GameState) -> None:
    piece = initial_state.piece_at(Position(3, 7))
    assert piece is not None
    assert piece.id == "b-queen"
    assert initial_state.piece_at(Position(3, 3)) is None


def test_pieces_of_player(initial_state: GameState) -> None:
    white = initial_state.pieces_of(Player.ONE)
    assert len(white) == 16
    assert all(p.id.startswith("w-") for p in white)


def test_is_on_board(initial_state: GameState) -> None:
    assert initial_state.is_on_board(Position(7, 7))
    assert not initial_state.is_on_board(Position(8, 7))


def test_selected_piece_resolves_id(initial_state: GameState) -> None:
    state = replace(initial_state, selected_piece_id="w-knight-1")
    assert state.selected_piece is not None
    assert state.selected_piece.type == PieceType.KNIGHT


def test_dangling_selection_reads_as_nothing_selected(
    make_piece: Callable[..., Piece], make_state: Callable[..., GameState]
) -> None:
    """The selection is a weak reference: if the piece is gone, nothing is selected."""
    rook = make_piece(PieceType.ROOK, Player.ONE, 0, 0)
    state = replace(make_state(rook), selected_piece_id="gone")
    assert state.selected_piece is None


def test_no_selection(initial_state: GameState) -> None:
    assert initial_state.selected_piece is None
