"""Unit tests for chess3d/chess/serialization.py"""

import json
from typing import Any, Callable

import pytest
from pydantic import ValidationError

from chess3d.chess.game_state import GameState
from chess3d.chess.intents import EndTurn, MovePiece, SelectPiece
from chess3d.chess.pieces import Piece
from chess3d.chess.position import Position
from chess3d.chess.reducer import apply_intent
from chess3d.chess.serialization import (
    decode_state,
    encode_state,
    state_from_plain,
    state_to_plain,
)
from chess3d.core.exceptions import GameError, StateDecodeError
from chess3d.core.shared_types import PieceType, Player, TileState

PieceFactory = Callable[..., Piece]
StateFactory = Callable[..., GameState]


@pytest.fixture
def selected_state(initial_state: GameState) -> GameState:
    return apply_intent(initial_state, SelectPiece("w-knight-2"))


@pytest.fixture
def captured_state(initial_state: GameState) -> GameState:
    """Three moves in, one black pawn taken, player 2 to move in turn 2."""
    state = initial_state
    for intent in [
        MovePiece("w-pawn-5", Position(4, 3)),
        MovePiece("b-pawn-4", Position(3, 4)),
        MovePiece("w-pawn-5", Position(3, 4)),
    ]:
        state = apply_intent(state, intent)
    return state


@pytest.fixture
def plain_initial(initial_state: GameState) -> dict[str, Any]:
    return state_to_plain(initial_state)


# --- ROUND TRIP ---
@pytest.mark.parametrize(
    "state_fixture", ["initial_state", "selected_state", "captured_state"]
)
def test_round_trip(request: pytest.FixtureRequest, state_fixture: str) -> None:
    state: GameState = request.getfixturevalue(state_fixture)
    assert decode_state(encode_state(state)) == state


def test_round_trip_keeps_enum_types(captured_state: GameState) -> None:
    decoded = decode_state(encode_state(captured_state))
    assert decoded.current_player is Player.TWO
    assert all(isinstance(piece.type, PieceType) for piece in decoded.pieces)
    assert all(isinstance(tile.state, TileState) for tile in decoded.board.tiles)


def test_round_trip_of_a_custom_position(
    make_piece: PieceFactory, make_state: StateFactory
) -> None:
    state = make_state(
        make_piece(PieceType.KING, Player.ONE, 0, 0, has_moved=True),
        make_piece(PieceType.KING, Player.TWO, 7, 7),
        current_player=Player.TWO,
        turn_number=41,
    )
    assert decode_state(encode_state(state)) == state


def test_decoded_state_keeps_playing(captured_state: GameState) -> None:
    decoded = decode_state(encode_state(captured_state))
    assert apply_intent(decoded, EndTurn()) == apply_intent(captured_state, EndTurn())


def test_plain_round_trip(captured_state: GameState) -> None:
    plain = state_to_plain(captured_state)
    # really plain: survives the json module unchanged
    assert json.loads(json.dumps(plain)) == plain
    assert state_from_plain(plain) == captured_state


def test_encode_matches_plain(selected_state: GameState) -> None:
    assert json.loads(encode_state(selected_state)) == state_to_plain(selected_state)


# --- LAYOUT ---
def test_camel_case_layout(plain_initial: dict[str, Any]) -> None:
    assert set(plain_initial) == {
        "board",
        "pieces",
        "currentPlayer",
        "selectedPieceId",
        "validMoves",
        "turnNumber",
        "capturedPieces",
    }
    assert plain_initial["currentPlayer"] == 1
    assert plain_initial["turnNumber"] == 1
    assert plain_initial["selectedPieceId"] is None


def test_piece_layout(plain_initial: dict[str, Any]) -> None:
    assert plain_initial["pieces"][0] == {
        "id": "w-rook-1",
        "position": {"x": 0, "y": 0},
        "playerId": 1,
        "type": "rook",
        "hasMoved": False,
    }


def test_tile_layout(selected_state: GameState) -> None:
    tiles = state_to_plain(selected_state)["board"]["tiles"]
    assert tiles[0] == {"id": "tile-0-0", "position": {"x": 0, "y": 0}, "type": "normal"}
    marked = [tile["id"] for tile in tiles if tile["type"] == "valid-move"]
    assert marked == ["tile-5-2", "tile-7-2"]


def test_decode_accepts_bytes(initial_state: GameState) -> None:
    assert decode_state(encode_state(initial_state).encode()) == initial_state


def test_decode_accepts_dangling_selection(plain_initial: dict[str, Any]) -> None:
    """An id that names no active piece is 'nothing selected', as long as no moves come with it."""
    plain_initial["selectedPieceId"] = "w-ghost"
    state = decode_state(json.dumps(plain_initial))
    assert state.selected_piece is None


def test_decode_accepts_reordered_valid_moves(selected_state: GameState) -> None:
    plain = state_to_plain(selected_state)
    plain["validMoves"].reverse()
    decoded = state_from_plain(plain)
    assert set(decoded.valid_moves) == set(selected_state.valid_moves)


def test_decode_accepts_field_names(plain_initial: dict[str, Any]) -> None:
    plain_initial["current_player"] = plain_initial.pop("currentPlayer")
    assert state_from_plain(plain_initial).current_player == Player.ONE


# --- MALFORMED INPUT ---
def _corrupt(plain: dict[str, Any], corruption: str) -> dict[str, Any]:
    """Break a valid plain state in one specific way."""
    pieces = plain["pieces"]
    corruptions = {
        "player_three": lambda: pieces[0].update(playerId=3),
        "unknown_piece_type": lambda: pieces[0].update(type="dragon"),
        "duplicate_id": lambda: pieces[1].update(id=pieces[0]["id"]),
        "captured_id_reused": lambda: plain.update(capturedPieces=[dict(pieces[0])]),
        "shared_square": lambda: pieces[1].update(position=dict(pieces[0]["position"])),
        "off_board_piece": lambda: pieces[0].update(position={"x": 8, "y": 0}),
        "missing_tile": lambda: plain["board"]["tiles"].pop(),
        "shuffled_tiles": lambda: plain["board"]["tiles"].reverse(),
        "unknown_tile_state": lambda: plain["board"]["tiles"][0].update(type="glowing"),
        "zero_width": lambda: plain["board"].update(width=0),
        "turn_zero": lambda: plain.update(turnNumber=0),
        "missing_field": lambda: plain.pop("pieces"),
        "extra_field": lambda: plain.update(winner=1),
        "wrong_type": lambda: plain.update(turnNumber="soon"),
        "opponent_selected": lambda: plain.update(selectedPieceId="b-king"),
        "opponent_selected_with_moves": lambda: plain.update(
            selectedPieceId="b-king", validMoves=[{"x": 0, "y": 0}]
        ),
        "moves_without_selection": lambda: plain.update(validMoves=[{"x": 4, "y": 4}]),
        "moves_with_dangling_selection": lambda: plain.update(
            selectedPieceId="w-ghost", validMoves=[{"x": 4, "y": 2}]
        ),
        "moves_not_legal": lambda: plain.update(
            selectedPieceId="w-knight-2", validMoves=[{"x": 0, "y": 0}]
        ),
        "moves_missing": lambda: plain.update(
            selectedPieceId="w-knight-2", validMoves=[{"x": 5, "y": 2}]
        ),
    }
    corruptions[corruption]()
    return plain


@pytest.mark.parametrize(
    "corruption",
    [
        "player_three",
        "unknown_piece_type",
        "duplicate_id",
        "captured_id_reused",
        "shared_square",
        "off_board_piece",
        "missing_tile",
        "shuffled_tiles",
        "unknown_tile_state",
        "zero_width",
        "turn_zero",
        "missing_field",
        "extra_field",
        "wrong_type",
        "opponent_selected",
        "opponent_selected_with_moves",
        "moves_without_selection",
        "moves_with_dangling_selection",
        "moves_not_legal",
        "moves_missing",
    ],
)
def test_decode_rejects_bad_shape(plain_initial: dict[str, Any], corruption: str) -> None:
    text = json.dumps(_corrupt(plain_initial, corruption))
    with pytest.raises(StateDecodeError) as exc_info:
        decode_state(text)
    assert isinstance(exc_info.value.__cause__, ValidationError)


@pytest.mark.parametrize("text", ["", "not json", "{", "[]", "null", '{"board": 1}'])
def test_decode_rejects_malformed_text(text: str) -> None:
    with pytest.raises(StateDecodeError):
        decode_state(text)


def test_decode_error_is_a_game_error() -> None:
    with pytest.raises(GameError):
        decode_state("not json")


@pytest.mark.parametrize("data", [None, 42, "text", [], {}])
def test_from_plain_rejects_bad_data(data: Any) -> None:
    with pytest.raises(StateDecodeError):
        state_from_plain(data)
