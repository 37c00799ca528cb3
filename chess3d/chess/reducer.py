"""
Reducer: applies intents to the game state.
----

apply_intent(state, intent) -> new state

* Pure: no side effects other than logging, the input state is never touched.
* Total: never raises. An intent that fails its preconditions returns the very same state object,
  so callers detect a rejection by comparing old and new state.
"""

import logging
from dataclasses import replace
from typing import Any, Callable

from chess3d.chess.game_state import GameState
from chess3d.chess.intents import (
    DeselectPiece,
    EndTurn,
    Intent,
    MovePiece,
    ResetGame,
    SelectPiece,
)
from chess3d.chess.moves import legal_moves
from chess3d.core.shared_types import Player

logger = logging.getLogger(__name__)


def apply_intent(state: GameState, intent: Intent) -> GameState:
    """Dispatch to the handler for this kind of intent. Unknown objects are ignored."""
    handler = INTENT_HANDLERS.get(type(intent))
    if handler is None:
        logger.warning("Ignoring unknown intent: %r", intent)
        return state
    return handler(state, intent)


# --- HANDLERS ---
def _select_piece(state: GameState, intent: SelectPiece) -> GameState:
    piece = state.piece(intent.piece_id)
    if piece is None:
        return _reject(state, intent, "no such piece")
    if piece.player != state.current_player:
        return _reject(state, intent, "not the current player's piece")

    moves = tuple(legal_moves(piece, state))
    return replace(
        state,
        selected_piece_id=piece.id,
        valid_moves=moves,
        board=state.board.with_valid_moves(moves),
    )


def _deselect_piece(state: GameState, intent: DeselectPiece) -> GameState:
    return _clear_selection(state)


def _move_piece(state: GameState, intent: MovePiece) -> GameState:
    """
    Make a move
    -----

    1. validate: the piece exists, it is yours, and the destination is one of its legal moves
    2. capture whatever enemy piece stands on the destination
    3. move the piece (same id, has_moved=True)
    4. clear highlights/selection and hand the turn to the opponent

    NOTE: pieces are matched by id, never by index, so removing the captured piece cannot shift the mover.
    """
    piece = state.piece(intent.piece_id)
    if piece is None:
        return _reject(state, intent, "no such piece")
    if piece.player != state.current_player:
        return _reject(state, intent, "not the current player's piece")
    if intent.to not in legal_moves(piece, state):
        return _reject(state, intent, "illegal destination")

    # legal destinations are never occupied by own pieces: anything found here is a capture
    captured = state.piece_at(intent.to)
    moved = piece.moved_to(intent.to)

    pieces = tuple(
        moved if p.id == piece.id else p
        for p in state.pieces
        if captured is None or p.id != captured.id
    )
    captured_pieces = (
        state.captured_pieces + (captured,)
        if captured is not None
        else state.captured_pieces
    )
    if captured is not None:
        logger.debug("%s captures %s on %s", piece.id, captured.id, intent.to)

    return _pass_turn(
        replace(state, pieces=pieces, captured_pieces=captured_pieces)
    )


def _end_turn(state: GameState, intent: EndTurn) -> GameState:
    return _pass_turn(state)


def _reset_game(state: GameState, intent: ResetGame) -> GameState:
    return GameState.initial()


# -- HELPERS ---
def _clear_selection(state: GameState) -> GameState:
    return replace(
        state,
        selected_piece_id=None,
        valid_moves=(),
        board=state.board.cleared(),
    )


def _pass_turn(state: GameState) -> GameState:
    """The turn number counts full rounds: it only goes up once player 2 is done."""
    finished = Player(state.current_player)
    return replace(
        _clear_selection(state),
        current_player=finished.opponent,
        turn_number=state.turn_number + (1 if finished == Player.TWO else 0),
    )


def _reject(state: GameState, intent: Intent, reason: str) -> GameState:
    logger.debug("Rejected %r: %s", intent, reason)
    return state


IntentHandler = Callable[[GameState, Any], GameState]
INTENT_HANDLERS: dict[type, IntentHandler] = {
    SelectPiece: _select_piece,
    DeselectPiece: _deselect_piece,
    MovePiece: _move_piece,
    EndTurn: _end_turn,
    ResetGame: _reset_game,
}
