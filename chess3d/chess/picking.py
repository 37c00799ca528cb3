"""
Turns what the player clicked on into an intent.

The input layer resolves a pointer event to either a piece or a tile (raycasting lives there, not here).
These helpers decide which intent that pick stands for. They never build a GameState: legality is still the reducer's call.
"""

from typing import Optional

from chess3d.chess.game_state import GameState
from chess3d.chess.intents import DeselectPiece, Intent, MovePiece, SelectPiece
from chess3d.chess.position import Position


def intent_for_piece_pick(state: GameState, piece_id: str) -> Optional[Intent]:
    """
    * own piece: select it, or deselect it when it is already the selected piece
    * opponent's piece while something is selected: try to capture it
    * anything else: nothing to do
    """
    piece = state.piece(piece_id)
    if piece is None:
        return None

    if piece.player == state.current_player:
        if state.selected_piece_id == piece.id:
            return DeselectPiece()
        return SelectPiece(piece.id)

    return intent_for_tile_pick(state, piece.position)


def intent_for_tile_pick(state: GameState, position: Position) -> Optional[Intent]:
    selected = state.selected_piece
    if selected is None:
        return None
    return MovePiece(selected.id, position)


def intent_for_cancel() -> Intent:
    """Right click / cancel key."""
    return DeselectPiece()
