"""Requests and Response models"""

from enum import StrEnum
from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from chess3d.chess.intents import (
    DeselectPiece,
    EndTurn,
    Intent,
    MovePiece,
    ResetGame,
    SelectPiece,
)
from chess3d.chess.position import Position
from chess3d.chess.serialization import decode_state
from chess3d.core.exceptions import InvalidRequestError, StateDecodeError
from chess3d.core.shared_types import Player

AlgebraicSquare = str


class IntentKind(StrEnum):
    SELECT_PIECE = "select_piece"
    DESELECT_PIECE = "deselect_piece"
    MOVE_PIECE = "move_piece"
    END_TURN = "end_turn"
    RESET_GAME = "reset_game"


def _validate_state_text(value: Optional[str]) -> Optional[str]:
    """Shared by the requests that carry an encoded state"""
    if value is None:
        return value
    try:
        decode_state(value)
    except StateDecodeError as err:
        raise InvalidRequestError(f"Cannot interpret supplied state: {err}") from err
    return value


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    initial_state: Optional[str] = None

    @field_validator("initial_state")
    @classmethod
    def validate_initial_state(cls, value: Optional[str]) -> Optional[str]:
        return _validate_state_text(value)


class GetSessionRequest(BaseModel):
    session_id: UUID


class IntentRequest(BaseModel):
    session_id: UUID
    kind: IntentKind
    piece_id: Optional[str] = None
    to: Optional[AlgebraicSquare] = None

    @field_validator("to")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        def _is_algebraic_notation(value: str) -> bool:
            if len(value) < 2:
                return False

            file_character = value[0]
            rank_characters = value[1:]
            # ASCII only: the rank is parsed with int()
            return (
                file_character.isascii()
                and file_character.isalpha()
                and rank_characters.isascii()
                and rank_characters.isdigit()
            )

        if value is None:
            return value
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret to: {value!r} as a valid square name."
            )
        return value

    @model_validator(mode="after")
    def validate_payload(self) -> Self:
        """Selecting and moving need a piece, moving also needs a destination."""
        needs_piece = {IntentKind.SELECT_PIECE, IntentKind.MOVE_PIECE}
        if self.kind in needs_piece and not self.piece_id:
            raise InvalidRequestError(f"Intent {self.kind} requires a piece_id.")
        if self.kind == IntentKind.MOVE_PIECE and self.to is None:
            raise InvalidRequestError(f"Intent {self.kind} requires a destination square.")
        return self

    def to_intent(self) -> Intent:
        """Build the domain intent. Raises InvalidRequestError if the payload is missing."""
        if self.kind == IntentKind.SELECT_PIECE:
            return SelectPiece(self._require_piece_id())
        if self.kind == IntentKind.MOVE_PIECE:
            if self.to is None:
                raise InvalidRequestError(f"Intent {self.kind} requires a destination square.")
            return MovePiece(self._require_piece_id(), Position.from_algebraic(self.to))
        if self.kind == IntentKind.DESELECT_PIECE:
            return DeselectPiece()
        if self.kind == IntentKind.END_TURN:
            return EndTurn()
        return ResetGame()

    def _require_piece_id(self) -> str:
        """Models built with model_construct skip the validators."""
        if not self.piece_id:
            raise InvalidRequestError(f"Intent {self.kind} requires a piece_id.")
        return self.piece_id


class LegalMovesRequest(BaseModel):
    session_id: UUID
    piece_id: str


class LoadStateRequest(BaseModel):
    session_id: UUID
    state: str

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        _validate_state_text(value)
        return value


class ResetSessionRequest(BaseModel):
    session_id: UUID


class DeleteSessionRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: UUID
    current_player: Player
    turn_number: int
    selected_piece_id: Optional[str]
    valid_moves: list[AlgebraicSquare]
    state: str


class DispatchResponse(SessionResponse):
    accepted: bool


class LegalMovesResponse(BaseModel):
    session_id: UUID
    piece_id: str
    player: Player
    legal_moves: list[AlgebraicSquare]
