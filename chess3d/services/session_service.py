"""
Orchestration of many games at once.

One authoritative GameSession (and so one reducer pipeline) per game, kept in memory and keyed by id.
Requests come in as the boundary models of chess3d.api.models, and go out as responses carrying the encoded state.
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

from chess3d.api.models import (
    CreateSessionRequest,
    DeleteSessionRequest,
    DispatchResponse,
    GetSessionRequest,
    IntentRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    LoadStateRequest,
    ResetSessionRequest,
    SessionResponse,
)
from chess3d.chess.game_state import GameState
from chess3d.chess.moves import legal_moves
from chess3d.chess.serialization import decode_state, encode_state
from chess3d.core.exceptions import InvalidRequestError, SessionNotFoundError
from chess3d.services.game_session import GameSession, StateObserver, Unsubscribe

logger = logging.getLogger(__name__)


class SessionService:
    """Orchestration of sessions for the chess game."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, GameSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    # -- Request handling ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Start a new game: standard setup unless an encoded starting state is supplied."""
        initial_state: Optional[GameState] = (
            decode_state(request.initial_state) if request.initial_state else None
        )
        session_id = uuid4()
        self._sessions[session_id] = GameSession(initial_state)
        logger.info("Created session %s", session_id)
        return self._create_session_response(session_id)

    def get_session_state(self, request: GetSessionRequest) -> SessionResponse:
        """
        Retrieve current game state.
        ----
        Used in a polling loop by clients that do not subscribe.
        """
        self._fetch_session(request.session_id)
        return self._create_session_response(request.session_id)

    def dispatch(self, request: IntentRequest) -> DispatchResponse:
        """Hand the intent to the session's reducer. A rejected intent is not an error: accepted=False."""
        session = self._fetch_session(request.session_id)
        accepted = session.dispatch(request.to_intent())
        response = self._create_session_response(request.session_id)
        return DispatchResponse(**response.model_dump(), accepted=accepted)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal destinations of any piece on the board, whoever's turn it is."""
        state = self._fetch_session(request.session_id).state
        piece = state.piece(request.piece_id)
        if piece is None:
            raise InvalidRequestError(
                f"No piece with id {request.piece_id!r} in session {request.session_id}."
            )
        return LegalMovesResponse(
            session_id=request.session_id,
            piece_id=piece.id,
            player=piece.player,
            legal_moves=[move.to_algebraic() for move in legal_moves(piece, state)],
        )

    def load_state(self, request: LoadStateRequest) -> SessionResponse:
        session = self._fetch_session(request.session_id)
        session.load_state(decode_state(request.state))
        return self._create_session_response(request.session_id)

    def reset_session(self, request: ResetSessionRequest) -> SessionResponse:
        self._fetch_session(request.session_id).reset()
        return self._create_session_response(request.session_id)

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Forget a session. Deleting an unknown id is not an error."""
        if self._sessions.pop(request.session_id, None) is not None:
            logger.info("Deleted session %s", request.session_id)

    def subscribe(self, session_id: UUID, observer: StateObserver) -> Unsubscribe:
        """Broadcast hook: the observer gets every accepted state of this session."""
        return self._fetch_session(session_id).subscribe(observer)

    # -- Internal helpers --
    def _create_session_response(self, session_id: UUID) -> SessionResponse:
        state = self._sessions[session_id].state
        return SessionResponse(
            session_id=session_id,
            current_player=state.current_player,
            turn_number=state.turn_number,
            selected_piece_id=state.selected_piece_id,
            valid_moves=[move.to_algebraic() for move in state.valid_moves],
            state=encode_state(state),
        )

    def _fetch_session(self, session_id: UUID) -> GameSession:
        """Attempt to find the session and raise error if it fails."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session with {session_id=} not found.")
        return session
