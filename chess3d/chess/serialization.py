"""
Plain-data encoding of the GameState.
----

encode_state(state) -> JSON text, decode_state(text) -> GameState.
Round-trip law: decode_state(encode_state(state)) == state for every reachable state.

The JSON layout uses the camelCase keys the browser client reads:

{"board": {"width": 8, "height": 8, "tiles": [{"id": "tile-0-0", "position": {"x": 0, "y": 0}, "type": "normal"}, ...]},
 "pieces": [{"id": "w-rook-1", "position": {...}, "playerId": 1, "type": "rook", "hasMoved": false}, ...],
 "currentPlayer": 1, "selectedPieceId": null, "validMoves": [], "turnNumber": 1, "capturedPieces": []}

Decoding is the one place where the core raises: malformed text, a wrong shape or an inconsistent selection
gives a StateDecodeError.
"""

from typing import Any, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from chess3d.chess.board import Board, Tile
from chess3d.chess.game_state import GameState
from chess3d.chess.moves import legal_moves
from chess3d.chess.pieces import Piece
from chess3d.chess.position import Position
from chess3d.core.exceptions import StateDecodeError
from chess3d.core.shared_types import PieceType, Player, TileState


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class PositionSchema(_Schema):
    x: int
    y: int

    @classmethod
    def from_domain(cls, position: Position) -> Self:
        return cls(x=position.x, y=position.y)

    def to_domain(self) -> Position:
        return Position(self.x, self.y)


class TileSchema(_Schema):
    id: str
    position: PositionSchema
    state: TileState = Field(alias="type")

    @classmethod
    def from_domain(cls, tile: Tile) -> Self:
        return cls(
            id=tile.id,
            position=PositionSchema.from_domain(tile.position),
            state=tile.state,
        )

    def to_domain(self) -> Tile:
        return Tile(self.id, self.position.to_domain(), self.state)


class PieceSchema(_Schema):
    id: str
    position: PositionSchema
    player: Player = Field(alias="playerId")
    type: PieceType
    has_moved: bool

    @classmethod
    def from_domain(cls, piece: Piece) -> Self:
        return cls(
            id=piece.id,
            position=PositionSchema.from_domain(piece.position),
            player=piece.player,
            type=piece.type,
            has_moved=piece.has_moved,
        )

    def to_domain(self) -> Piece:
        return Piece(
            self.id, self.position.to_domain(), self.player, self.type, self.has_moved
        )


class BoardSchema(_Schema):
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    tiles: list[TileSchema]

    @model_validator(mode="after")
    def check_tile_grid(self) -> Self:
        """One tile per coordinate, row by row. The board looks tiles up by index."""
        if len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} tiles, got {len(self.tiles)}"
            )
        for index, tile in enumerate(self.tiles):
            expected = (index % self.width, index // self.width)
            if (tile.position.x, tile.position.y) != expected:
                raise ValueError(f"tile {tile.id!r} is out of order, expected {expected}")
        return self

    @classmethod
    def from_domain(cls, board: Board) -> Self:
        return cls(
            width=board.width,
            height=board.height,
            tiles=[TileSchema.from_domain(tile) for tile in board.tiles],
        )

    def to_domain(self) -> Board:
        return Board(
            self.width, self.height, tuple(tile.to_domain() for tile in self.tiles)
        )


class GameStateSchema(_Schema):
    board: BoardSchema
    pieces: list[PieceSchema]
    current_player: Player
    selected_piece_id: Optional[str] = None
    valid_moves: list[PositionSchema]
    turn_number: int = Field(ge=1)
    captured_pieces: list[PieceSchema]

    @model_validator(mode="after")
    def check_pieces(self) -> Self:
        """Ids are never reused (captured pieces included), and no two active pieces share a square."""
        ids = [piece.id for piece in self.pieces + self.captured_pieces]
        if len(ids) != len(set(ids)):
            raise ValueError("piece ids must be unique")

        occupied: set[tuple[int, int]] = set()
        for piece in self.pieces:
            square = (piece.position.x, piece.position.y)
            if not (0 <= square[0] < self.board.width and 0 <= square[1] < self.board.height):
                raise ValueError(f"piece {piece.id!r} stands off the board at {square}")
            if square in occupied:
                raise ValueError(f"more than one piece on {square}")
            occupied.add(square)
        return self

    @model_validator(mode="after")
    def check_selection(self) -> Self:
        """
        The selection belongs to the player to move, and validMoves are exactly its legal moves.
        NOTE: a dangling selection id reads as 'nothing selected', so it must come without moves.
        """
        state = self.to_domain()
        selected = state.selected_piece
        if selected is None:
            if state.valid_moves:
                raise ValueError("validMoves given without a selected piece")
            return self

        if selected.player != state.current_player:
            raise ValueError(
                f"selected piece {selected.id!r} does not belong to player {state.current_player}"
            )
        expected = legal_moves(selected, state)
        if len(state.valid_moves) != len(expected) or set(state.valid_moves) != set(expected):
            raise ValueError(f"validMoves are not the legal moves of {selected.id!r}")
        return self

    @classmethod
    def from_domain(cls, state: GameState) -> Self:
        return cls(
            board=BoardSchema.from_domain(state.board),
            pieces=[PieceSchema.from_domain(piece) for piece in state.pieces],
            current_player=state.current_player,
            selected_piece_id=state.selected_piece_id,
            valid_moves=[PositionSchema.from_domain(pos) for pos in state.valid_moves],
            turn_number=state.turn_number,
            captured_pieces=[
                PieceSchema.from_domain(piece) for piece in state.captured_pieces
            ],
        )

    def to_domain(self) -> GameState:
        return GameState(
            board=self.board.to_domain(),
            pieces=tuple(piece.to_domain() for piece in self.pieces),
            current_player=self.current_player,
            selected_piece_id=self.selected_piece_id,
            valid_moves=tuple(pos.to_domain() for pos in self.valid_moves),
            turn_number=self.turn_number,
            captured_pieces=tuple(piece.to_domain() for piece in self.captured_pieces),
        )


# --- PUBLIC API ---
def encode_state(state: GameState) -> str:
    return GameStateSchema.from_domain(state).model_dump_json(by_alias=True)


def decode_state(text: str | bytes) -> GameState:
    try:
        schema = GameStateSchema.model_validate_json(text)
    except ValidationError as err:
        raise StateDecodeError(f"Cannot interpret supplied text as a game state: {err}") from err
    return schema.to_domain()


def state_to_plain(state: GameState) -> dict[str, Any]:
    """Same layout as encode_state, as JSON-compatible python data."""
    return GameStateSchema.from_domain(state).model_dump(mode="json", by_alias=True)


def state_from_plain(data: Any) -> GameState:
    try:
        schema = GameStateSchema.model_validate(data)
    except ValidationError as err:
        raise StateDecodeError(f"Cannot interpret supplied data as a game state: {err}") from err
    return schema.to_domain()
