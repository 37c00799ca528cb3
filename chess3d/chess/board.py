"""
The Board holds the grid of tiles.

NOTE: Tiles are pure presentation state (what the renderer should highlight).
Which square is occupied is always derived from the pieces, never from the tiles.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Self

from chess3d.chess.position import BOARD_DIMENSIONS, Position
from chess3d.core.shared_types import TileState


@dataclass(frozen=True)
class Tile:
    id: str
    position: Position
    state: TileState = TileState.NORMAL

    @classmethod
    def at(cls, position: Position) -> Self:
        return cls(f"tile-{position.x}-{position.y}", position)


@dataclass(frozen=True)
class Board:
    width: int
    height: int
    tiles: tuple[Tile, ...]

    @classmethod
    def empty(cls, width: int = BOARD_DIMENSIONS[0], height: int = BOARD_DIMENSIONS[1]) -> Self:
        """One tile per coordinate, generated row by row (y outer, x inner)."""
        tiles = tuple(
            Tile.at(Position(x, y)) for y in range(height) for x in range(width)
        )
        return cls(width, height, tiles)

    def is_on_board(self, position: Position) -> bool:
        return position.is_within(self.width, self.height)

    def tile(self, position: Position) -> Tile | None:
        """Tile for the given coordinate, if it lies on the board."""
        if not self.is_on_board(position):
            return None
        return self.tiles[position.y * self.width + position.x]

    def tiles_in_state(self, state: TileState) -> list[Tile]:
        return [tile for tile in self.tiles if tile.state == state]

    def with_valid_moves(self, moves: Iterable[Position]) -> Self:
        """Mark the destination tiles as valid moves; every other tile goes back to normal."""
        targets = set(moves)
        return replace(
            self,
            tiles=tuple(
                _with_state(
                    tile,
                    TileState.VALID_MOVE
                    if tile.position in targets
                    else TileState.NORMAL,
                )
                for tile in self.tiles
            ),
        )

    def cleared(self) -> Self:
        """All tiles back to normal."""
        if all(tile.state == TileState.NORMAL for tile in self.tiles):
            return self
        return replace(
            self,
            tiles=tuple(_with_state(tile, TileState.NORMAL) for tile in self.tiles),
        )


def _with_state(tile: Tile, state: TileState) -> Tile:
    """Reuse the tile object when its state is unchanged."""
    return tile if tile.state == state else replace(tile, state=state)
