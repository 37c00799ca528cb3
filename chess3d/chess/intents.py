"""
Intents: plain descriptions of a requested state change, not yet validated.

The set is closed. The reducer has exactly one handler per class defined here.
"""

from dataclasses import dataclass
from typing import Union

from chess3d.chess.position import Position


@dataclass(frozen=True)
class SelectPiece:
    piece_id: str


@dataclass(frozen=True)
class DeselectPiece:
    pass


@dataclass(frozen=True)
class MovePiece:
    piece_id: str
    to: Position


@dataclass(frozen=True)
class EndTurn:
    pass


@dataclass(frozen=True)
class ResetGame:
    pass


Intent = Union[SelectPiece, DeselectPiece, MovePiece, EndTurn, ResetGame]
