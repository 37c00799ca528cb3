"""
Movement rules per piece type.

Key idea: Use strategy pattern to define the set of destination squares for each piece type.

NOTE: There is no check detection, castling, en passant or promotion. A king may move into an attacked square.
The rules only look at the moving piece and at which squares are occupied (and by whom).
"""

from typing import Callable, Optional, Protocol

from chess3d.chess.pieces import Piece
from chess3d.chess.position import Position
from chess3d.core.shared_types import PieceType, Player


class Occupancy(Protocol):
    """Just the parts the movement strategies need (GameState provides these)"""

    def piece_at(self, position: Position) -> Optional[Piece]: ...
    def is_on_board(self, position: Position) -> bool: ...


Vector = tuple[int, int]

ORTHOGONALS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_STEPS: list[Vector] = ORTHOGONALS + DIAGONALS

# Player 1 moves UP the board, player 2 moves DOWN: the two sides advance toward each other
PAWN_DIRECTION: dict[Player, int] = {Player.ONE: 1, Player.TWO: -1}


# --- MOVEMENT RULES ---
def raycasting_move(
    piece: Piece, board: Occupancy, directions: list[Vector]
) -> list[Position]:
    """
    Raycasting algorithm
    -----

    Walk along each direction one square at a time until we hit another piece or the edge of the board.
    * empty square: keep going
    * own piece: stop, the square is not reachable
    * opponent's piece: stop, but the square can be captured
    """
    moves: list[Position] = []
    for dx, dy in directions:
        target = piece.position
        while True:
            target = target.offset(dx, dy)
            if not board.is_on_board(target):
                break

            occupant = board.piece_at(target)
            if occupant is not None:
                # only the first occupied square counts, and only if it belongs to the opponent
                if occupant.is_enemy_of(piece):
                    moves.append(target)
                break

            moves.append(target)
    return moves


def single_step_move(
    piece: Piece, board: Occupancy, deltas: list[Vector]
) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that jump to a fixed set of squares"""
    moves: list[Position] = []
    for dx, dy in deltas:
        target = piece.position.offset(dx, dy)
        if not board.is_on_board(target):
            continue

        occupant = board.piece_at(target)
        if occupant is None or occupant.is_enemy_of(piece):
            moves.append(target)
    return moves


def candidate_pawn_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two on its first move, if both squares are empty.
    - takes diagonally (forward), and never straight ahead.
    """
    moves: list[Position] = []
    forward = PAWN_DIRECTION[piece.player]

    one_step = piece.position.offset(0, forward)
    if board.is_on_board(one_step) and board.piece_at(one_step) is None:
        moves.append(one_step)

        if not piece.has_moved:
            two_steps = piece.position.offset(0, 2 * forward)
            if board.is_on_board(two_steps) and board.piece_at(two_steps) is None:
                moves.append(two_steps)

    for dx in (-1, 1):
        target = piece.position.offset(dx, forward)
        if not board.is_on_board(target):
            continue
        occupant = board.piece_at(target)
        if occupant is not None and occupant.is_enemy_of(piece):
            moves.append(target)
    return moves


def candidate_knight_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """Knights always move such that |dx| + |dy| = 3 (and jump over anything in between)"""
    return single_step_move(piece, board, KNIGHT_JUMPS)


def candidate_bishop_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """Bishops move diagonally: |dx| = |dy|"""
    return raycasting_move(piece, board, DIAGONALS)


def candidate_rook_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(piece, board, ORTHOGONALS)


def candidate_queen_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(piece, board) + candidate_bishop_moves(piece, board)


def candidate_king_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """The king can move by a single square at the time. No castling."""
    return single_step_move(piece, board, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovesFn = Callable[[Piece, Occupancy], list[Position]]
MOVEMENT_RULES: dict[PieceType, MovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def legal_moves(piece: Piece, board: Occupancy) -> list[Position]:
    """
    All squares the piece may move to.
    ----

    The order is deterministic (direction order, then distance for sliders) but should be treated as a set.
    A piece type without a movement rule has no moves.
    """
    movement_rule = MOVEMENT_RULES.get(piece.type)
    if movement_rule is None:
        return []
    return movement_rule(piece, board)


def is_legal_move(piece: Piece, to: Position, board: Occupancy) -> bool:
    return to in legal_moves(piece, board)
