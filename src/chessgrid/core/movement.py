"""Pseudo-legal destinations and attack reach, one pair of functions per kind.

Every ``destinations`` function is purely geometric: it never asks whether
the move would expose the mover's king. That filter is applied once, by
:meth:`Board.legal_destinations`, to all kinds alike.

``attacks`` functions answer "could this piece capture on *target* if
something stood there" and are used only by check detection. They never
mutate the board.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.position import Position

if TYPE_CHECKING:
    from chessgrid.core.board import Board
    from chessgrid.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# Row delta of a pawn step and the row pawns start on.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}

DestinationsFn = Callable[["Board", "Piece"], list[Position]]
AttacksFn = Callable[["Board", "Piece", Position], bool]


@dataclass(frozen=True, slots=True)
class Movement:
    """The capability pair every piece kind provides."""

    destinations: DestinationsFn
    attacks: AttacksFn


# -- Shared walkers ---------------------------------------------------------


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _is_enemy_or_empty(board: Board, piece: Piece, pos: Position) -> bool:
    target = board.get_piece(pos)
    return target is None or target.color != piece.color


def _step_targets(
    board: Board, piece: Piece, offsets: tuple[tuple[int, int], ...]
) -> list[Position]:
    moves: list[Position] = []
    for dr, dc in offsets:
        to = piece.position.offset(dr, dc)
        if board.is_in_bounds(to) and _is_enemy_or_empty(board, piece, to):
            moves.append(to)
    return moves


def _walk_rays(
    board: Board, piece: Piece, directions: tuple[tuple[int, int], ...]
) -> list[Position]:
    moves: list[Position] = []
    for dr, dc in directions:
        to = piece.position.offset(dr, dc)
        while board.is_in_bounds(to):
            target = board.get_piece(to)
            if target is None:
                moves.append(to)
                to = to.offset(dr, dc)
                continue
            if target.color != piece.color:
                moves.append(to)
            break
    return moves


def _line_is_clear(
    board: Board, origin: Position, target: Position, *, diagonal: bool
) -> bool:
    """Whether *target* lies on an open rank/file (or diagonal) from *origin*."""
    d_row = target.row - origin.row
    d_col = target.col - origin.col
    if d_row == 0 and d_col == 0:
        return False
    if diagonal:
        if abs(d_row) != abs(d_col):
            return False
    elif d_row != 0 and d_col != 0:
        return False

    step_row, step_col = _sign(d_row), _sign(d_col)
    cur = origin.offset(step_row, step_col)
    while cur != target:
        if board.get_piece(cur) is not None:
            return False
        cur = cur.offset(step_row, step_col)
    return True


# -- Pawn -------------------------------------------------------------------


def pawn_destinations(board: Board, piece: Piece) -> list[Position]:
    moves: list[Position] = []
    direction = PAWN_DIRECTION[piece.color]
    origin = piece.position

    one_step = origin.offset(direction, 0)
    if board.is_in_bounds(one_step) and board.get_piece(one_step) is None:
        moves.append(one_step)
        two_step = origin.offset(2 * direction, 0)
        if (
            origin.row == PAWN_START_ROW[piece.color]
            and board.is_in_bounds(two_step)
            and board.get_piece(two_step) is None
        ):
            moves.append(two_step)

    for d_col in (-1, 1):
        diag = origin.offset(direction, d_col)
        if not board.is_in_bounds(diag):
            continue
        target = board.get_piece(diag)
        if target is not None and target.color != piece.color:
            moves.append(diag)
    return moves


def pawn_attacks(board: Board, piece: Piece, target: Position) -> bool:
    direction = PAWN_DIRECTION[piece.color]
    return target in (
        piece.position.offset(direction, -1),
        piece.position.offset(direction, 1),
    )


# -- Knight -----------------------------------------------------------------


def knight_destinations(board: Board, piece: Piece) -> list[Position]:
    return _step_targets(board, piece, KNIGHT_OFFSETS)


def knight_attacks(board: Board, piece: Piece, target: Position) -> bool:
    delta = (target.row - piece.position.row, target.col - piece.position.col)
    return delta in KNIGHT_OFFSETS


# -- Sliders ----------------------------------------------------------------


def bishop_destinations(board: Board, piece: Piece) -> list[Position]:
    return _walk_rays(board, piece, BISHOP_DIRS)


def bishop_attacks(board: Board, piece: Piece, target: Position) -> bool:
    return _line_is_clear(board, piece.position, target, diagonal=True)


def rook_destinations(board: Board, piece: Piece) -> list[Position]:
    return _walk_rays(board, piece, ROOK_DIRS)


def rook_attacks(board: Board, piece: Piece, target: Position) -> bool:
    return _line_is_clear(board, piece.position, target, diagonal=False)


def queen_destinations(board: Board, piece: Piece) -> list[Position]:
    return rook_destinations(board, piece) + bishop_destinations(board, piece)


def queen_attacks(board: Board, piece: Piece, target: Position) -> bool:
    return rook_attacks(board, piece, target) or bishop_attacks(board, piece, target)


# -- King -------------------------------------------------------------------


def king_destinations(board: Board, piece: Piece) -> list[Position]:
    moves = _step_targets(board, piece, KING_OFFSETS)

    color = piece.color
    if piece.position != board.king_home(color):
        return moves
    if not (
        board.has_castling_right(color, kingside=True)
        or board.has_castling_right(color, kingside=False)
    ):
        return moves
    if board.is_check(color):
        return moves

    if board.can_castle_kingside(color):
        moves.append(piece.position.offset(0, 2))
    if board.can_castle_queenside(color):
        moves.append(piece.position.offset(0, -2))
    return moves


def king_attacks(board: Board, piece: Piece, target: Position) -> bool:
    d_row = abs(target.row - piece.position.row)
    d_col = abs(target.col - piece.position.col)
    return max(d_row, d_col) == 1


MOVEMENT: dict[PieceType, Movement] = {
    PieceType.PAWN: Movement(pawn_destinations, pawn_attacks),
    PieceType.KNIGHT: Movement(knight_destinations, knight_attacks),
    PieceType.BISHOP: Movement(bishop_destinations, bishop_attacks),
    PieceType.ROOK: Movement(rook_destinations, rook_attacks),
    PieceType.QUEEN: Movement(queen_destinations, queen_attacks),
    PieceType.KING: Movement(king_destinations, king_attacks),
}


def pseudo_legal_destinations(board: Board, piece: Piece) -> list[Position]:
    """Geometry-only destinations for *piece*, before the king-safety filter."""
    return MOVEMENT[piece.piece_type].destinations(board, piece)
