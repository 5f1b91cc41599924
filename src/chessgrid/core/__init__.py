"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessgrid.core import Board, Color, Position

    board = Board()
    pawn = board.get_piece(Position.from_string("E2"))
    print([str(p) for p in pawn.possible_moves(board)])  # ['E3', 'E4']
    print(board.is_check(Color.WHITE))                   # False
"""

from chessgrid.core.board import Board
from chessgrid.core.enums import CastlingRights, Color, GameResult, PieceType
from chessgrid.core.movement import MOVEMENT, Movement, pseudo_legal_destinations
from chessgrid.core.piece import PROMOTION_CODES, Piece
from chessgrid.core.position import BOARD_SIZE, Position, all_positions

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Value types
    "BOARD_SIZE",
    "Piece",
    "Position",
    "PROMOTION_CODES",
    "all_positions",
    # Movement table
    "MOVEMENT",
    "Movement",
    "pseudo_legal_destinations",
    # Board
    "Board",
]
