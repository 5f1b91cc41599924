"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.position import Position

if TYPE_CHECKING:
    from chessgrid.core.board import Board

# Two-character console codes as printed by the text board.
_CODES: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

# Promotion codes accepted from the player.
PROMOTION_CODES: dict[str, PieceType] = {
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable chess piece standing on *position*.

    Behaviour is looked up by ``piece_type`` in the movement table rather
    than through subclasses, so a piece is a plain value: moving it means
    replacing it with :meth:`moved_to`.
    """

    color: Color
    piece_type: PieceType
    position: Position

    # ── Capabilities ─────────────────────────────────────────────────────

    def possible_moves(self, board: Board) -> list[Position]:
        """Destinations that do not leave this piece's own king in check."""
        return board.legal_destinations(self)

    def can_attack_position(self, board: Board, pos: Position) -> bool:
        """Geometric reach to *pos*, ignoring whose turn it is."""
        from chessgrid.core.movement import MOVEMENT

        if not pos.is_in_bounds():
            return False
        return MOVEMENT[self.piece_type].attacks(board, self, pos)

    # ── Construction ─────────────────────────────────────────────────────

    def moved_to(self, position: Position) -> Piece:
        return replace(self, position=position)

    @classmethod
    def from_code(cls, color: Color, code: str, position: Position) -> Piece:
        """Create a promotion piece from ``Q``/``R``/``B``/``N``."""
        try:
            piece_type = PROMOTION_CODES[code.upper()]
        except KeyError:
            raise ValueError(f"Invalid promotion code: {code!r}") from None
        return cls(color, piece_type, position)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def is_white(self) -> bool:
        return self.color == Color.WHITE

    @property
    def code(self) -> str:
        """Console code, e.g. ``wK`` or ``bp``."""
        return ("w" if self.is_white else "b") + _CODES[self.piece_type]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def name(self) -> str:
        return self.piece_type.name.capitalize()

    def __str__(self) -> str:
        return self.code
