"""Player — validates and applies one move attempt for a side."""

from __future__ import annotations

import logging

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.piece import PROMOTION_CODES, Piece
from chessgrid.core.position import Position
from chessgrid.game.interfaces import MoveResult, MoveStatus, RejectReason

_LOGGER = logging.getLogger(__name__)

_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
_PROMOTION_TYPES = frozenset(PROMOTION_CODES.values())


def parse_promotion_choice(choice: PieceType | str | None) -> PieceType:
    """Map a user selection to a promotion kind; Queen for anything invalid."""
    if isinstance(choice, PieceType):
        return choice if choice in _PROMOTION_TYPES else PieceType.QUEEN
    if isinstance(choice, str):
        return PROMOTION_CODES.get(choice.strip().upper(), PieceType.QUEEN)
    return PieceType.QUEEN


class Player:
    """One side of the game, acting on a shared :class:`Board`.

    Promotion is two-phase: a pawn move onto the last rank without a chosen
    kind returns ``PROMOTION_PENDING`` and leaves the board untouched until
    :meth:`complete_promotion` supplies the kind.
    """

    __slots__ = ("_color", "_board", "_pending")

    def __init__(self, color: Color, board: Board) -> None:
        self._color = color
        self._board = board
        self._pending: tuple[Position, Position] | None = None

    @property
    def color(self) -> Color:
        return self._color

    @property
    def is_white(self) -> bool:
        return self._color == Color.WHITE

    @property
    def board(self) -> Board:
        return self._board

    @property
    def pending_promotion(self) -> Position | None:
        """Destination of the move awaiting a promotion choice."""
        return self._pending[1] if self._pending is not None else None

    # ── Move attempt ─────────────────────────────────────────────────────

    def make_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> MoveResult:
        """Try to move the piece on *from_pos* to *to_pos*.

        Every check happens before the board is touched, so a rejected
        attempt leaves it exactly as it was.
        """
        if self._pending is not None:
            return self._reject(RejectReason.PROMOTION_PENDING)

        moving = self._board.get_piece(from_pos)
        if moving is None:
            return self._reject(RejectReason.NO_PIECE)
        if moving.color != self._color:
            return self._reject(RejectReason.WRONG_COLOR)
        if to_pos not in moving.possible_moves(self._board):
            return self._reject(RejectReason.ILLEGAL_DESTINATION)

        if self._is_promotion(moving, to_pos):
            if promotion is None:
                self._pending = (from_pos, to_pos)
                _LOGGER.debug("%s promotion pending on %s", self._color.label, to_pos)
                return MoveResult(
                    MoveStatus.PROMOTION_PENDING, from_pos, to_pos, self._board[to_pos]
                )
            return self._apply(from_pos, to_pos, parse_promotion_choice(promotion))

        return self._apply(from_pos, to_pos, None)

    def complete_promotion(self, choice: PieceType | str | None) -> MoveResult:
        """Second phase: apply the pending pawn move with the chosen kind."""
        if self._pending is None:
            return self._reject(RejectReason.NO_PENDING_PROMOTION)
        from_pos, to_pos = self._pending
        self._pending = None

        # The board may have been edited between the two phases.
        moving = self._board.get_piece(from_pos)
        if (
            moving is None
            or moving.color != self._color
            or to_pos not in moving.possible_moves(self._board)
        ):
            return self._reject(RejectReason.ILLEGAL_DESTINATION)
        return self._apply(from_pos, to_pos, parse_promotion_choice(choice))

    def cancel_promotion(self) -> None:
        self._pending = None

    # ── Internal helpers ─────────────────────────────────────────────────

    def _is_promotion(self, piece: Piece, to_pos: Position) -> bool:
        return (
            piece.piece_type == PieceType.PAWN
            and to_pos.row == _PROMOTION_ROW[piece.color]
        )

    def _apply(
        self, from_pos: Position, to_pos: Position, promotion: PieceType | None
    ) -> MoveResult:
        captured = self._board.move_piece(from_pos, to_pos)
        if promotion is not None:
            self._board.set_piece(to_pos, Piece(self._color, promotion, to_pos))
            _LOGGER.info(
                "%s pawn promoted to %s on %s",
                self._color.label,
                promotion.name.capitalize(),
                to_pos,
            )
        return MoveResult(
            MoveStatus.APPLIED, from_pos, to_pos, captured, promoted_to=promotion
        )

    def _reject(self, reason: RejectReason) -> MoveResult:
        _LOGGER.debug("%s move rejected: %s", self._color.label, reason.name)
        return MoveResult.rejected(reason)
