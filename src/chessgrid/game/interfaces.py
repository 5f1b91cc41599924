"""Shared types and abstract interfaces for the game layer.

The controller depends on :class:`IGameController`, front ends only talk to
it through the result types defined here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessgrid.core.enums import PieceType

if TYPE_CHECKING:
    from chessgrid.core.piece import Piece
    from chessgrid.core.position import Position


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


# ── Move attempt outcome ─────────────────────────────────────────────────────


class MoveStatus(IntEnum):
    APPLIED = auto()
    PROMOTION_PENDING = auto()
    REJECTED = auto()


class RejectReason(IntEnum):
    """Why a move attempt left the board untouched."""

    NO_PIECE = auto()
    WRONG_COLOR = auto()
    ILLEGAL_DESTINATION = auto()
    PROMOTION_PENDING = auto()
    NO_PENDING_PROMOTION = auto()
    NOT_STARTED = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of a single move attempt.

    Truthy unless the attempt was rejected, so ``if player.make_move(a, b):``
    keeps working for callers that only care about acceptance.

    ``PROMOTION_PENDING`` means the move is legal but nothing has been
    applied yet: the board changes only once the piece kind is supplied.
    """

    status: MoveStatus
    from_pos: Position | None = None
    to_pos: Position | None = None
    captured: Piece | None = None
    promoted_to: PieceType | None = None
    reason: RejectReason | None = None

    @classmethod
    def rejected(cls, reason: RejectReason) -> MoveResult:
        return cls(MoveStatus.REJECTED, reason=reason)

    @property
    def applied(self) -> bool:
        return self.status == MoveStatus.APPLIED

    @property
    def promotion_pending(self) -> bool:
        return self.status == MoveStatus.PROMOTION_PENDING

    def __bool__(self) -> bool:
        return self.status != MoveStatus.REJECTED


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self) -> None:
        """Set up a new game from the standard layout."""

    @abstractmethod
    def submit_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> MoveResult:
        """Attempt a move for the side to move."""

    @abstractmethod
    def complete_promotion(self, choice: PieceType | str | None) -> MoveResult:
        """Finish a move left pending on a promotion choice."""

    @abstractmethod
    def cancel_promotion(self) -> None:
        """Abandon a pending promotion; the board is untouched."""
