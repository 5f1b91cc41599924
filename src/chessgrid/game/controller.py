"""GameController — the turn-taking orchestrator of a chess game.

Coordinates: Board, two Players, side to move, game result.
Emits events via simple callbacks so front ends / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, GameResult, PieceType
from chessgrid.core.piece import Piece
from chessgrid.core.position import Position
from chessgrid.game.interfaces import (
    GamePhase,
    IGameController,
    MoveResult,
    RejectReason,
)
from chessgrid.game.player import Player

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveResult], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Runs a full game: validates moves through the current player,
    switches turns, detects checkmate / stalemate, notifies listeners.

    Every public operation runs under one re-entrant lock, so a controller
    may be shared between threads; the board it owns must not be mutated
    behind its back.
    """

    __slots__ = (
        "_lock",
        "_board",
        "_players",
        "_side_to_move",
        "_phase",
        "_result",
        "events",
    )

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._board = Board()
        self._players: dict[Color, Player] = {}
        self._side_to_move = Color.WHITE
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def current_player(self) -> Player | None:
        return self._players.get(self._side_to_move)

    @property
    def pending_promotion(self) -> Position | None:
        player = self.current_player
        return player.pending_promotion if player is not None else None

    def player(self, color: Color) -> Player | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self, board: Board | None = None, side_to_move: Color = Color.WHITE
    ) -> None:
        """Start over on the standard layout (or a prepared *board*)."""
        with self._lock:
            self._board = board if board is not None else Board()
            self._players = {
                Color.WHITE: Player(Color.WHITE, self._board),
                Color.BLACK: Player(Color.BLACK, self._board),
            }
            self._side_to_move = side_to_move
            self._result = GameResult.IN_PROGRESS
            _LOGGER.info("New game, %s to move", side_to_move.label)
            self._set_phase(GamePhase.AWAITING_MOVE)

    def submit_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType | str | None = None,
    ) -> MoveResult:
        with self._lock:
            if self.is_game_over:
                return MoveResult.rejected(RejectReason.GAME_OVER)
            player = self.current_player
            if player is None:
                return MoveResult.rejected(RejectReason.NOT_STARTED)

            result = player.make_move(from_pos, to_pos, promotion)
            if result.promotion_pending:
                self._set_phase(GamePhase.AWAITING_PROMOTION)
            elif result.applied:
                self._after_move(result)
            return result

    def complete_promotion(self, choice: PieceType | str | None) -> MoveResult:
        with self._lock:
            player = self.current_player
            if player is None or self._phase != GamePhase.AWAITING_PROMOTION:
                return MoveResult.rejected(RejectReason.NO_PENDING_PROMOTION)
            result = player.complete_promotion(choice)
            if result.applied:
                self._after_move(result)
            else:
                self._set_phase(GamePhase.AWAITING_MOVE)
            return result

    def cancel_promotion(self) -> None:
        with self._lock:
            player = self.current_player
            if player is None or self._phase != GamePhase.AWAITING_PROMOTION:
                return
            player.cancel_promotion()
            self._set_phase(GamePhase.AWAITING_MOVE)

    def legal_destinations(self, from_pos: Position) -> list[Position]:
        """Where the side to move may send the piece on *from_pos*."""
        with self._lock:
            piece: Piece | None = self._board.get_piece(from_pos)
            if piece is None or piece.color != self._side_to_move:
                return []
            return piece.possible_moves(self._board)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, result: MoveResult) -> None:
        mover = self._side_to_move
        opponent = mover.opposite
        self._emit_move(result)

        if self._board.is_checkmate(opponent):
            _LOGGER.info("%s wins by checkmate", mover.label)
            self._finish(GameResult.win_for(mover))
            return
        if self._board.is_stalemate(opponent):
            _LOGGER.info("Stalemate, game drawn")
            self._finish(GameResult.DRAW)
            return

        self._side_to_move = opponent
        self._set_phase(GamePhase.AWAITING_MOVE)

    def _finish(self, result: GameResult) -> None:
        self._result = result
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, result: MoveResult) -> None:
        for cb in self.events.on_move:
            cb(result)
