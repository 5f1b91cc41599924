"""Console front end: a text board and ``E2 E4`` style move entry."""

from __future__ import annotations

import logging
from collections.abc import Callable

from chessgrid.core.enums import GameResult
from chessgrid.core.position import Position
from chessgrid.game.controller import GameController
from chessgrid.game.interfaces import MoveResult, RejectReason

_LOGGER = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

EXIT_COMMAND = "EXIT"


def run_console(
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
    controller: GameController | None = None,
) -> GameResult:
    """Play a two-player game on the console until it ends or ``EXIT``.

    Returns the final result (``IN_PROGRESS`` if the players quit).
    """
    ctrl = controller if controller is not None else GameController()
    if controller is None:
        ctrl.new_game()

    while not ctrl.is_game_over:
        output_fn(ctrl.board.render())
        side = ctrl.side_to_move.label
        try:
            raw = input_fn(f"{side}'s turn. Enter move (e.g., E2 E4; EXIT to quit): ")
        except EOFError:
            raw = EXIT_COMMAND
        command = raw.strip().upper()

        if command == EXIT_COMMAND:
            output_fn("Game exited.")
            return ctrl.result

        tokens = command.split()
        if len(tokens) != 2:
            output_fn("Invalid input. Please enter moves like E2 E4.")
            continue

        from_pos = Position.from_string(tokens[0])
        to_pos = Position.from_string(tokens[1])
        if from_pos is None or to_pos is None:
            output_fn("Invalid positions. Use format like E2 E4.")
            continue

        result = ctrl.submit_move(from_pos, to_pos)
        if result.promotion_pending:
            result = _ask_promotion(ctrl, input_fn)

        if not result:
            output_fn(_rejection_message(ctrl, result))
            continue

        _report_move(result, output_fn)

    output_fn(ctrl.board.render())
    output_fn(_result_message(ctrl.result))
    return ctrl.result


def _ask_promotion(ctrl: GameController, input_fn: InputFn) -> MoveResult:
    side = ctrl.side_to_move.label
    try:
        choice = input_fn(
            f"{side} pawn promotion! Enter piece to promote to (Q,R,B,N, default Q): "
        )
    except EOFError:
        choice = ""
    return ctrl.complete_promotion(choice)


def _report_move(result: MoveResult, output_fn: OutputFn) -> None:
    if result.captured is not None:
        captured = result.captured
        output_fn(f"{captured.color.label} captured: {captured.code}")
    if result.promoted_to is not None:
        output_fn(f"Pawn promoted to {result.promoted_to.name.capitalize()}!")


def _rejection_message(ctrl: GameController, result: MoveResult) -> str:
    _LOGGER.debug("Console move rejected: %s", result.reason)
    messages = {
        RejectReason.NO_PIECE: "No piece at source square.",
        RejectReason.WRONG_COLOR: f"It's {ctrl.side_to_move.label}'s turn!",
        RejectReason.ILLEGAL_DESTINATION: "Invalid move for that piece.",
    }
    return messages.get(result.reason, "Move not allowed. Try again.")


def _result_message(result: GameResult) -> str:
    if result == GameResult.WHITE_WINS:
        return "White wins by checkmate!"
    if result == GameResult.BLACK_WINS:
        return "Black wins by checkmate!"
    if result == GameResult.DRAW:
        return "Game is a stalemate! It's a draw."
    return "Game in progress."


def main() -> None:
    """Entry point for ``chessgrid-console``."""
    logging.basicConfig(level=logging.WARNING)
    run_console()


if __name__ == "__main__":
    main()
