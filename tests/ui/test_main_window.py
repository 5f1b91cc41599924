"""Tests for MainWindow wiring between the board view and the controller."""

from __future__ import annotations

import pytest

from chessgrid.core.enums import Color, GameResult, PieceType
from chessgrid.core.position import A7, A8, D8, E2, E4, E5, E7, F2, F3, G2, G4, H4
from chessgrid.game.interfaces import GamePhase
from chessgrid.ui.main_window import MainWindow
from chessgrid.ui.settings import AppSettings


def test_starts_with_white_to_move() -> None:
    window = MainWindow()
    assert window.controller.phase == GamePhase.AWAITING_MOVE
    assert window._turn_label.text() == "White to move"
    assert len(window.board_view.board_scene._piece_items) == 32


def test_move_request_updates_board_and_labels() -> None:
    window = MainWindow()
    window._on_move_requested(E2, E4)

    assert window.controller.board[E4] is not None
    assert window.controller.side_to_move == Color.BLACK
    assert window._turn_label.text() == "Black to move"
    assert window._last_move == (E2, E4)
    assert E4 in window.board_view.board_scene._piece_items


def test_rejected_request_sets_status() -> None:
    window = MainWindow()
    window._on_move_requested(E7, E5)
    assert window._status_label.text() == "Move not allowed."
    assert window.controller.side_to_move == Color.WHITE


def test_checkmate_disables_board() -> None:
    window = MainWindow()
    for from_sq, to_sq in ((F2, F3), (E7, E5), (G2, G4), (D8, H4)):
        window._on_move_requested(from_sq, to_sq)

    assert window.controller.result == GameResult.BLACK_WINS
    assert window._turn_label.text() == "Game over"
    assert window._status_label.text() == "Black wins by checkmate!"
    assert not window.board_view.board_scene.is_interactive()


def test_new_game_resets() -> None:
    window = MainWindow()
    window._on_move_requested(E2, E4)
    window._btn_new.click()
    assert window.controller.side_to_move == Color.WHITE
    assert window._last_move is None
    assert window.controller.board[E2] is not None


def test_flip_toggles_scene_and_settings() -> None:
    window = MainWindow()
    window._btn_flip.click()
    assert window.board_view.board_scene.is_flipped()
    assert window._settings.flipped


def test_settings_applied_on_start() -> None:
    window = MainWindow(AppSettings(show_coordinates=False, flipped=True))
    scene = window.board_view.board_scene
    assert scene.is_flipped()
    assert all(not item.isVisible() for item in scene._coord_items)


def _promotion_window(build_board) -> MainWindow:
    window = MainWindow()
    window.controller.new_game(build_board({"A7": "wP", "E1": "wK", "H6": "bK"}))
    window._refresh()
    return window


def test_promotion_uses_dialog_choice(
    monkeypatch: pytest.MonkeyPatch, build_board
) -> None:
    asked: list[Color] = []

    def fake_ask(color, parent=None):
        asked.append(color)
        return PieceType.KNIGHT

    monkeypatch.setattr(
        "chessgrid.ui.main_window.PromotionDialog.ask", staticmethod(fake_ask)
    )
    window = _promotion_window(build_board)
    window._on_move_requested(A7, A8)

    assert asked == [Color.WHITE]
    assert window.controller.board[A8].piece_type == PieceType.KNIGHT
    assert window.controller.side_to_move == Color.BLACK


def test_promotion_cancelled_leaves_board(
    monkeypatch: pytest.MonkeyPatch, build_board
) -> None:
    monkeypatch.setattr(
        "chessgrid.ui.main_window.PromotionDialog.ask",
        staticmethod(lambda color, parent=None: None),
    )
    window = _promotion_window(build_board)
    before = window.controller.board.copy()
    window._on_move_requested(A7, A8)

    assert window.controller.board == before
    assert window.controller.phase == GamePhase.AWAITING_MOVE
    assert window.controller.side_to_move == Color.WHITE
