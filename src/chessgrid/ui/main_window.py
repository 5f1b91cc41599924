"""MainWindow — top-level window assembling the board and status panel."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessgrid.core.enums import Color, GameResult
from chessgrid.core.position import Position
from chessgrid.game.controller import GameController
from chessgrid.game.interfaces import MoveResult
from chessgrid.ui.board.board_view import BoardView
from chessgrid.ui.dialogs.promotion_dialog import PromotionDialog
from chessgrid.ui.settings import AppSettings, apply_settings

_LOGGER = logging.getLogger(__name__)

_RESULT_TEXT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "White wins by checkmate!",
    GameResult.BLACK_WINS: "Black wins by checkmate!",
    GameResult.DRAW: "Stalemate! The game is a draw.",
}


class MainWindow(QMainWindow):
    """Main application window: board on the left, game info on the right."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Chessgrid")
        self.setMinimumSize(760, 560)
        self.resize(900, 660)

        self._controller = GameController()
        self._settings = settings if settings is not None else AppSettings()
        self._last_move: tuple[Position, Position] | None = None

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()
        apply_settings(self._settings, self._board_view.board_scene)

        # Start with a default game
        self._start_new_game()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        right = QVBoxLayout()
        right.setSpacing(6)

        self._turn_label = QLabel()
        self._turn_label.setObjectName("turnLabel")
        right.addWidget(self._turn_label)

        self._captured_labels: dict[Color, QLabel] = {}
        for color in (Color.WHITE, Color.BLACK):
            label = QLabel()
            label.setObjectName("capturedLabel")
            label.setWordWrap(True)
            right.addWidget(label)
            self._captured_labels[color] = label
        right.addStretch(1)

        self._btn_new = QPushButton("New game")
        self._btn_new.setMinimumHeight(36)
        right.addWidget(self._btn_new)

        self._btn_flip = QPushButton("Flip board")
        self._btn_flip.setMinimumHeight(36)
        right.addWidget(self._btn_flip)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(220)
        root.addWidget(right_widget)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None
        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None

        self._act_new_game = QAction("&New game", self)
        self._act_new_game.setShortcut("Ctrl+N")
        menu_game.addAction(self._act_new_game)

        self._act_flip = QAction("&Flip board", self)
        self._act_flip.setShortcut("Ctrl+F")
        menu_game.addAction(self._act_flip)

        menu_game.addSeparator()
        self._act_quit = QAction("&Quit", self)
        self._act_quit.setShortcut("Ctrl+Q")
        menu_game.addAction(self._act_quit)

    def _connect_signals(self) -> None:
        self._board_view.move_requested.connect(self._on_move_requested)
        self._btn_new.clicked.connect(self._start_new_game)
        self._btn_flip.clicked.connect(self._on_flip)
        self._act_new_game.triggered.connect(self._start_new_game)
        self._act_flip.triggered.connect(self._on_flip)
        self._act_quit.triggered.connect(self.close)

        events = self._controller.events
        events.on_move.append(self._on_move_applied)
        events.on_game_over.append(self._on_game_over)

    # ── Properties (used by tests) ───────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def settings(self) -> AppSettings:
        return self._settings

    # ── Handlers ─────────────────────────────────────────────────────────

    def _start_new_game(self) -> None:
        self._last_move = None
        self._controller.new_game()
        self._status_label.setText("Ready")
        self._refresh()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        self._settings.flipped = not scene.is_flipped()
        scene.set_flipped(self._settings.flipped)

    def _on_move_requested(self, from_pos: Position, to_pos: Position) -> None:
        result: MoveResult | None = self._controller.submit_move(from_pos, to_pos)
        if result is not None and result.promotion_pending:
            result = self._resolve_promotion()
        if result is not None and not result:
            _LOGGER.debug(
                "Board move %s-%s rejected: %s", from_pos, to_pos, result.reason
            )
            self._status_label.setText("Move not allowed.")
        self._refresh()

    def _resolve_promotion(self) -> MoveResult | None:
        """Ask for the promotion piece; ``None`` if the dialog was cancelled."""
        choice = PromotionDialog.ask(self._controller.side_to_move, self)
        if choice is None:
            self._controller.cancel_promotion()
            return None
        return self._controller.complete_promotion(choice)

    def _on_move_applied(self, result: MoveResult) -> None:
        if result.from_pos is not None and result.to_pos is not None:
            self._last_move = (result.from_pos, result.to_pos)
        self._status_label.setText(f"{result.from_pos} → {result.to_pos}")

    def _on_game_over(self, result: GameResult) -> None:
        self._status_label.setText(_RESULT_TEXT.get(result, ""))

    # ── Refresh ──────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        ctrl = self._controller
        scene = self._board_view.board_scene
        scene.set_board(ctrl.board, ctrl.side_to_move)
        if self._last_move is not None:
            scene.highlight_last_move(*self._last_move)
        else:
            scene.highlight_last_move(None, None)
        scene.highlight_check()
        scene.set_interactive(not ctrl.is_game_over)

        if ctrl.is_game_over:
            self._turn_label.setText("Game over")
        elif ctrl.board.is_check(ctrl.side_to_move):
            self._turn_label.setText(f"{ctrl.side_to_move.label} to move (check)")
        else:
            self._turn_label.setText(f"{ctrl.side_to_move.label} to move")

        for color, label in self._captured_labels.items():
            taken = " ".join(p.symbol for p in ctrl.board.captured(color))
            label.setText(f"{color.label} captured: {taken}")
