"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.piece import Piece
from chessgrid.core.position import Position

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

_CODE_TYPES: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}

BoardBuilder = Callable[[dict[str, str]], Board]


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


def piece_at(code: str, square: str) -> Piece:
    """``piece_at("wK", "E1")`` → white king on E1."""
    color = Color.WHITE if code[0] == "w" else Color.BLACK
    pos = Position.from_string(square)
    assert pos is not None, square
    return Piece(color, _CODE_TYPES[code[1].upper()], pos)


@pytest.fixture
def build_board() -> BoardBuilder:
    """Factory for custom positions: ``build_board({"E1": "wK", "E8": "bK"})``."""

    def _build(layout: dict[str, str]) -> Board:
        board = Board.empty()
        for square, code in layout.items():
            piece = piece_at(code, square)
            board.set_piece(piece.position, piece)
        return board

    return _build


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
