"""Visual theme constants and QSS styles for the board window."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets
    highlight_check: QColor  # king in check
    last_move: QColor  # origin and destination of the last move
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor
    black_piece: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(0, 0, 0, 40),  # dark dot overlay
            highlight_check=QColor(255, 0, 0, 120),  # red transparent
            last_move=QColor(155, 199, 0, 105),  # green
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(20, 20, 20),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(140, 162, 173),
            coord_dark=QColor(222, 227, 230),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(20, 20, 20),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 0, 0, 40),
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(112, 149, 120),
            coord_dark=QColor(236, 238, 220),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(20, 20, 20),
        )


THEMES = {
    "Classic": BoardTheme.default,
    "Blue": BoardTheme.blue,
    "Green": BoardTheme.green,
}


def theme_for(name: str) -> BoardTheme:
    """Theme by display name; unknown names fall back to Classic."""
    return THEMES.get(name, BoardTheme.default)()


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #262421;
}

QLabel {
    color: #d9d4c7;
    font-size: 13px;
}
QLabel#turnLabel {
    color: #f0d9b5;
    font-size: 17px;
    font-weight: bold;
}
QLabel#capturedLabel {
    font-size: 18px;
}

QPushButton {
    background: #3a3733;
    color: #d9d4c7;
    border: 1px solid #4d4a45;
    border-radius: 3px;
    padding: 6px 12px;
}
QPushButton:hover {
    background: #4d4a45;
}
QPushButton:pressed {
    background: #769656;
}

QDialog {
    background: #312e2b;
}

QMenuBar, QMenu, QStatusBar {
    background: #262421;
    color: #d9d4c7;
}
QMenuBar::item:selected, QMenu::item:selected {
    background: #769656;
}
"""
