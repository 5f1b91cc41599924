"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chessgrid.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and the board-window stylesheet."""
    from chessgrid.ui.styles.theme import APP_STYLE

    app.setApplicationName("Chessgrid")
    app.setApplicationDisplayName("Chessgrid")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None, settings: AppSettings | None = None
) -> int:
    """Create the Qt application, show one board window and run the loop."""
    from PyQt6.QtWidgets import QApplication

    from chessgrid.ui.main_window import MainWindow

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()
    _LOGGER.info("Board window shown (theme=%s)", window.settings.board_theme)

    exit_code = app.exec()
    _LOGGER.info("Event loop finished with code %d", exit_code)
    return exit_code
