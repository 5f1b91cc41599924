"""User-configurable options for the board window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgrid.ui.styles.theme import theme_for

if TYPE_CHECKING:
    from chessgrid.ui.board.board_scene import BoardScene


@dataclass
class AppSettings:
    """All user-configurable settings."""

    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    flipped: bool = False


def apply_settings(settings: AppSettings, scene: BoardScene) -> None:
    """Push *settings* onto a board scene."""
    scene.set_theme(theme_for(settings.board_theme))
    scene.set_show_coordinates(settings.show_coordinates)
    scene.set_show_legal_moves(settings.show_legal_moves)
    scene.set_flipped(settings.flipped)
