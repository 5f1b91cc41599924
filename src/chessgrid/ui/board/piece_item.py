"""PieceItem — draggable chess glyph on the QGraphicsScene."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsSimpleTextItem

from chessgrid.core.piece import Piece
from chessgrid.core.position import Position


class PieceItem(QGraphicsSimpleTextItem):
    """A single chess piece on the board, drawn as its unicode symbol.

    Stores its logical *square* and supports drag & drop.
    """

    _GLYPH_RATIO = 0.7

    def __init__(
        self, piece: Piece, square: Position, tile_size: int, color: QColor
    ) -> None:
        super().__init__(piece.symbol)
        self.piece = piece
        self.square = square
        self._tile_size = tile_size
        self._drag_origin: QPointF | None = None

        font = QFont()
        font.setPixelSize(int(tile_size * self._GLYPH_RATIO))
        self.setFont(font)
        self.setBrush(QBrush(color))
        self.setPen(QPen(QColor(40, 40, 40), 1))

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setZValue(1)

    def place_at(self, x: float, y: float) -> None:
        """Centre the glyph inside the tile whose top-left corner is (x, y)."""
        rect = self.boundingRect()
        self.setPos(
            x + (self._tile_size - rect.width()) / 2,
            y + (self._tile_size - rect.height()) / 2,
        )

    def enable_drag(self, enabled: bool) -> None:
        """Allow / disallow dragging."""
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, enabled)
        if enabled:
            self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        else:
            self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))

    def start_drag(self) -> None:
        """Called at the beginning of a drag gesture."""
        self._drag_origin = self.pos()
        self.setZValue(10)  # bring to front
        self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
        self.setOpacity(0.85)

    def cancel_drag(self) -> None:
        """Snap back to original position."""
        if self._drag_origin is not None:
            self.setPos(self._drag_origin)
        self._finish_drag()

    def finish_drag(self) -> None:
        """Cleanup after a successful drop."""
        self._finish_drag()

    def _finish_drag(self) -> None:
        self._drag_origin = None
        self.setZValue(1)
        self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        self.setOpacity(1.0)
