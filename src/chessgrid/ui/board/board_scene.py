"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessgrid.core.board import Board
from chessgrid.core.enums import Color
from chessgrid.core.position import BOARD_SIZE, Position, all_positions
from chessgrid.ui.board.piece_item import PieceItem
from chessgrid.ui.styles.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece items.

    The scene never mutates the board. It only proposes moves.

    Signals:
        move_requested(Position, Position): Emitted when a user drops or
            clicks a piece onto one of its legal destinations.
    """

    move_requested = pyqtSignal(object, object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._board: Board | None = None
        self._side_to_move = Color.WHITE
        self._flipped = False

        # Interaction state
        self._selected_sq: Position | None = None
        self._legal_targets: list[Position] = []
        self._dragging_item: PieceItem | None = None
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Position, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []
        self._last_move_highlights: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Position, PieceItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_board(self, board: Board, side_to_move: Color) -> None:
        """Update the displayed board (full redraw of pieces)."""
        self._board = board
        self._side_to_move = side_to_move
        self._clear_selection()
        self._sync_pieces()

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable piece interaction."""
        self._interactive = interactive
        if not interactive:
            self._clear_selection()

    def is_interactive(self) -> bool:
        return self._interactive

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        if self._board is not None:
            self._sync_pieces()

    def is_flipped(self) -> bool:
        """Return whether the board is currently flipped."""
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        if self._board is not None:
            self._sync_pieces()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide legal-move dot highlights."""
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    def highlight_last_move(
        self, from_pos: Position | None, to_pos: Position | None
    ) -> None:
        """Highlight origin/destination of the last played move."""
        self._clear_items(self._last_move_highlights)
        for sq in (from_pos, to_pos):
            if sq is None:
                continue
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_highlights.append(rect)

    def highlight_check(self) -> None:
        """Highlight the side to move's king if it is in check."""
        self._clear_items(self._check_items)
        if self._board is None or not self._board.is_check(self._side_to_move):
            return
        king_sq = self._board.find_king(self._side_to_move)
        if king_sq is not None:
            rect = self._make_highlight(king_sq, self._theme.highlight_check)
            rect.setZValue(0.6)
            self._check_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont()
        font.setPixelSize(max(9, t // 7))

        for sq in all_positions():
            vc, vr = self._visual_coords(sq)
            is_light = (sq.row + sq.col) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = QGraphicsRectItem(vc * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[sq] = rect

            text_color = self._theme.coord_dark if is_light else self._theme.coord_light

            # Rank numbers (left edge)
            if vc == 0:
                rank = str(BOARD_SIZE - sq.row)
                self._add_coord(rank, font, text_color, vc * t + 2, vr * t + 1)

            # File letters (bottom edge)
            if vr == BOARD_SIZE - 1:
                letter = chr(ord("a") + sq.col)
                self._add_coord(
                    letter, font, text_color, vc * t + t - 12, vr * t + t - 16
                )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, font: QFont, color: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        t = self.TILE
        for piece in self._board.pieces():
            color = (
                self._theme.white_piece
                if piece.color == Color.WHITE
                else self._theme.black_piece
            )
            item = PieceItem(piece, piece.position, t, color)
            vc, vr = self._visual_coords(piece.position)
            item.place_at(vc * t, vr * t)
            self.addItem(item)
            self._piece_items[piece.position] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        sq = self._pos_to_square(event.scenePos())
        if sq is None:
            self._clear_selection()
            return super().mousePressEvent(event)

        # Clicking a legal target → request the move
        if self._selected_sq is not None and sq in self._legal_targets:
            from_sq = self._selected_sq
            self._clear_selection()
            self.move_requested.emit(from_sq, sq)
            return

        piece = self._board.get_piece(sq)
        if piece is not None and piece.color == self._side_to_move:
            self._select_square(sq)
            item = self._piece_items.get(sq)
            if item is not None:
                item.enable_drag(True)
                item.start_drag()
                self._dragging_item = item
        else:
            self._clear_selection()

        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._dragging_item is not None and event is not None:
            item = self._dragging_item
            drop_sq = self._pos_to_square(event.scenePos())

            if (
                drop_sq is not None
                and drop_sq != item.square
                and drop_sq in self._legal_targets
            ):
                item.finish_drag()
                item.enable_drag(False)
                self._dragging_item = None
                self._clear_selection()
                self.move_requested.emit(item.square, drop_sq)
                return

            # Invalid drop — snap back
            item.cancel_drag()
            item.enable_drag(False)
            self._dragging_item = None

        super().mouseReleaseEvent(event)

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Position) -> None:
        self._clear_selection()
        self._selected_sq = sq

        rect = self._make_highlight(sq, self._theme.highlight_from)
        self._highlight_items.append(rect)

        piece = self._board.get_piece(sq) if self._board is not None else None
        if piece is None or self._board is None:
            return
        self._legal_targets = piece.possible_moves(self._board)
        if self._show_legal_moves:
            for target in self._legal_targets:
                dot = self._make_highlight(target, self._theme.highlight_to)
                self._legal_dot_items.append(dot)

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._legal_targets = []
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, sq: Position) -> tuple[int, int]:
        """Board square → visual (column, row)."""
        if self._flipped:
            return BOARD_SIZE - 1 - sq.col, BOARD_SIZE - 1 - sq.row
        return sq.col, sq.row

    def _pos_to_square(self, pos: QPointF) -> Position | None:
        """Scene position → board square."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return None
        if self._flipped:
            return Position(BOARD_SIZE - 1 - row, BOARD_SIZE - 1 - col)
        return Position(row, col)

    def _make_highlight(self, sq: Position, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vc, vr = self._visual_coords(sq)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
