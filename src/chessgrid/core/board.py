"""Board — piece placement on an 8x8 grid plus the legality oracle."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from chessgrid.core.enums import CastlingRights, Color, GameResult, PieceType
from chessgrid.core.movement import pseudo_legal_destinations
from chessgrid.core.piece import Piece
from chessgrid.core.position import BOARD_SIZE, Position

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
_KING_COL = 4
_KINGSIDE_ROOK_COL = 7
_QUEENSIDE_ROOK_COL = 0

_ROOK_CORNERS: dict[Position, CastlingRights] = {
    Position(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(7, 7): CastlingRights.WHITE_KINGSIDE,
    Position(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Position(0, 7): CastlingRights.BLACK_KINGSIDE,
}


class Board:
    """Mutable 8x8 grid of optional pieces.

    Besides storage the board owns check detection, castling legality and
    move application. Castling availability is tracked in an explicit
    :class:`CastlingRights` record: a right disappears for good once the
    king or the corresponding rook leaves (or is captured on) its home
    square.

    A board is not thread-safe. :meth:`would_be_in_check` temporarily
    rearranges the grid, so concurrent callers must serialise access
    (see :class:`chessgrid.game.controller.GameController`).
    """

    __slots__ = ("_grid", "_captured", "_castling")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = _empty_grid()
        self._captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        self._castling = CastlingRights.ALL
        self.reset()

    # -- Factory / lifecycle --------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        """A board with no pieces, for building custom positions."""
        board = cls()
        board.clear()
        return board

    def reset(self) -> None:
        """Restore the standard starting layout."""
        self.clear()
        for col, piece_type in enumerate(_BACK_RANK):
            self._place(Piece(Color.BLACK, piece_type, Position(0, col)))
            self._place(Piece(Color.BLACK, PieceType.PAWN, Position(1, col)))
            self._place(Piece(Color.WHITE, PieceType.PAWN, Position(6, col)))
            self._place(Piece(Color.WHITE, piece_type, Position(7, col)))

    def clear(self) -> None:
        """Remove every piece and forget captures.

        Castling rights are reset to :attr:`CastlingRights.ALL`: pieces put
        on the board afterwards have not moved yet.
        """
        self._grid = _empty_grid()
        self._captured = {Color.WHITE: [], Color.BLACK: []}
        self._castling = CastlingRights.ALL

    def copy(self) -> Board:
        board = Board.__new__(Board)
        board._grid = [row.copy() for row in self._grid]
        board._captured = {c: lst.copy() for c, lst in self._captured.items()}
        board._castling = self._castling
        return board

    # -- Element access -------------------------------------------------------

    @staticmethod
    def is_in_bounds(pos: Position) -> bool:
        return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE

    def get_piece(self, pos: Position) -> Piece | None:
        if not self.is_in_bounds(pos):
            return None
        return self._grid[pos.row][pos.col]

    def set_piece(self, pos: Position, piece: Piece | None) -> None:
        """Put *piece* on *pos* (or empty it). Out-of-bounds writes are ignored.

        The stored piece always carries *pos* as its position.
        """
        if not self.is_in_bounds(pos):
            return
        if piece is not None and piece.position != pos:
            piece = piece.moved_to(pos)
        self._grid[pos.row][pos.col] = piece

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.get_piece(pos)

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self.set_piece(pos, piece)

    def is_empty(self, pos: Position) -> bool:
        return self.get_piece(pos) is None

    def _place(self, piece: Piece) -> None:
        self._grid[piece.position.row][piece.position.col] = piece

    # -- Queries --------------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces on the board (of *color* if given), A8 to H1."""
        return [
            p
            for row in self._grid
            for p in row
            if p is not None and (color is None or p.color == color)
        ]

    def captured(self, color: Color) -> tuple[Piece, ...]:
        """*color*'s pieces taken so far, in capture order."""
        return tuple(self._captured[color])

    def find_king(self, color: Color) -> Position | None:
        for piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return piece.position
        return None

    @staticmethod
    def king_home(color: Color) -> Position:
        return Position(_HOME_ROW[color], _KING_COL)

    @property
    def castling_rights(self) -> CastlingRights:
        return self._castling

    @castling_rights.setter
    def castling_rights(self, rights: CastlingRights) -> None:
        self._castling = rights

    def has_castling_right(self, color: Color, kingside: bool) -> bool:
        return bool(self._castling & CastlingRights.for_side(color, kingside))

    # -- Mutation -------------------------------------------------------------

    def move_piece(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Relocate whatever stands on *from_pos* to *to_pos*.

        No legality check is made. Returns the captured piece, if any.
        A king moving two columns also brings the matching rook across.
        """
        moving = self.get_piece(from_pos)
        if moving is None or not self.is_in_bounds(to_pos):
            return None

        captured = self.get_piece(to_pos)
        if captured is not None:
            self._captured[captured.color].append(captured)
            _LOGGER.debug("%s captured on %s", captured.code, to_pos)

        self._grid[from_pos.row][from_pos.col] = None
        self._place(moving.moved_to(to_pos))
        self._revoke_castling(moving, from_pos, to_pos)

        if (
            moving.piece_type == PieceType.KING
            and abs(to_pos.col - from_pos.col) == 2
        ):
            self._slide_castling_rook(from_pos.row, kingside=to_pos.col > from_pos.col)

        return captured

    def _slide_castling_rook(self, row: int, *, kingside: bool) -> None:
        if kingside:
            rook_from, rook_to = Position(row, _KINGSIDE_ROOK_COL), Position(row, 5)
        else:
            rook_from, rook_to = Position(row, _QUEENSIDE_ROOK_COL), Position(row, 3)
        rook = self.get_piece(rook_from)
        if rook is None:
            return
        self._grid[rook_from.row][rook_from.col] = None
        self._place(rook.moved_to(rook_to))
        self._revoke_castling(rook, rook_from, rook_to)
        _LOGGER.debug(
            "%s castled %s", rook.color.label, "kingside" if kingside else "queenside"
        )

    def _revoke_castling(
        self, moving: Piece, from_pos: Position, to_pos: Position
    ) -> None:
        rights = self._castling
        if moving.piece_type == PieceType.KING:
            rights &= ~CastlingRights.both(moving.color)
        for pos in (from_pos, to_pos):
            if pos in _ROOK_CORNERS:
                rights &= ~_ROOK_CORNERS[pos]
        self._castling = rights

    # -- Check detection ------------------------------------------------------

    def is_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? ``False`` when *color* has no king."""
        king_pos = self.find_king(color)
        if king_pos is None:
            return False
        return any(
            piece.can_attack_position(self, king_pos)
            for piece in self.pieces(color.opposite)
        )

    @contextmanager
    def _simulated(self, piece: Piece, to_pos: Position) -> Iterator[None]:
        """Temporarily move *piece* to *to_pos*; always reverted on exit."""
        origin = piece.position
        saved_origin = self._grid[origin.row][origin.col]
        saved_target = self._grid[to_pos.row][to_pos.col]
        self._grid[origin.row][origin.col] = None
        self._grid[to_pos.row][to_pos.col] = piece.moved_to(to_pos)
        try:
            yield
        finally:
            self._grid[to_pos.row][to_pos.col] = saved_target
            self._grid[origin.row][origin.col] = saved_origin

    def would_be_in_check(self, piece: Piece, to_pos: Position) -> bool:
        """Would moving *piece* to *to_pos* leave its own king attacked?

        The board is left exactly as it was. An off-board destination can
        never be taken and is reported as unsafe.
        """
        if not (self.is_in_bounds(to_pos) and self.is_in_bounds(piece.position)):
            return True
        with self._simulated(piece, to_pos):
            return self.is_check(piece.color)

    # -- Castling -------------------------------------------------------------

    def can_castle_kingside(self, color: Color) -> bool:
        return self._can_castle(color, kingside=True)

    def can_castle_queenside(self, color: Color) -> bool:
        return self._can_castle(color, kingside=False)

    def _can_castle(self, color: Color, *, kingside: bool) -> bool:
        row = _HOME_ROW[color]
        rook_col = _KINGSIDE_ROOK_COL if kingside else _QUEENSIDE_ROOK_COL
        king = self._grid[row][_KING_COL]
        rook = self._grid[row][rook_col]
        if king is None or king.color != color or king.piece_type != PieceType.KING:
            return False
        if rook is None or rook.color != color or rook.piece_type != PieceType.ROOK:
            return False
        if not self.has_castling_right(color, kingside):
            return False

        lo, hi = sorted((_KING_COL, rook_col))
        if any(self._grid[row][col] is not None for col in range(lo + 1, hi)):
            return False

        step = 1 if kingside else -1
        transit = Position(row, _KING_COL + step)
        landing = Position(row, _KING_COL + 2 * step)
        return not (
            self.is_check(color)
            or self.would_be_in_check(king, transit)
            or self.would_be_in_check(king, landing)
        )

    # -- Legal moves / game state ----------------------------------------------

    def legal_destinations(self, piece: Piece) -> list[Position]:
        """Pseudo-legal destinations of *piece* that keep its king safe.

        This is the single place the king-safety filter is applied, for
        every piece kind and every move type including captures.
        """
        return [
            to_pos
            for to_pos in pseudo_legal_destinations(self, piece)
            if not self.would_be_in_check(piece, to_pos)
        ]

    def has_any_valid_moves(self, color: Color) -> bool:
        return any(self.legal_destinations(piece) for piece in self.pieces(color))

    def is_checkmate(self, color: Color) -> bool:
        return self.is_check(color) and not self.has_any_valid_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.is_check(color) and not self.has_any_valid_moves(color)

    def game_result(self, color_to_move: Color) -> GameResult:
        """Outcome with *color_to_move* on turn."""
        if self.has_any_valid_moves(color_to_move):
            return GameResult.IN_PROGRESS
        if self.is_check(color_to_move):
            return GameResult.win_for(color_to_move.opposite)
        return GameResult.DRAW

    # -- Display --------------------------------------------------------------

    def render(self) -> str:
        """Text board as shown by the console, captures underneath."""
        lines = ["   " + "  ".join("ABCDEFGH")]
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = self._grid[row][col]
                if piece is not None:
                    cells.append(piece.code)
                else:
                    cells.append("##" if (row + col) % 2 == 0 else "  ")
            lines.append(f"{BOARD_SIZE - row} " + " ".join(cells))
        for color in (Color.WHITE, Color.BLACK):
            taken = " ".join(p.code for p in self._captured[color])
            lines.append(f"{color.label} captured: {taken}".rstrip())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    # -- Dunder helpers -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self._castling == other._castling
            and self._captured == other._captured
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [p.code if p else ".." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  A  B  C  D  E  F  G  H")
        return "\n".join(rows)


def _empty_grid() -> list[list[Piece | None]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
