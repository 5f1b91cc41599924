"""Position — an immutable board coordinate.

Board layout (row-major, top-down as the board is printed):
    row 0 = rank 8, row 7 = rank 1
    col 0 = file A, col 7 = file H

So ``A8 == Position(0, 0)`` and ``H1 == Position(7, 7)``.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8

_FILES = "ABCDEFGH"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable ``(row, col)`` coordinate compared and hashed by value."""

    row: int
    col: int

    # ── Notation ─────────────────────────────────────────────────────────

    @classmethod
    def from_string(cls, notation: object) -> Position | None:
        """Parse ``"E2"`` style notation; ``None`` for anything malformed.

        The file letter is case-insensitive. No whitespace is stripped.
        """
        if not isinstance(notation, str) or len(notation) != 2:
            return None
        file_char = notation[0].upper()
        rank_char = notation[1]
        if file_char not in _FILES or rank_char not in _RANKS:
            return None
        return cls(BOARD_SIZE - int(rank_char), _FILES.index(file_char))

    def to_string(self) -> str:
        """Two-character notation, e.g. ``Position(6, 4)`` → ``"E2"``."""
        return f"{_FILES[self.col]}{BOARD_SIZE - self.row}"

    def __str__(self) -> str:
        return self.to_string()

    # ── Geometry ─────────────────────────────────────────────────────────

    def is_in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def offset(self, d_row: int, d_col: int) -> Position:
        """Shifted coordinate; may fall off the board."""
        return Position(self.row + d_row, self.col + d_col)


def all_positions() -> list[Position]:
    """Every on-board coordinate, A8 first, H1 last."""
    return [Position(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Position(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Position(7, c) for c in range(8))
