"""Tests for castling availability and execution."""

import pytest

from chessgrid.core.board import Board
from chessgrid.core.enums import CastlingRights, Color, PieceType
from chessgrid.core.position import (
    A1,
    A8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    G1,
    H1,
)

_WHITE_CASTLE = {"E1": "wK", "A1": "wR", "H1": "wR", "E8": "bK"}
_BLACK_CASTLE = {"E8": "bK", "A8": "bR", "H8": "bR", "E1": "wK"}


class TestAvailability:
    def test_both_sides_open(self, build_board) -> None:
        board = build_board(_WHITE_CASTLE)
        assert board.can_castle_kingside(Color.WHITE)
        assert board.can_castle_queenside(Color.WHITE)
        assert {G1, C1} <= set(board[E1].possible_moves(board))

    def test_black_both_sides(self, build_board) -> None:
        board = build_board(_BLACK_CASTLE)
        assert board.can_castle_kingside(Color.BLACK)
        assert board.can_castle_queenside(Color.BLACK)

    def test_blocked_by_pieces_at_start(self) -> None:
        board = Board()
        assert not board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.WHITE)

    def test_queenside_blocked_on_b_file(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "B1": "wN"})
        assert not board.can_castle_queenside(Color.WHITE)
        assert board.can_castle_kingside(Color.WHITE)

    def test_not_out_of_check(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "E5": "bR"})
        assert board.is_check(Color.WHITE)
        assert not board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.WHITE)

    def test_not_through_attacked_square(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "F5": "bR"})
        assert not board.can_castle_kingside(Color.WHITE)
        assert board.can_castle_queenside(Color.WHITE)

    def test_not_into_attacked_square(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "C5": "bR"})
        assert not board.can_castle_queenside(Color.WHITE)
        assert board.can_castle_kingside(Color.WHITE)

    def test_attacked_b_file_does_not_matter(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "B5": "bR"})
        assert board.can_castle_queenside(Color.WHITE)

    def test_requires_the_right(self, build_board) -> None:
        board = build_board(_WHITE_CASTLE)
        board.castling_rights = CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE
        assert not board.can_castle_kingside(Color.WHITE)
        assert board.can_castle_queenside(Color.WHITE)
        assert G1 not in board[E1].possible_moves(board)

    def test_requires_rook_on_corner(self, build_board) -> None:
        board = build_board({"E1": "wK", "A1": "wR", "E8": "bK"})
        assert not board.can_castle_kingside(Color.WHITE)

    def test_enemy_rook_on_corner_does_not_count(self, build_board) -> None:
        board = build_board({"E1": "wK", "H1": "bR", "E8": "bK"})
        assert not board.can_castle_kingside(Color.WHITE)

    def test_check_is_pure(self, build_board) -> None:
        board = build_board({**_WHITE_CASTLE, "F5": "bR"})
        before = board.copy()
        board.can_castle_kingside(Color.WHITE)
        board.can_castle_queenside(Color.WHITE)
        assert board == before


class TestRightsLoss:
    def test_king_round_trip_loses_rights(self, build_board) -> None:
        board = build_board(_WHITE_CASTLE)
        board.move_piece(E1, D1)
        board.move_piece(D1, E1)
        assert not board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.WHITE)

    def test_rook_round_trip_loses_one_side(self, build_board) -> None:
        board = build_board(_WHITE_CASTLE)
        board.move_piece(H1, G1)
        board.move_piece(G1, H1)
        assert not board.can_castle_kingside(Color.WHITE)
        assert board.can_castle_queenside(Color.WHITE)


class TestExecution:
    def test_kingside(self, build_board) -> None:
        board = build_board(_WHITE_CASTLE)
        board.move_piece(E1, G1)
        assert board[G1].piece_type == PieceType.KING
        assert board[F1].piece_type == PieceType.ROOK
        assert board.is_empty(H1)
        assert board.is_empty(E1)
        assert not board.has_castling_right(Color.WHITE, kingside=False)

    @pytest.mark.parametrize(
        ("layout", "king_from", "king_to", "rook_to", "rook_from"),
        [
            (_WHITE_CASTLE, E1, C1, D1, A1),
            (_BLACK_CASTLE, E8, C8, D8, A8),
        ],
    )
    def test_queenside(
        self, build_board, layout, king_from, king_to, rook_to, rook_from
    ) -> None:
        board = build_board(layout)
        board.move_piece(king_from, king_to)
        assert board[king_to].piece_type == PieceType.KING
        assert board[rook_to].piece_type == PieceType.ROOK
        assert board[rook_to].position == rook_to
        assert board.is_empty(rook_from)
