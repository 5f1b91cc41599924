"""Tests for check detection, king safety and terminal positions."""

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, GameResult
from chessgrid.core.position import (
    D8,
    E1,
    E2,
    E4,
    E5,
    E7,
    F2,
    F3,
    G2,
    G4,
    H4,
    Position,
)


def _sq(name: str) -> Position:
    pos = Position.from_string(name)
    assert pos is not None
    return pos


def _fools_mate() -> Board:
    board = Board()
    board.move_piece(F2, F3)
    board.move_piece(E7, E5)
    board.move_piece(G2, G4)
    board.move_piece(D8, H4)
    return board


class TestIsCheck:
    def test_start_position_no_check(self) -> None:
        board = Board()
        assert not board.is_check(Color.WHITE)
        assert not board.is_check(Color.BLACK)

    def test_rook_gives_check(self, build_board) -> None:
        board = build_board({"E1": "wK", "E8": "bR"})
        assert board.is_check(Color.WHITE)

    def test_blocked_rook_no_check(self, build_board) -> None:
        board = build_board({"E1": "wK", "E8": "bR", "E4": "wP"})
        assert not board.is_check(Color.WHITE)

    def test_pawn_gives_check(self, build_board) -> None:
        board = build_board({"E4": "wK", "D5": "bP"})
        assert board.is_check(Color.WHITE)

    def test_pawn_does_not_check_straight_ahead(self, build_board) -> None:
        board = build_board({"E4": "wK", "E5": "bP"})
        assert not board.is_check(Color.WHITE)

    def test_knight_gives_check(self, build_board) -> None:
        board = build_board({"E1": "wK", "F3": "bN"})
        assert board.is_check(Color.WHITE)

    def test_missing_king_is_never_in_check(self, build_board) -> None:
        board = build_board({"E8": "bQ"})
        assert not board.is_check(Color.WHITE)
        assert not board.is_checkmate(Color.WHITE)


class TestWouldBeInCheck:
    def test_pinned_piece_cannot_leave_line(self, build_board) -> None:
        board = build_board({"E1": "wK", "E2": "wR", "E8": "bQ", "A8": "bK"})
        rook = board[E2]
        assert board.would_be_in_check(rook, _sq("D2"))
        assert not board.would_be_in_check(rook, E4)
        assert set(rook.possible_moves(board)) == {
            _sq(n) for n in ("E3", "E4", "E5", "E6", "E7", "E8")
        }

    def test_king_cannot_step_into_attack(self, build_board) -> None:
        board = build_board({"E1": "wK", "D8": "bR", "H8": "bK"})
        moves = set(board[E1].possible_moves(board))
        assert _sq("D1") not in moves
        assert _sq("D2") not in moves
        assert _sq("F1") in moves

    def test_board_unchanged_for_empty_target(self) -> None:
        board = Board()
        before = board.copy()
        assert not board.would_be_in_check(board[E2], E4)
        assert board == before

    def test_board_unchanged_for_occupied_target(self, build_board) -> None:
        board = build_board({"E1": "wK", "E2": "wQ", "E7": "bR", "A8": "bK"})
        before = board.copy()
        # Capturing the rook keeps the file closed.
        assert not board.would_be_in_check(board[E2], E7)
        assert board[E7] == before[E7]
        assert board == before

    def test_board_unchanged_when_check_results(self, build_board) -> None:
        board = build_board({"E1": "wK", "E2": "wQ", "E7": "bR", "A8": "bK"})
        before = board.copy()
        assert board.would_be_in_check(board[E2], _sq("D3"))
        assert board == before

    def test_off_board_destination_is_unsafe(self) -> None:
        board = Board()
        before = board.copy()
        assert board.would_be_in_check(board[E2], Position(8, 4))
        assert board == before

    def test_capturing_the_checker_resolves_check(self, build_board) -> None:
        board = build_board({"E1": "wK", "E2": "bQ", "A8": "bK", "A2": "wR"})
        assert board.is_check(Color.WHITE)
        assert not board.would_be_in_check(board[_sq("A2")], E2)


class TestCheckmate:
    def test_fools_mate(self) -> None:
        board = _fools_mate()
        assert board.is_check(Color.WHITE)
        assert board.is_checkmate(Color.WHITE)
        assert not board.is_stalemate(Color.WHITE)
        assert board.game_result(Color.WHITE) == GameResult.BLACK_WINS

    def test_check_with_escape_is_not_mate(self, build_board) -> None:
        board = build_board({"E1": "wK", "E8": "bR", "A8": "bK"})
        assert board.is_check(Color.WHITE)
        assert not board.is_checkmate(Color.WHITE)
        assert board.game_result(Color.WHITE) == GameResult.IN_PROGRESS

    def test_back_rank_mate(self, build_board) -> None:
        board = build_board(
            {"G1": "wK", "F2": "wP", "G2": "wP", "H2": "wP", "A1": "bR", "A8": "bK"}
        )
        assert board.is_checkmate(Color.WHITE)

    def test_queries_leave_board_unchanged(self) -> None:
        board = _fools_mate()
        before = board.copy()
        board.is_checkmate(Color.WHITE)
        board.has_any_valid_moves(Color.BLACK)
        assert board == before


class TestStalemate:
    def test_king_in_corner(self, build_board) -> None:
        board = build_board({"H8": "bK", "F7": "wQ", "G6": "wK"})
        assert not board.is_check(Color.BLACK)
        assert board.is_stalemate(Color.BLACK)
        assert not board.is_checkmate(Color.BLACK)
        assert board.game_result(Color.BLACK) == GameResult.DRAW

    def test_start_position_not_stalemate(self) -> None:
        board = Board()
        assert not board.is_stalemate(Color.WHITE)
        assert board.has_any_valid_moves(Color.WHITE)

    def test_side_with_moves_is_not_stalemated(self, build_board) -> None:
        board = build_board({"E1": "wK", "E8": "bK"})
        assert not board.is_stalemate(Color.WHITE)
        assert board[E1].possible_moves(board)
