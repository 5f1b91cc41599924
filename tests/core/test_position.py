"""Tests for Position parsing and geometry."""

import pytest

from chessgrid.core.position import (
    A1,
    A8,
    E2,
    E4,
    H1,
    H8,
    Position,
    all_positions,
)


class TestFromString:
    @pytest.mark.parametrize(
        ("notation", "expected"),
        [
            ("A8", Position(0, 0)),
            ("H1", Position(7, 7)),
            ("E2", Position(6, 4)),
            ("E4", Position(4, 4)),
            ("e2", Position(6, 4)),
        ],
    )
    def test_valid(self, notation: str, expected: Position) -> None:
        assert Position.from_string(notation) == expected

    @pytest.mark.parametrize(
        "notation", ["", "Z9", "A0", "AA", "I1", "A9", "E22", "E", " E2", 42, None]
    )
    def test_malformed_returns_none(self, notation: object) -> None:
        assert Position.from_string(notation) is None


class TestToString:
    def test_corners(self) -> None:
        assert A8.to_string() == "A8"
        assert H1.to_string() == "H1"
        assert str(Position(7, 0)) == "A1"

    def test_every_square_round_trips(self) -> None:
        for pos in all_positions():
            assert Position.from_string(pos.to_string()) == pos


class TestValueSemantics:
    def test_equal_and_hashable(self) -> None:
        assert Position(6, 4) == E2
        assert len({Position(6, 4), E2, E4}) == 2

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            E2.row = 3  # type: ignore[misc]

    def test_named_constants(self) -> None:
        assert A1 == Position(7, 0)
        assert H8 == Position(0, 7)


class TestGeometry:
    def test_bounds(self) -> None:
        assert E4.is_in_bounds()
        assert not Position(-1, 0).is_in_bounds()
        assert not Position(0, 8).is_in_bounds()

    def test_offset(self) -> None:
        assert E2.offset(-2, 0) == E4
        assert not A1.offset(1, 0).is_in_bounds()

    def test_all_positions_order(self) -> None:
        squares = all_positions()
        assert len(squares) == 64
        assert squares[0] == A8
        assert squares[-1] == H1
