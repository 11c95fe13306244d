from __future__ import annotations

import pytest

from ringchess.engine.topology import (
    OFF_BOARD,
    SQUARES,
    Coordinate,
    is_valid_ring,
    normalize_file,
    square_to_str,
    str_to_square,
    to_coord,
    to_index,
)


def test_index_coord_round_trip() -> None:
    for i in range(SQUARES):
        c = to_coord(i)
        assert to_index(c.ring, c.file) == i
        assert Coordinate.from_index(i).to_index() == i


@pytest.mark.parametrize("ring", [0, 1, 2, 3])
def test_file_wraps_modulo_16(ring: int) -> None:
    for f in range(-40, 40):
        assert to_index(ring, f) == to_index(ring, f + 16)
    assert to_index(ring, -1) == ring * 16 + 15
    assert to_index(ring, 16) == ring * 16


@pytest.mark.parametrize("ring", [-3, -1, 4, 7])
def test_invalid_ring_is_off_board(ring: int) -> None:
    assert not is_valid_ring(ring)
    for f in (-1, 0, 5, 15, 16):
        assert to_index(ring, f) == OFF_BOARD


def test_normalize_file_is_non_negative() -> None:
    assert normalize_file(-1) == 15
    assert normalize_file(-17) == 15
    assert normalize_file(31) == 15
    assert normalize_file(0) == 0


def test_coordinate_normalizes_file_and_keeps_ring() -> None:
    c = Coordinate(2, -2)
    assert c.file == 14
    assert c.to_index() == 46
    off = c.offset(2, 3)
    assert off == Coordinate(4, 1)
    assert not off.is_valid()
    assert off.to_index() == OFF_BOARD
    assert str(Coordinate(1, 17)) == "(1, 1)"


def test_square_notation() -> None:
    assert str_to_square("a1") == 0
    assert str_to_square("c2") == 18
    assert str_to_square("p4") == 63
    assert square_to_str(47) == "p3"
    for bad in ("", "a", "a5", "q1", "a0", "a10"):
        with pytest.raises(ValueError):
            str_to_square(bad)
    with pytest.raises(ValueError):
        square_to_str(64)
