import numpy as np
import pytest

from falling_blocks.game import Board, OutOfRangeError
from tests.helpers import fill_row


def test_board_starts_empty_with_fixed_shape():
    board = Board()
    assert board.grid.shape == (20, 10)
    assert board.occupied_count() == 0
    assert not board.is_occupied(0, 0)


def test_set_cell_records_identity():
    board = Board()
    board.set_cell(3, 19, 6)
    assert board.is_occupied(3, 19) is True
    assert board.is_occupied(4, 19) is False
    assert board.identity_at(3, 19) == 6
    assert board.identity_at(4, 19) == 0


@pytest.mark.parametrize("x,y", [(-1, 0), (10, 0), (0, 20), (0, -1)])
def test_out_of_range_access_raises(x, y):
    board = Board()
    with pytest.raises(OutOfRangeError):
        board.is_occupied(x, y)
    with pytest.raises(IndexError):
        board.set_cell(x, y, 1)


def test_set_cell_rejects_empty_identity():
    board = Board()
    with pytest.raises(ValueError):
        board.set_cell(0, 0, 0)


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        Board(0, 20)


def test_clear_full_rows_without_full_rows_is_noop():
    board = Board()
    fill_row(board, 19, gap=4)
    before = board.clone_state()
    assert board.clear_full_rows() == 0
    assert np.array_equal(board.grid, before)


def test_clear_rows_three_and_seven_preserves_order():
    board = Board()
    # Every row gets a distinct partial fingerprint
    for y in range(board.rows):
        fill_row(board, y, identity=(y % 7) + 1, gap=y % board.cols)
    fill_row(board, 3, identity=2)
    fill_row(board, 7, identity=5)
    partial_rows = [board.grid[y].copy() for y in range(board.rows) if y not in (3, 7)]

    assert board.full_rows() == [3, 7]
    assert board.clear_full_rows() == 2

    assert not board.grid[0].any()
    assert not board.grid[1].any()
    for got, expected in zip(board.grid[2:], partial_rows):
        assert np.array_equal(got, expected)
    assert board.full_rows() == []


def test_clear_adjacent_full_rows_drops_content_above():
    board = Board()
    fill_row(board, 18)
    fill_row(board, 19)
    board.set_cell(0, 17, 4)
    assert board.clear_full_rows() == 2
    assert board.identity_at(0, 19) == 4
    assert board.occupied_count() == 1


def test_reset_empties_in_place():
    board = Board()
    grid = board.grid
    fill_row(board, 10)
    board.reset()
    assert board.grid is grid
    assert board.occupied_count() == 0
