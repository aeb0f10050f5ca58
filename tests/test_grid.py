import numpy as np
import pytest

from tetris_rl.game import Position, clear_lines, collides, empty_grid, full_rows, get_shape, lock

from conftest import grid_from


def test_i_piece_against_right_wall():
    grid = empty_grid(20, 10)
    i_piece = get_shape("I")
    assert collides(i_piece, Position(0, 7), grid)
    assert not collides(i_piece, Position(0, 6), grid)


def test_left_wall_and_floor():
    grid = empty_grid(20, 10)
    o_piece = get_shape("O")
    assert collides(o_piece, Position(0, -1), grid)
    assert collides(o_piece, Position(19, 0), grid)
    assert not collides(o_piece, Position(18, 0), grid)


def test_cells_above_field_skip_occupancy_but_not_walls():
    grid = grid_from(["#...", "....", "...."])
    o_piece = get_shape("O")
    assert not collides(o_piece, Position(-2, 0), grid)
    assert collides(o_piece, Position(-1, 0), grid)
    assert collides(o_piece, Position(-2, 3), grid)


def test_empty_shape_cells_never_collide():
    grid = grid_from(["#..", "...", "..."])
    # T's top-left cell is empty, so it may overlap the settled block
    assert not collides(get_shape("T"), Position(0, 0), grid)


def test_lock_o_piece_at_bottom_left():
    grid = empty_grid(20, 10)
    locked = lock(grid, get_shape("O"), Position(18, 0))
    expected = np.zeros((20, 10), dtype=np.int8)
    expected[18:20, 0:2] = 1
    assert np.array_equal(locked, expected)
    assert not grid.any()


def test_lock_drops_cells_above_field():
    grid = empty_grid(4, 4)
    locked = lock(grid, get_shape("O"), Position(-1, 0))
    assert locked.tolist()[0] == [1, 1, 0, 0]
    assert int(np.count_nonzero(locked)) == 2


def test_clear_single_row_shifts_rows_down():
    grid = np.zeros((20, 10), dtype=np.int8)
    grid[19, :] = 1
    grid[19, 5] = 0
    grid[18, 2] = 1
    grid[17, 7] = 1
    grid = lock(grid, np.array([[1]], dtype=np.int8), Position(19, 5))
    assert full_rows(grid).tolist() == [19]

    cleared = clear_lines(grid)
    assert cleared.shape == (20, 10)
    assert not cleared[0].any()
    assert np.array_equal(cleared[1:], grid[:19])
    assert cleared[19, 2] == 1 and cleared[18, 7] == 1


def test_clear_non_adjacent_rows_keeps_order():
    grid = grid_from([
        "....",
        "#...",
        "####",
        ".#..",
        "####",
    ])
    cleared = clear_lines(grid)
    assert cleared.tolist() == grid_from([
        "....",
        "....",
        "....",
        "#...",
        ".#..",
    ]).tolist()


def test_clear_without_full_rows_is_unchanged():
    grid = grid_from(["#.#", ".##"])
    assert np.array_equal(clear_lines(grid), grid)


def test_lock_rejects_cells_outside_walls_and_floor():
    grid = empty_grid(4, 4)
    o_piece = get_shape("O")
    with pytest.raises(AssertionError):
        lock(grid, o_piece, Position(2, -1))
    with pytest.raises(AssertionError):
        lock(grid, o_piece, Position(2, 3))
    with pytest.raises(AssertionError):
        lock(grid, o_piece, Position(3, 0))
    assert not grid.any()


def test_empty_grid_rejects_non_positive_dimensions():
    with pytest.raises(AssertionError):
        empty_grid(0, 10)
    with pytest.raises(AssertionError):
        empty_grid(20, -1)
