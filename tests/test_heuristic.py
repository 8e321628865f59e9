"""Tests for the heuristic move selector."""

import numpy as np
import pytest

from dropfour.ai.heuristic import find_winning_move, select_move
from dropfour.game.board import new_grid, get_valid_columns
from dropfour.utils import CENTER_COLUMN, Player


def test_find_winning_move(make_grid):
    grid = make_grid(
        ".......",
        ".......",
        ".......",
        "O......",
        "O......",
        "OXXX...",
    )
    before = grid.copy()
    assert find_winning_move(grid, Player.ONE, get_valid_columns(grid)) == 4
    assert find_winning_move(grid, Player.TWO, get_valid_columns(grid)) == 0
    assert find_winning_move(grid, Player.ONE, [0, 1, 2, 3]) is None
    assert np.array_equal(grid, before)


def test_find_winning_move_prefers_lowest_column(make_grid):
    grid = make_grid(
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        ".XXX...",
    )
    assert find_winning_move(grid, Player.ONE, get_valid_columns(grid)) == 0


def test_win_beats_block_and_center(make_grid):
    """An immediate win is taken even when a block on the center is available."""
    grid = make_grid(
        ".......",
        ".......",
        ".......",
        "......O",
        "X.....O",
        "XXX...O",
    )
    col = select_move(grid, Player.TWO, Player.ONE, get_valid_columns(grid))
    assert col == 6


def test_block_beats_center(make_grid):
    grid = make_grid(
        ".......",
        ".......",
        ".......",
        ".......",
        "...O.O.",
        "...XXX.",
    )
    col = select_move(grid, Player.TWO, Player.ONE, get_valid_columns(grid))
    assert col == 2


def test_block_away_from_center(make_grid):
    grid = make_grid(
        ".......",
        ".......",
        "X......",
        "X......",
        "X..O...",
        "O..O...",
    )
    col = select_move(grid, Player.TWO, Player.ONE, get_valid_columns(grid))
    assert col == 0


def test_center_when_nothing_urgent():
    grid = new_grid()
    grid[5, 0] = Player.ONE.value
    col = select_move(grid, Player.TWO, Player.ONE, get_valid_columns(grid))
    assert col == CENTER_COLUMN


def test_random_fallback_picks_valid_column(make_grid):
    """With the center full and no threats, a valid column is drawn at random."""
    grid = make_grid(
        "...X...",
        "...O...",
        "...X...",
        "...O...",
        "...X...",
        "...O...",
    )
    valid = get_valid_columns(grid)
    assert CENTER_COLUMN not in valid

    rng = np.random.default_rng(7)
    picks = {select_move(grid, Player.TWO, Player.ONE, valid, rng) for _ in range(200)}
    assert picks <= set(valid)
    assert len(picks) > 1


def test_random_fallback_is_reproducible(make_grid):
    grid = make_grid(
        "...X...",
        "...O...",
        "...X...",
        "...O...",
        "...X...",
        "...O...",
    )
    valid = get_valid_columns(grid)
    first = [select_move(grid, Player.ONE, Player.TWO, valid, np.random.default_rng(3))
             for _ in range(5)]
    second = [select_move(grid, Player.ONE, Player.TWO, valid, np.random.default_rng(3))
              for _ in range(5)]
    assert first == second


def test_select_move_leaves_grid_unchanged(make_grid):
    grid = make_grid(
        ".......",
        ".......",
        ".......",
        ".O.....",
        ".OX....",
        ".OXX...",
    )
    before = grid.copy()
    select_move(grid, Player.TWO, Player.ONE, get_valid_columns(grid))
    assert np.array_equal(grid, before)


def test_select_move_without_columns():
    with pytest.raises(ValueError):
        select_move(new_grid(), Player.ONE, Player.TWO, [])
