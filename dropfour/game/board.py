"""
board.py - Grid operations for Connect Four

The grid is a plain numpy array so that game states, the heuristic opponent
and the Gymnasium environment can all share it without wrapping. Functions
here never track whose turn it is; that belongs to ``dropfour.game.rules``.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.utils import (ROWS, COLS, CONNECT_N, DIRECTION_VECTORS, Player,
                            is_valid_position)

Coord = Tuple[int, int]


def new_grid() -> np.ndarray:
    """Create an empty ROWS x COLS grid."""
    return np.full((ROWS, COLS), Player.EMPTY.value, dtype=np.int8)


def find_available_row(grid: np.ndarray, col: int) -> Optional[int]:
    """
    Find the row a piece dropped into ``col`` would land on.

    Args:
        grid: The game grid
        col: Column index (0-indexed)

    Returns:
        The lowest empty row of the column, or None if the column is full
    """
    for row in range(ROWS - 1, -1, -1):
        if grid[row, col] == Player.EMPTY.value:
            return row
    return None


def place_piece(grid: np.ndarray, row: int, col: int, player: Player) -> None:
    """Write ``player`` to ``(row, col)``. Callers get ``row`` from find_available_row."""
    grid[row, col] = player.value


def _count_one_side(grid: np.ndarray, row: int, col: int, value: int, dr: int, dc: int) -> int:
    count = 0
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and grid[r, c] == value:
        count += 1
        r += dr
        c += dc
    return count


def check_winner(grid: np.ndarray, row: int, col: int, player: Player) -> bool:
    """
    Check whether ``player`` holding ``(row, col)`` completes a run of four.

    Only the four lines through ``(row, col)`` are inspected, so this has to
    run after every placement with that placement's coordinates.

    Args:
        grid: The game grid
        row: Row of the piece just placed
        col: Column of the piece just placed
        player: Owner of the piece

    Returns:
        True if any axis through the cell holds CONNECT_N or more pieces
    """
    value = player.value
    for dr, dc in DIRECTION_VECTORS.values():
        run = (_count_one_side(grid, row, col, value, dr, dc)
               + _count_one_side(grid, row, col, value, -dr, -dc)
               + 1)
        if run >= CONNECT_N:
            return True
    return False


def get_winning_line(grid: np.ndarray, row: int, col: int) -> List[Coord]:
    """
    Get the cells of the run through ``(row, col)`` that won the game.

    Returns:
        List of (row, col) positions along the first winning axis, ordered
        from one end of the run to the other, or an empty list
    """
    value = grid[row, col]
    if value == Player.EMPTY.value:
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        back = _count_one_side(grid, row, col, value, -dr, -dc)
        forward = _count_one_side(grid, row, col, value, dr, dc)
        if back + forward + 1 >= CONNECT_N:
            start_r, start_c = row - back * dr, col - back * dc
            return [(start_r + i * dr, start_c + i * dc) for i in range(back + forward + 1)]
    return []


def is_board_full(grid: np.ndarray) -> bool:
    return bool(np.all(grid != Player.EMPTY.value))


def get_valid_columns(grid: np.ndarray) -> List[int]:
    """Columns whose top cell is empty, in ascending order."""
    return [col for col in range(COLS) if grid[0, col] == Player.EMPTY.value]


@contextmanager
def simulated_piece(grid: np.ndarray, col: int, player: Player) -> Iterator[Optional[int]]:
    """
    Temporarily drop ``player``'s piece into ``col``.

    Yields the landing row, or None when the column is full (nothing is
    placed then). The cell is emptied again however the block exits.

    Example:
        with simulated_piece(grid, 3, Player.TWO) as row:
            if row is not None and check_winner(grid, row, 3, Player.TWO):
                ...
    """
    row = find_available_row(grid, col)
    if row is None:
        yield None
        return

    debug.trace(f"Simulating {player.name} at ({row}, {col})", "board")
    place_piece(grid, row, col, player)
    try:
        yield row
    finally:
        grid[row, col] = Player.EMPTY.value
