"""
heuristic.py - One-ply heuristic opponent for Connect Four

The opponent works through a fixed priority list:
1. Win if possible
2. Block the opponent's immediate win
3. Take the center column
4. Otherwise random
"""

from typing import Optional, Sequence

import numpy as np

from dropfour.debug import debug
from dropfour.game.board import check_winner, simulated_piece
from dropfour.utils import CENTER_COLUMN, Player


def find_winning_move(grid: np.ndarray, player: Player, columns: Sequence[int]) -> Optional[int]:
    """
    Find the first column where ``player`` would win immediately.

    Args:
        grid: The game grid (left unchanged)
        player: Player whose piece is simulated
        columns: Candidate columns, checked in the given order

    Returns:
        The winning column, or None if no candidate wins
    """
    for col in columns:
        with simulated_piece(grid, col, player) as row:
            if row is not None and check_winner(grid, row, col, player):
                return col
    return None


def select_move(grid: np.ndarray, ai_player: Player, opponent: Player,
                valid_columns: Sequence[int],
                rng: Optional[np.random.Generator] = None) -> int:
    """
    Pick a column for ``ai_player``.

    Args:
        grid: The game grid (left unchanged)
        ai_player: The player to move
        opponent: The player to block
        valid_columns: Playable columns in ascending order
        rng: Random generator for the fallback tier

    Returns:
        The chosen column index
    """
    if not valid_columns:
        raise ValueError("No valid columns to choose from")

    col = find_winning_move(grid, ai_player, valid_columns)
    if col is not None:
        debug.debug(f"{ai_player.name} takes the win in column {col}", "ai")
        return col

    col = find_winning_move(grid, opponent, valid_columns)
    if col is not None:
        debug.debug(f"{ai_player.name} blocks {opponent.name} in column {col}", "ai")
        return col

    if CENTER_COLUMN in valid_columns:
        debug.debug(f"{ai_player.name} takes the center column", "ai")
        return CENTER_COLUMN

    if rng is None:
        rng = np.random.default_rng()
    col = int(rng.choice(list(valid_columns)))
    debug.debug(f"{ai_player.name} plays random column {col}", "ai")
    return col
