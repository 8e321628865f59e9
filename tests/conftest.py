"""Shared fixtures for dropfour tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dropfour.utils import ROWS, COLS, Player

SYMBOLS = {'.': Player.EMPTY.value, 'X': Player.ONE.value, 'O': Player.TWO.value}


@pytest.fixture
def make_grid():
    """Build a grid from ROWS strings of '.', 'X' and 'O', top row first."""
    def _make(*rows):
        assert len(rows) == ROWS
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for r, line in enumerate(rows):
            assert len(line) == COLS
            for c, symbol in enumerate(line):
                grid[r, c] = SYMBOLS[symbol]
        return grid
    return _make
