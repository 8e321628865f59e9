"""
dropfour.game - Core game mechanics for Connect Four

The board engine and state types are re-exported here. Turn management lives
in dropfour.game.rules and the Gymnasium environment in dropfour.game.env;
import those modules directly.
"""

from dropfour.game.board import (new_grid, find_available_row, place_piece,
                                 check_winner, is_board_full, get_valid_columns)
from dropfour.game.state import GameState, MoveResult, RejectReason, ScoreTally

__all__ = ['new_grid', 'find_available_row', 'place_piece', 'check_winner',
           'is_board_full', 'get_valid_columns',
           'GameState', 'MoveResult', 'RejectReason', 'ScoreTally']
