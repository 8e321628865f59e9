"""
dropfour.ai - Computer opponents for Connect Four
"""

from dropfour.ai.heuristic import select_move, find_winning_move

__all__ = ['select_move', 'find_winning_move']
