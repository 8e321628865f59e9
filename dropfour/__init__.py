"""
dropfour - Connect Four game engine with a heuristic computer opponent

This package provides the board engine, turn management, win/draw detection,
a one-ply heuristic move selector, and a terminal controller that drives them.
"""

# Version number
__version__ = '0.1.0'
