"""
rules.py - Turn management and game sessions for Connect Four

This module provides:
1. The turn protocol as plain functions over a GameState (new_game,
   attempt_move, suggest_ai_move)
2. ConnectFourGame, a session that owns the current game, the score tally
   and the listeners a presentation layer subscribes with
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

import numpy as np

from dropfour.ai.heuristic import select_move
from dropfour.debug import debug
from dropfour.game.board import (find_available_row, place_piece, check_winner,
                                 get_winning_line, is_board_full, get_valid_columns)
from dropfour.game.state import GameState, MoveResult, RejectReason, ScoreTally
from dropfour.utils import COLS, Player, GameResult

DEFAULT_NAMES = {Player.ONE: "Player 1", Player.TWO: "Player 2"}


def new_game(ai_player: Optional[Player] = None) -> GameState:
    """Create a fresh game with Player.ONE to move."""
    debug.debug(f"New game (ai_player={ai_player.name if ai_player else None})", "game")
    return GameState(ai_player=ai_player)


def attempt_move(state: GameState, col: int, *, by_ai: bool = False,
                 player: Optional[Player] = None) -> MoveResult:
    """
    Try to drop the current player's piece into ``col``.

    Legality check, placement, win/draw evaluation and turn advance happen
    together; a rejected move leaves ``state`` untouched.

    Args:
        state: The game to play in (mutated on success)
        col: Column index (0-indexed)
        by_ai: Whether the move comes from the automated player
        player: If given, the player the move is submitted for

    Returns:
        MoveResult describing the placement or the rejection reason
    """
    if not 0 <= col < COLS:
        debug.debug(f"Rejected column {col}: out of range", "game")
        return MoveResult.rejected(col, RejectReason.INVALID_COLUMN)

    if state.ended:
        debug.debug(f"Rejected column {col}: game is over ({state.result.name})", "game")
        return MoveResult.rejected(col, RejectReason.GAME_ALREADY_ENDED)

    if ((player is not None and player != state.current_player)
            or state.is_ai_turn != by_ai):
        debug.debug(f"Rejected column {col}: not this player's turn "
                    f"(current={state.current_player.name}, by_ai={by_ai})", "game")
        return MoveResult.rejected(col, RejectReason.WRONG_TURN)

    row = find_available_row(state.grid, col)
    if row is None:
        debug.debug(f"Rejected column {col}: column is full", "game")
        return MoveResult.rejected(col, RejectReason.COLUMN_FULL)

    mover = state.current_player
    place_piece(state.grid, row, col, mover)
    state.last_move = (row, col)
    state.moves_made.append(col)
    debug.trace(f"{mover.name} placed at ({row}, {col})", "game")

    winning_line = ()
    debug.start_timer("win_check")
    if check_winner(state.grid, row, col, mover):
        state.result = GameResult.win_for(mover)
        winning_line = tuple(get_winning_line(state.grid, row, col))
        debug.info(f"{mover.name} wins after move at {state.last_move}", "game")
    elif is_board_full(state.grid):
        state.result = GameResult.DRAW
        debug.info("Game ends in a draw", "game")
    else:
        state.current_player = mover.other()
    debug.end_timer("win_check", "game")

    return MoveResult(accepted=True, column=col, row=row, player=mover,
                      outcome=state.result, winning_line=winning_line)


def suggest_ai_move(state: GameState, rng: Optional[np.random.Generator] = None) -> int:
    """
    Choose the automated player's next column.

    Raises:
        ValueError: if the game is over or it is not the automated player's turn
    """
    if state.ended:
        raise ValueError("Cannot suggest a move: the game is over")
    if not state.is_ai_turn:
        raise ValueError(f"Cannot suggest a move: it is {state.current_player.name}'s turn")

    ai_player = state.current_player
    return select_move(state.grid, ai_player, ai_player.other(),
                       get_valid_columns(state.grid), rng)


class EventKind(Enum):
    NEW_GAME = auto()
    MOVE = auto()
    REJECTED = auto()
    GAME_OVER = auto()
    SCORES = auto()


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    state: GameState
    result: Optional[MoveResult] = None
    scores: Optional[Dict[Player, int]] = None


Listener = Callable[[GameEvent], None]


class ConnectFourGame:
    """
    A play session: the current game, the score tally and the listeners.

    Presentation layers call make_move / play_ai_turn / new_game and redraw
    from the GameEvents they receive.
    """

    def __init__(self, ai_player: Optional[Player] = None,
                 names: Optional[Dict[Player, str]] = None,
                 seed: Optional[int] = None):
        """
        Initialize a session.

        Args:
            ai_player: Player controlled by the heuristic opponent, if any
            names: Display names per player; blank names use the defaults
            seed: Seed for the opponent's random fallback
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.ai_player = ai_player
        self.names = dict(names or {})
        self.rng = np.random.default_rng(seed)
        self.scores = ScoreTally()
        self._listeners: List[Listener] = []
        self.state = new_game(ai_player)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, kind: EventKind, result: Optional[MoveResult] = None) -> None:
        scores = self.scores.as_dict() if kind == EventKind.SCORES else None
        event = GameEvent(kind=kind, state=self.state, result=result, scores=scores)
        for listener in list(self._listeners):
            listener(event)

    def player_name(self, player: Player) -> str:
        name = (self.names.get(player) or "").strip()
        return name or DEFAULT_NAMES[player]

    def set_ai_player(self, ai_player: Optional[Player]) -> None:
        """Switch the automated player on or off; applies to the current game too."""
        debug.info(f"Automated player set to {ai_player.name if ai_player else 'none'}", "game")
        self.ai_player = ai_player
        self.state.ai_player = ai_player

    def new_game(self) -> GameState:
        self.state = new_game(self.ai_player)
        self._emit(EventKind.NEW_GAME)
        return self.state

    def make_move(self, col: int) -> MoveResult:
        """Submit a human move for the current player."""
        return self._resolve(attempt_move(self.state, col))

    def play_ai_turn(self) -> Optional[MoveResult]:
        """
        Let the automated player move.

        Returns:
            The MoveResult, or None when the game is over or it is not the
            automated player's turn
        """
        if self.state.ended or not self.state.is_ai_turn:
            return None
        col = suggest_ai_move(self.state, self.rng)
        return self._resolve(attempt_move(self.state, col, by_ai=True))

    def _resolve(self, result: MoveResult) -> MoveResult:
        if not result.accepted:
            self._emit(EventKind.REJECTED, result)
            return result

        # The tally is settled before any listener runs.
        winner = result.outcome.winner()
        if winner is not None:
            self.scores.increment(winner)

        self._emit(EventKind.MOVE, result)
        if result.outcome.is_game_over():
            self._emit(EventKind.GAME_OVER, result)
            if winner is not None:
                self._emit(EventKind.SCORES)
        return result

    def increment_score(self, player: Player) -> int:
        count = self.scores.increment(player)
        self._emit(EventKind.SCORES)
        return count

    def reset_scores(self) -> None:
        self.scores.reset()
        self._emit(EventKind.SCORES)

    def get_scores(self) -> Dict[Player, int]:
        return self.scores.as_dict()
