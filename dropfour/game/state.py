"""
state.py - Game state, move results and the session score tally
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.game.board import new_grid
from dropfour.utils import Player, GameResult

Coord = Tuple[int, int]


class RejectReason(Enum):
    """Why a move was not accepted."""
    COLUMN_FULL = auto()
    GAME_ALREADY_ENDED = auto()
    WRONG_TURN = auto()
    INVALID_COLUMN = auto()


@dataclass
class GameState:
    """
    Everything needed to continue a game.

    ``result`` doubles as the ended flag: once it is anything other than
    GameResult.IN_PROGRESS the grid no longer changes.
    """
    grid: np.ndarray = field(default_factory=new_grid)
    current_player: Player = Player.ONE
    result: GameResult = GameResult.IN_PROGRESS
    ai_player: Optional[Player] = None
    last_move: Optional[Coord] = None
    moves_made: List[int] = field(default_factory=list)

    @property
    def ended(self) -> bool:
        return self.result.is_game_over()

    @property
    def is_ai_turn(self) -> bool:
        return self.ai_player is not None and self.current_player == self.ai_player

    def copy(self) -> 'GameState':
        return GameState(
            grid=self.grid.copy(),
            current_player=self.current_player,
            result=self.result,
            ai_player=self.ai_player,
            last_move=self.last_move,
            moves_made=self.moves_made.copy(),
        )


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single move attempt, accepted or not."""
    accepted: bool
    column: int
    row: Optional[int] = None
    player: Optional[Player] = None
    outcome: GameResult = GameResult.IN_PROGRESS
    reason: Optional[RejectReason] = None
    winning_line: Tuple[Coord, ...] = ()

    @classmethod
    def rejected(cls, column: int, reason: RejectReason) -> 'MoveResult':
        return cls(accepted=False, column=column, reason=reason)


class ScoreTally:
    """Win counts that outlive individual games within a session."""

    def __init__(self):
        self._wins: Dict[Player, int] = {Player.ONE: 0, Player.TWO: 0}

    def increment(self, player: Player) -> int:
        if player not in self._wins:
            raise ValueError(f"Cannot score for {player!r}")
        self._wins[player] += 1
        debug.debug(f"Score for {player.name} is now {self._wins[player]}", "game")
        return self._wins[player]

    def reset(self) -> None:
        debug.debug("Resetting scores", "game")
        for player in self._wins:
            self._wins[player] = 0

    def as_dict(self) -> Dict[Player, int]:
        return dict(self._wins)

    def __getitem__(self, player: Player) -> int:
        return self._wins[player]
