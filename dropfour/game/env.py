"""
env.py - Gymnasium environment for Connect Four

The agent plays Player.ONE. With the default "heuristic" opponent every
accepted agent move is answered by the one-ply heuristic as Player.TWO, so a
step covers a full round. With ``opponent="none"`` the agent moves for both
sides and rewards are always given from Player.ONE's point of view.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.game.board import get_valid_columns, get_winning_line
from dropfour.game.rules import attempt_move, new_game, suggest_ai_move
from dropfour.game.state import MoveResult
from dropfour.utils import ROWS, COLS, Player, GameResult, render_board_ascii

OPPONENTS = ("heuristic", "none")


class ConnectFourEnv(gym.Env):
    """Connect Four following the Gymnasium interface."""

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, opponent: str = "heuristic"):
        """
        Initialize the environment.

        Args:
            render_mode: "ascii", "human" or None
            opponent: "heuristic" or "none"
        """
        if opponent not in OPPONENTS:
            raise ValueError(f"Unknown opponent {opponent!r}; expected one of {OPPONENTS}")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode {render_mode!r}")
        debug.debug(f"Initializing ConnectFourEnv (opponent={opponent})", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with 3 possible cell values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.render_mode = render_mode
        self.opponent = opponent
        self.state = new_game(self._ai_player())

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def _ai_player(self) -> Optional[Player]:
        return Player.TWO if self.opponent == "heuristic" else None

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")
        self.state = new_game(self._ai_player())

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the agent, then let the opponent answer.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        result = attempt_move(self.state, int(action))
        if not result.accepted:
            debug.warning(f"Invalid action {action}: {result.reason.name}", "env")
            info = self._get_info()
            info['rejected'] = result.reason.name
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.state.ended and self.state.is_ai_turn:
            reply = suggest_ai_move(self.state, self.np_random)
            result = attempt_move(self.state, reply, by_ai=True)
            debug.debug(f"Opponent replied in column {reply}", "env")

        reward = self._reward(result)
        terminated = self.state.ended

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward(self, result: MoveResult) -> float:
        if result.outcome == GameResult.PLAYER_ONE_WIN:
            debug.info("Game over: Player ONE wins", "env")
            return self.reward_win
        if result.outcome == GameResult.PLAYER_TWO_WIN:
            debug.info("Game over: Player TWO wins", "env")
            return self.reward_lose
        if result.outcome == GameResult.DRAW:
            debug.info("Game over: Draw", "env")
            return self.reward_draw
        return self.reward_step

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return render_board_ascii(self.state.grid)
        if self.render_mode == "human":
            print(render_board_ascii(self.state.grid))
        return None

    def _get_observation(self) -> np.ndarray:
        return self.state.grid.copy()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = [] if self.state.ended else get_valid_columns(self.state.grid)
        winning_line = []
        if self.state.result.winner() is not None and self.state.last_move is not None:
            winning_line = get_winning_line(self.state.grid, *self.state.last_move)

        return {
            'valid_moves': valid_moves,
            'current_player': self.state.current_player.value,
            'game_result': self.state.result.name,
            'moves_made': len(self.state.moves_made),
            'last_move': self.state.last_move,
            'winning_line': winning_line,
        }
