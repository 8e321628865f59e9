"""
cli.py - Terminal controller for Connect Four

Draws the board in the terminal, maps key presses to columns and lets the
heuristic opponent take its turns. All game logic goes through a
ConnectFourGame session; this module only reacts to the events it emits.
"""

import argparse
import sys
import time
from typing import Callable, List, Optional, Tuple

from dropfour.debug import debug, DebugLevel
from dropfour.game.rules import ConnectFourGame, EventKind, GameEvent
from dropfour.game.state import RejectReason
from dropfour.utils import COLS, Player, GameResult, render_board_ascii

# Parsed commands
MOVE = "move"
NEW_GAME = "new"
RESET_SCORES = "scores"
QUIT = "quit"
INVALID = "invalid"

Command = Tuple[str, Optional[int]]


def parse_command(raw: str) -> Command:
    """
    Turn a line of user input into a command.

    Keys 1-7 select columns 0-6; 'n' starts a new game, 's' resets the
    scores and 'q' quits.
    """
    text = raw.strip().lower()
    if text == 'q':
        return QUIT, None
    if text == 'n':
        return NEW_GAME, None
    if text == 's':
        return RESET_SCORES, None
    if text.isdecimal() and 1 <= int(text) <= COLS:
        return MOVE, int(text) - 1
    return INVALID, None


class SimpleCLI:
    """Command-line interface for playing Connect Four."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print,
                 sleep_fn: Callable[[float], None] = time.sleep):
        self.input = input_fn
        self.output = output_fn
        self.sleep = sleep_fn
        self.args = None
        self.session: Optional[ConnectFourGame] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four in the terminal')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--mode', choices=['human', 'ai'], default='ai',
                                 help='Second player: another human or the computer')
        play_parser.add_argument('--name1', default='', help='Display name for player 1')
        play_parser.add_argument('--name2', default='', help='Display name for player 2')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the computer player\'s random moves')
        play_parser.add_argument('--ai_delay', type=float, default=0.4,
                                 help='Seconds to wait before the computer moves')
        play_parser.add_argument('--debug', action='store_true',
                                 help='Enable debug logging (same as --debug_level debug)')
        play_parser.add_argument('--debug_level', default='warning',
                                 choices=[level.name.lower() for level in DebugLevel],
                                 help='Logging verbosity, from none to trace')
        play_parser.add_argument('--log_file', default=None, help='Also write logs to this file')

        self.args = parser.parse_args(argv)
        self.configure_debug()
        return self.args

    def configure_debug(self) -> None:
        """Apply the logging options of the parsed arguments."""
        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)
        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if self.args is None:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
            return 0

        self.output("Please specify a command. Use --help for options.")
        return 1

    def build_session(self) -> ConnectFourGame:
        ai_player = Player.TWO if self.args.mode == 'ai' else None
        names = {Player.ONE: self.args.name1, Player.TWO: self.args.name2}
        if ai_player is not None and not self.args.name2:
            names[Player.TWO] = "Computer"
        return ConnectFourGame(ai_player=ai_player, names=names, seed=self.args.seed)

    def play_game(self) -> None:
        """Play Connect Four until the user quits."""
        self.session = self.build_session()
        self.session.subscribe(self.on_event)

        self.output("Starting a new Connect Four game!")
        self.output(f"Enter a column number (1-{COLS}) to drop a piece.")
        self.output("Other commands: 'n' new game, 's' reset scores, 'q' quit.")
        self.session.new_game()

        while True:
            state = self.session.state
            if state.is_ai_turn and not state.ended:
                self.sleep(self.args.ai_delay)
                self.session.play_ai_turn()
                continue

            if state.ended:
                prompt = "Game over ('n' new game, 's' reset scores, 'q' quit): "
            else:
                prompt = f"{self.session.player_name(state.current_player)} ({state.current_player}) move: "

            try:
                raw = self.input(prompt)
            except EOFError:
                raw = 'q'

            command, col = parse_command(raw)
            if command == QUIT:
                self.output("Quitting game.")
                return
            if command == NEW_GAME:
                self.session.new_game()
            elif command == RESET_SCORES:
                self.session.reset_scores()
            elif command == MOVE:
                self.session.make_move(col)
            else:
                self.output(f"Invalid input. Enter 1-{COLS}, 'n', 's' or 'q'.")

    def on_event(self, event: GameEvent) -> None:
        """Render a session event."""
        if event.kind in (EventKind.NEW_GAME, EventKind.MOVE):
            self.output(render_board_ascii(event.state.grid))
            if event.kind == EventKind.MOVE and not event.state.ended:
                player = event.state.current_player
                self.output(f"Turn: {self.session.player_name(player)} ({player})")
        elif event.kind == EventKind.REJECTED:
            self._show_rejection(event.result.reason)
        elif event.kind == EventKind.GAME_OVER:
            outcome = event.result.outcome
            if outcome == GameResult.DRAW:
                self.output("Draw")
            else:
                self.output(f"{self.session.player_name(outcome.winner())} wins!")
        elif event.kind == EventKind.SCORES:
            self.output(self.format_scores())

    def _show_rejection(self, reason: RejectReason) -> None:
        if reason == RejectReason.COLUMN_FULL:
            self.output("Column full")
        elif reason == RejectReason.INVALID_COLUMN:
            self.output(f"Column must be between 1 and {COLS}.")
        elif reason == RejectReason.GAME_ALREADY_ENDED:
            self.output("The game is over. Press 'n' to start a new one.")
        # WRONG_TURN is ignored

    def format_scores(self) -> str:
        scores = self.session.get_scores()
        return " | ".join(f"{self.session.player_name(p)}: {scores[p]}"
                          for p in (Player.ONE, Player.TWO))


def main(argv: Optional[List[str]] = None) -> int:
    cli = SimpleCLI()
    cli.parse_args(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
