"""
cli.py - Command-line interface for playing and inspecting dropfour

Commands:
    play       a human against an AI tier
    match      two AI tiers against each other for N games
    analyze    load a position and show the outcome and each tier's column
    benchmark  time searches at a given depth
"""

import argparse
import sys
import time
from collections import Counter
from typing import List, Optional

from dropfour.ai.minimax import MinimaxSearch
from dropfour.ai.player import AIPlayer
from dropfour.config import GameConfig
from dropfour.debug import debug
from dropfour.errors import DropFourError
from dropfour.game.board import Board
from dropfour.game.rules import ConnectFourGame
from dropfour.utils import FULL_COLUMN, Difficulty, Player, parse_position

DIFFICULTY_CHOICES = [d.name.lower() for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='dropfour connect-four engine')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        default='error', help='Logging verbosity')
    parser.add_argument('--rows', type=int, default=6, help='Board rows')
    parser.add_argument('--cols', type=int, default=7, help='Board columns')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the AI random source')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play against the AI')
    play_parser.add_argument('--difficulty', choices=DIFFICULTY_CHOICES, default='medium')
    play_parser.add_argument('--ai-first', action='store_true', help='Let the AI move first')

    match_parser = subparsers.add_parser('match', help='Play two AI tiers against each other')
    match_parser.add_argument('--one', choices=DIFFICULTY_CHOICES, default='easy',
                              help='Difficulty of player ONE')
    match_parser.add_argument('--two', choices=DIFFICULTY_CHOICES, default='hard',
                              help='Difficulty of player TWO')
    match_parser.add_argument('--games', type=int, default=10)
    match_parser.add_argument('--show', action='store_true', help='Print each final board')

    analyze_parser = subparsers.add_parser('analyze', help='Analyze a position')
    analyze_parser.add_argument('--position', type=str, required=True,
                                help='Row-major comma-separated cell values (0, 1, 2)')
    analyze_parser.add_argument('--to-move', type=int, choices=[1, 2], default=None,
                                help='Player to move (default: inferred from token counts)')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark search performance')
    benchmark_parser.add_argument('--depth', type=int, default=4)
    benchmark_parser.add_argument('--iterations', type=int, default=5)

    return parser


class SimpleCLI:
    """Simple command-line interface around the engine."""

    def __init__(self, argv: Optional[List[str]] = None):
        """Initialize the CLI."""
        self.argv = argv
        self.args = None
        self.config: Optional[GameConfig] = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = build_parser().parse_args(self.argv)
        self.config = GameConfig(rows=self.args.rows, cols=self.args.cols,
                                 seed=self.args.seed, debug_level=self.args.debug_level)
        debug.set_from_string(self.config.debug_level)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            try:
                self.parse_args()
            except DropFourError as e:
                print(f"Error: {e}")
                return 2

        handlers = {
            'play': self.play_game,
            'match': self.run_match,
            'analyze': self.analyze_position,
            'benchmark': self.benchmark,
        }
        handler = handlers.get(self.args.command)
        if handler is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            handler()
        except DropFourError as e:
            print(f"Error: {e}")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game interactively against the chosen tier."""
        difficulty = Difficulty[self.args.difficulty.upper()]
        game = ConnectFourGame(self.config)
        human = Player.TWO if self.args.ai_first else Player.ONE
        ai = AIPlayer(difficulty, game.board, human.other(), self.config)
        if not ai.implemented:
            print(f"{difficulty.name} difficulty is not available yet.")
            return

        print(f"Starting a new game against {difficulty.name}!")
        print(f"You are {human}. Enter a column number (0-{self.config.cols - 1}), 'q' to quit.")
        print(game.render())

        while not game.is_game_over():
            if game.get_current_player() == human:
                column = self.get_human_move()
                if column is None:
                    print("Quitting game.")
                    return
                row, _ = game.play(column)
                if row == FULL_COLUMN:
                    print(f"Column {column} is full.")
                    continue
            else:
                print("AI is thinking...")
                column, _, _ = game.play_ai_turn(ai)
                print(f"AI plays column {column}")
            print(game.render())

        print("Game over!")
        winner = game.get_winner()
        if winner == human:
            print("You win! Congratulations!")
        elif winner is not None:
            print("AI wins! Better luck next time.")
        else:
            print("Stalemate: nobody can complete a line.")

    def get_human_move(self) -> Optional[int]:
        """
        Read a column from stdin.

        Returns:
            Column index, or None to quit
        """
        while True:
            user_input = input(f"Your move (0-{self.config.cols - 1}, q): ").strip().lower()
            if user_input == 'q':
                return None
            try:
                column = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")
                continue
            if 0 <= column < self.config.cols:
                return column
            print(f"Column must be between 0 and {self.config.cols - 1}.")

    def run_match(self) -> None:
        """Play AI against AI and report the results."""
        one = Difficulty[self.args.one.upper()]
        two = Difficulty[self.args.two.upper()]
        results = Counter()

        for number in range(1, self.args.games + 1):
            game = ConnectFourGame(self.config)
            players = {
                Player.ONE: AIPlayer(one, game.board, Player.ONE, self.config),
                Player.TWO: AIPlayer(two, game.board, Player.TWO, self.config),
            }
            if not all(p.implemented for p in players.values()):
                print("Both tiers must be implemented to play a match.")
                return

            while not game.is_game_over():
                game.play_ai_turn(players[game.get_current_player()])

            winner = game.get_winner()
            label = winner.name if winner is not None else "STALEMATE"
            results[label] += 1
            print(f"Game {number}: {label} after {len(game.moves)} moves")
            if self.args.show:
                print(game.render())

        print(f"\n{one.name} (ONE) vs {two.name} (TWO) over {self.args.games} games:")
        for label in ("ONE", "TWO", "STALEMATE"):
            print(f"  {label}: {results[label]}")

    def analyze_position(self) -> None:
        """Show the outcome of a position and each tier's suggested column."""
        try:
            grid = parse_position(self.args.position, self.config.rows, self.config.cols)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return

        to_move = self.args.to_move
        if to_move is None:
            ones, twos = int((grid == 1).sum()), int((grid == 2).sum())
            to_move = Player.ONE if ones <= twos else Player.TWO

        # Win check runs for the player who just moved
        board = Board.from_grid(grid, Player(to_move).other(), self.config)
        print("Loaded position:")
        print(board.render())

        outcome = board.switch_player()
        print(f"\nOutcome: {outcome.name}")
        if board.winner is not None:
            print(f"Winner: {board.winner.name}, line {board.winning_line()}")
            return
        if outcome.is_game_over():
            return

        print(f"Player to move: {board.current_player.name}")
        print(f"Available columns: {board.available_columns()}")
        for difficulty in Difficulty:
            ai = AIPlayer(difficulty, board, board.current_player, self.config)
            if not ai.implemented:
                print(f"  {difficulty.name:<7} not implemented")
                continue
            print(f"  {difficulty.name:<7} column {ai.make_move()}")

    def benchmark(self) -> None:
        """Time searches from a few opening positions."""
        print(f"Running {self.args.iterations} searches at depth {self.args.depth}...")
        game = ConnectFourGame(self.config)
        rng = self.config.rng()
        total_nodes = 0
        started = time.perf_counter()

        for _ in range(self.args.iterations):
            game.reset()
            for _ in range(rng.randint(0, 6)):
                if game.is_game_over():
                    break
                game.play(rng.choice(game.get_valid_moves()))
            if game.is_game_over():
                continue

            search = MinimaxSearch(game.board, int(game.get_current_player()),
                                   int(game.get_current_player().other()), self.args.depth,
                                   prune=self.config.prune)
            move = search.search()
            total_nodes += search.nodes_evaluated
            print(f"  column {move.column} score {move.score} nodes {search.nodes_evaluated}")

        elapsed = time.perf_counter() - started
        print(f"Searched {total_nodes} nodes in {elapsed:.3f} seconds")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
