"""
Command line entry point.

Run:
  dond-classic                          interactive menu
  dond-classic --trials 2000 --out run  batch auto-play reports
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional, Tuple

from .board import PRIZES, validate_prizes
from .console import RULES, HumanPlayer, prompt_int
from .errors import GameError
from .game import ComputerPlayer, GameLog, play_game, time_seed
from .stats import DEFAULT_STATS_FILE, GameStats, StatsStore

logger = logging.getLogger("dond_classic")

MENU = "\n".join([
    "",
    "=" * 50,
    "        DEAL OR NO DEAL - MAIN MENU",
    "=" * 50,
    "1. Play Game (Human Player)",
    "2. Computer Auto-Play",
    "3. View Statistics",
    "4. Reset Statistics",
    "5. Game Rules",
    "6. Exit",
    "=" * 50,
])


class GameMenu:
    """Main menu loop. Owns the statistics for the whole session."""

    def __init__(self, store: StatsStore, seed: Optional[int] = None, input_fn=None):
        validate_prizes(PRIZES)
        self.store = store
        self.stats: GameStats = store.load()
        self.seed = seed
        self.input_fn = input_fn or input

    def _rngs(self) -> Tuple[random.Random, random.Random]:
        """Board and player streams. The player runs one seed ahead, as in batch runs."""
        base = self.seed if self.seed is not None else time_seed()
        return random.Random(base), random.Random(base + 1)

    def play_human(self) -> Optional[GameLog]:
        try:
            board_rng, _ = self._rngs()
            glog = play_game(HumanPlayer(self.input_fn), rng=board_rng, seed=self.seed, echo=print)
        except GameError as e:
            print(f"Game Error: {e}")
            return None

        if glog.dealt:
            print(f"\nCongratulations! You won ${glog.winnings:,.2f}!")
            print(f"Your case contained: ${glog.chosen_value:,.2f}")
        else:
            print("\nNo more deals! You're going home with your case!")
            print(f"Your case contained: ${glog.winnings:,.2f}!")
        self._record(glog)
        return glog

    def play_computer(self) -> Optional[GameLog]:
        print("Computer Player is playing...")
        board_rng, player_rng = self._rngs()
        player = ComputerPlayer(rng=player_rng, echo=print)
        try:
            glog = play_game(player, rng=board_rng, seed=self.seed, echo=print)
        except GameError as e:
            print(f"Computer Game Error: {e}")
            return None

        if glog.dealt:
            print(f"Computer won: ${glog.winnings:,.2f}")
            print(f"Computer's case contained: ${glog.chosen_value:,.2f}")
        else:
            print(f"\nComputer's final case contained: ${glog.winnings:,.2f}!")
        self._record(glog)
        return glog

    def _record(self, glog: GameLog) -> None:
        self.stats.update(glog.winnings)
        self.store.save(self.stats)

    def reset_stats(self) -> None:
        self.stats = GameStats()
        if self.store.reset():
            print("Statistics reset successfully!")

    def run(self) -> None:
        while True:
            print(MENU)
            choice = prompt_int(1, 6, "Enter your choice (1-6): ", self.input_fn)
            if choice == 1:
                self.play_human()
            elif choice == 2:
                self.play_computer()
            elif choice == 3:
                print(self.stats.render())
            elif choice == 4:
                self.reset_stats()
            elif choice == 5:
                print(RULES)
            else:
                print("Thank you for playing Deal or No Deal!")
                return


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="dond-classic", description="Deal or No Deal console game (26 cases).")
    ap.add_argument("--stats_file", type=str, default=DEFAULT_STATS_FILE, help="Where win/loss statistics are kept.")
    ap.add_argument("--seed", type=int, default=None, help="Fix the random seed (default: time based).")
    ap.add_argument("--trials", type=int, default=0, help="Run N automated games per strategy instead of the menu.")
    ap.add_argument("--out", type=str, default="results", help="Output prefix for batch reports.")
    ap.add_argument("--no_progress", action="store_true", help="Disable progress bars.")
    ap.add_argument("--no_charts", action="store_true", help="Skip PNG charts in batch mode.")
    ap.add_argument("--verbose", action="store_true", help="Debug logging.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.trials > 0:
        from .simulate import run_simulation

        seed = args.seed if args.seed is not None else 1234
        run_simulation(args.trials, args.out, seed, show_progress=not args.no_progress, charts=not args.no_charts)
        return 0

    store = StatsStore(args.stats_file)
    try:
        menu = GameMenu(store, seed=args.seed)
    except GameError as e:
        print(f"Failed to initialize game: {e}")
        return 1
    logger.debug("Loaded statistics from %s: %s", store.path, menu.stats)

    try:
        menu.run()
    except (EOFError, KeyboardInterrupt):
        print("\nThank you for playing Deal or No Deal!")
    finally:
        store.save(menu.stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
