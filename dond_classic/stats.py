"""
Win/loss statistics kept between runs.

The file is plain text, one number per line:
  games played, games won, total winnings, best winning
Average winning is derived and never written.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("dond_classic.stats")

DEFAULT_STATS_FILE = "dealornodeal_stats.txt"


@dataclass
class GameStats:
    games_played: int = 0
    games_won: int = 0
    total_winnings: float = 0.0
    best_winning: float = 0.0

    @property
    def average_winning(self) -> float:
        return self.total_winnings / self.games_played if self.games_played > 0 else 0.0

    @property
    def win_rate(self) -> float:
        return self.games_won / self.games_played * 100 if self.games_played > 0 else 0.0

    def update(self, winnings: float) -> None:
        self.games_played += 1
        self.total_winnings += winnings
        if winnings > self.best_winning:
            self.best_winning = winnings
        if winnings > 0:
            self.games_won += 1

    def render(self) -> str:
        return "\n".join([
            "",
            "=== GAME STATISTICS ===",
            f"Games Played: {self.games_played}",
            f"Games Won: {self.games_won}",
            f"Win Rate: {self.win_rate:.1f}%",
            f"Total Winnings: ${self.total_winnings:,.2f}",
            f"Best Winning: ${self.best_winning:,.2f}",
            f"Average Winning: ${self.average_winning:,.2f}",
        ])


class StatsStore:
    """Reads and writes GameStats; failures never leave this class."""

    def __init__(self, path: str = DEFAULT_STATS_FILE):
        self.path = path

    def load(self) -> GameStats:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                fields = f.read().split()
        except FileNotFoundError:
            return GameStats()
        except OSError as e:
            logger.debug("Could not read statistics from %s: %s", self.path, e)
            return GameStats()

        try:
            return GameStats(
                games_played=int(fields[0]),
                games_won=int(fields[1]),
                total_winnings=float(fields[2]),
                best_winning=float(fields[3]),
            )
        except (IndexError, ValueError) as e:
            # corrupt or truncated file, start fresh
            logger.debug("Ignoring unreadable statistics file %s: %s", self.path, e)
            return GameStats()

    def save(self, stats: GameStats) -> bool:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(f"{stats.games_played}\n")
                f.write(f"{stats.games_won}\n")
                f.write(f"{stats.total_winnings!r}\n")
                f.write(f"{stats.best_winning!r}\n")
        except OSError as e:
            logger.debug("Could not save statistics to %s: %s", self.path, e)
            print(f"Warning: Could not save statistics: {e}")
            return False
        return True

    def reset(self) -> bool:
        """Delete the file. False if it could not be removed."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug("Could not delete statistics file %s: %s", self.path, e)
            print(f"Warning: Could not delete statistics file: {e}")
            return False
        return True
