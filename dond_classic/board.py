"""
Prize pool and case board for the classic 26-case game.

The board owns the shuffled case -> prize assignment, the opened flags and the
derived list of remaining prizes. It knows nothing about offers or players.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .errors import GameStateError


# =========================
# GAME CONFIG (classic US board)
# =========================

NUM_CASES = 26

PRIZES = [
    0.01, 1.0, 5.0, 10.0, 25.0, 50.0, 75.0, 100.0, 200.0, 300.0,
    400.0, 500.0, 750.0, 1000.0, 5000.0, 10000.0, 25000.0, 50000.0,
    75000.0, 100000.0, 200000.0, 300000.0, 400000.0, 500000.0, 750000.0, 1000000.0,
]

OPEN_SCHEDULE = [6, 5, 4, 3, 2, 1, 1, 1, 1]  # offer after each; ends with 2 cases (yours + 1)

LOW_PRIZE_LIMIT = 500.0  # board splits low/high prizes at this value


def validate_prizes(prizes: Sequence[float]) -> List[float]:
    if len(prizes) != NUM_CASES:
        raise GameStateError(f"Invalid number of prizes initialized ({len(prizes)}, expected {NUM_CASES})")
    if len(set(prizes)) != NUM_CASES:
        raise GameStateError("Prize values must be distinct")
    return [float(p) for p in prizes]


class CaseBoard:
    """26 cases, their hidden prizes and which ones have been opened."""

    def __init__(self, prizes: Sequence[float] = PRIZES):
        self.prizes = validate_prizes(prizes)
        self.case_values: List[float] = []
        self.opened: List[bool] = [False] * NUM_CASES
        self.remaining: List[float] = []
        self.player_case: Optional[int] = None

    def shuffle(self, rng: random.Random) -> None:
        values = self.prizes[:]
        rng.shuffle(values)
        self.case_values = values
        self.opened = [False] * NUM_CASES
        self._update_remaining()

    def choose(self, case_idx: int) -> None:
        if not 0 <= case_idx < NUM_CASES:
            raise GameStateError(f"Invalid case number: {case_idx + 1}")
        if self.opened[case_idx]:
            raise GameStateError(f"Case {case_idx + 1} already opened")
        self.player_case = case_idx

    @property
    def player_value(self) -> float:
        if self.player_case is None:
            raise GameStateError("No case has been chosen")
        return self.case_values[self.player_case]

    def closed_cases(self, include_player: bool = False) -> List[int]:
        return [
            i for i in range(NUM_CASES)
            if not self.opened[i] and (include_player or i != self.player_case)
        ]

    def open_case(self, case_idx: int) -> float:
        if not self.case_values:
            raise GameStateError("Prizes have not been assigned to cases")
        if not 0 <= case_idx < NUM_CASES:
            raise GameStateError(f"Invalid case number: {case_idx + 1}")
        if case_idx == self.player_case:
            raise GameStateError(f"Case {case_idx + 1} is the player's case")
        if self.opened[case_idx]:
            raise GameStateError(f"Case {case_idx + 1} already opened")
        self.opened[case_idx] = True
        return self.case_values[case_idx]

    def open_cases(self, case_indices: Sequence[int]) -> List[float]:
        """Open a batch and return the revealed values, in the order opened."""
        revealed = []
        try:
            for idx in case_indices:
                revealed.append(self.open_case(idx))
        finally:
            self._update_remaining()
        return revealed

    def _update_remaining(self) -> None:
        self.remaining = sorted(
            (v for v, is_open in zip(self.case_values, self.opened) if not is_open),
            reverse=True,
        )
