"""
Round controller: one game from choosing a case to the final payout.

The controller only talks to a *player* object, so the same loop runs the
human console game, the computer auto-play and the batch simulator. A player
provides:

  choose_case(board) -> int                     index 0..25
  pick_cases(board, n, round_num) -> List[int]  cases to open this round
  decide(board, offer, round_num) -> bool       True = DEAL

Anything the player returns is checked by the board; an illegal pick raises
GameStateError and ends the game.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .advisor import expected_value, select_cases_to_open, should_accept_deal
from .banker import OfferParams, bank_offer
from .board import NUM_CASES, OPEN_SCHEDULE, PRIZES, CaseBoard

Echo = Optional[Callable[[str], None]]
Decider = Callable[..., bool]


def time_seed() -> int:
    return time.time_ns()


# =========================
# GAME LOG
# =========================

@dataclass
class GameLog:
    strategy: str
    seed: Optional[int]
    player_case: int
    chosen_value: float
    opened_by_round: List[List[float]] = field(default_factory=list)
    remaining_by_round: List[List[float]] = field(default_factory=list)
    ev_by_round: List[float] = field(default_factory=list)
    offer_by_round: List[float] = field(default_factory=list)
    deal_decision_by_round: List[bool] = field(default_factory=list)
    deal_round: Optional[int] = None   # 1..9 or None
    winnings: float = 0.0

    @property
    def dealt(self) -> bool:
        return self.deal_round is not None

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "seed": self.seed,
            "player_case": self.player_case + 1,
            "chosen_value": self.chosen_value,
            "opened_by_round": self.opened_by_round,
            "remaining_by_round": self.remaining_by_round,
            "ev_by_round": self.ev_by_round,
            "offer_by_round": self.offer_by_round,
            "deal_decision_by_round": self.deal_decision_by_round,
            "deal_round": self.deal_round,
            "winnings": self.winnings,
        }


# =========================
# COMPUTER PLAYER
# =========================

class ComputerPlayer:
    """Picks its case and the cases to open at random, deals by heuristic."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        decide: Decider = should_accept_deal,
        strategy: str = "heuristic",
        echo: Echo = None,
    ):
        self.rng = rng if rng is not None else random.Random(time_seed())
        self._decide = decide
        self.strategy = strategy
        self.echo = echo

    def choose_case(self, board: CaseBoard) -> int:
        case_idx = self.rng.randrange(NUM_CASES)
        if self.echo:
            self.echo(f"Computer chose case {case_idx + 1}")
        return case_idx

    def pick_cases(self, board: CaseBoard, n: int, round_num: int) -> List[int]:
        return select_cases_to_open(board.closed_cases(), n, self.rng)

    def decide(self, board: CaseBoard, offer: float, round_num: int) -> bool:
        deal = self._decide(board.remaining, offer, len(board.remaining))
        if self.echo:
            self.echo("Computer says: DEAL!" if deal else "Computer says: NO DEAL!")
        return deal


# =========================
# ROUND LOOP
# =========================

def play_game(
    player,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    prizes=PRIZES,
    offer_params: OfferParams = OfferParams(),
    echo: Echo = None,
) -> GameLog:
    """
    Play one game to the end and return its log.

    Each round opens the next batch from OPEN_SCHEDULE, then the bank makes an
    offer scaled by the round number. Rejecting every offer leaves the
    player's case and one other closed; the player keeps their own case.
    """
    if rng is None:
        seed = time_seed() if seed is None else seed
        rng = random.Random(seed)

    board = CaseBoard(prizes)
    board.choose(player.choose_case(board))
    board.shuffle(rng)

    glog = GameLog(
        strategy=getattr(player, "strategy", "human"),
        seed=seed,
        player_case=board.player_case,
        chosen_value=board.player_value,
    )
    round_num = 1
    for open_n in OPEN_SCHEDULE:
        if len(board.remaining) <= 1:
            break
        if echo:
            echo(f"\n=== ROUND {round_num} ===")

        picks = player.pick_cases(board, open_n, round_num)
        if echo:
            echo("\nOpening cases...")
        values = board.open_cases(picks)
        if echo:
            for idx, v in zip(picks, values):
                echo(f"Case {idx + 1} contained: ${v:,.2f}")

        glog.opened_by_round.append(sorted(values))
        glog.remaining_by_round.append(list(board.remaining))
        if len(board.remaining) <= 1:
            break

        glog.ev_by_round.append(expected_value(board.remaining))
        offer = bank_offer(board.remaining, round_num, offer_params)
        glog.offer_by_round.append(offer)
        if echo:
            echo("\n" + "=" * 50)
            echo(f"THE BANK OFFERS: ${offer:,.2f}")
            echo("=" * 50)

        deal = bool(player.decide(board, offer, round_num))
        glog.deal_decision_by_round.append(deal)
        if deal:
            glog.deal_round = round_num
            glog.winnings = offer
            return glog

        round_num += 1

    glog.winnings = board.player_value  # no deal, reveal chosen
    return glog
