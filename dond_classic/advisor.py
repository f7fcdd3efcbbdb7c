"""
Decision heuristic used by the computer player and the human player's advisor.

Three numbers drive everything here:
  ev    mean of the unopened prizes
  std   population standard deviation of the unopened prizes (divide by N)
  risk  P(prize > offer) - risk_weight * std / (ev + 1)

The accept/reject rule branches on how many cases are still closed:
  > 10 closed   deal if offer >= 90% of ev
  6..10 closed  deal if offer >= 85% of ev
  <= 5 closed   deal if risk < 0.4 or offer >= 80% of ev
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class DealPolicy:
    early_cutoff: int = 10        # more than this many closed -> early game
    mid_cutoff: int = 5           # more than this many closed -> mid game
    early_ratio: float = 0.90
    mid_ratio: float = 0.85
    late_ratio: float = 0.80
    risk_cutoff: float = 0.40
    risk_weight: float = 0.30


DEFAULT_POLICY = DealPolicy()


# =========================
# STATISTICS OVER THE BOARD
# =========================

def expected_value(remaining: Sequence[float]) -> float:
    if not remaining:
        return 0.0
    return sum(remaining) / len(remaining)


def standard_deviation(remaining: Sequence[float]) -> float:
    if len(remaining) <= 1:
        return 0.0
    m = expected_value(remaining)
    v = sum((x - m) ** 2 for x in remaining) / len(remaining)
    return math.sqrt(v)


def probability_better(remaining: Sequence[float], offer: float) -> float:
    if not remaining:
        return 0.0
    return sum(1 for x in remaining if x > offer) / len(remaining)


def risk_factor(remaining: Sequence[float], offer: float, policy: DealPolicy = DEFAULT_POLICY) -> float:
    ev = expected_value(remaining)
    std = standard_deviation(remaining)
    # +1 keeps an all-zero board from dividing by zero
    risk_adjustment = std / (ev + 1.0)
    return probability_better(remaining, offer) - risk_adjustment * policy.risk_weight


# =========================
# DEAL / NO DEAL
# =========================

def should_accept_deal(
    remaining: Sequence[float],
    offer: float,
    cases_remaining: Optional[int] = None,
    policy: DealPolicy = DEFAULT_POLICY,
) -> bool:
    """
    Accept/reject a bank offer.

    ``cases_remaining`` defaults to ``len(remaining)``; the round controller
    always passes the size of the board, the player's own case included.
    """
    if not remaining:
        return True
    if cases_remaining is None:
        cases_remaining = len(remaining)

    ev = expected_value(remaining)

    if cases_remaining > policy.early_cutoff:
        return offer >= ev * policy.early_ratio
    if cases_remaining > policy.mid_cutoff:
        return offer >= ev * policy.mid_ratio
    return risk_factor(remaining, offer, policy) < policy.risk_cutoff or offer >= ev * policy.late_ratio


def ev_baseline(remaining: Sequence[float], offer: float, cases_remaining: Optional[int] = None) -> bool:
    # Risk-neutral reference strategy for batch runs.
    return offer >= expected_value(remaining)


def get_advice(
    remaining: Sequence[float],
    offer: float,
    cases_remaining: Optional[int] = None,
    policy: DealPolicy = DEFAULT_POLICY,
) -> str:
    if not remaining:
        return "Accept the deal!"

    ev = expected_value(remaining)
    std = standard_deviation(remaining)
    offer_pct = offer / ev * 100 if ev > 0 else 0.0
    risk_pct = std / ev * 100 if ev > 0 else 0.0

    lines = [
        "",
        "=== AI ADVISOR ===",
        f"Expected Value: ${ev:,.2f}",
        f"Bank Offer: ${offer:,.2f}",
        f"Offer vs Expected: {offer_pct:.1f}%",
        f"Risk Level: {risk_pct:.1f}%",
    ]
    if should_accept_deal(remaining, offer, cases_remaining, policy):
        lines.append("RECOMMENDATION: DEAL! The offer is favorable.")
    else:
        lines.append("RECOMMENDATION: NO DEAL! You can likely do better.")
    return "\n".join(lines) + "\n"


# =========================
# CASE PICKING
# =========================

def select_cases_to_open(closed: Sequence[int], num_to_open: int, rng: random.Random) -> List[int]:
    """Uniform random pick of min(num_to_open, len(closed)) distinct cases.

    The caller is responsible for leaving the player's own case out of ``closed``.
    """
    return rng.sample(list(closed), max(0, min(num_to_open, len(closed))))

