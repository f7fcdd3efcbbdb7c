"""Bank offer: a growing share of the mean of what is still on the board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class OfferParams:
    base: float = 0.10
    step: float = 0.05   # added per round
    cap: float = 0.90


def offer_percentage(round_num: int, p: OfferParams = OfferParams()) -> float:
    return min(p.cap, p.base + p.step * round_num)


def bank_offer(remaining: Sequence[float], round_num: int, p: OfferParams = OfferParams()) -> float:
    """
    Offer = mean(remaining) * min(cap, base + step * round).

    Round 1 pays 15% of the mean, each round adds 5 points, and round 16 onwards
    sits at the 90% cap. An empty board offers nothing.
    """
    if not remaining:
        return 0.0
    mean = sum(remaining) / len(remaining)
    return mean * offer_percentage(round_num, p)
