"""
Deal or No Deal, classic 26-case board.

A console game with a computer player, an AI advisor for the human player,
persistent win/loss statistics and a batch auto-play simulator.
"""

from .advisor import (
    DealPolicy,
    expected_value,
    get_advice,
    risk_factor,
    select_cases_to_open,
    should_accept_deal,
    standard_deviation,
)
from .banker import OfferParams, bank_offer, offer_percentage
from .board import NUM_CASES, OPEN_SCHEDULE, PRIZES, CaseBoard
from .errors import GameError, GameStateError, InvalidInputError
from .game import ComputerPlayer, GameLog, play_game
from .stats import GameStats, StatsStore

__version__ = "1.0.0"
