"""Console I/O: prompts, board rendering and the human player."""

from __future__ import annotations

from typing import Callable, List

from .advisor import get_advice
from .board import LOW_PRIZE_LIMIT, NUM_CASES, CaseBoard
from .errors import InvalidInputError

InputFn = Callable[[str], str]


# =========================
# PROMPTS
# =========================

def parse_int(line: str, lo: int, hi: int) -> int:
    line = line.strip()
    if not line:
        raise InvalidInputError("Empty input")
    try:
        value = int(line)
    except ValueError:
        raise InvalidInputError("Non-numeric input") from None
    if value < lo or value > hi:
        raise InvalidInputError(f"Input out of range ({lo}-{hi})")
    return value


def parse_yes_no(line: str) -> bool:
    line = line.strip()
    if not line:
        raise InvalidInputError("Empty input")
    ch = line[0].lower()
    if ch == "y":
        return True
    if ch == "n":
        return False
    raise InvalidInputError("Invalid choice")


def prompt_int(lo: int, hi: int, prompt: str, input_fn: InputFn = input) -> int:
    while True:
        try:
            return parse_int(input_fn(prompt), lo, hi)
        except InvalidInputError as e:
            print(f"{e}. Please try again.")


def prompt_yes_no(prompt: str, input_fn: InputFn = input) -> bool:
    while True:
        try:
            return parse_yes_no(input_fn(f"{prompt} (y/n): "))
        except InvalidInputError as e:
            print(f"{e}. Please enter 'y' or 'n'.")


# =========================
# BOARD
# =========================

def render_remaining(remaining: List[float]) -> str:
    low = sorted(v for v in remaining if v <= LOW_PRIZE_LIMIT)
    high = sorted((v for v in remaining if v > LOW_PRIZE_LIMIT), reverse=True)
    return "\n".join([
        "Low Prizes: " + " ".join(f"${v:,.2f}" for v in low),
        "High Prizes: " + " ".join(f"${v:,.0f}" for v in high),
    ])


def render_board(board: CaseBoard) -> str:
    lines = [
        f"Your Case: {board.player_case + 1}",
        "",
        "Cases Status:",
    ]
    row = ""
    for i in range(NUM_CASES):
        if i == board.player_case:
            row += f"[{i + 1:2d}]"
        elif board.opened[i]:
            row += " XX "
        else:
            row += f" {i + 1:2d} "
        if (i + 1) % 13 == 0:
            lines.append(row)
            row = ""
    lines += ["", "Remaining Prizes:", render_remaining(board.remaining)]
    return "\n".join(lines)


RULES = "\n".join([
    "",
    "=" * 50,
    "                 GAME RULES",
    "=" * 50,
    "1. Choose your lucky case (1-26)",
    "2. Open other cases to reveal their prizes",
    "3. The bank will make offers based on remaining prizes",
    "4. Decide: DEAL (accept offer) or NO DEAL (continue)",
    "5. If you reject all offers, you win your case's prize",
    "6. AI Advisor provides recommendations",
    "7. Computer player uses advanced strategy",
    "",
    "Prizes range from $0.01 to $1,000,000",
    "=" * 50,
])


# =========================
# HUMAN PLAYER
# =========================

class HumanPlayer:
    strategy = "human"

    def __init__(self, input_fn: InputFn = input):
        self.input_fn = input_fn

    def choose_case(self, board: CaseBoard) -> int:
        print("Welcome to Deal or No Deal!")
        case_idx = prompt_int(1, NUM_CASES, "Choose your lucky case (1-26): ", self.input_fn) - 1
        print(f"\nYou chose case {case_idx + 1}!")
        print("Now let's see what's in the other cases...")
        return case_idx

    def pick_cases(self, board: CaseBoard, n: int, round_num: int) -> List[int]:
        print(render_board(board))
        print(f"\nSelect {n} case(s) to open:")
        picks: List[int] = []
        while len(picks) < n:
            idx = prompt_int(1, NUM_CASES, f"Case {len(picks) + 1}: ", self.input_fn) - 1
            if idx == board.player_case:
                print("You can't open your own case!")
            elif board.opened[idx]:
                print("Case already opened!")
            elif idx in picks:
                print("Case already selected for this round!")
            else:
                picks.append(idx)
        return picks

    def decide(self, board: CaseBoard, offer: float, round_num: int) -> bool:
        print(get_advice(board.remaining, offer, len(board.remaining)))
        return prompt_yes_no("Deal or No Deal?", self.input_fn)
