import random

import pytest

from dond_classic.board import CaseBoard
from dond_classic.console import (
    RULES,
    HumanPlayer,
    parse_int,
    parse_yes_no,
    prompt_int,
    prompt_yes_no,
    render_board,
    render_remaining,
)
from dond_classic.errors import InvalidInputError

from conftest import scripted


class TestParsing:
    @pytest.mark.parametrize("line,message", [
        ("", "Empty input"),
        ("   ", "Empty input"),
        ("abc", "Non-numeric input"),
        ("3.5", "Non-numeric input"),
        ("0", "out of range"),
        ("27", "out of range"),
    ])
    def test_parse_int_rejects(self, line, message):
        with pytest.raises(InvalidInputError, match=message):
            parse_int(line, 1, 26)

    def test_parse_int_accepts(self):
        assert parse_int(" 26 ", 1, 26) == 26

    @pytest.mark.parametrize("line,expected", [("y", True), ("Yes", True), ("n", False), ("NO", False)])
    def test_yes_no(self, line, expected):
        assert parse_yes_no(line) is expected

    @pytest.mark.parametrize("line", ["", "maybe", "1"])
    def test_yes_no_rejects(self, line):
        with pytest.raises(InvalidInputError):
            parse_yes_no(line)


class TestPrompts:
    def test_prompt_int_retries(self, capsys):
        assert prompt_int(1, 6, "> ", scripted(["", "x", "9", "4"])) == 4
        out = capsys.readouterr().out
        assert out.count("Please try again.") == 3
        assert "Invalid Input: Empty input" in out

    def test_prompt_yes_no_retries(self, capsys):
        assert prompt_yes_no("Deal?", scripted(["?", "n"])) is False
        assert "Please enter 'y' or 'n'." in capsys.readouterr().out


class TestRendering:
    def test_board_marks_cases(self):
        board = CaseBoard()
        board.choose(2)
        board.shuffle(random.Random(0))
        board.open_cases([0, 13])
        text = render_board(board)
        rows = [line for line in text.splitlines() if "XX" in line or "[" in line]
        assert rows[0].startswith(" XX   2 [ 3]")
        assert rows[1].startswith(" XX  15 ")
        assert "Your Case: 3" in text

    def test_remaining_split(self):
        text = render_remaining([1000000.0, 750.0, 500.0, 0.01])
        low, high = text.splitlines()
        assert low == "Low Prizes: $0.01 $500.00"
        assert high == "High Prizes: $1,000,000 $750"

    def test_rules(self):
        assert "Prizes range from $0.01 to $1,000,000" in RULES


class TestHumanPlayer:
    def test_pick_rejects_invalid_choices(self, capsys):
        board = CaseBoard()
        board.choose(0)
        board.shuffle(random.Random(0))
        board.open_case(1)
        player = HumanPlayer(scripted(["1", "2", "3", "3", "4"]))
        assert player.pick_cases(board, 2, 1) == [2, 3]
        out = capsys.readouterr().out
        assert "You can't open your own case!" in out
        assert "Case already opened!" in out
        assert "Case already selected for this round!" in out

    def test_decide_shows_advice(self, capsys):
        board = CaseBoard()
        board.choose(0)
        board.shuffle(random.Random(0))
        assert HumanPlayer(scripted(["y"])).decide(board, 1000.0, 1) is True
        assert "=== AI ADVISOR ===" in capsys.readouterr().out
