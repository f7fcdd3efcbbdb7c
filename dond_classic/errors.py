"""Exceptions raised by the game, the prompts and the case board."""

from __future__ import annotations


class GameError(Exception):
    """Base class for everything the game raises on purpose."""


class InvalidInputError(GameError):
    def __init__(self, message: str):
        super().__init__(f"Invalid Input: {message}")


class GameStateError(GameError):
    def __init__(self, message: str):
        super().__init__(f"Game State Error: {message}")
