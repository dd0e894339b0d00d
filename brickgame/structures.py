"""Shared game enumerations and the state structure handed to the views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

FIELD_HEIGHT = 20
FIELD_WIDTH = 10
NEXT_SIZE = 4


class UserAction(IntEnum):
    """Actions a player can request during a game."""

    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7
    NO_ACTION = 10


class Status(IntEnum):
    """States a game can be in."""

    ERROR_GAME = -1
    START_GAME = 0
    PAUSE_GAME = 1
    EXIT_GAME = 2
    MOVE = 3
    GAME_OVER = 4
    WIN_GAME = 5


class Color(IntEnum):
    """Colour pair identifiers used by the console view."""

    FIELD = 1
    BLOCK = 2
    STATUS = 3
    SYMB = 4
    YELLOW = 5


@dataclass
class GameInfo:
    """Field contents, preview of the next piece and the score panel values."""

    field: list[list[int]] = field(default_factory=lambda: GameInfo.empty_field())
    next: list[list[int]] | None = None
    score: int = 0
    high_score: int = 0
    level: int = 0
    speed: int = 0
    pause: int = 0

    @staticmethod
    def empty_field() -> list[list[int]]:
        """Return a fresh all-zero playing field."""
        return [[0] * FIELD_WIDTH for _ in range(FIELD_HEIGHT)]

    def clear_field(self) -> None:
        """Reset every cell of the field to zero."""
        for row in self.field:
            row[:] = [0] * len(row)