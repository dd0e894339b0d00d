"""Game state and rules of the falling-blocks game."""

from __future__ import annotations

import random
from pathlib import Path

from .board import (
    MAX_LEVEL,
    Figure,
    add_score,
    clear_filled_lines,
    figure_from_next,
    is_attached,
    next_level,
    out_of_bounds,
    random_next,
    top_reached,
    write_figure,
)
from .structures import NEXT_SIZE, GameInfo, Status, UserAction

MAX_TICKS = 100
TICK_SCALE = 6
RECORD_PATH = "games/record_tetris.txt"

FIGURE_CELL = 2


def read_score(path: str | Path) -> int:
    """Read the stored high score; an empty file gives 0, a missing one raises OSError."""
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()
    if not tokens:
        return 0
    try:
        return int(tokens[0])
    except ValueError:
        return 0


def write_score(path: str | Path, record: int) -> None:
    """Store the high score."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(str(record))


def _full_preview() -> list[list[int]]:
    return [[1] * NEXT_SIZE for _ in range(NEXT_SIZE)]


class TetrisGame:
    """Field, falling piece and score of one falling-blocks game."""

    def __init__(self, record_path: str | Path = RECORD_PATH, rng: random.Random | None = None):
        self.record_path = Path(record_path)
        self._rng = rng if rng is not None else random.Random()
        self.info = GameInfo(next=_full_preview())
        self.figure: Figure | None = None
        self.status = Status.START_GAME
        self.ticks_left = 0

    def create_game(self, record: int) -> None:
        """Reset the field and the score panel for a new game."""
        info = self.info
        info.clear_field()
        info.next = _full_preview()
        self.ticks_left = 0
        info.score = 0
        info.high_score = record
        info.level = 1
        info.speed = 1
        info.pause = 0

    def start(self, record: int | None) -> None:
        """Start a game; a record of None means it could not be read."""
        if record is None:
            self.info.high_score = 0
            return
        self.status = Status.MOVE
        self.create_game(record)
        self.info.next = random_next(self._rng)
        self.spawn_figure()

    def spawn_figure(self) -> None:
        """Make the previewed piece current and preview a new one."""
        self.figure = figure_from_next(self.info.next)
        self.info.next = random_next(self._rng)

    def _place(self, candidate: Figure) -> None:
        if not out_of_bounds(self.info.field, candidate):
            self.figure = candidate

    def _shift(self, dx: int, dy: int) -> None:
        if self.figure is not None:
            self._place(self.figure.shifted(dx, dy))

    def rotate(self) -> None:
        """Turn the piece clockwise if it fits."""
        if self.figure is not None:
            self._place(self.figure.rotated())

    def toggle_pause(self) -> None:
        """Put the game on pause unless it already is."""
        if self.info.pause != Status.PAUSE_GAME:
            self.info.pause = int(Status.PAUSE_GAME)
            self.status = Status.PAUSE_GAME

    def move_left(self) -> None:
        """Move the piece one column left if it fits."""
        self._shift(-1, 0)

    def move_right(self) -> None:
        """Move the piece one column right if it fits."""
        self._shift(1, 0)

    def move_down(self) -> None:
        """Move the piece one row down if it fits."""
        self._shift(0, 1)

    def process_filled_lines(self) -> None:
        """Remove full rows and update score, level, speed and record."""
        info = self.info
        lines = clear_filled_lines(info.field)
        if not lines:
            return
        info.score = add_score(info.score, lines)
        if info.level < MAX_LEVEL:
            info.level = next_level(info.level, info.score)
            info.speed = info.level
        if info.score > info.high_score:
            info.high_score = info.score

    def user_input(self, action: UserAction, hold: bool = True) -> None:
        """Apply a player action."""
        if not hold:
            return
        match action:
            case UserAction.LEFT:
                self.move_left()
            case UserAction.RIGHT:
                self.move_right()
            case UserAction.DOWN:
                self.move_down()
            case UserAction.ACTION:
                self.rotate()
            case UserAction.START:
                if self.status == Status.GAME_OVER:
                    self.status = Status.START_GAME
            case UserAction.PAUSE:
                self.toggle_pause()
            case UserAction.TERMINATE:
                self.status = Status.EXIT_GAME

    def game_step(self) -> None:
        """Advance one tick: drop the piece when due, settle it and check the top."""
        if self.figure is None:
            return
        if self.ticks_left >= MAX_TICKS - self.info.speed * TICK_SCALE:
            self.move_down()
            self.ticks_left = 0
        else:
            self.ticks_left += 1
        if is_attached(self.info.field, self.figure):
            write_figure(self.info.field, self.figure)
            self.spawn_figure()
            self.process_filled_lines()
        if top_reached(self.info.field):
            self.status = Status.GAME_OVER

    def update_current_state(self) -> GameInfo:
        """Draw the falling piece into the field and return the info."""
        field = self.info.field
        for row in field:
            row[:] = [0 if cell == FIGURE_CELL else cell for cell in row]
        if self.figure is not None:
            for row, col in self.figure.cells():
                field[row][col] = FIGURE_CELL
        return self.info