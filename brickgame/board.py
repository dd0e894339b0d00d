"""Pieces, field checks and scoring rules of the falling-blocks game."""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, replace

from .structures import FIELD_HEIGHT, FIELD_WIDTH, NEXT_SIZE

MAX_SCORE = 999999999
MAX_LEVEL = 10
LEVEL_POINTS = 600
SPAWN_X = 3
SPAWN_Y = 0

BLOCK = 1

LINE_POINTS = {1: 100, 2: 300, 3: 700, 4: 1500}

# Each template is a 4x4 preview; its bottom-right cell holds the piece size.
FIGURE_TEMPLATES: tuple[tuple[tuple[int, ...], ...], ...] = (
    ((0, 0, 0, 0), (0, 1, 1, 0), (0, 1, 1, 0), (0, 0, 0, 4)),
    ((0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0), (0, 0, 0, 4)),
    ((1, 0, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 3)),
    ((0, 0, 1, 0), (1, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 3)),
    ((0, 1, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 3)),
    ((0, 1, 1, 0), (1, 1, 0, 0), (0, 0, 0, 0), (0, 0, 0, 3)),
    ((1, 1, 0, 0), (0, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 3)),
)

Field = list[list[int]]


@dataclass(frozen=True)
class Figure:
    """A falling piece: its 4x4 image, rotation box size and position."""

    image: tuple[tuple[int, ...], ...]
    size: int
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def rotated(self) -> Figure:
        """Return the piece turned clockwise inside its size x size box."""
        s = self.size
        rows = [[0] * NEXT_SIZE for _ in range(NEXT_SIZE)]
        for i in range(s):
            for j in range(s):
                rows[i][j] = self.image[s - 1 - j][i]
        return replace(self, image=tuple(tuple(row) for row in rows))

    def shifted(self, dx: int, dy: int) -> Figure:
        """Return the piece moved by the given offsets."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield (row, column) field positions covered by the piece."""
        for i, row in enumerate(self.image):
            for j, value in enumerate(row):
                if value == BLOCK:
                    yield self.y + i, self.x + j


def random_next(rng: random.Random | None = None) -> list[list[int]]:
    """Pick a random template as a fresh 4x4 preview grid."""
    chooser = rng if rng is not None else random
    template = chooser.choice(FIGURE_TEMPLATES)
    return [list(row) for row in template]


def figure_from_next(next_figure: list[list[int]]) -> Figure:
    """Build a piece at the spawn position from a preview grid."""
    size = next_figure[NEXT_SIZE - 1][NEXT_SIZE - 1]
    rows = [list(row) for row in next_figure]
    rows[NEXT_SIZE - 1][NEXT_SIZE - 1] = 0
    return Figure(image=tuple(tuple(row) for row in rows), size=size)


def _inside(row: int, col: int) -> bool:
    return 0 <= row < FIELD_HEIGHT and 0 <= col < FIELD_WIDTH


def out_of_bounds(field: Field, figure: Figure) -> bool:
    """Tell whether the piece leaves the field or overlaps a settled block."""
    return any(
        not _inside(row, col) or field[row][col] == BLOCK
        for row, col in figure.cells()
    )


def is_attached(field: Field, figure: Figure) -> bool:
    """Tell whether the piece rests on the floor or on a settled block."""
    return any(
        row == FIELD_HEIGHT - 1 or field[row + 1][col] == BLOCK
        for row, col in figure.cells()
    )


def write_figure(field: Field, figure: Figure) -> None:
    """Settle the piece's blocks into the field."""
    for row, col in figure.cells():
        field[row][col] = BLOCK


def clear_filled_lines(field: Field) -> int:
    """Remove full rows, drop the rows above them and return how many went."""
    kept = [row for row in field if sum(cell == BLOCK for cell in row) != len(row)]
    removed = len(field) - len(kept)
    if removed:
        width = len(field[0])
        field[:] = [[0] * width for _ in range(removed)] + kept
    return removed


def top_reached(field: Field) -> bool:
    """Tell whether any settled block lies in the top row."""
    return any(cell == BLOCK for cell in field[0])


def next_level(level: int, score: int) -> int:
    """Return the level for the score: one more every 600 points, at most 10."""
    if level >= MAX_LEVEL:
        return level
    while level * LEVEL_POINTS <= score:
        level += 1
    return min(level, MAX_LEVEL)


def add_score(score: int, lines: int) -> int:
    """Return the score after clearing the given number of lines, capped."""
    return min(score + LINE_POINTS.get(lines, 0), MAX_SCORE)