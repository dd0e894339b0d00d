"""Business logic of the snake game."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from .structures import FIELD_HEIGHT, FIELD_WIDTH, GameInfo, Status, UserAction

MAX_LEVEL = 10
SCALE_POINT = 5
RECORD_PATH = "games/record_snake.txt"
FIELD_CELLS = FIELD_HEIGHT * FIELD_WIDTH

EMPTY_CELL = 0
SNAKE_CELL = 1
APPLE_CELL = 2

_STEPS = {
    UserAction.LEFT: (-1, 0),
    UserAction.RIGHT: (1, 0),
    UserAction.DOWN: (0, 1),
    UserAction.UP: (0, -1),
}


@dataclass(frozen=True)
class Node:
    """A cell of the playing field."""

    x: int = 0
    y: int = 0

    def moved(self, dx: int, dy: int) -> Node:
        """Return the node shifted by the given offsets."""
        return Node(self.x + dx, self.y + dy)


def read_record(path: str | Path) -> int:
    """Read the stored high score; a missing file raises OSError."""
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()
    if not tokens:
        return 0
    try:
        return int(tokens[0])
    except ValueError:
        return 0


def write_record(path: str | Path, record: int) -> None:
    """Store the high score."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(str(record))


class SnakeModel:
    """State and rules of a snake game on a 10x20 field."""

    def __init__(self, record_path: str | Path = RECORD_PATH, rng: random.Random | None = None):
        self.record_path = Path(record_path)
        self._rng = rng if rng is not None else random.Random()
        self.apple = Node()
        self.snake: list[Node] = []
        self.info = self._initial_game()
        self.status = Status.START_GAME
        self.rotate = UserAction.LEFT
        self.update_current_state()

    def _initial_game(self) -> GameInfo:
        info = GameInfo(next=None, high_score=read_record(self.record_path))
        self.snake = [Node(x, 9) for x in range(3, 7)]
        self.plant_apple(self.snake)
        return info

    @property
    def speed(self) -> int:
        """Current game speed."""
        return self.info.speed

    def set_pause(self, value: int) -> None:
        """Set the pause flag shown by the views."""
        self.info.pause = value

    def restart(self) -> None:
        """Start a new game from the initial position."""
        self.info = self._initial_game()
        self.status = Status.MOVE
        self.rotate = UserAction.LEFT

    def move_body(self) -> None:
        """Advance the snake one cell, eating, growing or dying as needed."""
        head = self.move_head(self.snake[0])
        if self.check_collision(self.snake, head):
            self.status = Status.GAME_OVER
            return
        body = [head, *self.snake[:-1]]
        if self.check_for_eating(head):
            body.append(self.snake[-1])
            if len(body) == FIELD_CELLS:
                self.status = Status.WIN_GAME
            else:
                self.plant_apple(body)
            self.process_score()
        self.snake = body

    def move_head(self, head: Node) -> Node:
        """Return where the head goes in the current direction."""
        return head.moved(*_STEPS[self.rotate])

    def process_score(self) -> None:
        """Count an eaten apple, updating record, level and speed."""
        info = self.info
        info.score += 1
        if info.score > info.high_score:
            info.high_score = info.score
            write_record(self.record_path, info.high_score)
        scale = info.score // SCALE_POINT
        if info.level < scale <= MAX_LEVEL:
            info.level = scale
            info.speed = scale

    def user_input(self, action: UserAction, hold: bool = True) -> None:
        """Apply a player action."""
        if not hold:
            return
        match action:
            case UserAction.LEFT | UserAction.RIGHT | UserAction.DOWN | UserAction.UP:
                self._turn(action)
            case UserAction.ACTION:
                self.move_body()
            case UserAction.START:
                self.status = Status.MOVE
            case UserAction.PAUSE:
                if self.status == Status.MOVE:
                    self.status = Status.PAUSE_GAME
                elif self.status == Status.PAUSE_GAME:
                    self.status = Status.MOVE
            case UserAction.TERMINATE:
                self.status = Status.EXIT_GAME

    def _turn(self, direction: UserAction) -> None:
        candidate = self.snake[0].moved(*_STEPS[direction])
        if candidate != self.snake[1]:
            self.rotate = direction

    def update_current_state(self) -> GameInfo:
        """Redraw the apple and the snake into the field and return the info."""
        self.info.clear_field()
        self.info.field[self.apple.y][self.apple.x] = APPLE_CELL
        for node in self.snake:
            self.info.field[node.y][node.x] = SNAKE_CELL
        return self.info

    def plant_apple(self, body: list[Node]) -> None:
        """Place the apple on a random cell not covered by the body."""
        occupied = set(body)
        free = [
            Node(x, y)
            for y in range(FIELD_HEIGHT)
            for x in range(FIELD_WIDTH)
            if Node(x, y) not in occupied
        ]
        self.apple = self._rng.choice(free)

    def check_for_eating(self, head: Node) -> bool:
        """Tell whether the head is on the apple."""
        return head == self.apple

    def check_collision(self, body: list[Node], head: Node) -> bool:
        """Tell whether the head leaves the field or hits the body after the step."""
        if not (0 <= head.x < FIELD_WIDTH and 0 <= head.y < FIELD_HEIGHT):
            return True
        # After the step the tail has moved on, so only body[:-1] remains.
        return head in body[:-1]