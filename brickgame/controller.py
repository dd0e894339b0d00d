"""Links between the views and the two games' logic."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import suppress

from .board import is_attached, top_reached, write_figure
from .snake import SnakeModel
from .structures import NEXT_SIZE, GameInfo, Status, UserAction
from .tetris import TetrisGame, read_score, write_score


class Controller(ABC):
    """Interface a view uses to drive a game."""

    @property
    @abstractmethod
    def gameinfo(self) -> GameInfo:
        """State to render."""

    @abstractmethod
    def handle_input(self, action: UserAction) -> None:
        """Pass a player action to the game."""

    @abstractmethod
    def move_model(self) -> None:
        """Advance the game on a timer tick."""

    @property
    @abstractmethod
    def status(self) -> Status:
        """Current game status."""


class SnakeController(Controller):
    """Drives a snake game."""

    def __init__(self, model: SnakeModel):
        self.model = model

    @property
    def gameinfo(self) -> GameInfo:
        return self.model.info

    def handle_input(self, action: UserAction) -> None:
        status = self.status
        if status == Status.START_GAME:
            if action == UserAction.START:
                self.model.user_input(action, True)
        elif status == Status.PAUSE_GAME:
            if action == UserAction.PAUSE:
                self.model.user_input(action, True)
        elif status in (Status.GAME_OVER, Status.WIN_GAME):
            self.model.user_input(UserAction.NO_ACTION, True)
        else:
            self.model.user_input(action, True)
            self.model.update_current_state()

    def move_model(self) -> None:
        self.model.move_body()
        self.model.update_current_state()

    @property
    def status(self) -> Status:
        return self.model.status


class TetrisController(Controller):
    """Drives a falling-blocks game."""

    def __init__(self, game: TetrisGame):
        self.game = game
        game.status = Status.START_GAME
        game.info.clear_field()
        game.info.next = [[1] * NEXT_SIZE for _ in range(NEXT_SIZE)]

    @property
    def gameinfo(self) -> GameInfo:
        return self.game.info

    def handle_input(self, action: UserAction) -> None:
        game = self.game
        status = self.status
        if status == Status.START_GAME:
            if action == UserAction.START:
                try:
                    record = read_score(game.record_path)
                except OSError:
                    record = None
                game.start(record)
        elif status == Status.PAUSE_GAME:
            if action == UserAction.PAUSE:
                game.status = Status.MOVE
                game.info.pause = int(Status.START_GAME)
        elif status != Status.GAME_OVER:
            game.user_input(action, True)
            self.process_changes()
            game.update_current_state()
        with suppress(OSError):
            write_score(game.record_path, game.info.high_score)

    def move_model(self) -> None:
        if self.status != Status.GAME_OVER:
            self.game.move_down()
            self.process_changes()
        self.game.update_current_state()

    @property
    def status(self) -> Status:
        return self.game.status

    def process_changes(self) -> None:
        """Settle a landed piece, clear full rows and check for game over."""
        game = self.game
        if game.figure is None:
            return
        field = game.info.field
        if is_attached(field, game.figure):
            write_figure(field, game.figure)
            game.spawn_figure()
            game.process_filled_lines()
        if top_reached(field):
            game.status = Status.GAME_OVER