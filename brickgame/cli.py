"""Console front end for both games."""

from __future__ import annotations

import argparse
import curses
import sys
import time
from contextlib import suppress
from pathlib import Path

from . import snake as snake_module
from . import tetris as tetris_module
from .snake import SnakeModel
from .structures import FIELD_HEIGHT, FIELD_WIDTH, NEXT_SIZE, Color, GameInfo, Status, UserAction
from .tetris import MAX_TICKS, TICK_SCALE, TetrisGame, read_score, write_score

KEY_ESC = 27
DELAY_SECONDS = 9999999 / 1_000_000_000
PANEL_X = 24

_KEYMAP = {
    curses.KEY_LEFT: UserAction.LEFT,
    ord("a"): UserAction.LEFT,
    curses.KEY_DOWN: UserAction.DOWN,
    ord("s"): UserAction.DOWN,
    curses.KEY_RIGHT: UserAction.RIGHT,
    ord("d"): UserAction.RIGHT,
    ord("r"): UserAction.START,
    ord("p"): UserAction.PAUSE,
    KEY_ESC: UserAction.TERMINATE,
    ord(" "): UserAction.ACTION,
    ord("w"): UserAction.UP,
    curses.KEY_UP: UserAction.UP,
}

_PAIRS = {
    Color.FIELD: (curses.COLOR_WHITE, curses.COLOR_CYAN),
    Color.BLOCK: (curses.COLOR_GREEN, curses.COLOR_GREEN),
    Color.STATUS: (curses.COLOR_GREEN, curses.COLOR_BLACK),
    Color.SYMB: (curses.COLOR_RED, curses.COLOR_CYAN),
    Color.YELLOW: (curses.COLOR_YELLOW, curses.COLOR_YELLOW),
}


def key_to_action(ch: int) -> UserAction:
    """Translate a key code into a player action."""
    return _KEYMAP.get(ch, UserAction.NO_ACTION)


def tick_limit(speed: int) -> int:
    """Number of ticks between automatic moves at the given speed."""
    return MAX_TICKS - speed * TICK_SCALE


def _pair(color: Color) -> int:
    try:
        return curses.color_pair(int(color))
    except curses.error:
        return 0


class Screen:
    """Draws game state on a curses window and reads keys from it."""

    def __init__(self, window):
        self.window = window

    def _put(self, y: int, x: int, text: str, color: Color | None = None) -> None:
        attr = _pair(color) if color is not None else 0
        with suppress(curses.error):
            self.window.addstr(y, x, text, attr)

    def _wait_for(self, wanted: tuple[UserAction, ...]) -> UserAction:
        self.window.nodelay(False)
        action = self.get_input()
        while action not in wanted:
            action = self.get_input()
        self.window.nodelay(True)
        return action

    def print_game_screen(self, info: GameInfo) -> None:
        """Draw the field and the score panel."""
        self.print_field(info)
        self._put(0, PANEL_X, "SCORE:          ", Color.STATUS)
        self._put(0, PANEL_X, f"SCORE: {info.score}", Color.STATUS)
        self._put(2, PANEL_X, f"HIGH_SCORE: {info.high_score}", Color.STATUS)
        self._put(4, PANEL_X, f"LEVEL: {info.level}", Color.STATUS)
        if info.next is not None:
            self._put(6, PANEL_X, "NEXT:", Color.STATUS)
            self.print_next_figure(7, PANEL_X, info)
        if info.pause:
            self._put(11, PANEL_X, "PAUSE", Color.STATUS)
        else:
            self._put(11, PANEL_X, "     ")

    def print_field(self, info: GameInfo) -> None:
        """Draw every cell of the playing field."""
        for i, row in enumerate(info.field[:FIELD_HEIGHT]):
            for j, cell in enumerate(row[:FIELD_WIDTH]):
                if cell == 1:
                    color = Color.BLOCK
                elif cell == 2:
                    color = Color.YELLOW
                else:
                    color = Color.FIELD
                self._put(i, 2 * j, "  ", color)

    def print_next_figure(self, y: int, x: int, info: GameInfo) -> None:
        """Draw the preview of the next piece with its top-left corner at (y, x)."""
        for i, row in enumerate(info.next[:NEXT_SIZE]):
            for j, cell in enumerate(row[:NEXT_SIZE]):
                color = Color.BLOCK if cell == 1 else Color.FIELD
                self._put(y + i, x + 2 * j, "  ", color)

    def game_over(self, info: GameInfo, status: Status) -> UserAction:
        """Show the end-of-game message and wait for restart or exit."""
        if status == Status.GAME_OVER:
            lines = ("GAME OVER", "YOUR SCORE", str(info.score), "PRESS R", "TO RESTART")
        elif status == Status.WIN_GAME:
            lines = ("CONGRATULATIONS", "ON YOUR", "VICTORY", "PRESS R", "TO RESTART")
        else:
            lines = ()
        for row, text in zip(range(1, 10, 2), lines):
            self._put(row, 0, text, Color.SYMB)
        self.window.refresh()
        return self._wait_for((UserAction.START, UserAction.TERMINATE))

    def print_error(self) -> None:
        """Report a missing record file and wait for a key."""
        self._put(0, 0, "File 'data.txt' not found")
        self.window.refresh()
        self.window.nodelay(False)
        self.window.getch()

    def start_screen(self, info: GameInfo) -> Status:
        """Show the start prompt on an empty field and wait for the start key."""
        info.clear_field()
        self.print_field(info)
        self._put(3, 0, "PRESS", Color.SYMB)
        self._put(5, 0, "R", Color.SYMB)
        self._put(7, 0, "TO START", Color.SYMB)
        self.window.refresh()
        self._wait_for((UserAction.START,))
        return Status.START_GAME

    def get_input(self) -> UserAction:
        """Read one key and return its action."""
        return key_to_action(self.window.getch())

    def wait_pause(self) -> bool:
        """Block until 'p' or Escape; True means resume, False means quit."""
        self.window.nodelay(False)
        ch = 0
        while ch not in (ord("p"), KEY_ESC):
            ch = self.window.getch()
        self.window.nodelay(True)
        return ch == ord("p")


def _setup_terminal(window) -> None:
    with suppress(curses.error):
        curses.noecho()
    with suppress(curses.error):
        curses.curs_set(0)
    window.keypad(True)
    window.nodelay(True)
    with suppress(curses.error):
        curses.start_color()
        for pair, (fg, bg) in _PAIRS.items():
            curses.init_pair(int(pair), fg, bg)


def run_snake(window, record_path: str | Path = snake_module.RECORD_PATH) -> SnakeModel:
    """Play snake on the window until the player quits; return the final model."""
    _setup_terminal(window)
    screen = Screen(window)
    model = SnakeModel(record_path)
    model.status = screen.start_screen(model.info)
    ticks = 0
    while model.status != Status.EXIT_GAME:
        if model.status == Status.START_GAME:
            model.restart()
        elif model.status == Status.MOVE:
            time.sleep(DELAY_SECONDS)
            model.user_input(screen.get_input(), True)
            if ticks >= tick_limit(model.speed):
                model.move_body()
                ticks = 0
            else:
                ticks += 1
            screen.print_game_screen(model.update_current_state())
            window.refresh()
        elif model.status == Status.PAUSE_GAME:
            if screen.wait_pause():
                model.status = Status.MOVE
                model.set_pause(int(Status.START_GAME))
            else:
                model.status = Status.EXIT_GAME
        elif model.status in (Status.GAME_OVER, Status.WIN_GAME):
            action = screen.game_over(model.info, model.status)
            if action == UserAction.TERMINATE:
                model.status = Status.EXIT_GAME
            elif action == UserAction.START:
                model.status = Status.START_GAME
    return model


def run_tetris(window, record_path: str | Path = tetris_module.RECORD_PATH) -> TetrisGame:
    """Play the falling-blocks game on the window until the player quits."""
    _setup_terminal(window)
    screen = Screen(window)
    game = TetrisGame(record_path)
    game.status = screen.start_screen(game.info)
    record_missing = False
    while game.status != Status.EXIT_GAME and not record_missing:
        if game.status == Status.START_GAME:
            try:
                record = read_score(game.record_path)
            except OSError:
                record_missing = True
                record = None
            game.start(record)
        elif game.status == Status.MOVE:
            time.sleep(DELAY_SECONDS)
            game.user_input(screen.get_input(), True)
            game.game_step()
            screen.print_game_screen(game.update_current_state())
            window.refresh()
        elif game.status == Status.PAUSE_GAME:
            if screen.wait_pause():
                game.status = Status.MOVE
                game.info.pause = int(Status.START_GAME)
            else:
                game.status = Status.EXIT_GAME
        elif game.status == Status.GAME_OVER:
            game.user_input(screen.game_over(game.info, game.status), True)
            with suppress(OSError):
                write_score(game.record_path, game.info.high_score)
    if record_missing:
        screen.print_error()
    with suppress(OSError):
        write_score(game.record_path, game.info.high_score)
    return game


def main(argv: list[str] | None = None) -> int:
    """Start one of the games in the terminal."""
    parser = argparse.ArgumentParser(prog="brickgame", description="Play snake or tetris in the terminal.")
    parser.add_argument("game", choices=("snake", "tetris"))
    parser.add_argument("--record", help="file that stores the high score")
    args = parser.parse_args(argv)
    if args.game == "snake":
        runner, default = run_snake, snake_module.RECORD_PATH
    else:
        runner, default = run_tetris, tetris_module.RECORD_PATH
    path = args.record or default
    try:
        curses.wrapper(runner, path)
    except OSError as exc:
        print(f"brickgame: {exc}", file=sys.stderr)
        return 1
    return 0