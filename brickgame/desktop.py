"""Windowed front end for both games, built on tkinter."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from .controller import Controller, SnakeController, TetrisController
from .snake import SnakeModel
from .structures import FIELD_HEIGHT, FIELD_WIDTH, NEXT_SIZE, GameInfo, Status, UserAction
from .tetris import TetrisGame

FIELD_W = 400
FIELD_H = 800
LABEL_X = 440
LABEL_W = 100
LABEL_H = 50
NUMB_X = 550
NUMB_W = 150
NUMB_H = 50
PIXEL_SIZE = 40
START_DELAY = 400
SCALE_DELAY = 30
NEXT_Y = 310

BLOCK_COLOR = "#2980b9"
APPLE_COLOR = "limegreen"

SNAKE_RECORD = "record_snake.txt"
TETRIS_RECORD = "record_tetris.txt"

_KEYMAP = {
    "Up": UserAction.UP,
    "w": UserAction.UP,
    "W": UserAction.UP,
    "Down": UserAction.DOWN,
    "s": UserAction.DOWN,
    "S": UserAction.DOWN,
    "Left": UserAction.LEFT,
    "a": UserAction.LEFT,
    "A": UserAction.LEFT,
    "Right": UserAction.RIGHT,
    "d": UserAction.RIGHT,
    "D": UserAction.RIGHT,
    "r": UserAction.START,
    "R": UserAction.START,
    "p": UserAction.PAUSE,
    "P": UserAction.PAUSE,
    "Escape": UserAction.TERMINATE,
    "space": UserAction.ACTION,
}


def _tk():
    import tkinter

    return tkinter


def key_to_action(keysym: str) -> UserAction:
    """Translate a Tk key symbol into a player action."""
    return _KEYMAP.get(keysym, UserAction.NO_ACTION)


def timer_interval(speed: int) -> int:
    """Milliseconds between automatic moves at the given speed."""
    return START_DELAY - speed * SCALE_DELAY


def cell_fill(value: int) -> str | None:
    """Fill colour of a field cell, or None for an empty one."""
    if value == 1:
        return BLOCK_COLOR
    if value == 2:
        return APPLE_COLOR
    return None


def _message_label(parent, text: str):
    tk = _tk()
    return tk.Label(
        parent,
        text=text,
        bg="white",
        borderwidth=1,
        relief="solid",
        highlightbackground="black",
    )


class FieldView:
    """The playing field with its in-game messages."""

    def __init__(self, parent, info: GameInfo):
        tk = _tk()
        self.info = info
        self.frame = tk.Frame(parent, width=FIELD_W + 1, height=FIELD_H + 1)
        self.frame.place(x=10, y=10, width=FIELD_W + 1, height=FIELD_H + 1)
        self.canvas = tk.Canvas(
            self.frame, width=FIELD_W + 1, height=FIELD_H + 1, highlightthickness=0, bg="white"
        )
        self.canvas.place(x=0, y=0)
        self.start_text = _message_label(self.frame, "PRESS <R> TO START GAME")
        self.game_over_text = _message_label(self.frame, "GAME OVER")
        self.pause_text = _message_label(self.frame, "GAME ON PAUSE, PRESS P TO CONTINUE")
        self.win_text = _message_label(self.frame, "CONGRATULATIONS ON YOUR VICTORY!!!")
        self._show(self.start_text)

    @staticmethod
    def _show(label) -> None:
        label.place(x=10, y=70, width=380, height=LABEL_H)
        label.lift()

    def redraw(self) -> None:
        """Draw the grid and the coloured blocks of the field."""
        canvas = self.canvas
        canvas.delete("all")
        for i in range(FIELD_WIDTH + 1):
            canvas.create_line(PIXEL_SIZE * i, 0, PIXEL_SIZE * i, FIELD_H, dash=(1, 2), fill="black")
        for i in range(FIELD_HEIGHT + 1):
            canvas.create_line(0, PIXEL_SIZE * i, FIELD_W, PIXEL_SIZE * i, dash=(1, 2), fill="black")
        for i, row in enumerate(self.info.field[:FIELD_HEIGHT]):
            for j, value in enumerate(row[:FIELD_WIDTH]):
                colour = cell_fill(value)
                if colour is not None:
                    canvas.create_rectangle(
                        j * PIXEL_SIZE,
                        i * PIXEL_SIZE,
                        (j + 1) * PIXEL_SIZE,
                        (i + 1) * PIXEL_SIZE,
                        fill=colour,
                        width=0,
                    )

    def hide_start_text(self) -> None:
        """Hide the start prompt."""
        self.start_text.place_forget()

    def show_game_over_text(self) -> None:
        """Show the game-over message."""
        self._show(self.game_over_text)

    def show_win_text(self) -> None:
        """Show the victory message."""
        self._show(self.win_text)

    def show_pause_text(self) -> None:
        """Show the pause message."""
        self._show(self.pause_text)

    def hide_pause_text(self) -> None:
        """Hide the pause message."""
        self.pause_text.place_forget()


class GameView:
    """Game window: field, score panel, next-piece preview and move timer."""

    def __init__(self, master, controller: Controller):
        tk = _tk()
        self.master = master
        self.controller = controller
        self._closed = False
        self._running = False
        self._job = None
        self._interval = START_DELAY
        self._started_at = 0.0

        self.numbers = {}
        for name, y in (("high_score", 10), ("score", 70), ("level", 130), ("speed", 190)):
            label = tk.Label(
                master, text="0", bg="white", borderwidth=1, relief="solid", font=("Courier", 24)
            )
            label.place(x=NUMB_X, y=y, width=NUMB_W, height=NUMB_H)
            self.numbers[name] = label

        self.field = FieldView(master, controller.gameinfo)

        for text, y in (("HIGH SCORE", 10), ("SCORE", 70), ("LEVEL", 130), ("SPEED", 190)):
            _message_label(master, text).place(x=LABEL_X, y=y, width=LABEL_W, height=LABEL_H)
        self.next_figure_text = _message_label(master, "NEXT FIGURE")
        if controller.gameinfo.next is not None:
            self.next_figure_text.place(x=LABEL_X, y=250, width=LABEL_W, height=LABEL_H)

        size = NEXT_SIZE * PIXEL_SIZE + 1
        self.next_canvas = tk.Canvas(master, width=size, height=size, highlightthickness=0)
        self.next_canvas.place(x=LABEL_X, y=NEXT_Y)

        master.bind("<Key>", self.on_key)
        master.protocol("WM_DELETE_WINDOW", self._close)
        self.process_model()

    def _close(self) -> None:
        self._cancel_job()
        self._running = False
        self._closed = True
        self.master.destroy()

    def _cancel_job(self) -> None:
        if self._job is not None:
            self.master.after_cancel(self._job)
            self._job = None

    def _schedule(self) -> None:
        self._cancel_job()
        self._started_at = time.monotonic()
        self._job = self.master.after(max(int(self._interval), 0), self._fire)

    def _start_timer(self, interval: int | None = None) -> None:
        if interval is not None:
            self._interval = interval
        self._running = True
        self._schedule()

    def _fire(self) -> None:
        self._job = None
        self.time_to_move()
        if self._running and not self._closed:
            self._schedule()

    def on_key(self, event) -> None:
        """Translate a key press, steer the timer and pass the action on."""
        action = key_to_action(event.keysym)
        status = self.controller.status
        if action == UserAction.START:
            if status == Status.START_GAME:
                self.field.hide_start_text()
                self._start_timer(START_DELAY)
        elif action == UserAction.PAUSE:
            if status == Status.MOVE:
                self.pause_timer()
            elif status == Status.PAUSE_GAME:
                self.restart_timer()
        elif action == UserAction.TERMINATE:
            self._close()
        self.controller.handle_input(action)
        self.process_model()

    def time_to_move(self) -> None:
        """Advance the game on a timer tick and retune the timer to the speed."""
        if self._closed:
            return
        self.controller.move_model()
        self.process_model()
        self._interval = timer_interval(self.controller.gameinfo.speed)

    def pause_timer(self) -> None:
        """Stop the timer, keeping the time left until the next move."""
        if self._running:
            elapsed = (time.monotonic() - self._started_at) * 1000
            self._interval = max(int(self._interval - elapsed), 0)
        self._running = False
        self._cancel_job()

    def restart_timer(self) -> None:
        """Start the timer again with its current interval."""
        self._start_timer()

    def paint_next_figure(self) -> None:
        """Draw the preview grid and the blocks of the next piece."""
        canvas = self.next_canvas
        canvas.delete("all")
        info = self.controller.gameinfo
        if info.next is None:
            return
        span = NEXT_SIZE * PIXEL_SIZE
        for i in range(NEXT_SIZE + 1):
            canvas.create_line(PIXEL_SIZE * i, 0, PIXEL_SIZE * i, span, dash=(1, 2), fill="grey")
            canvas.create_line(0, PIXEL_SIZE * i, span, PIXEL_SIZE * i, dash=(1, 2), fill="grey")
        for i, row in enumerate(info.next[:NEXT_SIZE]):
            for j, value in enumerate(row[:NEXT_SIZE]):
                if value == 1:
                    canvas.create_rectangle(
                        j * PIXEL_SIZE,
                        i * PIXEL_SIZE,
                        (j + 1) * PIXEL_SIZE,
                        (i + 1) * PIXEL_SIZE,
                        fill=BLOCK_COLOR,
                        width=0,
                    )

    def process_model(self) -> None:
        """Show status messages, repaint and refresh the score panel."""
        if self._closed:
            return
        status = self.controller.status
        if status == Status.GAME_OVER:
            self.field.show_game_over_text()
        if status == Status.WIN_GAME:
            self.field.show_win_text()
            self.pause_timer()
        if status == Status.PAUSE_GAME:
            self.field.show_pause_text()
        else:
            self.field.hide_pause_text()
        info = self.controller.gameinfo
        self.field.info = info
        self.field.redraw()
        self.paint_next_figure()
        for name in ("high_score", "score", "level", "speed"):
            self.numbers[name].config(text=str(getattr(info, name)))


class MainWindow:
    """Start window offering a choice of game."""

    def __init__(self, root, record_dir: str | Path = "games"):
        tk = _tk()
        self.root = root
        self.record_dir = Path(record_dir)
        self.record_dir.mkdir(parents=True, exist_ok=True)
        for name in (SNAKE_RECORD, TETRIS_RECORD):
            (self.record_dir / name).touch(exist_ok=True)
        self.game: GameView | None = None
        root.title("BrickGame")
        root.geometry("300x200")
        root.resizable(False, False)
        root.configure(bg="grey")
        self.snake_button = tk.Button(root, text="Snake", bg="white", command=self.load_snake)
        self.tetris_button = tk.Button(root, text="Tetris", bg="white", command=self.load_tetris)
        self.snake_button.pack(fill="both", expand=True, padx=10, pady=5)
        self.tetris_button.pack(fill="both", expand=True, padx=10, pady=5)

    def _open(self, title: str, controller: Controller) -> GameView:
        tk = _tk()
        window = tk.Toplevel(self.root)
        window.title(title)
        window.geometry("720x855")
        window.resizable(False, False)
        window.transient(self.root)
        window.focus_set()
        self.game = GameView(window, controller)
        return self.game

    def load_snake(self) -> GameView:
        """Open a snake game window."""
        model = SnakeModel(self.record_dir / SNAKE_RECORD)
        return self._open("Snake", SnakeController(model))

    def load_tetris(self) -> GameView:
        """Open a falling-blocks game window."""
        game = TetrisGame(self.record_dir / TETRIS_RECORD)
        return self._open("Tetris", TetrisController(game))


def main(argv: list[str] | None = None) -> int:
    """Open the game selection window."""
    parser = argparse.ArgumentParser(prog="brickgame-desktop", description="Play snake or tetris in a window.")
    parser.add_argument("--records", default="games", help="directory that stores the high scores")
    args = parser.parse_args(argv)
    tk = _tk()
    root = tk.Tk()
    MainWindow(root, args.records)
    root.mainloop()
    return 0