# brickgame

Two classic brick games, Snake and Tetris, on a 10 × 20 field. Each game
can be played in the terminal (curses) or in a desktop window (tkinter).
Both interfaces use only the standard library; the desktop window needs a
Python built with tkinter.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing in a window

```
brickgame
brickgame --records path/to/dir
```

A small menu opens with two buttons, **Snake** and **Tetris**. Each opens
the chosen game in its own window. The high score, score, level and speed
are shown beside the field; for Tetris the next figure is shown as well.

High scores are kept in `record_snake.txt` and `record_tetris.txt` inside
the records directory (`games` by default, relative to the current
directory). The directory and both files are created when the menu opens.

## Playing in the terminal

```
brickgame-cli snake
brickgame-cli tetris
brickgame-cli snake --record path/to/record.txt
```

The default record files are `games/record_snake.txt` and
`games/record_tetris.txt`, relative to the current directory. The terminal
interface does not create them: the file must already exist (an empty file
counts as a record of 0; running `brickgame` once creates both). Without it
Snake exits with an error message, and Tetris shows a "not found" message
and waits for a key before quitting.

### Keys

| Key               | Snake                          | Tetris              |
|-------------------|--------------------------------|---------------------|
| `r`               | start / restart                | start / restart     |
| `p`               | pause / resume                 | pause / resume      |
| Esc               | quit                           | quit                |
| arrows or `wasd`  | turn the snake                 | move the figure (up does nothing) |
| Space             | move one step at once          | rotate the figure   |

In the window, upper-case letters work too, and Esc closes the game window.

## Rules

**Snake.** The snake starts with four segments in the middle row, heading
left, and moves on its own. It cannot turn straight back onto itself. Each
apple it eats adds one segment and one point. Every 5 points raise the
level and the speed, up to level 10. The game is lost when the snake hits
a wall or itself, and won when the snake fills all 200 cells.

**Tetris.** Figures fall from the top of the field. Clearing 1, 2, 3 or 4
lines at once scores 100, 300, 700 or 1500 points, up to 999999999. Every
600 points raise the level and the speed, up to level 10. The game ends
when a settled block reaches the top row.

## Using the game logic

The game logic does not depend on either interface:

- `brickgame.snake.SnakeModel` holds a snake game; `user_input`,
  `move_body` and `update_current_state` drive it.
- `brickgame.tetris.TetrisGame` holds a Tetris game; `start`,
  `user_input`, `game_step` and `update_current_state` drive it.
- `brickgame.board` has the Tetris pieces (`Figure`) and the field and
  scoring rules as plain functions.
- `brickgame.controller.SnakeController` and
  `brickgame.controller.TetrisController` take `UserAction` values through
  `handle_input`, advance the game with `move_model`, and report its
  `gameinfo` (a `GameInfo`) and `status` (a `Status`).
- `brickgame.structures` defines `UserAction`, `Status`, `Color` and
  `GameInfo`.