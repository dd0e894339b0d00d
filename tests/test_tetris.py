import random

import pytest

from brickgame.board import FIGURE_TEMPLATES, MAX_SCORE, SPAWN_X, SPAWN_Y, figure_from_next
from brickgame.structures import FIELD_HEIGHT, FIELD_WIDTH, Status, UserAction
from brickgame.tetris import MAX_TICKS, TetrisGame, read_score, write_score


def make_game(tmp_path):
    return TetrisGame(tmp_path / "record.txt", random.Random(1))


def template(index):
    return [list(row) for row in FIGURE_TEMPLATES[index]]


def started(tmp_path, index=0):
    game = make_game(tmp_path)
    game.start(0)
    game.figure = figure_from_next(template(index))
    return game


def test_score_round_trip(tmp_path):
    path = tmp_path / "record.txt"
    write_score(path, 1234)
    assert read_score(path) == 1234


def test_read_score_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_score(tmp_path / "missing.txt")


def test_read_score_empty_file(tmp_path):
    path = tmp_path / "record.txt"
    path.write_text("")
    assert read_score(path) == 0


def test_new_game_waits_for_start(tmp_path):
    game = make_game(tmp_path)
    assert game.status == Status.START_GAME
    assert game.info.next == [[1] * 4 for _ in range(4)]


def test_create_game_resets_panel(tmp_path):
    game = make_game(tmp_path)
    game.info.score = 500
    game.info.field[5][5] = 1
    game.create_game(42)
    assert game.info.score == 0
    assert game.info.high_score == 42
    assert game.info.level == 1
    assert game.info.speed == 1
    assert game.info.pause == 0
    assert all(cell == 0 for row in game.info.field for cell in row)


def test_start_without_record(tmp_path):
    game = make_game(tmp_path)
    game.info.high_score = 9
    game.start(None)
    assert game.info.high_score == 0
    assert game.status == Status.START_GAME


def test_start_with_record(tmp_path):
    game = make_game(tmp_path)
    game.start(42)
    assert game.status == Status.MOVE
    assert game.info.high_score == 42
    assert (game.figure.x, game.figure.y) == (SPAWN_X, SPAWN_Y)
    assert tuple(tuple(row) for row in game.info.next) in FIGURE_TEMPLATES


def test_spawn_uses_preview(tmp_path):
    game = make_game(tmp_path)
    game.info.next = template(1)
    game.spawn_figure()
    assert game.figure == figure_from_next(template(1))


def test_move_left_stops_at_wall(tmp_path):
    game = started(tmp_path)
    for _ in range(20):
        game.move_left()
    assert min(col for _, col in game.figure.cells()) == 0


def test_move_right_stops_at_wall(tmp_path):
    game = started(tmp_path)
    for _ in range(20):
        game.move_right()
    assert max(col for _, col in game.figure.cells()) == FIELD_WIDTH - 1


def test_move_down_stops_at_floor(tmp_path):
    game = started(tmp_path)
    for _ in range(40):
        game.move_down()
    assert max(row for row, _ in game.figure.cells()) == FIELD_HEIGHT - 1


@pytest.mark.parametrize("index", range(len(FIGURE_TEMPLATES)))
def test_four_rotations_restore_piece(tmp_path, index):
    game = started(tmp_path, index)
    original = game.figure
    for _ in range(4):
        game.rotate()
    assert game.figure == original


def test_rotation_changes_long_piece(tmp_path):
    game = started(tmp_path, 1)
    before = set(game.figure.cells())
    game.rotate()
    assert set(game.figure.cells()) != before
    assert len(set(game.figure.cells())) == len(before)


def test_rotation_blocked(tmp_path):
    game = started(tmp_path, 1)
    cells = set(game.figure.cells())
    for r in range(FIELD_HEIGHT):
        for c in range(FIELD_WIDTH):
            if (r, c) not in cells:
                game.info.field[r][c] = 1
    before = game.figure
    game.rotate()
    assert game.figure == before


def test_toggle_pause(tmp_path):
    game = started(tmp_path)
    game.toggle_pause()
    assert game.status == Status.PAUSE_GAME
    assert game.info.pause == Status.PAUSE_GAME
    game.status = Status.MOVE
    game.toggle_pause()
    assert game.status == Status.MOVE


def test_one_line_scores(tmp_path):
    game = started(tmp_path)
    game.info.field[19] = [1] * FIELD_WIDTH
    game.process_filled_lines()
    assert game.info.score == 100
    assert game.info.high_score == 100
    assert game.info.level == 1
    assert game.info.field[19] == [0] * FIELD_WIDTH


def test_four_lines_raise_level(tmp_path):
    game = started(tmp_path)
    for r in range(16, 20):
        game.info.field[r] = [1] * FIELD_WIDTH
    game.process_filled_lines()
    assert game.info.score == 1500
    assert game.info.level > 1
    assert game.info.speed == game.info.level


def test_score_is_capped(tmp_path):
    game = started(tmp_path)
    game.info.score = MAX_SCORE - 50
    game.info.field[19] = [1] * FIELD_WIDTH
    game.process_filled_lines()
    assert game.info.score == MAX_SCORE


def test_high_score_not_lowered(tmp_path):
    game = started(tmp_path)
    game.info.high_score = 5000
    game.info.field[19] = [1] * FIELD_WIDTH
    game.process_filled_lines()
    assert game.info.high_score == 5000


def test_no_lines_no_score(tmp_path):
    game = started(tmp_path)
    game.info.field[19][0] = 1
    game.process_filled_lines()
    assert game.info.score == 0
    assert game.info.field[19][0] == 1


def test_user_input_moves(tmp_path):
    game = started(tmp_path)
    x = game.figure.x
    game.user_input(UserAction.LEFT, True)
    assert game.figure.x == x - 1
    game.user_input(UserAction.RIGHT, True)
    assert game.figure.x == x
    game.user_input(UserAction.DOWN, True)
    assert game.figure.y == SPAWN_Y + 1


def test_user_input_without_hold_ignored(tmp_path):
    game = started(tmp_path)
    before = game.figure
    game.user_input(UserAction.LEFT, False)
    assert game.figure == before


def test_user_input_terminate(tmp_path):
    game = started(tmp_path)
    game.user_input(UserAction.TERMINATE, True)
    assert game.status == Status.EXIT_GAME


def test_user_input_start_after_game_over(tmp_path):
    game = started(tmp_path)
    game.user_input(UserAction.START, True)
    assert game.status == Status.MOVE
    game.status = Status.GAME_OVER
    game.user_input(UserAction.START, True)
    assert game.status == Status.START_GAME


def test_game_step_counts_ticks(tmp_path):
    game = started(tmp_path)
    game.game_step()
    assert game.ticks_left == 1
    assert game.figure.y == SPAWN_Y


def test_game_step_drops_when_due(tmp_path):
    game = started(tmp_path)
    game.ticks_left = MAX_TICKS
    game.game_step()
    assert game.ticks_left == 0
    assert game.figure.y == SPAWN_Y + 1


def test_game_step_settles_piece(tmp_path):
    game = started(tmp_path)
    game.figure = game.figure.shifted(0, 17)
    cells = set(game.figure.cells())
    game.game_step()
    assert all(game.info.field[r][c] == 1 for r, c in cells)
    assert game.figure.y == SPAWN_Y
    assert game.status == Status.MOVE


def test_game_step_top_reached(tmp_path):
    game = started(tmp_path)
    game.info.field[0][0] = 1
    game.game_step()
    assert game.status == Status.GAME_OVER


def test_update_current_state_draws_piece(tmp_path):
    game = started(tmp_path)
    info = game.update_current_state()
    drawn = {(r, c) for r in range(FIELD_HEIGHT) for c in range(FIELD_WIDTH) if info.field[r][c] == 2}
    assert drawn == set(game.figure.cells())
    game.move_down()
    info = game.update_current_state()
    drawn = {(r, c) for r in range(FIELD_HEIGHT) for c in range(FIELD_WIDTH) if info.field[r][c] == 2}
    assert drawn == set(game.figure.cells())