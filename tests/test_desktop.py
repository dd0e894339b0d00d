import pytest

from brickgame.desktop import (
    APPLE_COLOR,
    BLOCK_COLOR,
    SCALE_DELAY,
    START_DELAY,
    cell_fill,
    key_to_action,
    timer_interval,
)
from brickgame.structures import UserAction


@pytest.mark.parametrize(
    ("keysym", "action"),
    [
        ("Up", UserAction.UP),
        ("w", UserAction.UP),
        ("Down", UserAction.DOWN),
        ("s", UserAction.DOWN),
        ("Left", UserAction.LEFT),
        ("a", UserAction.LEFT),
        ("Right", UserAction.RIGHT),
        ("d", UserAction.RIGHT),
        ("r", UserAction.START),
        ("p", UserAction.PAUSE),
        ("Escape", UserAction.TERMINATE),
        ("space", UserAction.ACTION),
    ],
)
def test_key_to_action_maps_known_keys(keysym, action):
    assert key_to_action(keysym) == action


@pytest.mark.parametrize("keysym", ["w", "s", "a", "d", "r", "p"])
def test_key_to_action_ignores_case(keysym):
    assert key_to_action(keysym.upper()) == key_to_action(keysym)


@pytest.mark.parametrize("keysym", ["q", "Return", "Tab", ""])
def test_key_to_action_unknown_key_is_no_action(keysym):
    assert key_to_action(keysym) == UserAction.NO_ACTION


def test_timer_interval_at_speed_zero_is_start_delay():
    assert timer_interval(0) == 400
    assert timer_interval(0) == START_DELAY


@pytest.mark.parametrize("speed", range(0, 10))
def test_timer_interval_drops_by_scale_per_speed(speed):
    assert timer_interval(speed) - timer_interval(speed + 1) == SCALE_DELAY
    assert SCALE_DELAY == 30


def test_timer_interval_stays_positive_up_to_max_level():
    assert all(timer_interval(speed) > 0 for speed in range(0, 11))


def test_cell_fill_block_colour():
    assert cell_fill(1) == "#2980b9"
    assert cell_fill(1) == BLOCK_COLOR


def test_cell_fill_apple_colour():
    assert cell_fill(2) == "limegreen"
    assert cell_fill(2) == APPLE_COLOR


@pytest.mark.parametrize("value", [0, 3, -1])
def test_cell_fill_empty_cells_have_no_colour(value):
    assert cell_fill(value) is None