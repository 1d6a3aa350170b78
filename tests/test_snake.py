from __future__ import annotations

import pytest

from serpent_grid.config import Direction, GameConfig
from serpent_grid.grid import GridDimensions
from serpent_grid.snake import SnakeController, SnakeState

DIMS = GridDimensions(20, 20, 16)


@pytest.fixture()
def snake_config() -> GameConfig:
    return GameConfig(snake_move_interval=0.1, boost_multiplier=0.5, boost_duration=0.5)


def make_snake(config: GameConfig, body, direction=Direction.RIGHT, **kwargs) -> SnakeController:
    snake = SnakeController(body[0], config, direction=direction, **kwargs)
    snake.mover.body = list(body)
    snake.segment_directions = [direction] * len(body)
    return snake


def test_initial_state(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    assert snake.body == [(10, 10)]
    assert snake.direction is Direction.RIGHT
    assert snake.state is SnakeState.ALIVE
    assert not snake.boosted
    assert snake.move_interval == pytest.approx(0.1)


def test_reversal_is_dropped_and_turn_accepted(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    assert snake.request_direction(Direction.LEFT) is False
    assert snake.direction is Direction.RIGHT
    assert not snake.boosted

    assert snake.request_direction(Direction.UP) is True
    assert snake.direction is Direction.UP


def test_two_turns_before_a_tick_cannot_reverse(snake_config: GameConfig) -> None:
    snake = make_snake(snake_config, [(5, 5), (4, 5), (3, 5)])
    assert snake.request_direction(Direction.UP) is True
    assert snake.request_direction(Direction.LEFT) is False
    assert snake.direction is Direction.UP

    assert snake.tick(DIMS) == (5, 4)
    assert snake.alive
    assert snake.request_direction(Direction.LEFT) is True


def test_same_direction_is_not_a_turn(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    assert snake.request_direction(Direction.RIGHT) is False
    assert not snake.boosted


def test_self_collision_ends_the_game(snake_config: GameConfig) -> None:
    reasons: list[str] = []
    snake = make_snake(
        snake_config,
        [(5, 5), (4, 5), (3, 5)],
        direction=Direction.LEFT,
        on_game_over=reasons.append,
    )
    assert snake.tick(DIMS) is None
    assert snake.state is SnakeState.GAME_OVER
    assert snake.body == [(5, 5), (4, 5), (3, 5)]
    assert reasons == ["self"]


def test_moving_away_from_body_is_safe(snake_config: GameConfig) -> None:
    snake = make_snake(snake_config, [(5, 5), (4, 5), (3, 5)])
    assert snake.tick(DIMS) == (6, 5)
    assert snake.alive
    assert snake.body == [(6, 5), (5, 5), (4, 5)]


@pytest.mark.parametrize("pending_growth", [False, True])
def test_tail_cell_counts_as_collision_regardless_of_growth(
    snake_config: GameConfig, pending_growth: bool
) -> None:
    snake = make_snake(
        snake_config,
        [(5, 5), (5, 6), (4, 6), (4, 5)],
        direction=Direction.LEFT,
    )
    if pending_growth:
        snake.grow()
    assert snake.tick(DIMS) is None
    assert not snake.alive


def test_game_over_is_terminal(snake_config: GameConfig) -> None:
    snake = make_snake(snake_config, [(5, 5), (4, 5)], direction=Direction.LEFT)
    snake.tick(DIMS)
    assert not snake.alive
    assert snake.request_direction(Direction.UP) is False
    assert snake.tick(DIMS) is None
    assert snake.body == [(5, 5), (4, 5)]


def test_segment_directions_track_the_body(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    snake.grow()
    snake.tick(DIMS)
    snake.request_direction(Direction.DOWN)
    snake.grow()
    snake.tick(DIMS)
    snake.tick(DIMS)
    assert snake.body == [(11, 12), (11, 11), (11, 10)]
    assert snake.segment_directions == [Direction.DOWN, Direction.DOWN, Direction.RIGHT]


def test_turn_starts_boost_that_expires(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    snake.request_direction(Direction.UP)
    assert snake.boosted
    assert snake.move_interval == pytest.approx(0.05)

    snake.update(0.49)
    assert snake.boosted
    snake.update(0.02)
    assert not snake.boosted
    assert snake.move_interval == pytest.approx(0.1)


def test_turning_while_boosted_does_not_extend_boost(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    snake.request_direction(Direction.UP)
    snake.update(0.3)
    snake.tick(DIMS)
    assert snake.request_direction(Direction.LEFT) is True
    snake.update(0.25)
    assert not snake.boosted


def test_grow_after_death_is_ignored(snake_config: GameConfig) -> None:
    snake = SnakeController((10, 10), snake_config)
    snake.kill("enemy")
    snake.grow()
    assert not snake.mover.pending_growth
