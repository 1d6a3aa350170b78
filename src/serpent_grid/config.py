"""Centralized configuration and direction tables for the grid core."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping

import pygame


class ConfigError(ValueError):
    """Raised when a configuration value cannot drive a session."""


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE[self]

    @property
    def vector(self) -> tuple[int, int]:
        return DIRECTIONS[self]


VIEWPORT_SIZE: tuple[int, int] = (480, 480)
CELL_SIZE: int = 16  # 480 / 16 => 30 cells
MIN_GRID_CELLS: int = 10

FPS: int = 60
SNAKE_MOVE_INTERVAL: float = 0.1
BOOST_MULTIPLIER: float = 0.5
BOOST_DURATION: float = 0.5

ENEMY_MOVE_INTERVAL: float = 0.25
ENEMY_RESPAWN_INTERVAL: float = 10.0
ENEMY_VISIBLE_TIME: float = 2.0
ENEMY_FADE_TIME: float = 2.0
ENEMY_MILESTONE: int = 5

FOOD_RESPAWN_INTERVAL: float = 8.0
FOOD_VISIBLE_TIME: float = 4.0
FOOD_FADE_TIME: float = 4.0

MIN_ALPHA: float = 0.1
SAFE_RESPAWN_ATTEMPTS: int = 100
SAFE_RESPAWN_DISTANCE: float = 3.0
FALLBACK_CELL: tuple[int, int] = (0, 0)

DIRECTIONS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
OPPOSITE: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}
KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Explicit tuning value handed to every session.

    Defaults mirror the module constants above; ``from_env`` layers the
    ``SERPENT_GRID_*`` environment variables on top of them.
    """

    viewport_size: tuple[int, int] = VIEWPORT_SIZE
    cell_size: int = CELL_SIZE
    min_grid_cells: int = MIN_GRID_CELLS
    snake_move_interval: float = SNAKE_MOVE_INTERVAL
    boost_multiplier: float = BOOST_MULTIPLIER
    boost_duration: float = BOOST_DURATION
    enemy_move_interval: float = ENEMY_MOVE_INTERVAL
    enemy_respawn_interval: float = ENEMY_RESPAWN_INTERVAL
    enemy_visible_time: float = ENEMY_VISIBLE_TIME
    enemy_fade_time: float = ENEMY_FADE_TIME
    enemy_milestone: int = ENEMY_MILESTONE
    food_respawn_interval: float = FOOD_RESPAWN_INTERVAL
    food_visible_time: float = FOOD_VISIBLE_TIME
    food_fade_time: float = FOOD_FADE_TIME
    min_alpha: float = MIN_ALPHA
    safe_respawn_attempts: int = SAFE_RESPAWN_ATTEMPTS
    safe_respawn_distance: float = SAFE_RESPAWN_DISTANCE
    seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ConfigError(f"cell_size must be positive, got {self.cell_size}")
        width, height = self.viewport_size
        if width <= 0 or height <= 0:
            raise ConfigError(f"viewport must be positive, got {self.viewport_size}")
        if self.min_grid_cells < 1:
            raise ConfigError("min_grid_cells must be at least 1")
        for name in (
            "snake_move_interval",
            "enemy_move_interval",
            "enemy_respawn_interval",
            "food_respawn_interval",
        ):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if not 0.0 < self.boost_multiplier <= 1.0:
            raise ConfigError("boost_multiplier must be within (0, 1]")
        if self.boost_duration < 0:
            raise ConfigError("boost_duration cannot be negative")
        if self.safe_respawn_attempts < 1:
            raise ConfigError("safe_respawn_attempts must be at least 1")
        if self.enemy_milestone < 1:
            raise ConfigError("enemy_milestone must be at least 1")
        if not 0.0 <= self.min_alpha <= 1.0:
            raise ConfigError("min_alpha must be within [0, 1]")

    def with_viewport(self, viewport_size: tuple[int, int]) -> "GameConfig":
        return replace(self, viewport_size=tuple(viewport_size))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameConfig":
        """Build a config from ``SERPENT_GRID_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        viewport = env.get("SERPENT_GRID_VIEWPORT")
        if viewport:
            overrides["viewport_size"] = _parse_viewport(viewport)
        cell_size = env.get("SERPENT_GRID_CELL_SIZE")
        if cell_size:
            overrides["cell_size"] = _parse_int("SERPENT_GRID_CELL_SIZE", cell_size)
        seed = env.get("SERPENT_GRID_SEED")
        if seed:
            overrides["seed"] = _parse_int("SERPENT_GRID_SEED", seed)
        log_level = env.get("SERPENT_GRID_LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()
        return cls(**overrides)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_viewport(raw: str) -> tuple[int, int]:
    parts = raw.lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ConfigError(f"SERPENT_GRID_VIEWPORT must look like 480x480, got {raw!r}")
    return (
        _parse_int("SERPENT_GRID_VIEWPORT", parts[0]),
        _parse_int("SERPENT_GRID_VIEWPORT", parts[1]),
    )
