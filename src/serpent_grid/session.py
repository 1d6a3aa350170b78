"""Game session: timers, collision resolution, scoring and enemy waves."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import pygame

from .config import Direction, GameConfig
from .enemies import EnemyController, enemy_hitting, spawn_enemy, update_enemies
from .events import (
    EventDispatcher,
    FoodEaten,
    GameOverEvent,
    PauseChanged,
    ScoreChanged,
)
from .food import FoodSpawner
from .grid import GridCoordinateSystem
from .snake import SnakeController
from .timers import IntervalTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    score: int
    paused: bool
    game_over: bool


class GameSession:
    """Owns every entity of one game and advances them on a shared clock.

    ``update(dt)`` runs the four interval timers (snake move, enemy move,
    enemy respawn, food respawn), ages enemies and food, then resolves
    collisions against the snake head. Pausing only holds the snake timer.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.dispatcher = dispatcher or EventDispatcher()
        self.coords = GridCoordinateSystem(
            self.config.viewport_size,
            self.config.cell_size,
            self.config.min_grid_cells,
        )

        self.score = 0
        self.paused = False
        self.game_over = False
        self.frames = 0

        dims = self.coords.dims
        self.snake = SnakeController(
            (dims.width // 2, dims.height // 2),
            self.config,
            dispatcher=self.dispatcher,
            on_game_over=self._handle_game_over,
        )
        self.food = FoodSpawner(
            self.coords, self.config, self.rng, dispatcher=self.dispatcher
        )
        self.food.respawn_safe(self.snake_world_position)
        self.enemies: list[EnemyController] = []

        self.snake_timer = IntervalTimer(self.snake.move_interval)
        self.enemy_move_timer = IntervalTimer(self.config.enemy_move_interval)
        self.enemy_respawn_timer = IntervalTimer(self.config.enemy_respawn_interval)
        self.food_respawn_timer = IntervalTimer(self.config.food_respawn_interval)

        logger.info(
            "Session started on a %dx%d grid, snake at %s, food at %s",
            dims.width,
            dims.height,
            self.snake.head,
            self.food.cell,
        )

    # --- State -----------------------------------------------------------

    @property
    def state(self) -> str:
        if self.game_over:
            return "game_over"
        return "paused" if self.paused else "running"

    @property
    def snake_world_position(self) -> pygame.Vector2:
        return self.coords.to_world(self.snake.head)

    def snapshot(self) -> SessionState:
        return SessionState(self.score, self.paused, self.game_over)

    # --- Commands --------------------------------------------------------

    def request_direction(self, direction: Direction) -> bool:
        if self.state != "running":
            return False
        return self.snake.request_direction(direction)

    def toggle_pause(self) -> bool:
        """Flip between running and paused; ignored once the game is over."""
        if self.game_over:
            return self.paused
        self.paused = not self.paused
        if not self.paused:
            self.snake_timer.reset()
        logger.info("Session %s", "paused" if self.paused else "resumed")
        self.dispatcher.emit(PauseChanged(self.paused))
        return self.paused

    def resize(self, viewport_size: tuple[int, int]) -> None:
        """Re-derive the grid for a new viewport and fold entities back inside."""
        self.config = self.config.with_viewport(viewport_size)
        dims = self.coords.recompute(viewport_size, self.config.cell_size)
        self.snake.wrap_into(dims)
        self.food.wrap_into(dims)
        for enemy in self.enemies:
            enemy.wrap_into(dims)

    def restart(self) -> "GameSession":
        """Return a brand-new session sharing config, randomness and dispatcher."""
        logger.info("Restarting session (final score %d)", self.score)
        return GameSession(self.config, rng=self.rng, dispatcher=self.dispatcher)

    # --- Frame update ----------------------------------------------------

    def update(self, dt: float) -> None:
        if self.game_over or dt <= 0:
            return
        dims = self.coords.dims

        if not self.paused:
            self.snake.update(dt)
            self.snake_timer.interval = self.snake.move_interval
            for _ in range(self.snake_timer.advance(dt)):
                if self.snake.tick(dims) is None:
                    break
            if self.game_over:
                return

        for _ in range(self.enemy_move_timer.advance(dt)):
            for enemy in self.enemies:
                enemy.tick(dims)

        if self.enemy_respawn_timer.advance(dt):
            avoid = self.snake_world_position
            for enemy in self.enemies:
                enemy.respawn_safe(avoid)

        if self.food_respawn_timer.advance(dt):
            self.food.respawn()

        update_enemies(self.enemies, dt)
        self.food.update(dt)

        if not self.paused:
            self.resolve_collisions()
        self.frames += 1

    def resolve_collisions(self) -> None:
        """Check the snake head against the food, then against every enemy."""
        if self.game_over:
            return
        # Both sides unclamped, so an overhanging grid still lines up.
        head_world = self.snake_world_position
        food_world = self.coords.to_world(self.food.cell)
        half_cell = self.coords.dims.cell_size / 2
        if head_world.distance_to(food_world) < half_cell:
            self._eat_food()

        hit = enemy_hitting(self.enemies, self.snake.head)
        if hit is not None:
            logger.debug("Snake head %s ran into %s", self.snake.head, hit.entity_id)
            self.snake.kill("enemy")

    def _eat_food(self) -> None:
        eaten = self.food.cell
        self.snake.grow()
        self.food.respawn()
        self.score += 1
        self.dispatcher.emit(FoodEaten(eaten, self.score))
        self.dispatcher.emit(ScoreChanged(self.score))

        if self.score % self.config.enemy_milestone == 0:
            for enemy in self.enemies:
                enemy.grow()
            spawn_enemy(
                self.enemies,
                self.coords,
                self.config,
                self.rng,
                avoid_world_pos=self.snake_world_position,
                dispatcher=self.dispatcher,
            )
            logger.info(
                "Score %d reached, %d enemies on the field",
                self.score,
                len(self.enemies),
            )

    def _handle_game_over(self, reason: str) -> None:
        if self.game_over:
            return
        self.game_over = True
        logger.info("Game over (%s) with score %d", reason, self.score)
        self.dispatcher.emit(GameOverEvent(self.score, reason))
