"""Autonomous enemy behaviors for the grid core."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, List, Sequence

import pygame

from .config import FALLBACK_CELL, Direction, GameConfig
from .events import EnemySpawned, EventDispatcher, Respawned
from .grid import Cell, GridCoordinateSystem, GridDimensions
from .movement import GridBody
from .timers import FadeClock

logger = logging.getLogger(__name__)

_DIRECTION_CHOICES: tuple[Direction, ...] = tuple(Direction)


def random_direction(rng: random.Random) -> Direction:
    return rng.choice(_DIRECTION_CHOICES)


def find_safe_cell(
    coords: GridCoordinateSystem,
    rng: random.Random,
    avoid_world_pos: pygame.Vector2 | Sequence[float],
    min_distance: float,
    attempts: int,
) -> Cell | None:
    """Pick a random cell at least ``min_distance`` cells away from the avoid point."""

    avoid = coords.to_grid(avoid_world_pos)
    for _ in range(attempts):
        cell = coords.random_cell(rng)
        if avoid.distance_to(cell) >= min_distance:
            return cell
    return None


class EnemyController:
    """A wandering segmented enemy.

    Heading is rolled once per (re)spawn and kept until the next one. Enemies
    never test against their own body, so they can fold over themselves.
    """

    def __init__(
        self,
        entity_id: str,
        coords: GridCoordinateSystem,
        config: GameConfig,
        rng: random.Random,
        *,
        start: Cell = FALLBACK_CELL,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.coords = coords
        self.rng = rng
        self.mover = GridBody(entity_id, start, random_direction(rng), dispatcher)
        self.fade = FadeClock(
            config.enemy_visible_time, config.enemy_fade_time, config.min_alpha
        )
        self.safe_attempts = config.safe_respawn_attempts
        self.safe_distance = config.safe_respawn_distance
        self._dispatcher = dispatcher

    @property
    def entity_id(self) -> str:
        return self.mover.entity_id

    @property
    def body(self) -> list[Cell]:
        return self.mover.body

    @property
    def head(self) -> Cell:
        return self.mover.head

    @property
    def direction(self) -> Direction:
        return self.mover.direction

    @property
    def alpha(self) -> float:
        return self.fade.alpha

    def tick(self, dims: GridDimensions | None = None) -> Cell:
        return self.mover.step(dims or self.coords.dims)

    def update(self, dt: float) -> float:
        return self.fade.update(dt)

    def grow(self) -> None:
        self.mover.grow()

    def find_safe_cell(self, avoid_world_pos: pygame.Vector2) -> Cell:
        cell = find_safe_cell(
            self.coords,
            self.rng,
            avoid_world_pos,
            self.safe_distance,
            self.safe_attempts,
        )
        if cell is None:
            logger.debug(
                "%s: no safe cell after %d attempts, using %s",
                self.entity_id,
                self.safe_attempts,
                FALLBACK_CELL,
            )
            return FALLBACK_CELL
        return cell

    def place(self, cell: Cell) -> None:
        """Collapse to a single cell with a fresh heading and lifetime."""
        self.mover.reset(cell, random_direction(self.rng))
        self.fade.reset()

    def respawn_safe(self, avoid_world_pos: pygame.Vector2) -> Cell:
        cell = self.find_safe_cell(avoid_world_pos)
        self.place(cell)
        if self._dispatcher is not None:
            self._dispatcher.emit(Respawned(self.entity_id, cell))
        return cell

    def wrap_into(self, dims: GridDimensions) -> None:
        self.mover.wrap_into(dims)


def spawn_enemy(
    enemies: List[EnemyController],
    coords: GridCoordinateSystem,
    config: GameConfig,
    rng: random.Random,
    *,
    avoid_world_pos: pygame.Vector2,
    dispatcher: EventDispatcher | None = None,
    on_spawn: Callable[[EnemyController], None] | None = None,
) -> EnemyController:
    """Create the next enemy away from ``avoid_world_pos`` and add it to the list."""

    enemy = EnemyController(
        f"enemy-{len(enemies) + 1}",
        coords,
        config,
        rng,
        dispatcher=dispatcher,
    )
    enemy.place(enemy.find_safe_cell(avoid_world_pos))
    enemies.append(enemy)
    logger.info("Spawned %s at %s heading %s", enemy.entity_id, enemy.head, enemy.direction.value)
    if dispatcher is not None:
        dispatcher.emit(EnemySpawned(enemy.entity_id, enemy.head))
    if on_spawn:
        on_spawn(enemy)
    return enemy


def update_enemies(enemies: Iterable[EnemyController], dt: float) -> None:
    if dt <= 0:
        return
    for enemy in enemies:
        enemy.update(dt)


def enemy_hitting(enemies: Iterable[EnemyController], cell: Cell) -> EnemyController | None:
    """Return the first enemy with any segment on ``cell``."""
    for enemy in enemies:
        if enemy.mover.occupies(cell):
            return enemy
    return None
