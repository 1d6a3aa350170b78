"""Single-cell food with periodic and head-avoiding respawns."""

from __future__ import annotations

import logging
import random

import pygame

from .config import GameConfig
from .events import EventDispatcher, Respawned
from .grid import Cell, GridCoordinateSystem, GridDimensions
from .timers import FadeClock

logger = logging.getLogger(__name__)


class FoodSpawner:
    entity_id = "food"

    def __init__(
        self,
        coords: GridCoordinateSystem,
        config: GameConfig,
        rng: random.Random,
        *,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.coords = coords
        self.rng = rng
        self.fade = FadeClock(
            config.food_visible_time, config.food_fade_time, config.min_alpha
        )
        self.safe_attempts = config.safe_respawn_attempts
        self._dispatcher = dispatcher
        self.cell: Cell = coords.random_cell(rng)
        self.respawns = 0

    @property
    def body(self) -> list[Cell]:
        return [self.cell]

    @property
    def alpha(self) -> float:
        return self.fade.alpha

    @property
    def world_position(self) -> pygame.Vector2:
        return self.coords.clamp_to_viewport(self.coords.to_world(self.cell))

    def update(self, dt: float) -> float:
        return self.fade.update(dt)

    def respawn(self) -> Cell:
        """Jump to any random cell; never retries."""
        return self._place(self.coords.random_cell(self.rng))

    def respawn_safe(self, avoid_world_pos: pygame.Vector2) -> Cell:
        """Jump to a random cell whose world position differs from ``avoid_world_pos``.

        After ``safe_respawn_attempts`` misses, one last unchecked sample is used.
        """
        for _ in range(self.safe_attempts):
            cell = self.coords.random_cell(self.rng)
            world = self.coords.clamp_to_viewport(self.coords.to_world(cell))
            if world != avoid_world_pos:
                return self._place(cell)
        logger.debug("Food: no free cell after %d attempts", self.safe_attempts)
        return self._place(self.coords.random_cell(self.rng))

    def wrap_into(self, dims: GridDimensions) -> None:
        self.cell = dims.wrap(self.cell)

    def _place(self, cell: Cell) -> Cell:
        self.cell = cell
        self.fade.reset()
        self.respawns += 1
        if self._dispatcher is not None:
            self._dispatcher.emit(Respawned(self.entity_id, cell))
        return cell
