"""Player snake: steering, self collision and the turn boost."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from .config import Direction, GameConfig
from .events import EventDispatcher
from .grid import Cell, GridDimensions
from .movement import GridBody
from .timers import OneShotTimer

logger = logging.getLogger(__name__)


class SnakeState(Enum):
    ALIVE = auto()
    GAME_OVER = auto()


class SnakeController:
    """The player-controlled entity.

    Direction changes take effect immediately; turns opposite to the heading
    of the last completed tick are dropped, so two quick turns between ticks
    cannot fold the head back into the neck. Each
    accepted turn starts a short boost that shortens ``move_interval`` unless
    one is already running.
    """

    entity_id = "snake"

    def __init__(
        self,
        start: Cell,
        config: GameConfig,
        *,
        direction: Direction = Direction.RIGHT,
        dispatcher: EventDispatcher | None = None,
        on_game_over: Callable[[str], None] | None = None,
    ) -> None:
        self.mover = GridBody(self.entity_id, start, direction, dispatcher)
        # Heading each segment had when it was laid down, parallel to the body.
        self.segment_directions: list[Direction] = [direction]
        # Heading of the last completed tick; reversals are judged against it.
        self.last_heading = direction
        self.state = SnakeState.ALIVE
        self.base_interval = config.snake_move_interval
        self.boost_multiplier = config.boost_multiplier
        self._boost = OneShotTimer(config.boost_duration)
        self._on_game_over = on_game_over

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
    def alive(self) -> bool:
        return self.state is SnakeState.ALIVE

    @property
    def boosted(self) -> bool:
        return self._boost.active

    @property
    def move_interval(self) -> float:
        if self.boosted:
            return self.base_interval * self.boost_multiplier
        return self.base_interval

    def request_direction(self, direction: Direction) -> bool:
        """Steer the snake; returns whether the request was accepted."""
        if not self.alive:
            return False
        if direction is self.last_heading.opposite:
            logger.debug(
                "Ignoring reversal %s -> %s", self.last_heading.value, direction.value
            )
            return False
        if direction is self.mover.direction:
            return False
        self.mover.direction = direction
        self._start_boost()
        return True

    def _start_boost(self) -> None:
        # A running boost is left alone: no restart, no extension.
        if self._boost.active:
            return
        self._boost.start()

    def update(self, dt: float) -> None:
        """Advance the boost countdown."""
        if self._boost.advance(dt):
            logger.debug("Boost expired, interval back to %.3fs", self.base_interval)

    def grow(self) -> None:
        if self.alive:
            self.mover.grow()

    def tick(self, dims: GridDimensions) -> Cell | None:
        """Advance one cell; returns the new head or None when the snake died."""
        if not self.alive:
            return None
        candidate = self.mover.next_head(dims)
        # Compared against the body before insertion, so a pending growth
        # never changes the outcome.
        if candidate in self.mover.body[1:]:
            self.kill("self")
            return None
        self.mover.advance(candidate)
        self.last_heading = self.mover.direction
        self.segment_directions.insert(0, self.mover.direction)
        del self.segment_directions[len(self.mover.body):]
        return candidate

    def kill(self, reason: str) -> None:
        if not self.alive:
            return
        self.state = SnakeState.GAME_OVER
        self._boost.cancel()
        logger.debug("Snake died (%s) at %s, length %d", reason, self.head, len(self.body))
        if self._on_game_over is not None:
            self._on_game_over(reason)

    def wrap_into(self, dims: GridDimensions) -> None:
        self.mover.wrap_into(dims)
