"""Typed events emitted by the simulation core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

Cell = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Moved:
    entity_id: str
    head: Cell


@dataclass(frozen=True, slots=True)
class Grew:
    entity_id: str
    length: int


@dataclass(frozen=True, slots=True)
class ScoreChanged:
    score: int


@dataclass(frozen=True, slots=True)
class FoodEaten:
    cell: Cell
    score: int


@dataclass(frozen=True, slots=True)
class GameOverEvent:
    score: int
    reason: str  # "self" or "enemy"


@dataclass(frozen=True, slots=True)
class PauseChanged:
    paused: bool


@dataclass(frozen=True, slots=True)
class EnemySpawned:
    entity_id: str
    cell: Cell


@dataclass(frozen=True, slots=True)
class Respawned:
    entity_id: str
    cell: Cell


Event = Union[
    Moved,
    Grew,
    ScoreChanged,
    FoodEaten,
    GameOverEvent,
    PauseChanged,
    EnemySpawned,
    Respawned,
]
Handler = Callable[[Event], None]


class EventDispatcher:
    """Fan events out to subscribed handlers in subscription order."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        for handler in list(self._handlers):
            handler(event)

