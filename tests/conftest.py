from __future__ import annotations

import os
import random
from collections.abc import Iterable

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from serpent_grid.config import GameConfig  # noqa: E402
from serpent_grid.events import Event, EventDispatcher  # noqa: E402
from serpent_grid.grid import GridCoordinateSystem  # noqa: E402


class EventLog:
    """Handler that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, kind: type) -> list[Event]:
        return [event for event in self.events if isinstance(event, kind)]


class ScriptedRandom(random.Random):
    """Seeded Random whose ``randrange`` replays a script, then repeats its last value."""

    def __init__(self, values: Iterable[int]) -> None:
        super().__init__(1234)
        self.values = list(values)
        self.calls = 0

    def randrange(self, *args, **kwargs) -> int:  # type: ignore[override]
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        return self.values[index]


@pytest.fixture()
def config() -> GameConfig:
    return GameConfig(viewport_size=(480, 480), cell_size=16, seed=7)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def coords(config: GameConfig) -> GridCoordinateSystem:
    return GridCoordinateSystem(config.viewport_size, config.cell_size)


@pytest.fixture()
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture()
def dispatcher(event_log: EventLog) -> EventDispatcher:
    d = EventDispatcher()
    d.subscribe(event_log)
    return d
