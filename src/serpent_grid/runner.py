"""Fixed-step driver that feeds input into a session and swaps it on restart."""

from __future__ import annotations

import logging
import random

import pygame

from .config import FPS, KEY_TO_DIRECTION, Direction, GameConfig
from .controls import Command, read_intent
from .events import Event, EventDispatcher, GameOverEvent
from .session import GameSession

logger = logging.getLogger(__name__)

_STEER_KEYS = tuple(KEY_TO_DIRECTION)


class SessionRunner:
    """Keeps the live session plus what outlives it (high score, running flag)."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.session = GameSession(config, rng=rng, dispatcher=dispatcher)
        self.high_score = 0
        self.games_played = 0
        self.running = True
        self.session.dispatcher.subscribe(self._on_event)

    def _on_event(self, event: Event) -> None:
        if isinstance(event, GameOverEvent):
            self.games_played += 1
            if event.score > self.high_score:
                self.high_score = event.score
                logger.info("New high score: %d", self.high_score)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply one input event; returns False once the player asked to quit."""
        if event.type == pygame.VIDEORESIZE:
            self.session.resize(event.size)
            return self.running

        intent = read_intent(event)
        if intent is None:
            return self.running
        if intent is Command.QUIT:
            self.running = False
        elif isinstance(intent, Direction):
            self.session.request_direction(intent)
        elif intent is Command.PAUSE:
            self.session.toggle_pause()
        elif intent is Command.RESTART and self.session.game_over:
            self.session = self.session.restart()
        return self.running

    def advance(self, dt: float) -> None:
        self.session.update(dt)


def autoplay(
    runner: SessionRunner,
    frames: int,
    *,
    fps: int = FPS,
    turn_chance: float = 0.08,
    rng: random.Random | None = None,
) -> SessionRunner:
    """Drive ``runner`` headlessly with random steering, restarting after each loss."""

    rng = rng or random.Random()
    dt = 1.0 / fps
    for _ in range(frames):
        if not runner.running:
            break
        if runner.session.game_over:
            runner.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
        elif rng.random() < turn_chance:
            key = rng.choice(_STEER_KEYS)
            runner.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))
        runner.advance(dt)
    return runner
