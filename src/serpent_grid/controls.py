"""Translate pygame input events into session intents."""

from __future__ import annotations

from enum import Enum, auto

import pygame

from .config import KEY_TO_DIRECTION, Direction


class Command(Enum):
    PAUSE = auto()
    RESTART = auto()
    QUIT = auto()


KEY_TO_COMMAND = {
    pygame.K_SPACE: Command.PAUSE,
    pygame.K_r: Command.RESTART,
    pygame.K_q: Command.QUIT,
    pygame.K_ESCAPE: Command.QUIT,
}


def read_intent(event: pygame.event.Event) -> Direction | Command | None:
    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type != pygame.KEYDOWN:
        return None
    direction = KEY_TO_DIRECTION.get(event.key)
    if direction is not None:
        return direction
    return KEY_TO_COMMAND.get(event.key)
