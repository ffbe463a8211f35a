from __future__ import annotations

import pygame
import reactivex
from reactivex.subject import Subject

from wavesurf.game.state import Command
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

KEY_REPEAT_DELAY_MS = 200
KEY_REPEAT_INTERVAL_MS = 50

DEFAULT_KEY_BINDINGS: dict[int, Command] = {
    pygame.K_LEFT: Command.STEER_LEFT,
    pygame.K_RIGHT: Command.STEER_RIGHT,
    pygame.K_UP: Command.SPEED_UP,
    pygame.K_DOWN: Command.SPEED_DOWN,
    pygame.K_SPACE: Command.JUMP,
    pygame.K_a: Command.FLIP_LEFT,
    pygame.K_d: Command.FLIP_RIGHT,
    pygame.K_RETURN: Command.RESTART,
}


class KeyboardCommands:
    """Translate pygame key presses into a stream of game commands."""

    def __init__(self, bindings: dict[int, Command] | None = None) -> None:
        self._bindings = dict(DEFAULT_KEY_BINDINGS if bindings is None else bindings)
        self._subject: Subject[Command] = Subject()

    @staticmethod
    def enable_key_repeat() -> None:
        pygame.key.set_repeat(KEY_REPEAT_DELAY_MS, KEY_REPEAT_INTERVAL_MS)

    def command_for(self, key: int) -> Command | None:
        return self._bindings.get(key)

    def handle_event(self, event: pygame.event.Event) -> Command | None:
        if event.type != pygame.KEYDOWN:
            return None
        command = self.command_for(event.key)
        if command is None:
            return None
        logger.debug("Key %d -> %s", event.key, command)
        self._subject.on_next(command)
        return command

    def observable(self) -> reactivex.Observable[Command]:
        return self._subject

    def close(self) -> None:
        self._subject.on_completed()
