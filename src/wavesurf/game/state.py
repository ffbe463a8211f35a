from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np


class Command(StrEnum):
    STEER_LEFT = "steer_left"
    STEER_RIGHT = "steer_right"
    SPEED_UP = "speed_up"
    SPEED_DOWN = "speed_down"
    JUMP = "jump"
    FLIP_LEFT = "flip_left"
    FLIP_RIGHT = "flip_right"
    RESTART = "restart"


class TransientSignal(StrEnum):
    NICE_JUMP = "nice_jump"
    GREAT_FLIP = "great_flip"
    SPLASH = "splash"


class InvalidViewportError(ValueError):
    """Raised when the viewport has a non-positive width or height."""


def validate_viewport(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidViewportError(
            f"Viewport must have positive dimensions, got {width}x{height}"
        )


@dataclass(frozen=True, slots=True)
class BoatPose:
    x: float
    y: float
    rotation: float
    airborne: bool
    capsizing: bool
    balance: float = 0.0
    flip_progress: float = 0.0


@dataclass(frozen=True, slots=True)
class MineState:
    x: float
    y: float
    scale: float


@dataclass(frozen=True, slots=True)
class BirdState:
    x: float
    y: float
    speed: float
    wing_phase: float


@dataclass(frozen=True, slots=True)
class CloudState:
    x: float
    y: float
    scale: float
    speed: float
    z_index: int


@dataclass(frozen=True, slots=True)
class FishState:
    x: float
    y: float
    rotation: float
    jumping: bool


@dataclass(frozen=True, slots=True)
class HazardSnapshot:
    mines: tuple[MineState, ...] = ()
    birds: tuple[BirdState, ...] = ()
    clouds: tuple[CloudState, ...] = ()
    fish: tuple[FishState, ...] = ()


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything the presentation layer needs to draw one frame."""

    width: int
    height: int
    baseline: float
    wave_samples: np.ndarray
    boat: BoatPose
    hazards: HazardSnapshot
    score: float
    difficulty: float
    speed: float
    game_over: bool
    signals: frozenset[TransientSignal] = field(default_factory=frozenset)

    @property
    def capsizing(self) -> bool:
        return self.boat.capsizing

    def has_signal(self, signal: TransientSignal) -> bool:
        return signal in self.signals
