from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from wavesurf.game.controls import FULL_ROTATION, ControlStrategy, build_control
from wavesurf.game.rules import GameRules
from wavesurf.game.state import BoatPose, TransientSignal
from wavesurf.utilities.env import CapsizePolicy
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

UPSIDE_DOWN_RANGE = (math.pi / 2.0, 3.0 * math.pi / 2.0)


@dataclass
class Boat:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    rotation: float = 0.0
    airborne: bool = False
    jump_count: int = 0
    capsizing: bool = False


@dataclass
class BoatOutcome:
    """Score and signal side effects produced by one controller step."""

    bonus: float = 0.0
    signals: set[TransientSignal] = field(default_factory=set)
    capsized: bool = False
    skipped: bool = False


def is_upside_down(rotation: float) -> bool:
    settled = rotation % FULL_ROTATION
    lower, upper = UPSIDE_DOWN_RANGE
    return lower < settled < upper


class BoatController:
    """Owns the boat and advances it over the wave field.

    States: floating (tracks the surface), airborne (ballistic with gravity),
    capsizing (sinks and spins until reset). The active
    :class:`~wavesurf.game.controls.ControlStrategy` decides how player input
    turns into hull rotation; ``GameRules.capsize_policy`` decides when the
    boat tips over.
    """

    def __init__(
        self,
        rules: GameRules | None = None,
        control: ControlStrategy | None = None,
        *,
        x: float = 0.0,
        y: float = 0.0,
    ) -> None:
        self._rules = rules or GameRules()
        self._control = control or build_control(self._rules)
        self.boat = Boat(x=x, y=y)
        self.last_wave_angle = 0.0
        self._credited_rotations = 0
        self._last_flip_ms = -math.inf

    @property
    def control(self) -> ControlStrategy:
        return self._control

    def reset(self, *, x: float, y: float) -> None:
        self.boat = Boat(x=x, y=y)
        self.last_wave_angle = 0.0
        self._credited_rotations = 0
        self._last_flip_ms = -math.inf
        self._control.reset()

    def pose(self) -> BoatPose:
        boat = self.boat
        return BoatPose(
            x=boat.x,
            y=boat.y,
            rotation=boat.rotation,
            airborne=boat.airborne,
            capsizing=boat.capsizing,
            balance=self._control.balance,
            flip_progress=self._control.flip_progress,
        )

    def footprint(self, sample_count: int, viewport_width: float) -> tuple[int, int]:
        scale = sample_count / viewport_width
        left = math.floor(self.boat.x * scale)
        right = math.floor((self.boat.x + self._rules.footprint_width) * scale)
        return left, right

    def jump(self) -> BoatOutcome:
        outcome = BoatOutcome()
        boat = self.boat
        if boat.capsizing:
            return outcome
        if boat.airborne and boat.jump_count >= self._rules.air_jump_limit:
            return outcome

        slope_boost = max(0.0, -self.last_wave_angle * self._rules.slope_boost_factor)
        boat.vy = self._rules.base_jump_velocity - slope_boost
        boat.airborne = True
        boat.jump_count += 1

        if boat.vy < self._rules.nice_jump_velocity:
            outcome.bonus += self._rules.nice_jump_bonus
            outcome.signals.add(TransientSignal.NICE_JUMP)
            logger.info("Nice jump: launch velocity %.2f", boat.vy)
        return outcome

    def set_balance(self, delta: float) -> bool:
        if self.boat.capsizing:
            return False
        return self._control.set_balance(delta)

    def start_flip(self, direction: int) -> bool:
        if self.boat.capsizing or not self.boat.airborne:
            return False
        return self._control.start_flip(direction)

    def capsize(self) -> None:
        if not self.boat.capsizing:
            logger.info("Boat capsized at x=%.1f y=%.1f", self.boat.x, self.boat.y)
        self.boat.capsizing = True
        self.boat.airborne = False

    def update(
        self,
        samples: np.ndarray,
        *,
        baseline: float,
        viewport_width: float,
        viewport_height: float,
        difficulty: float,
        now_ms: float,
    ) -> BoatOutcome:
        outcome = BoatOutcome()
        boat = self.boat

        if boat.capsizing:
            self._sink(viewport_height)
            return outcome

        left, right = self.footprint(len(samples), viewport_width)
        if left < 0 or right >= len(samples):
            outcome.skipped = True
            return outcome

        left_height = float(samples[left])
        right_height = float(samples[right])
        wave_angle = math.atan2(
            right_height - left_height, self._rules.footprint_width
        )
        self.last_wave_angle = wave_angle
        surface_y = baseline + (left_height + right_height) / 2.0

        if boat.airborne:
            self._fly(surface_y, wave_angle, difficulty, now_ms, outcome)
        else:
            boat.y = surface_y
            boat.rotation = self._control.floating_rotation(wave_angle)
            if (
                self._rules.capsize_policy == CapsizePolicy.TILT_THRESHOLD
                and self._exceeds_tilt(wave_angle, difficulty)
            ):
                outcome.capsized = True

        if outcome.capsized:
            self.capsize()
        return outcome

    def _fly(
        self,
        surface_y: float,
        wave_angle: float,
        difficulty: float,
        now_ms: float,
        outcome: BoatOutcome,
    ) -> None:
        boat = self.boat
        boat.vy += self._rules.gravity
        projected_y = boat.y + boat.vy
        boat.rotation = self._control.airborne_rotation(boat.rotation)
        self._credit_flip(now_ms, outcome)

        if projected_y < surface_y:
            boat.y = projected_y
            return

        boat.airborne = False
        boat.jump_count = 0
        boat.y = surface_y
        boat.vx = 0.0
        boat.vy = 0.0
        outcome.signals.add(TransientSignal.SPLASH)

        if self._capsizes_on_landing(wave_angle, difficulty):
            outcome.capsized = True
        else:
            boat.rotation = self._control.landing_rotation(wave_angle)
        self._control.on_landing()
        self._credited_rotations = 0

    def _credit_flip(self, now_ms: float, outcome: BoatOutcome) -> None:
        completed = math.floor(abs(self.boat.rotation) / FULL_ROTATION)
        if completed <= self._credited_rotations:
            return
        if now_ms - self._last_flip_ms < self._rules.flip_cooldown_ms:
            return

        self._credited_rotations += 1
        self._last_flip_ms = now_ms
        outcome.bonus += self._rules.flip_bonus
        outcome.signals.add(TransientSignal.GREAT_FLIP)
        logger.info("Great flip: rotation %.2f rad", self.boat.rotation)

    def _exceeds_tilt(self, wave_angle: float, difficulty: float) -> bool:
        factor = 1.0 + difficulty * self._rules.capsize_difficulty_factor
        total_rotation = wave_angle * factor + self._control.tilt()
        return abs(total_rotation) > self._rules.capsize_threshold

    def _capsizes_on_landing(self, wave_angle: float, difficulty: float) -> bool:
        if is_upside_down(self.boat.rotation):
            return True
        if self._rules.capsize_policy == CapsizePolicy.TILT_THRESHOLD:
            return self._exceeds_tilt(wave_angle, difficulty)
        return False

    def _sink(self, viewport_height: float) -> None:
        boat = self.boat
        boat.y = min(boat.y + self._rules.sink_rate, viewport_height)
        boat.rotation += self._rules.sink_rotation_rate
