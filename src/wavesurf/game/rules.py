from __future__ import annotations

import math
from dataclasses import dataclass, replace

from wavesurf.utilities.env import (CapsizePolicy, Configuration,
                                    ControlScheme)

FRAME_MS = 1000.0 / 60.0

MIN_SPEED = 5.0
INITIAL_SPEED = 5.0
BALANCE_STEP = 0.08
SPEED_STEP = 1.0


@dataclass(frozen=True)
class GameRules:
    """Tunables shared by the wave, boat, hazard and session components."""

    control_scheme: ControlScheme = ControlScheme.BALANCE
    capsize_policy: CapsizePolicy = CapsizePolicy.TILT_THRESHOLD

    # Speed and difficulty
    min_speed: float = MIN_SPEED
    max_speed: float = 100.0
    initial_speed: float = INITIAL_SPEED
    difficulty_rate: float = 0.3
    difficulty_interval_ms: float = 1000.0
    speed_divisor: float = 5.0

    # Boat
    baseline_ratio: float = 0.7
    boat_x_ratio: float = 0.25
    footprint_width: float = 70.0
    gravity: float = 0.5
    base_jump_velocity: float = -10.0
    slope_boost_factor: float = 50.0
    nice_jump_velocity: float = -15.0
    nice_jump_bonus: float = 100.0
    air_jump_limit: int = 1
    balance_rotation_rate: float = 0.1
    balance_tilt_factor: float = 0.3
    flip_rate: float = 0.05
    flip_bonus: float = 5000.0
    flip_cooldown_ms: float = 1000.0
    capsize_threshold: float = math.pi / 3.5
    capsize_difficulty_factor: float = 0.03
    sink_rate: float = 2.0
    sink_rotation_rate: float = 0.05

    # Waves
    base_amplitude_ratio: float = 0.05
    max_amplitude_increase_ratio: float = 0.10
    difficulty_amplitude_cap: float = 50.0
    noise_ratio: float = 0.1

    # Hazards
    mine_hit_box: tuple[float, float] = (35.0, 20.0)
    bird_hit_box: tuple[float, float] = (30.0, 30.0)
    fish_count: int = 3

    # Transient signal durations
    nice_jump_ms: float = 1000.0
    great_flip_ms: float = 1000.0
    splash_ms: float = 300.0

    @classmethod
    def for_scheme(cls, scheme: ControlScheme) -> "GameRules":
        if scheme == ControlScheme.FLIP:
            return cls(
                control_scheme=ControlScheme.FLIP,
                capsize_policy=CapsizePolicy.LANDING_ORIENTATION,
                max_speed=20.0,
                difficulty_rate=0.5,
                mine_hit_box=(20.0, 20.0),
            )
        return cls()

    @classmethod
    def from_configuration(cls, scheme: ControlScheme | None = None) -> "GameRules":
        """Build the preset for ``scheme`` (or the configured one) plus env overrides."""

        rules = cls.for_scheme(scheme or Configuration.control_scheme())

        policy = Configuration.capsize_policy()
        if policy != CapsizePolicy.AUTO:
            rules = replace(rules, capsize_policy=policy)

        max_speed = Configuration.max_speed()
        if max_speed is not None:
            rules = replace(rules, max_speed=max_speed)

        difficulty_rate = Configuration.difficulty_rate()
        if difficulty_rate is not None:
            rules = replace(rules, difficulty_rate=difficulty_rate)

        return replace(rules, fish_count=Configuration.fish_count())

    def clamp_speed(self, speed: float) -> float:
        return max(self.min_speed, min(self.max_speed, speed))
