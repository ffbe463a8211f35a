"""Control schemes for steering the boat.

Two schemes exist. ``BalanceControl`` shifts the crew's weight left or right:
the tilt adds to the wave angle while floating and spins the hull while
airborne. ``FlipControl`` ignores weight and instead lets the player trigger a
scripted full rotation while airborne.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from wavesurf.game.rules import GameRules
from wavesurf.utilities.env import ControlScheme

FULL_ROTATION = 2.0 * math.pi


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class ControlStrategy(ABC):
    scheme: ControlScheme

    def __init__(self, rules: GameRules) -> None:
        self._rules = rules

    @property
    def balance(self) -> float:
        return 0.0

    @property
    def flip_progress(self) -> float:
        return 0.0

    def tilt(self) -> float:
        """Extra hull rotation contributed by the player while floating."""
        return 0.0

    def set_balance(self, delta: float) -> bool:
        return False

    def start_flip(self, direction: int) -> bool:
        return False

    @abstractmethod
    def airborne_rotation(self, rotation: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def floating_rotation(self, wave_angle: float) -> float:
        raise NotImplementedError

    def landing_rotation(self, wave_angle: float) -> float:
        return self.floating_rotation(wave_angle)

    def on_landing(self) -> None:
        pass

    def reset(self) -> None:
        pass


class BalanceControl(ControlStrategy):
    scheme = ControlScheme.BALANCE

    def __init__(self, rules: GameRules) -> None:
        super().__init__(rules)
        self._balance = 0.0

    @property
    def balance(self) -> float:
        return self._balance

    def tilt(self) -> float:
        return self._balance * self._rules.balance_tilt_factor

    def set_balance(self, delta: float) -> bool:
        self._balance = clamp(self._balance + delta, -1.0, 1.0)
        return True

    def airborne_rotation(self, rotation: float) -> float:
        return rotation + self._balance * self._rules.balance_rotation_rate

    def floating_rotation(self, wave_angle: float) -> float:
        return wave_angle + self.tilt()

    def reset(self) -> None:
        self._balance = 0.0


class FlipControl(ControlStrategy):
    scheme = ControlScheme.FLIP

    def __init__(self, rules: GameRules) -> None:
        super().__init__(rules)
        self._direction = 0
        self._progress = 0.0
        self._start_rotation: float | None = 0.0

    @property
    def flip_progress(self) -> float:
        return self._progress

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def flipping(self) -> bool:
        return self._direction != 0 and self._progress < 1.0

    def start_flip(self, direction: int) -> bool:
        if direction == 0 or self.flipping:
            return False
        self._direction = 1 if direction > 0 else -1
        self._progress = 0.0
        self._start_rotation = None
        return True

    def airborne_rotation(self, rotation: float) -> float:
        if not self.flipping:
            return rotation
        if self._start_rotation is None:
            self._start_rotation = rotation

        progress = self._progress + self._rules.flip_rate
        # Snap so twenty 0.05 steps land on exactly one revolution.
        self._progress = 1.0 if progress >= 1.0 - 1e-9 else progress
        return self._start_rotation + self._progress * self._direction * FULL_ROTATION

    def floating_rotation(self, wave_angle: float) -> float:
        return 0.0

    def on_landing(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._direction = 0
        self._progress = 0.0
        self._start_rotation = 0.0


def build_control(rules: GameRules) -> ControlStrategy:
    if rules.control_scheme == ControlScheme.FLIP:
        return FlipControl(rules)
    return BalanceControl(rules)
