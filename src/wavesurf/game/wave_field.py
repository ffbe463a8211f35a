from __future__ import annotations

import math
from random import Random

import numpy as np
from scipy.signal import lfilter

from wavesurf.game.rules import GameRules
from wavesurf.game.state import validate_viewport

# (angular frequency, relative amplitude) for each sine component.
WAVE_COMPONENTS: tuple[tuple[float, float], ...] = (
    (0.3, 1.0),
    (0.2, 0.5),
    (0.7, 0.3),
)
CLOCK_RATE = 0.01

# Sequential (left + 2 * center + right) / 4 pass where ``left`` is the
# already-smoothed neighbour: y[i] = 0.5 x[i] + 0.25 x[i + 1] + 0.25 y[i - 1].
_SMOOTHING_FEEDBACK = np.array([1.0, -0.25])


class WaveField:
    """Scrolling sea-surface height samples, one per viewport column.

    Samples hold the vertical displacement from the sea baseline. Each call to
    :meth:`advance` scrolls the field left by ``ceil(speed)`` columns,
    synthesizes the uncovered trailing columns and smooths the result.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        rules: GameRules | None = None,
        rng: Random | None = None,
    ) -> None:
        validate_viewport(width, height)
        self._rules = rules or GameRules()
        self._rng = rng or Random()
        self._width = width
        self._height = height
        self._clock = 0.0
        self._samples = np.zeros(width, dtype=float)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def clock(self) -> float:
        return self._clock

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    def __len__(self) -> int:
        return self._width

    def resize(self, width: int, height: int) -> None:
        validate_viewport(width, height)
        self._width = width
        self._height = height
        self.reset()

    def reset(self) -> None:
        self._clock = 0.0
        self._samples = np.zeros(self._width, dtype=float)

    def amplitude(self, difficulty: float) -> float:
        rules = self._rules
        base = self._height * rules.base_amplitude_ratio
        increase = self._height * rules.max_amplitude_increase_ratio
        ramp = min(difficulty, rules.difficulty_amplitude_cap) / rules.difficulty_amplitude_cap
        return base + increase * ramp

    def max_displacement(self, difficulty: float) -> float:
        """Upper bound on ``abs(sample)`` for the given difficulty."""

        weights = sum(weight for _, weight in WAVE_COMPONENTS)
        return self.amplitude(difficulty) * (weights + self._rules.noise_ratio / 2)

    def advance(self, delta: float, speed: float, difficulty: float) -> np.ndarray:
        self._clock += delta * CLOCK_RATE * speed

        width = self._width
        shift = min(max(math.ceil(speed), 1), width)

        samples = np.empty(width, dtype=float)
        samples[: width - shift] = self._samples[shift:]
        samples[width - shift :] = self._synthesize(shift, difficulty)

        self._samples = self._smooth(samples)
        return self._samples

    def _synthesize(self, count: int, difficulty: float) -> np.ndarray:
        amplitude = self.amplitude(difficulty)
        t = self._clock + np.arange(count, dtype=float) / count

        heights = np.zeros(count, dtype=float)
        for frequency, weight in WAVE_COMPONENTS:
            heights += np.sin(t * frequency) * amplitude * weight

        noise = np.array([self._rng.random() - 0.5 for _ in range(count)])
        return heights + noise * amplitude * self._rules.noise_ratio

    @staticmethod
    def _smooth(samples: np.ndarray) -> np.ndarray:
        if samples.size < 3:
            return samples

        drive = 0.5 * samples[1:-1] + 0.25 * samples[2:]
        smoothed = samples.copy()
        smoothed[1:-1], _ = lfilter(
            [1.0], _SMOOTHING_FEEDBACK, drive, zi=[0.25 * samples[0]]
        )
        return smoothed
