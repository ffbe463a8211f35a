from __future__ import annotations

from collections import deque
from random import Random

import numpy as np

from wavesurf.game.boat import BoatController, BoatOutcome
from wavesurf.game.controls import build_control
from wavesurf.game.hazards import HazardField
from wavesurf.game.rules import BALANCE_STEP, FRAME_MS, SPEED_STEP, GameRules
from wavesurf.game.state import (Command, GameSnapshot, TransientSignal,
                                 validate_viewport)
from wavesurf.game.wave_field import WaveField
from wavesurf.utilities.env import ControlScheme
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

_FLIP_DIRECTIONS = {
    Command.FLIP_LEFT: -1,
    Command.FLIP_RIGHT: 1,
    Command.STEER_LEFT: -1,
    Command.STEER_RIGHT: 1,
}


class GameSession:
    """Top-level simulation: waves, boat, hazards, score and difficulty.

    ``tick`` is the only place simulation state advances. Input arrives through
    :meth:`enqueue` and is applied at the start of the following tick; the
    direct control methods (``jump``, ``set_speed`` ...) act immediately and
    exist for callers that already run on the tick thread.
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
        self.rules = rules or GameRules()
        self._rng = rng or Random()
        self._width = width
        self._height = height
        self._waves = WaveField(width, height, rules=self.rules, rng=self._rng)
        self._hazards = HazardField(width, height, rules=self.rules, rng=self._rng)
        self._controller = BoatController(self.rules, build_control(self.rules))
        self._commands: deque[Command] = deque()
        self._signal_expiry: dict[TransientSignal, float] = {}
        self.reset()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def baseline(self) -> float:
        return self._height * self.rules.baseline_ratio

    @property
    def controller(self) -> BoatController:
        return self._controller

    @property
    def waves(self) -> WaveField:
        return self._waves

    @property
    def hazards(self) -> HazardField:
        return self._hazards

    @property
    def now_ms(self) -> float:
        return self._now_ms

    def reset(self) -> None:
        self.score = 0.0
        self.difficulty = 0.0
        self.speed = self.rules.initial_speed
        self.game_over = False
        self._now_ms = 0.0
        self._difficulty_elapsed_ms = 0.0
        self._signal_expiry.clear()
        self._commands.clear()
        self._waves.reset()
        self._hazards.reset()
        self._controller.reset(
            x=self._width * self.rules.boat_x_ratio,
            y=self.baseline,
        )
        logger.info(
            "Session reset (%dx%d, %s controls)",
            self._width,
            self._height,
            self.rules.control_scheme,
        )

    def resize(self, width: int, height: int) -> None:
        validate_viewport(width, height)
        self._width = width
        self._height = height
        self._waves.resize(width, height)
        self._hazards.resize(width, height)

        boat = self._controller.boat
        boat.x = width * self.rules.boat_x_ratio
        if not boat.airborne and not boat.capsizing:
            boat.y = self.baseline
        logger.info("Viewport resized to %dx%d", width, height)

    def enqueue(self, command: Command) -> None:
        self._commands.append(command)

    def set_speed(self, delta: float) -> float:
        if not self.game_over:
            self.speed = self.rules.clamp_speed(self.speed + delta)
        return self.speed

    def set_balance(self, delta: float) -> bool:
        if self.game_over:
            return False
        return self._controller.set_balance(delta)

    def jump(self) -> None:
        if self.game_over:
            return
        self._apply_outcome(self._controller.jump())

    def start_flip(self, direction: int) -> bool:
        if self.game_over:
            return False
        return self._controller.start_flip(direction)

    def is_signal_active(self, signal: TransientSignal) -> bool:
        expiry = self._signal_expiry.get(signal)
        return expiry is not None and expiry > self._now_ms

    def tick(self, delta: float = 1.0) -> GameSnapshot:
        self._drain_commands()

        elapsed_ms = delta * FRAME_MS
        self._now_ms += elapsed_ms

        samples = self._waves.advance(delta, self.speed, self.difficulty)
        outcome = self._controller.update(
            samples,
            baseline=self.baseline,
            viewport_width=self._width,
            viewport_height=self._height,
            difficulty=self.difficulty,
            now_ms=self._now_ms,
        )
        self._apply_outcome(outcome)

        self._hazards.advance(delta, elapsed_ms, self.speed, self.difficulty)
        if not self.game_over:
            boat = self._controller.boat
            if self._hazards.collide(boat.x, boat.y):
                self._controller.capsize()
                self._end_game()

        if not self.game_over:
            self.score += self.speed / self.rules.speed_divisor
            self._accrue_difficulty(elapsed_ms)

        return self.snapshot()

    def snapshot(self) -> GameSnapshot:
        samples = np.array(self._waves.samples, dtype=float, copy=True)
        samples.setflags(write=False)
        return GameSnapshot(
            width=self._width,
            height=self._height,
            baseline=self.baseline,
            wave_samples=samples,
            boat=self._controller.pose(),
            hazards=self._hazards.snapshot(),
            score=self.score,
            difficulty=self.difficulty,
            speed=self.speed,
            game_over=self.game_over,
            signals=frozenset(
                signal
                for signal in self._signal_expiry
                if self.is_signal_active(signal)
            ),
        )

    def _drain_commands(self) -> None:
        pending = list(dict.fromkeys(self._commands))
        self._commands.clear()
        for command in pending:
            self._apply_command(command)

    def _apply_command(self, command: Command) -> None:
        flip_scheme = self.rules.control_scheme == ControlScheme.FLIP

        if command == Command.RESTART:
            self.reset()
        elif command == Command.SPEED_UP:
            self.set_speed(SPEED_STEP)
        elif command == Command.SPEED_DOWN:
            self.set_speed(-SPEED_STEP)
        elif command == Command.JUMP:
            self.jump()
        elif command in (Command.FLIP_LEFT, Command.FLIP_RIGHT) or flip_scheme:
            if not flip_scheme:
                logger.debug("Ignoring %s under balance controls", command)
                return
            self.start_flip(_FLIP_DIRECTIONS[command])
        elif command == Command.STEER_LEFT:
            self.set_balance(-BALANCE_STEP)
        elif command == Command.STEER_RIGHT:
            self.set_balance(BALANCE_STEP)

    def _apply_outcome(self, outcome: BoatOutcome) -> None:
        if self.game_over:
            return
        self.score += outcome.bonus
        for signal in outcome.signals:
            self._raise_signal(signal)
        if outcome.capsized:
            self._end_game()

    def _raise_signal(self, signal: TransientSignal) -> None:
        durations = {
            TransientSignal.NICE_JUMP: self.rules.nice_jump_ms,
            TransientSignal.GREAT_FLIP: self.rules.great_flip_ms,
            TransientSignal.SPLASH: self.rules.splash_ms,
        }
        self._signal_expiry[signal] = self._now_ms + durations[signal]

    def _accrue_difficulty(self, elapsed_ms: float) -> None:
        interval = self.rules.difficulty_interval_ms
        self._difficulty_elapsed_ms += elapsed_ms
        while self._difficulty_elapsed_ms >= interval:
            self._difficulty_elapsed_ms -= interval
            self.difficulty += (
                self.rules.difficulty_rate * self.speed / self.rules.speed_divisor
            )

    def _end_game(self) -> None:
        if not self.game_over:
            logger.info(
                "Game over: score %.0f, difficulty %.1f, speed %.0f",
                self.score,
                self.difficulty,
                self.speed,
            )
        self.game_over = True
