from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from random import Random

from wavesurf.game.rules import GameRules
from wavesurf.game.state import (BirdState, CloudState, FishState,
                                 HazardSnapshot, MineState, validate_viewport)
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

MINE_INTERVAL_MS = 2000.0
MINE_CAP = 8
MINE_BASE_PROBABILITY = 0.1
MINE_DIFFICULTY_PROBABILITY = 0.01

BIRD_INTERVAL_MS = 3000.0
BIRD_CAP = 3
BIRD_WING_RATE = 0.1

CLOUD_INTERVAL_MS = 5000.0
CLOUD_CAP = 5

MINE_PRUNE_X = -50.0
BIRD_PRUNE_X = -50.0
CLOUD_PRUNE_X = -100.0

FISH_JUMP_PROBABILITY = 0.0005
FISH_JUMP_RATE = 0.05
FISH_JUMP_HEIGHT = 50.0
FISH_DEPTH = 15.0
FISH_TILT = math.pi / 4.0


class HazardKind(StrEnum):
    MINE = "mine"
    BIRD = "bird"
    CLOUD = "cloud"
    FISH = "fish"


@dataclass
class SpawnTimer:
    """Fires once per ``interval_ms`` of simulated time."""

    interval_ms: float
    cap: int
    elapsed_ms: float = 0.0

    def advance(self, elapsed_ms: float) -> int:
        self.elapsed_ms += elapsed_ms
        fired = int(self.elapsed_ms // self.interval_ms)
        self.elapsed_ms -= fired * self.interval_ms
        return fired

    def reset(self) -> None:
        self.elapsed_ms = 0.0


@dataclass(frozen=True, slots=True)
class _Fish:
    x: float
    progress: float = 0.0
    jumping: bool = False


def mine_spawn_probability(difficulty: float) -> float:
    return min(1.0, MINE_BASE_PROBABILITY + difficulty * MINE_DIFFICULTY_PROBABILITY)


class HazardField:
    """Spawns, scrolls and prunes mines, birds, clouds and fish."""

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
        self._mine_timer = SpawnTimer(MINE_INTERVAL_MS, MINE_CAP)
        self._bird_timer = SpawnTimer(BIRD_INTERVAL_MS, BIRD_CAP)
        self._cloud_timer = SpawnTimer(CLOUD_INTERVAL_MS, CLOUD_CAP)
        self.mines: list[MineState] = []
        self.birds: list[BirdState] = []
        self.clouds: list[CloudState] = []
        self._fish: list[_Fish] = []
        self.reset()

    @property
    def sea_line(self) -> float:
        return self._height * self._rules.baseline_ratio

    def reset(self) -> None:
        self.mines = []
        self.birds = []
        self.clouds = []
        self._fish = [self._spawn_fish() for _ in range(self._rules.fish_count)]
        for timer in (self._mine_timer, self._bird_timer, self._cloud_timer):
            timer.reset()

    def resize(self, width: int, height: int) -> None:
        validate_viewport(width, height)
        self._width = width
        self._height = height
        self._fish = [self._spawn_fish() for _ in range(self._rules.fish_count)]

    def snapshot(self) -> HazardSnapshot:
        fish_y = self.sea_line + FISH_DEPTH
        return HazardSnapshot(
            mines=tuple(self.mines),
            birds=tuple(self.birds),
            clouds=tuple(self.clouds),
            fish=tuple(
                FishState(
                    x=fish.x,
                    y=fish_y - math.sin(fish.progress) * FISH_JUMP_HEIGHT,
                    rotation=self._fish_tilt(fish),
                    jumping=fish.jumping,
                )
                for fish in self._fish
            ),
        )

    def advance(
        self, delta: float, elapsed_ms: float, speed: float, difficulty: float
    ) -> None:
        self._spawn(elapsed_ms, difficulty)

        self.mines = [
            moved
            for moved in (replace(mine, x=mine.x - speed) for mine in self.mines)
            if moved.x >= MINE_PRUNE_X
        ]
        self.birds = [
            moved
            for moved in (
                replace(
                    bird,
                    x=bird.x - bird.speed * speed,
                    wing_phase=(bird.wing_phase + delta * BIRD_WING_RATE)
                    % (2.0 * math.pi),
                )
                for bird in self.birds
            )
            if moved.x >= BIRD_PRUNE_X
        ]
        self.clouds = [
            moved
            for moved in (
                replace(cloud, x=cloud.x - cloud.speed * speed) for cloud in self.clouds
            )
            if moved.x >= CLOUD_PRUNE_X
        ]
        self._fish = [self._advance_fish(fish, delta) for fish in self._fish]

    def collide(self, x: float, y: float) -> list[HazardKind]:
        """Remove and report every mine or bird overlapping the point ``(x, y)``."""

        hits: list[HazardKind] = []
        mine_dx, mine_dy = self._rules.mine_hit_box
        bird_dx, bird_dy = self._rules.bird_hit_box

        remaining_mines = []
        for mine in self.mines:
            if abs(mine.x - x) < mine_dx and abs(mine.y - y) < mine_dy:
                hits.append(HazardKind.MINE)
            else:
                remaining_mines.append(mine)

        remaining_birds = []
        for bird in self.birds:
            if abs(bird.x - x) < bird_dx and abs(bird.y - y) < bird_dy:
                hits.append(HazardKind.BIRD)
            else:
                remaining_birds.append(bird)

        self.mines = remaining_mines
        self.birds = remaining_birds
        if hits:
            logger.info("Boat struck %s", ", ".join(hits))
        return hits

    def _spawn(self, elapsed_ms: float, difficulty: float) -> None:
        for _ in range(self._mine_timer.advance(elapsed_ms)):
            if len(self.mines) >= self._mine_timer.cap:
                continue
            if self._rng.random() < mine_spawn_probability(difficulty):
                self.mines.append(self._spawn_mine())

        for _ in range(self._bird_timer.advance(elapsed_ms)):
            if len(self.birds) < self._bird_timer.cap:
                self.birds.append(self._spawn_bird())

        for _ in range(self._cloud_timer.advance(elapsed_ms)):
            if len(self.clouds) < self._cloud_timer.cap:
                self.clouds.append(self._spawn_cloud())

    def _spawn_mine(self) -> MineState:
        return MineState(
            x=float(self._width),
            y=self.sea_line + self._rng.random() * self._height * 0.2,
            scale=self._rng.uniform(0.8, 1.2),
        )

    def _spawn_bird(self) -> BirdState:
        return BirdState(
            x=float(self._width),
            y=self._rng.random() * self._height * 0.5,
            speed=self._rng.uniform(0.5, 1.0),
            wing_phase=0.0,
        )

    def _spawn_cloud(self) -> CloudState:
        return CloudState(
            x=float(self._width),
            y=self._rng.random() * self._height * 0.3,
            scale=self._rng.uniform(0.5, 1.0),
            speed=self._rng.uniform(0.2, 0.5),
            z_index=self._rng.randrange(3),
        )

    def _spawn_fish(self) -> _Fish:
        return _Fish(x=self._rng.random() * self._width)

    def _advance_fish(self, fish: _Fish, delta: float) -> _Fish:
        if not fish.jumping:
            if self._rng.random() < FISH_JUMP_PROBABILITY:
                return replace(fish, jumping=True)
            return fish

        progress = fish.progress + delta * FISH_JUMP_RATE
        if progress >= math.pi:
            return self._spawn_fish()
        return replace(fish, progress=progress)

    @staticmethod
    def _fish_tilt(fish: _Fish) -> float:
        if not fish.jumping:
            return 0.0
        return -FISH_TILT if fish.progress < math.pi / 2.0 else FISH_TILT
