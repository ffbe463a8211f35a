import math
from dataclasses import replace

import pytest
from helpers.rng import StubRandom

from wavesurf.game.hazards import (HazardField, HazardKind, SpawnTimer,
                                   mine_spawn_probability)
from wavesurf.game.rules import GameRules
from wavesurf.game.state import BirdState, CloudState, MineState
from wavesurf.utilities.env import ControlScheme


def _field(value: float = 0.0, rules: GameRules | None = None) -> HazardField:
    return HazardField(
        800, 600, rules=rules or GameRules(fish_count=0), rng=StubRandom(value)
    )


class TestSpawnTimer:
    """Spawn timers fire on simulated time so spawning is frame-rate independent."""

    def test_fires_once_per_interval(self) -> None:
        """Verify leftover time carries over between advances."""
        timer = SpawnTimer(2000.0, cap=8)

        assert timer.advance(1500.0) == 0
        assert timer.advance(600.0) == 1
        assert timer.elapsed_ms == pytest.approx(100.0)

    def test_long_step_fires_multiple_times(self) -> None:
        """Ensure a long pause catches up every missed interval."""
        timer = SpawnTimer(2000.0, cap=8)

        assert timer.advance(4000.0) == 2
        assert timer.elapsed_ms == 0.0


class TestMineProbability:
    @pytest.mark.parametrize(
        ("difficulty", "expected"),
        [(0.0, 0.1), (10.0, 0.2), (200.0, 1.0)],
    )
    def test_probability_grows_with_difficulty(self, difficulty: float, expected: float) -> None:
        """Check the spawn chance rises one percent per difficulty point and saturates."""
        assert mine_spawn_probability(difficulty) == pytest.approx(expected)


class TestSpawning:
    """Cover spawn placement and caps so the screen never floods with hazards."""

    def test_spawns_at_right_edge(self) -> None:
        """Confirm each hazard kind enters from the right edge once its interval passes."""
        field = _field(0.0)

        field.advance(1.0, 5000.0, 5.0, 0.0)

        assert len(field.mines) == 2
        assert len(field.birds) == 1
        assert len(field.clouds) == 1
        assert field.mines[0].x == 795.0
        assert field.mines[0].y == pytest.approx(420.0)
        assert field.mines[0].scale == pytest.approx(0.8)
        assert field.birds[0].x == pytest.approx(800.0 - 0.5 * 5.0)
        assert field.clouds[0].x == pytest.approx(800.0 - 0.2 * 5.0)
        assert field.clouds[0].z_index == 0

    def test_mine_roll_can_fail(self) -> None:
        """Verify a mine interval does not spawn when the roll misses."""
        field = _field(0.5)

        field.advance(1.0, 2000.0, 5.0, 0.0)

        assert field.mines == []

    def test_caps_are_enforced(self) -> None:
        """Ensure full hazard lists stay at their cap when timers fire."""
        field = _field(0.0)
        field.mines = [MineState(x=400.0, y=420.0, scale=1.0)] * 8
        field.birds = [BirdState(x=400.0, y=100.0, speed=1.0, wing_phase=0.0)] * 3
        field.clouds = [
            CloudState(x=400.0, y=50.0, scale=1.0, speed=0.3, z_index=1)
        ] * 5

        field.advance(1.0, 30000.0, 5.0, 0.0)

        assert len(field.mines) == 8
        assert len(field.birds) == 3
        assert len(field.clouds) == 5

    def test_resize_moves_spawn_edge(self) -> None:
        """Check hazards spawn from the new right edge after a resize."""
        field = _field(0.0)

        field.resize(1000, 500)
        field.advance(1.0, 2000.0, 5.0, 0.0)

        assert field.mines[0].x == 995.0
        assert field.mines[0].y == pytest.approx(350.0)


class TestMovement:
    """Hazards scroll left with the boat's speed and disappear past the left edge."""

    def test_mines_scroll_at_game_speed(self) -> None:
        field = _field(0.5)
        field.mines = [MineState(x=400.0, y=420.0, scale=1.0)]

        field.advance(1.0, 1.0, 12.0, 0.0)

        assert field.mines[0].x == 388.0

    def test_birds_flap_while_flying(self) -> None:
        """Verify birds scale their own speed by the game speed and advance wing phase."""
        field = _field(0.5)
        field.birds = [BirdState(x=400.0, y=100.0, speed=0.5, wing_phase=0.0)]

        field.advance(2.0, 1.0, 10.0, 0.0)

        assert field.birds[0].x == 395.0
        assert field.birds[0].wing_phase == pytest.approx(0.2)

    def test_offscreen_hazards_are_pruned(self) -> None:
        """Ensure hazards past their prune line are dropped and nearer ones survive."""
        field = _field(0.5)
        field.mines = [
            MineState(x=-41.0, y=420.0, scale=1.0),
            MineState(x=-30.0, y=420.0, scale=1.0),
        ]
        field.birds = [BirdState(x=-45.0, y=100.0, speed=1.0, wing_phase=0.0)]
        field.clouds = [
            CloudState(x=-95.0, y=50.0, scale=1.0, speed=0.5, z_index=0),
            CloudState(x=-96.0, y=50.0, scale=1.0, speed=0.5, z_index=0),
        ]

        field.advance(1.0, 1.0, 10.0, 0.0)

        assert [mine.x for mine in field.mines] == [-40.0]
        assert field.birds == []
        assert [cloud.x for cloud in field.clouds] == [-100.0]


class TestCollisions:
    """Validate hit boxes so collisions match what the player sees."""

    def test_mine_hit_box_under_balance_rules(self) -> None:
        field = _field(0.5)
        field.mines = [
            MineState(x=234.0, y=430.0, scale=1.0),
            MineState(x=235.0, y=420.0, scale=1.0),
        ]

        hits = field.collide(200.0, 420.0)

        assert hits == [HazardKind.MINE]
        assert [mine.x for mine in field.mines] == [235.0]

    def test_mine_hit_box_under_flip_rules(self) -> None:
        """Confirm the flip variant uses the tighter square mine box."""
        rules = GameRules.for_scheme(ControlScheme.FLIP)
        field = _field(0.5, rules=replace(rules, fish_count=0))
        field.mines = [
            MineState(x=219.0, y=420.0, scale=1.0),
            MineState(x=220.0, y=420.0, scale=1.0),
        ]

        hits = field.collide(200.0, 420.0)

        assert hits == [HazardKind.MINE]
        assert len(field.mines) == 1

    def test_bird_hit_box(self) -> None:
        field = _field(0.5)
        field.birds = [
            BirdState(x=229.0, y=391.0, speed=1.0, wing_phase=0.0),
            BirdState(x=200.0, y=450.0, speed=1.0, wing_phase=0.0),
        ]

        hits = field.collide(200.0, 420.0)

        assert hits == [HazardKind.BIRD]
        assert len(field.birds) == 1

    def test_clear_water_reports_nothing(self) -> None:
        field = _field(0.5)

        assert field.collide(200.0, 420.0) == []


class TestFish:
    """Fish are scenery; they jump in arcs and never collide."""

    def test_resting_fish_sit_below_sea_line(self) -> None:
        field = _field(0.5, rules=GameRules(fish_count=2))

        field.advance(1.0, 1.0, 5.0, 0.0)

        fish = field.snapshot().fish
        assert len(fish) == 2
        assert all(not f.jumping and f.rotation == 0.0 for f in fish)
        assert [f.y for f in fish] == pytest.approx([435.0, 435.0])

    def test_jumping_fish_follow_an_arc(self) -> None:
        """Verify a jumping fish rises along a sine arc nose-up."""
        field = _field(0.0, rules=GameRules(fish_count=1))

        field.advance(1.0, 1.0, 5.0, 0.0)
        field.advance(1.0, 1.0, 5.0, 0.0)

        (fish,) = field.snapshot().fish
        assert fish.jumping
        assert fish.y == pytest.approx(435.0 - math.sin(0.05) * 50.0)
        assert fish.rotation == pytest.approx(-math.pi / 4.0)

    def test_fish_never_collide(self) -> None:
        field = _field(0.0, rules=GameRules(fish_count=3))

        assert field.collide(0.0, 435.0) == []
