import math

import pygame
import pytest

from wavesurf.display.renderer import (SKY_COLOR, SurfRenderer,
                                       interpolate_color, rotate_points)
from wavesurf.game.session import GameSession
from wavesurf.game.state import (BirdState, CloudState, MineState,
                                 TransientSignal)


@pytest.fixture
def window() -> pygame.Surface:
    pygame.font.init()
    yield pygame.Surface((800, 600))
    pygame.font.quit()


class TestRenderHelpers:
    def test_interpolate_color_endpoints(self) -> None:
        assert interpolate_color((0, 0, 0), (200, 100, 50), 0.0) == (0, 0, 0)
        assert interpolate_color((0, 0, 0), (200, 100, 50), 1.0) == (200, 100, 50)
        assert interpolate_color((0, 0, 0), (200, 100, 50), 0.5) == (100, 50, 25)

    def test_rotate_points_quarter_turn(self) -> None:
        ((x, y),) = rotate_points([(10.0, 0.0)], math.pi / 2, (100.0, 100.0))

        assert x == pytest.approx(100.0)
        assert y == pytest.approx(110.0)


class TestSurfRenderer:
    """Smoke-test frame drawing so every snapshot state renders without errors."""

    def test_renders_sky_and_sea(self, session: GameSession, window: pygame.Surface) -> None:
        snapshot = session.tick()

        SurfRenderer().render(window, snapshot)

        assert tuple(window.get_at((400, 200)))[:3] == SKY_COLOR
        sea = window.get_at((400, 590))
        assert sea.b > sea.r

    def test_renders_hazards_and_callouts(
        self, session: GameSession, window: pygame.Surface
    ) -> None:
        """Ensure hazards, callouts and the splash draw together."""
        session.hazards.mines = [MineState(x=600.0, y=450.0, scale=1.0)]
        session.hazards.birds = [BirdState(x=500.0, y=100.0, speed=1.0, wing_phase=0.3)]
        session.hazards.clouds = [
            CloudState(x=300.0, y=60.0, scale=1.0, speed=0.3, z_index=2),
            CloudState(x=350.0, y=80.0, scale=0.6, speed=0.3, z_index=0),
        ]
        session.controller.last_wave_angle = -0.3
        session.jump()
        snapshot = session.snapshot()
        assert snapshot.has_signal(TransientSignal.NICE_JUMP)

        SurfRenderer().render(window, snapshot)

        assert tuple(window.get_at((600, 450)))[:3] != SKY_COLOR

    def test_renders_game_over_summary(
        self, session: GameSession, window: pygame.Surface
    ) -> None:
        session.hazards.mines = [
            MineState(x=205.0, y=session.baseline + offset, scale=1.0)
            for offset in range(-60, 61, 10)
        ]
        for _ in range(5):
            snapshot = session.tick()

        assert snapshot.game_over
        SurfRenderer().render(window, snapshot)
