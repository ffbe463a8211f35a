from random import Random

import pytest
from hypothesis import HealthCheck, settings

from wavesurf.game.rules import GameRules
from wavesurf.game.session import GameSession

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("default")


@pytest.fixture(autouse=True)
def dummy_sdl_video_driver(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def rng() -> Random:
    return Random(1234)


@pytest.fixture
def quiet_rules() -> GameRules:
    """Balance rules without the decorative fish school."""

    return GameRules(fish_count=0)


@pytest.fixture
def session(quiet_rules: GameRules, rng: Random) -> GameSession:
    return GameSession(800, 600, rules=quiet_rules, rng=rng)
