from __future__ import annotations

from random import Random
from typing import Any, Mapping

from lagom import Container, Singleton

from wavesurf.display.renderer import SurfRenderer
from wavesurf.game.rules import GameRules
from wavesurf.game.session import GameSession
from wavesurf.input.keyboard import KeyboardCommands
from wavesurf.runtime.game_loop import GameLoop
from wavesurf.utilities.env import Configuration, ControlScheme
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

RuntimeContainer = Container


class Viewport(tuple[int, int]):
    """Initial window size handed to the session."""


def _build_session(resolver: RuntimeContainer) -> GameSession:
    width, height = resolver[Viewport]
    return GameSession(
        width,
        height,
        rules=resolver[GameRules],
        rng=resolver[Random],
    )


def _build_game_loop(resolver: RuntimeContainer) -> GameLoop:
    return GameLoop(
        session=resolver[GameSession],
        renderer=resolver[SurfRenderer],
        keyboard=resolver[KeyboardCommands],
        max_fps=Configuration.max_fps(),
        fullscreen=Configuration.fullscreen(),
    )


def _bind(
    container: RuntimeContainer,
    overrides: Mapping[type[Any], object] | None,
    key: type[Any],
    value: object,
) -> None:
    if overrides and key in overrides:
        container[key] = overrides[key]
        logger.debug("Applied Lagom override for %s.", key)
        return
    container[key] = value


def build_runtime_container(
    *,
    rules: GameRules | None = None,
    width: int | None = None,
    height: int | None = None,
    seed: int | None = None,
    overrides: Mapping[type[Any], object] | None = None,
) -> RuntimeContainer:
    """Wire the session, input, renderer and loop from configuration."""

    container = RuntimeContainer()
    resolved_rules = rules or GameRules.from_configuration()
    default_width, default_height = Configuration.window_size()
    viewport = Viewport((width or default_width, height or default_height))
    resolved_seed = seed if seed is not None else Configuration.seed()

    _bind(container, overrides, GameRules, resolved_rules)
    _bind(container, overrides, Viewport, viewport)
    _bind(container, overrides, Random, Random(resolved_seed))
    _bind(
        container,
        overrides,
        GameSession,
        Singleton(lambda resolver: _build_session(resolver)),
    )
    _bind(
        container,
        overrides,
        KeyboardCommands,
        Singleton(lambda resolver: KeyboardCommands()),
    )
    _bind(container, overrides, SurfRenderer, Singleton(SurfRenderer))
    _bind(
        container,
        overrides,
        GameLoop,
        Singleton(lambda resolver: _build_game_loop(resolver)),
    )

    logger.info(
        "Runtime configured: %dx%d, %s controls, seed=%s",
        viewport[0],
        viewport[1],
        resolved_rules.control_scheme,
        resolved_seed,
    )
    return container


def rules_for(scheme: ControlScheme | None) -> GameRules:
    return GameRules.from_configuration(scheme)
