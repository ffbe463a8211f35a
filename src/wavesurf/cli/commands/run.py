from typing import Annotated, Optional

import typer

from wavesurf.game.state import InvalidViewportError
from wavesurf.runtime.container import build_runtime_container, rules_for
from wavesurf.runtime.game_loop import GameLoop
from wavesurf.utilities.env import ControlScheme
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)


def run_command(
    scheme: Annotated[
        Optional[ControlScheme],
        typer.Option("--scheme", help="Control scheme: balance or flip"),
    ] = None,
    width: Annotated[Optional[int], typer.Option("--width", min=1)] = None,
    height: Annotated[Optional[int], typer.Option("--height", min=1)] = None,
    seed: Annotated[
        Optional[int], typer.Option("--seed", help="Seed the hazard and wave noise")
    ] = None,
) -> None:
    try:
        resolver = build_runtime_container(
            rules=rules_for(scheme),
            width=width,
            height=height,
            seed=seed,
        )
        loop = resolver.resolve(GameLoop)
    except (InvalidViewportError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        raise typer.Exit(code=1) from exc

    loop.start()
