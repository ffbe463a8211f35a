from __future__ import annotations

import reactivex
from reactivex import operators as ops

from wavesurf.game.session import GameSession
from wavesurf.game.state import Command, GameSnapshot
from wavesurf.runtime.providers import ObservableProvider
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)


class GameSessionStateProvider(ObservableProvider[GameSnapshot]):
    """Drive a :class:`GameSession` from a tick stream and a command stream.

    Commands are only enqueued; they take effect on the next tick so every
    snapshot is produced by exactly one ``session.tick`` call.
    """

    def __init__(
        self,
        session: GameSession,
        ticks: reactivex.Observable[float],
        commands: reactivex.Observable[Command] | None = None,
    ) -> None:
        self._session = session
        self._ticks = ticks
        self._commands = commands if commands is not None else reactivex.empty()

    @property
    def session(self) -> GameSession:
        return self._session

    def observable(self) -> reactivex.Observable[GameSnapshot]:
        session = self._session
        command_queue = self._commands.pipe(
            ops.do_action(on_next=session.enqueue),
            ops.ignore_elements(),
        )
        snapshots = self._ticks.pipe(
            ops.map(session.tick),
        )

        return reactivex.merge(command_queue, snapshots).pipe(
            ops.start_with(session.snapshot()),
            ops.share(),
        )
