from reactivex.subject import Subject

from wavesurf.game.provider import GameSessionStateProvider
from wavesurf.game.session import GameSession
from wavesurf.game.state import Command, GameSnapshot


class TestGameSessionStateProvider:
    """Validate the snapshot stream so renderers see one snapshot per tick."""

    def test_emits_initial_snapshot(self, session: GameSession) -> None:
        """Confirm subscribers get the current state before the first tick."""
        provider = GameSessionStateProvider(session, Subject())
        received: list[GameSnapshot] = []

        provider.observable().subscribe(received.append)

        assert len(received) == 1
        assert received[0].score == 0.0

    def test_commands_apply_on_next_tick(self, session: GameSession) -> None:
        """Ensure commands queue until a tick arrives instead of mutating state mid-frame."""
        ticks: Subject[float] = Subject()
        commands: Subject[Command] = Subject()
        provider = GameSessionStateProvider(session, ticks, commands)
        received: list[GameSnapshot] = []
        provider.observable().subscribe(received.append)

        commands.on_next(Command.JUMP)
        assert not session.controller.boat.airborne

        ticks.on_next(1.0)

        assert len(received) == 2
        assert received[-1].boat.airborne

    def test_stream_is_shared(self, session: GameSession) -> None:
        """Verify multiple subscribers do not tick the session more than once."""
        ticks: Subject[float] = Subject()
        observable = GameSessionStateProvider(session, ticks).observable()
        received_a: list[GameSnapshot] = []
        received_b: list[GameSnapshot] = []
        observable.subscribe(received_a.append)
        observable.subscribe(received_b.append)

        ticks.on_next(1.0)

        assert received_a[-1] is received_b[-1]
        assert session.score == 1.0
