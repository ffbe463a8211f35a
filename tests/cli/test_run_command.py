import pytest
from typer.testing import CliRunner

from wavesurf.loop import app
from wavesurf.runtime.game_loop import GameLoop

runner = CliRunner()


class TestRunCommand:
    """Cover CLI startup so bad configuration exits cleanly instead of opening a window."""

    def test_invalid_environment_exits_with_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WAVESURF_WIDTH", "0")

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1

    def test_rejects_unknown_scheme(self) -> None:
        result = runner.invoke(app, ["run", "--scheme", "sideways"])

        assert result.exit_code == 2

    def test_starts_loop_with_options(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify CLI options reach the resolved session before the loop starts."""
        started: list[GameLoop] = []
        monkeypatch.setattr(GameLoop, "start", lambda self: started.append(self))

        result = runner.invoke(
            app, ["run", "--scheme", "flip", "--width", "400", "--height", "300"]
        )

        assert result.exit_code == 0
        (loop,) = started
        assert loop.session.width == 400
        assert loop.session.rules.max_speed == 20.0
