from wavesurf.utilities.env.parsing import _env_flag, _env_int

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_MAX_FPS = 60


class DisplayConfiguration:
    @classmethod
    def window_size(cls) -> tuple[int, int]:
        return (
            _env_int("WAVESURF_WIDTH", default=DEFAULT_WIDTH, minimum=1),
            _env_int("WAVESURF_HEIGHT", default=DEFAULT_HEIGHT, minimum=1),
        )

    @classmethod
    def max_fps(cls) -> int:
        return _env_int("WAVESURF_MAX_FPS", default=DEFAULT_MAX_FPS, minimum=1)

    @classmethod
    def fullscreen(cls) -> bool:
        return _env_flag("WAVESURF_FULLSCREEN")
