from wavesurf.utilities.env.enums import CapsizePolicy, ControlScheme
from wavesurf.utilities.env.parsing import (_env_enum, _env_int,
                                            _env_optional_float,
                                            _env_optional_int)

DEFAULT_FISH_COUNT = 3


class GameConfiguration:
    @classmethod
    def control_scheme(cls) -> ControlScheme:
        return _env_enum(
            "WAVESURF_CONTROL_SCHEME", ControlScheme, default=ControlScheme.BALANCE
        )

    @classmethod
    def capsize_policy(cls) -> CapsizePolicy:
        return _env_enum(
            "WAVESURF_CAPSIZE_POLICY", CapsizePolicy, default=CapsizePolicy.AUTO
        )

    @classmethod
    def max_speed(cls) -> float | None:
        return _env_optional_float("WAVESURF_MAX_SPEED", minimum=5.0)

    @classmethod
    def difficulty_rate(cls) -> float | None:
        return _env_optional_float("WAVESURF_DIFFICULTY_RATE", minimum=0.0)

    @classmethod
    def seed(cls) -> int | None:
        return _env_optional_int("WAVESURF_SEED")

    @classmethod
    def fish_count(cls) -> int:
        return _env_int("WAVESURF_FISH_COUNT", default=DEFAULT_FISH_COUNT, minimum=0)
