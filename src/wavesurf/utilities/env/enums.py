from enum import StrEnum


class ControlScheme(StrEnum):
    BALANCE = "balance"
    FLIP = "flip"


class CapsizePolicy(StrEnum):
    AUTO = "auto"
    TILT_THRESHOLD = "tilt_threshold"
    LANDING_ORIENTATION = "landing_orientation"
