"""Environment configuration helpers."""

from wavesurf.utilities.env.config import Configuration as Configuration
from wavesurf.utilities.env.enums import CapsizePolicy as CapsizePolicy
from wavesurf.utilities.env.enums import ControlScheme as ControlScheme
