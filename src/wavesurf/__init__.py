from wavesurf.utilities.env import CapsizePolicy as CapsizePolicy
from wavesurf.utilities.env import ControlScheme as ControlScheme
