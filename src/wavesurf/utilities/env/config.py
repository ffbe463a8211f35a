from wavesurf.utilities.env.display import DisplayConfiguration
from wavesurf.utilities.env.game import GameConfiguration


class Configuration(GameConfiguration, DisplayConfiguration):
    """Aggregate environment configuration helpers."""
