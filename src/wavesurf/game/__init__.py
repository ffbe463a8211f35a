from wavesurf.game.rules import GameRules as GameRules
from wavesurf.game.session import GameSession as GameSession
from wavesurf.game.state import Command as Command
from wavesurf.game.state import GameSnapshot as GameSnapshot
from wavesurf.game.state import InvalidViewportError as InvalidViewportError
from wavesurf.game.state import TransientSignal as TransientSignal
