# Retro Arcade - Pong, Snake and Breakout on one pygame screen.

from .driver import GAMES, Driver, GameKind, SessionContext
from .scores import GameResult, JsonScoreStore, Outcome, ScoreSink, ScoreStore
from .session import Session, SessionError, SessionState

__version__ = "1.0.0"
