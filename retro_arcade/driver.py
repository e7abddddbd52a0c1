"""
Frame driver: owns the one live session and feeds it clamped time steps.

The driver is called once per display frame. It never looks inside a game;
it only knows the session lifecycle (start, stop, set_paused, update, draw).
"""

import enum
import logging
import random
from dataclasses import dataclass

import pygame

from .breakout import Breakout
from .config import FRAME_CLAMP_MS
from .pong import Pong
from .snake import Snake

logger = logging.getLogger(__name__)


class GameKind(enum.Enum):
    PONG = "pong"
    SNAKE = "snake"
    BREAKOUT = "breakout"


GAMES = {GameKind.PONG: Pong, GameKind.SNAKE: Snake, GameKind.BREAKOUT: Breakout}


@dataclass
class SessionContext:
    session: object = None
    kind: GameKind = None
    paused: bool = False


class Driver:
    def __init__(self, surface, clock=None, clamp_ms=FRAME_CLAMP_MS, sink=None, hub=None, rng=None, options=None):
        self.surface = surface
        self.clock = clock or pygame.time.get_ticks
        self.clamp_ms = clamp_ms
        self.sink = sink
        self.hub = hub
        self.rng = rng if rng is not None else random.Random()
        # per-kind constructor kwargs, e.g. {GameKind.PONG: {"max_score": 7}}
        self.options = options or {}
        self.context = SessionContext()
        self.last = None

    @property
    def session(self):
        return self.context.session

    @property
    def paused(self):
        return self.context.paused

    def build(self, kind):
        kind = GameKind(kind)
        cls = GAMES[kind]
        return cls(self.surface.get_size(), sink=self.sink, hub=self.hub, rng=self.rng,
                   **self.options.get(kind, {}))

    def start(self, session, kind=None):
        self.stop()
        session.start()
        self.context.session = session
        self.context.kind = kind
        self.context.paused = False
        self.last = self.clock()
        logger.info("driver running %s", session.name)

    def switch(self, kind):
        # old listeners go before the new session exists
        self.stop()
        kind = GameKind(kind)
        session = self.build(kind)
        self.start(session, kind)
        return session

    def stop(self):
        s = self.context.session
        if s is None:
            return
        s.stop()
        self.context.session = None
        self.context.kind = None
        self.context.paused = False
        logger.info("driver released %s", s.name)

    def toggle_pause(self):
        s = self.context.session
        if s is None or not s.live:
            return False
        self.context.paused = not self.context.paused
        s.set_paused(self.context.paused)
        if not self.context.paused:
            # resume from now, not from when we paused
            self.last = self.clock()
        return True

    def tick(self, now=None):
        s = self.context.session
        if s is None:
            return None
        now = self.clock() if now is None else now
        if self.context.paused:
            return None
        dt = min(self.clamp_ms, max(0, now - self.last)) / 1000
        self.last = now
        s.update(dt)
        s.draw(self.surface)
        return dt
