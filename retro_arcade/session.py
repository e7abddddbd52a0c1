"""
Lifecycle shared by every game.

A session is built, reset, started, optionally paused and resumed, and finally
either stopped from outside or ended by its own terminal rule. An ended session
has reported its one result and is never restarted; "play again" means a new
instance.

    IDLE -> RUNNING <-> PAUSED -> ENDED   (terminal rule)
    IDLE | RUNNING | PAUSED -> STOPPED   (stop)
"""

import enum
import logging
import random

import pygame

from .scores import ScoreSink

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    ENDED = "ended"


class SessionError(RuntimeError):
    pass


class Session:
    """Base game session: subclasses fill in reset/update/draw."""
    name = "Base"
    key = "base"
    keymap = {}  # pygame key -> action name

    def __init__(self, size, sink=None, hub=None, rng=None):
        self.w, self.h = size
        self.sink = sink if sink is not None else ScoreSink()
        self.hub = hub
        self.rng = rng if rng is not None else random.Random()
        self.state = SessionState.IDLE
        self.result = None
        self.held = set()
        self.score = 0
        self.reset()

    def reset(self):
        pass

    @property
    def running(self):
        return self.state is SessionState.RUNNING

    @property
    def paused(self):
        return self.state is SessionState.PAUSED

    @property
    def live(self):
        return self.state in (SessionState.RUNNING, SessionState.PAUSED)

    def start(self):
        if self.state is not SessionState.IDLE:
            raise SessionError(f"{self.name} session is {self.state.value}; create a new one to play again")
        self.state = SessionState.RUNNING
        if self.hub is not None:
            self.hub.attach(self.handle_event)
        logger.debug("%s started", self.name)

    def set_paused(self, paused):
        if not self.live:
            return
        self.state = SessionState.PAUSED if paused else SessionState.RUNNING
        logger.debug("%s %s", self.name, self.state.value)

    def _detach(self):
        if self.hub is not None:
            self.hub.detach(self.handle_event)
        self.held.clear()

    def stop(self):
        self._detach()
        if self.state in (SessionState.STOPPED, SessionState.ENDED):
            return
        self.state = SessionState.STOPPED
        logger.debug("%s stopped", self.name)

    def end_game(self, outcome, final_score=None):
        if self.state is SessionState.ENDED:
            return self.result
        self._detach()
        self.state = SessionState.ENDED
        score = self.score if final_score is None else final_score
        self.result = self.sink.report(self.key, outcome, score)
        return self.result

    def handle_event(self, ev):
        # keep listening while paused; presses only buffer input for the next update
        if not self.live:
            return
        action = self.keymap.get(getattr(ev, "key", None))
        if action is None:
            return self.handle_other(ev)
        if ev.type == pygame.KEYDOWN:
            self.held.add(action)
            self.on_press(action)
        elif ev.type == pygame.KEYUP:
            self.held.discard(action)

    def on_press(self, action):
        pass

    def handle_other(self, ev):
        pass

    def update(self, dt):
        pass

    def draw(self, surf):
        pass

    @property
    def drawable(self):
        return self.state in (SessionState.RUNNING, SessionState.PAUSED, SessionState.ENDED)
