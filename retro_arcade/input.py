# Keyboard / mouse fan-out. Sessions attach a listener while they run.

import logging

import pygame

logger = logging.getLogger(__name__)

GAME_EVENTS = (pygame.KEYDOWN, pygame.KEYUP, pygame.MOUSEMOTION)


class InputHub:
    def __init__(self):
        self.listeners = []

    def attach(self, fn):
        if fn not in self.listeners:
            self.listeners.append(fn)
            logger.debug("listener attached (%d live)", len(self.listeners))

    def detach(self, fn):
        if fn in self.listeners:
            self.listeners.remove(fn)
            logger.debug("listener detached (%d live)", len(self.listeners))

    def dispatch(self, ev):
        if ev.type not in GAME_EVENTS:
            return
        # copy: a listener may end its session and detach mid-dispatch
        for fn in list(self.listeners):
            fn(ev)

    def __len__(self):
        return len(self.listeners)
