import os
import random
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pygame
import pytest

from retro_arcade.input import InputHub
from retro_arcade.scores import ScoreSink, ScoreStore

BOARD = (800, 600)


class Recorder:
    """Collects what a session sends to its sink."""
    def __init__(self):
        self.results = []
        self.lines = []


class FakeClock:
    def __init__(self, start=1000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def store():
    return ScoreStore()


@pytest.fixture
def sink(store, recorder):
    return ScoreSink(store, notifier=recorder.results.append, display=recorder.lines.append)


@pytest.fixture
def hub():
    return InputHub()


@pytest.fixture
def clock():
    return FakeClock()


def key(kind, k):
    return pygame.event.Event(kind, key=k)
