"""
Driver and session lifecycle: clamped dt, pause gating, switching, idempotent stop.
"""

import random

import pygame
import pytest

from conftest import key
from retro_arcade.driver import GAMES, Driver, GameKind
from retro_arcade.pong import Pong
from retro_arcade.scores import Outcome
from retro_arcade.session import SessionError, SessionState
from retro_arcade.snake import Snake


@pytest.fixture
def driver(clock, sink, hub):
    surface = pygame.Surface((800, 600))
    return Driver(surface, clock=clock, clamp_ms=40, sink=sink, hub=hub, rng=random.Random(2))


class TestTick:

    def test_no_session_no_tick(self, driver):
        assert driver.tick() is None

    def test_dt_follows_clock(self, driver, clock):
        driver.switch(GameKind.PONG)
        clock.advance(16)
        assert driver.tick() == pytest.approx(0.016)

    def test_dt_is_clamped_after_a_stall(self, driver, clock):
        driver.switch(GameKind.PONG)
        clock.advance(5000)
        assert driver.tick() == pytest.approx(0.04)

    def test_explicit_timestamp(self, driver, clock):
        driver.switch("snake")
        assert driver.tick(clock.now + 10) == pytest.approx(0.01)

    def test_tick_updates_then_draws(self, driver, clock):
        s = driver.switch(GameKind.BREAKOUT)
        y = s.ball.y
        clock.advance(16)
        driver.tick()
        assert s.ball.y < y
        assert tuple(driver.surface.get_at((int(s.ball.x), int(s.ball.y))))[:3] == (235, 235, 235)


class TestPause:

    def test_paused_driver_skips_update(self, driver, clock):
        s = driver.switch(GameKind.BREAKOUT)
        assert driver.toggle_pause()
        assert s.state is SessionState.PAUSED
        before = (s.ball.x, s.ball.y)
        clock.advance(16)
        assert driver.tick() is None
        assert (s.ball.x, s.ball.y) == before

    def test_resume_after_long_pause_is_bounded(self, driver, clock):
        driver.switch(GameKind.PONG)
        clock.advance(16)
        driver.tick()
        driver.toggle_pause()
        for _ in range(10):
            clock.advance(60000)
            driver.tick()
        driver.toggle_pause()
        clock.advance(16)
        dt = driver.tick()
        assert dt == pytest.approx(0.016)
        assert dt <= driver.clamp_ms/1000

    def test_resume_without_baseline_reset_still_clamped(self, driver, clock):
        driver.switch(GameKind.PONG)
        driver.toggle_pause()
        driver.toggle_pause()
        driver.last = clock.now - 10**7
        assert driver.tick() == pytest.approx(0.04)

    def test_pause_without_session(self, driver):
        assert not driver.toggle_pause()
        assert not driver.paused

    def test_pause_after_game_ended(self, driver):
        s = driver.switch(GameKind.PONG)
        s.end_game(Outcome.LOSE, 0)
        assert not driver.toggle_pause()


class TestSwitching:

    def test_switch_stops_old_session_first(self, driver, hub):
        old = driver.switch(GameKind.PONG)
        assert len(hub) == 1
        new = driver.switch(GameKind.SNAKE)
        assert old.state is SessionState.STOPPED
        assert new.state is SessionState.RUNNING
        assert hub.listeners == [new.handle_event]
        assert isinstance(new, Snake)
        assert driver.context.kind is GameKind.SNAKE

    def test_old_session_gets_no_keys(self, driver, hub):
        old = driver.switch(GameKind.PONG)
        new = driver.switch(GameKind.SNAKE)
        hub.dispatch(key(pygame.KEYDOWN, pygame.K_UP))
        assert old.held == set()
        assert new.pending == (0, -1)

    def test_stop_is_idempotent(self, driver, hub):
        s = driver.switch(GameKind.BREAKOUT)
        driver.stop()
        first = (s.state, driver.session, driver.paused, len(hub))
        driver.stop()
        s.stop()
        assert (s.state, driver.session, driver.paused, len(hub)) == first
        assert first == (SessionState.STOPPED, None, False, 0)

    def test_failed_start_leaves_driver_unbound(self, driver, hub):
        s = Pong((800, 600), sink=driver.sink, hub=hub)
        s.start()
        s.end_game(Outcome.LOSE, 0)
        with pytest.raises(SessionError):
            driver.start(s)
        assert driver.session is None
        assert driver.context.kind is None
        assert driver.tick() is None

    def test_options_reach_session(self, clock, sink, hub):
        d = Driver(pygame.Surface((800, 600)), clock=clock, sink=sink, hub=hub,
                   options={GameKind.PONG: {"max_score": 3}})
        assert d.switch(GameKind.PONG).max_score == 3

    def test_unknown_game(self, driver):
        with pytest.raises(ValueError):
            driver.switch("tetris")

    def test_registry(self):
        assert set(GAMES) == set(GameKind)


class TestSessionLifecycle:

    def test_not_started_session_is_inert(self, sink):
        s = Pong((800, 600), sink=sink, rng=random.Random(1))
        x = s.ball.x
        s.update(0.016)
        surf = pygame.Surface((800, 600))
        s.draw(surf)
        assert s.ball.x == x
        assert tuple(surf.get_at((400, 300)))[:3] == (0, 0, 0)

    def test_stopped_session_is_inert(self, sink):
        s = Pong((800, 600), sink=sink, rng=random.Random(1))
        s.start()
        s.stop()
        x = s.ball.x
        s.update(0.016)
        assert s.ball.x == x

    def test_restart_is_refused(self, sink):
        s = Pong((800, 600), sink=sink)
        s.start()
        with pytest.raises(SessionError):
            s.start()

    def test_one_result_only(self, sink, recorder):
        s = Snake((800, 600), sink=sink)
        s.start()
        first = s.end_game(Outcome.NONE)
        second = s.end_game(Outcome.NONE)
        assert first is second
        assert len(recorder.results) == 1

    def test_stop_after_end_keeps_ended(self, sink):
        s = Snake((800, 600), sink=sink)
        s.start()
        s.end_game(Outcome.NONE)
        s.stop()
        assert s.state is SessionState.ENDED
