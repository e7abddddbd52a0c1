"""
App shell without a window: menu routing, pause key, HUD and end messages.
"""

import pygame
import pytest

from conftest import key
from retro_arcade.app import ArcadeApp, end_message, menu_rect
from retro_arcade.config import BOARD_POS, Settings, load_settings
from retro_arcade.driver import GameKind
from retro_arcade.scores import GameResult, Outcome, ScoreStore
from retro_arcade.session import SessionState


@pytest.fixture
def app():
    return ArcadeApp(settings=Settings(), store=ScoreStore())


def test_enter_starts_selected_game(app):
    app.handle_event(key(pygame.KEYDOWN, pygame.K_DOWN))
    app.handle_event(key(pygame.KEYDOWN, pygame.K_RETURN))
    assert app.view == "game"
    assert app.driver.context.kind is GameKind.SNAKE
    assert app.hud == "Score: 0"


def test_click_starts_game(app):
    app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=menu_rect(2).center, button=1))
    assert app.driver.context.kind is GameKind.BREAKOUT


def test_pause_key_and_message(app):
    app.show_game(GameKind.PONG)
    app.handle_event(key(pygame.KEYDOWN, pygame.K_p))
    assert app.driver.paused and app.message == "Paused"
    app.handle_event(key(pygame.KEYDOWN, pygame.K_p))
    assert not app.driver.paused and app.message == ""


def test_escape_goes_home_and_detaches(app):
    app.show_game(GameKind.PONG)
    s = app.driver.session
    assert app.handle_event(key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert app.view == "home"
    assert s.state is SessionState.STOPPED
    assert len(app.hub) == 0


def test_escape_on_home_quits(app):
    assert not app.handle_event(key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert not app.handle_event(pygame.event.Event(pygame.QUIT))


def test_mouse_is_mapped_to_board(app):
    app.show_game(GameKind.BREAKOUT)
    s = app.driver.session
    app.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(BOARD_POS[0] + 300, BOARD_POS[1] + 10)))
    s.update(0.001)
    assert s.px == 300 - s.pw/2


def test_game_keys_reach_session(app):
    app.show_game(GameKind.SNAKE)
    app.handle_event(key(pygame.KEYDOWN, pygame.K_UP))
    assert app.driver.session.pending == (0, -1)


def test_result_sets_message(app):
    app.show_game(GameKind.BREAKOUT)
    s = app.driver.session
    s.end_game(Outcome.WIN)
    assert app.message.startswith("You cleared all bricks!")


def test_draw_both_views(app):
    surf = pygame.Surface((900, 720))
    app.draw_home(surf)
    app.show_game(GameKind.PONG)
    app.driver.tick()
    app.draw_game(surf)


@pytest.mark.parametrize("kind, result, expected", [
    (GameKind.PONG, GameResult(Outcome.WIN, 7), "Game over - You win! - Score 7"),
    (GameKind.PONG, GameResult(Outcome.LOSE, 2), "Game over - You lost - Score 2"),
    (GameKind.SNAKE, GameResult(Outcome.NONE, 9, True), "Game over - Score 9 - New best!"),
    (GameKind.BREAKOUT, GameResult(Outcome.LOSE, 0), "Game over - Score 0"),
])
def test_end_messages(kind, result, expected):
    assert end_message(kind, result).startswith(expected)


def test_close_saves_settings(tmp_path):
    path = tmp_path / "settings.json"
    app = ArcadeApp(settings=Settings(pong_max_score=4), store=ScoreStore(), settings_path=path)
    app.show_game(GameKind.PONG)
    app.close()
    assert app.driver.session is None
    assert load_settings(path).pong_max_score == 4
