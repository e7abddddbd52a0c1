# Window, home menu and game screen around the driver.

import logging
import sys

import pygame

from .config import BOARD_H, BOARD_POS, BOARD_W, COLS, HEIGHT, SETTINGS_FILE, WIDTH, load_settings, save_settings
from .driver import GAMES, Driver, GameKind
from .input import InputHub
from .render import draw_text
from .scores import JsonScoreStore, Outcome, ScoreSink

logger = logging.getLogger(__name__)

MENU = [("Pong", GameKind.PONG), ("Snake", GameKind.SNAKE), ("Breakout", GameKind.BREAKOUT)]
MENU_Y, MENU_STEP, MENU_W, MENU_H = 180, 96, 760, 72


def end_message(kind, result):
    if kind is GameKind.PONG:
        verdict = "You win!" if result.outcome is Outcome.WIN else "You lost"
        text = f"Game over - {verdict} - Score {result.final_score}"
    elif kind is GameKind.BREAKOUT and result.outcome is Outcome.WIN:
        text = f"You cleared all bricks! Score {result.final_score}"
    else:
        text = f"Game over - Score {result.final_score}"
    if result.high_score:
        text += " - New best!"
    return text + " - Esc for home to play again."


def menu_rect(i):
    return pygame.Rect((WIDTH - MENU_W)//2, MENU_Y + i*MENU_STEP, MENU_W, MENU_H)


class ArcadeApp:
    def __init__(self, settings=None, store=None, settings_path=SETTINGS_FILE):
        self.settings_path = settings_path
        self.settings = settings or load_settings(settings_path)
        self.store = store if store is not None else JsonScoreStore()
        self.hub = InputHub()
        self.sink = ScoreSink(self.store, notifier=self.on_result, display=self.on_display)
        self.board = pygame.Surface((BOARD_W, BOARD_H))
        options = {
            GameKind.PONG: {"max_score": self.settings.pong_max_score},
            GameKind.BREAKOUT: {"lives": self.settings.breakout_lives},
        }
        self.driver = Driver(self.board, clamp_ms=self.settings.frame_clamp_ms,
                             sink=self.sink, hub=self.hub, options=options)
        self.view = "home"
        self.menu_idx = 0
        self.hud = ""
        self.message = ""

    # sink callbacks
    def on_display(self, text):
        self.hud = text

    def on_result(self, result):
        self.message = end_message(self.driver.context.kind, result)

    # view switching
    def show_home(self):
        self.driver.stop()
        self.view = "home"
        self.hud = self.message = ""

    def show_game(self, kind):
        self.view = "game"
        self.hud = "Score: 0"
        self.message = ""
        self.driver.switch(kind)

    def toggle_pause(self):
        if self.driver.toggle_pause():
            self.message = "Paused" if self.driver.paused else ""

    def handle_event(self, ev):
        k = self.settings.keys
        if ev.type == pygame.QUIT:
            return False
        if self.view == "home":
            if ev.type == pygame.KEYDOWN:
                if ev.key == k["down"]:
                    self.menu_idx = (self.menu_idx + 1) % len(MENU)
                elif ev.key == k["up"]:
                    self.menu_idx = (self.menu_idx - 1) % len(MENU)
                elif ev.key == k["select"]:
                    self.show_game(MENU[self.menu_idx][1])
                elif ev.key == k["back"]:
                    return False
            elif ev.type == pygame.MOUSEBUTTONDOWN:
                for i, (label, kind) in enumerate(MENU):
                    if menu_rect(i).collidepoint(ev.pos):
                        self.menu_idx = i
                        self.show_game(kind)
            return True
        if ev.type == pygame.KEYDOWN and ev.key == k["back"]:
            self.show_home()
            return True
        if ev.type == pygame.KEYDOWN and ev.key == k["pause"]:
            self.toggle_pause()
            return True
        if ev.type == pygame.MOUSEMOTION:
            # window -> board coordinates
            ev = pygame.event.Event(ev.type, pos=(ev.pos[0] - BOARD_POS[0], ev.pos[1] - BOARD_POS[1]))
        self.hub.dispatch(ev)
        return True

    def draw_home(self, surf):
        surf.fill(COLS["bg"])
        draw_text(surf, "Retro Arcade", WIDTH//2, 44, "xl", COLS["accent"], center=True)
        draw_text(surf, "Up/Down + Enter or click to play. P pauses, Esc returns home.", WIDTH//2, 100, "normal", COLS["muted"], center=True)
        for i, (label, kind) in enumerate(MENU):
            rect = menu_rect(i)
            color = (36,46,66) if i == self.menu_idx else COLS["panel"]
            pygame.draw.rect(surf, color, rect, border_radius=8)
            draw_text(surf, label, rect.x+20, rect.y+16, "big", COLS["white"])
            draw_text(surf, f"Best: {self.store.get(kind.value)}", rect.right-140, rect.y+26, "normal", COLS["good"])

    def draw_game(self, surf):
        surf.fill(COLS["bg"])
        s = self.driver.session
        title = GAMES[self.driver.context.kind].name if self.driver.context.kind else ""
        draw_text(surf, f"{title}  {self.hud}", WIDTH//2, 40, "big", COLS["white"], center=True)
        surf.blit(self.board, BOARD_POS)
        if self.message:
            color = COLS["accent"] if s is not None and s.live else COLS["danger"]
            draw_text(surf, self.message, WIDTH//2, HEIGHT-20, "normal", color, center=True)

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Retro Arcade")
        clock = pygame.time.Clock()
        running = True
        while running:
            clock.tick(self.settings.fps)
            for ev in pygame.event.get():
                if not self.handle_event(ev):
                    running = False
                    break
            if not running:
                break
            if self.view == "game":
                self.driver.tick()
                self.draw_game(screen)
            else:
                self.draw_home(screen)
            pygame.display.flip()
        self.close()
        pygame.quit()

    def close(self):
        self.driver.stop()
        save_settings(self.settings, self.settings_path)
        logger.info("arcade closed")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ArcadeApp().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
