import logging
from dataclasses import dataclass

import pygame

from .config import COLS
from .physics import Ball, bounce_horizontal, bounce_vertical, clamp, linear_reflect, overlaps
from .scores import Outcome
from .session import Session

logger = logging.getLogger(__name__)


@dataclass
class Brick:
    rect: pygame.Rect
    alive: bool = True


class Breakout(Session):
    """
    Breakout - Left/Right or mouse to move, clear every brick to win
    """
    name = "Breakout"
    key = "breakout"
    keymap = {pygame.K_LEFT: "left", pygame.K_RIGHT: "right"}
    pw, ph = 120, 12
    paddle_speed = 600
    ball_r = 8
    serve_vx, serve_vy = 220, -260
    max_deflection = 420
    rows, cols = 5, 10
    brick_h = 20
    brick_points = 10

    def __init__(self, size, sink=None, hub=None, rng=None, lives=3):
        self.start_lives = lives
        super().__init__(size, sink, hub, rng)

    def reset(self):
        self.py = self.h - 40
        self.ball = Ball(0, 0, 0, 0, self.ball_r)
        self.respawn()
        self.make_level()
        self.lives = self.start_lives
        self.score = 0
        self.pointer_x = None
        self.held.clear()

    def make_level(self):
        self.bricks = []
        bw = (self.w - 60) // self.cols
        for r in range(self.rows):
            for c in range(self.cols):
                x = 30 + c*(bw+2)
                y = 40 + r*(self.brick_h+6)
                self.bricks.append(Brick(pygame.Rect(x, y, bw, self.brick_h)))

    def respawn(self):
        self.px = (self.w - self.pw)/2
        self.ball.x, self.ball.y = self.w/2, self.h - 60
        self.ball.vx = self.serve_vx * (1 if self.rng.random() > 0.5 else -1)
        self.ball.vy = self.serve_vy

    @property
    def alive_count(self):
        return sum(1 for b in self.bricks if b.alive)

    def handle_other(self, ev):
        if ev.type == pygame.MOUSEMOTION:
            self.pointer_x = ev.pos[0]

    def _move_paddle(self, dt):
        if "left" in self.held: self.px -= self.paddle_speed*dt
        if "right" in self.held: self.px += self.paddle_speed*dt
        # pointer wins on frames where it moved
        if self.pointer_x is not None:
            self.px = self.pointer_x - self.pw/2
            self.pointer_x = None
        self.px = clamp(self.px, 0, self.w - self.pw)

    def _hits_paddle(self):
        b = self.ball
        return (b.vy > 0 and b.y + b.r > self.py and b.y < self.py + self.ph
                and self.px < b.x < self.px + self.pw)

    def update(self, dt):
        if not self.running: return
        self._move_paddle(dt)
        b = self.ball
        b.move(dt)
        bounce_horizontal(b, 0, self.w)
        bounce_vertical(b, 0, None)

        if self._hits_paddle():
            linear_reflect(b, self.px, self.pw, self.max_deflection)
            b.y = self.py - b.r - 1

        for brick in self.bricks:
            if brick.alive and overlaps(brick.rect, b):
                brick.alive = False
                b.vy = -b.vy
                self.score += self.brick_points

        # bottom -> lose a life; checked before the win
        if b.y - b.r > self.h:
            self.lives -= 1
            logger.debug("ball lost, %d lives left", self.lives)
            if self.lives <= 0:
                self.lives = 0
                self.sink.show(f"Score: {self.score}  Lives: {self.lives}")
                self.end_game(Outcome.LOSE)
                return
            self.respawn()

        self.sink.show(f"Score: {self.score}  Lives: {self.lives}")
        if not self.alive_count:
            self.end_game(Outcome.WIN)

    def draw(self, surf):
        if not self.drawable: return
        surf.fill(COLS["board"])
        for brick in self.bricks:
            if not brick.alive: continue
            pygame.draw.rect(surf, COLS["neon"], brick.rect)
            pygame.draw.rect(surf, COLS["brick_edge"], brick.rect, 1)
        pygame.draw.rect(surf, COLS["neon"], (int(self.px), self.py, self.pw, self.ph))
        pygame.draw.circle(surf, COLS["white"], (int(self.ball.x), int(self.ball.y)), self.ball.r)
