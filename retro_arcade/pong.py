import logging
from dataclasses import dataclass

import pygame

from .config import COLS
from .physics import Ball, angle_reflect, bounce_vertical, clamp
from .render import draw_text
from .scores import Outcome
from .session import Session

logger = logging.getLogger(__name__)


@dataclass
class Paddle:
    x: float
    y: float
    speed: float


class Pong(Session):
    """
    Pong - W/S or Up/Down to move, first to max_score wins
    """
    name = "Pong"
    key = "pong"
    keymap = {
        pygame.K_w: "up", pygame.K_UP: "up",
        pygame.K_s: "down", pygame.K_DOWN: "down",
    }
    ball_r = 8
    paddle_w, paddle_h = 12, 90
    player_speed, ai_speed = 380, 260
    ai_dead_zone = 6
    floor_speed = 200
    growth = 1.05
    serve_speed = 300
    serve_spread = 120

    def __init__(self, size, sink=None, hub=None, rng=None, max_score=7):
        self.max_score = max_score
        super().__init__(size, sink, hub, rng)

    def reset(self):
        sign = 1 if self.rng.random() > 0.5 else -1
        self.ball = Ball(self.w/2, self.h/2, 280*sign, self.serve_spread*(self.rng.random()*2-1), self.ball_r)
        top = (self.h - self.paddle_h)/2
        self.player = Paddle(20, top, self.player_speed)
        self.ai = Paddle(self.w - 20 - self.paddle_w, top, self.ai_speed)
        self.points = {"player": 0, "ai": 0}
        self.score = 0
        self.held.clear()

    def serve(self, direction):
        self.ball.x, self.ball.y = self.w/2, self.h/2
        self.ball.vx = self.serve_speed*direction
        self.ball.vy = self.serve_spread*(self.rng.random()*2-1)

    def _chase(self, dt):
        center = self.ai.y + self.paddle_h/2
        if center < self.ball.y - self.ai_dead_zone: self.ai.y += self.ai.speed*dt
        if center > self.ball.y + self.ai_dead_zone: self.ai.y -= self.ai.speed*dt
        self.ai.y = clamp(self.ai.y, 0, self.h - self.paddle_h)

    def _in_span(self, paddle):
        return paddle.y < self.ball.y < paddle.y + self.paddle_h

    def _bounce(self, paddle, direction):
        angle_reflect(self.ball, paddle.y + self.paddle_h/2, self.paddle_h/2,
                      self.floor_speed, self.growth, direction)

    def _point(self, side):
        self.points[side] += 1
        self.score = self.points["player"]
        # serve toward whoever took the point
        self.serve(1 if side == "ai" else -1)
        logger.debug("point %s, %d-%d", side, self.points["player"], self.points["ai"])

    def update(self, dt):
        if not self.running: return
        # player input
        if "up" in self.held: self.player.y -= self.player.speed*dt
        if "down" in self.held: self.player.y += self.player.speed*dt
        self.player.y = clamp(self.player.y, 0, self.h - self.paddle_h)
        self._chase(dt)

        b = self.ball
        b.move(dt)
        bounce_vertical(b, 0, self.h)

        # player paddle face
        if b.x - b.r < self.player.x + self.paddle_w:
            if self._in_span(self.player):
                b.x = self.player.x + self.paddle_w + b.r
                self._bounce(self.player, 1)
            else:
                self._point("ai")
        # ai paddle face
        if b.x + b.r > self.ai.x:
            if self._in_span(self.ai):
                b.x = self.ai.x - b.r
                self._bounce(self.ai, -1)
            else:
                self._point("player")

        self.sink.show(f"Score: {self.points['player']}")
        if self.points["player"] >= self.max_score or self.points["ai"] >= self.max_score:
            winner = Outcome.WIN if self.points["player"] > self.points["ai"] else Outcome.LOSE
            self.end_game(winner, self.points["player"])

    def draw(self, surf):
        if not self.drawable: return
        surf.fill(COLS["board"])
        # dashed center line
        for y in range(0, self.h, 20):
            pygame.draw.line(surf, COLS["panel"], (self.w//2, y), (self.w//2, y+10), 2)
        for p in (self.player, self.ai):
            pygame.draw.rect(surf, COLS["neon"], (int(p.x), int(p.y), self.paddle_w, self.paddle_h))
        pygame.draw.circle(surf, COLS["white"], (int(self.ball.x), int(self.ball.y)), self.ball.r)
        draw_text(surf, str(self.points["player"]), int(self.w*0.25), 30, "normal", COLS["muted"], center=True)
        draw_text(surf, str(self.points["ai"]), int(self.w*0.75), 30, "normal", COLS["muted"], center=True)
