import logging

import pygame

from .config import COLS
from .physics import wrap_cell
from .scores import Outcome
from .session import Session

logger = logging.getLogger(__name__)

DIRS = {"up": (0,-1), "down": (0,1), "left": (-1,0), "right": (1,0)}


def reverse(d):
    return (-d[0], -d[1])


class Snake(Session):
    """
    Snake - Arrow keys or WASD to move, eat food to grow, edges wrap
    """
    name = "Snake"
    key = "snake"
    keymap = {
        pygame.K_UP: "up", pygame.K_w: "up",
        pygame.K_DOWN: "down", pygame.K_s: "down",
        pygame.K_LEFT: "left", pygame.K_a: "left",
        pygame.K_RIGHT: "right", pygame.K_d: "right",
    }
    cell = 20
    start_interval_ms = 120
    interval_step_ms = 2
    min_interval_ms = 50

    def reset(self):
        self.cols = self.w // self.cell
        self.rows = self.h // self.cell
        self.body = [(self.cols//2, self.rows//2)]
        self.direction = DIRS["right"]
        self.pending = self.direction
        self.step_interval_ms = self.start_interval_ms
        self.elapsed_ms = 0.0
        self.score = 0
        self.place_food()

    def place_food(self):
        taken = set(self.body)
        free = [(x, y) for y in range(self.rows) for x in range(self.cols) if (x, y) not in taken]
        # board full: no food until the snake bites itself
        self.food = self.rng.choice(free) if free else None

    def turn(self, name):
        d = DIRS.get(name)
        if d is None or d == reverse(self.direction):
            return False
        self.pending = d
        return True

    def on_press(self, action):
        self.turn(action)

    def step(self):
        if self.pending != reverse(self.direction):
            self.direction = self.pending
        self.pending = self.direction
        hx, hy = self.body[0]
        head = wrap_cell((hx + self.direction[0], hy + self.direction[1]), self.cols, self.rows)
        if head in self.body:
            logger.debug("snake bit itself at %s, length %d", head, len(self.body))
            self.end_game(Outcome.NONE)
            return
        self.body.insert(0, head)
        if head == self.food:
            self.score += 1
            self.step_interval_ms = max(self.min_interval_ms, self.step_interval_ms - self.interval_step_ms)
            self.place_food()
        else:
            self.body.pop()
        self.sink.show(f"Score: {self.score}")

    def update(self, dt):
        if not self.running: return
        self.elapsed_ms += dt*1000
        if self.elapsed_ms >= self.step_interval_ms:
            self.elapsed_ms = 0.0
            self.step()

    def draw(self, surf):
        if not self.drawable: return
        surf.fill(COLS["board"])
        c = self.cell
        if self.food is not None:
            pygame.draw.rect(surf, COLS["food"], (self.food[0]*c+1, self.food[1]*c+1, c-2, c-2))
        for x, y in self.body:
            pygame.draw.rect(surf, COLS["neon"], (x*c+1, y*c+1, c-2, c-2))
