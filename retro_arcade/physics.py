"""
Motion and collision helpers shared by the paddle, snake and brick games.

All hit tests are discrete: a contact is found on the frame the ball overlaps
a collider, never swept between frames. The driver's dt clamp keeps per-frame
travel small enough for the colliders used here.
"""

import math

import pygame

MAX_BOUNCE_ANGLE = math.pi/3


class Ball:
    """Circle with a velocity in px/s."""
    def __init__(self, x, y, vx, vy, r):
        self.x = x; self.y = y
        self.vx = vx; self.vy = vy
        self.r = r

    @property
    def speed(self):
        return math.hypot(self.vx, self.vy)

    def move(self, dt):
        self.x += self.vx*dt
        self.y += self.vy*dt

    def __repr__(self):
        return f"Ball(x={self.x:.1f}, y={self.y:.1f}, vx={self.vx:.1f}, vy={self.vy:.1f}, r={self.r})"


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


def bounce_vertical(ball, top, bottom):
    """Reflect off horizontal walls. Returns True when a wall was hit."""
    if ball.y - ball.r < top:
        ball.y = top + ball.r
        ball.vy = -ball.vy
        return True
    if bottom is not None and ball.y + ball.r > bottom:
        ball.y = bottom - ball.r
        ball.vy = -ball.vy
        return True
    return False


def bounce_horizontal(ball, left, right):
    """Reflect off vertical walls. Returns True when a wall was hit."""
    if ball.x - ball.r < left:
        ball.x = left + ball.r
        ball.vx = -ball.vx
        return True
    if ball.x + ball.r > right:
        ball.x = right - ball.r
        ball.vx = -ball.vx
        return True
    return False


def angle_reflect(ball, paddle_center_y, half_height, floor_speed, growth, direction):
    """Send the ball back at an angle set by where it met the paddle.

    The contact offset maps linearly onto +/-60 degrees and the speed ratchets
    up by ``growth`` but never drops below ``floor_speed``. ``direction`` is the
    outgoing x sign.
    """
    relative = clamp((ball.y - paddle_center_y) / half_height, -1.0, 1.0)
    angle = relative * MAX_BOUNCE_ANGLE
    speed = max(floor_speed, ball.speed*growth)
    ball.vx = direction * math.cos(angle) * speed
    ball.vy = math.sin(angle) * speed
    return angle


def linear_reflect(ball, paddle_x, paddle_w, max_deflection):
    relative = clamp((ball.x - (paddle_x + paddle_w/2)) / (paddle_w/2), -1.0, 1.0)
    ball.vx = relative * max_deflection
    ball.vy = -ball.vy
    return relative


def ball_column(ball):
    # one pixel wide strip through the ball's x covering its vertical extent
    return pygame.Rect(math.floor(ball.x), math.floor(ball.y - ball.r), 1, max(1, round(2*ball.r)))


def overlaps(rect, ball):
    return rect.colliderect(ball_column(ball))


def wrap_cell(cell, cols, rows):
    return (cell[0] % cols, cell[1] % rows)
