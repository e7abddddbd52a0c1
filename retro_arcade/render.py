# Text drawing and fonts. Fonts are created lazily so importing needs no display.

import pygame

from .config import COLS

_FONTS = {}
SIZES = {"small": 14, "normal": 18, "big": 34, "xl": 44}


def font(name="normal"):
    if name not in _FONTS:
        if not pygame.font.get_init():
            pygame.font.init()
        _FONTS[name] = pygame.font.SysFont("consolas", SIZES[name])
    return _FONTS[name]


def draw_text(surf, txt, x, y, size="normal", color=None, center=False):
    color = color or COLS["white"]
    r = font(size).render(txt, True, color)
    rect = r.get_rect()
    if center:
        rect.center = (x,y)
    else:
        rect.topleft = (x,y)
    surf.blit(r, rect)
    return rect
