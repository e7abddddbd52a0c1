# Window, board and settings for the arcade.
# Settings live in a small JSON file next to the scores; missing keys take defaults.

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pygame

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 900, 720
BOARD_W, BOARD_H = 800, 600
BOARD_POS = ((WIDTH - BOARD_W)//2, 90)
FPS = 60
FRAME_CLAMP_MS = 40

DATA_DIR = Path(".")
SCORES_FILE = DATA_DIR / "arcade_scores.json"
SETTINGS_FILE = DATA_DIR / "arcade_settings.json"

COLS = {
    "bg":(12,14,24),"panel":(24,28,44),"accent":(245,188,66),
    "white":(235,235,235),"muted":(150,150,160),"danger":(220,80,80),
    "good":(80,200,120),"neon":(57,255,20),"food":(255,107,107),
    "board":(0,0,0),"brick_edge":(7,16,34)
}

# defaults
DEFAULT_KEYS = {
    "pause": pygame.K_p,
    "back": pygame.K_ESCAPE,
    "select": pygame.K_RETURN,
    "up": pygame.K_UP,
    "down": pygame.K_DOWN,
}
DEFAULT_SETTINGS = {
    "fps": FPS,
    "frame_clamp_ms": FRAME_CLAMP_MS,
    "pong_max_score": 7,
    "breakout_lives": 3,
    "keys": DEFAULT_KEYS,
}


# load / save helpers
def load_json(path, default):
    try:
        if path.exists():
            return json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        logger.warning("could not read %s, using defaults: %s", path, exc)
    return default


def save_json(path, data):
    try:
        path.write_text(json.dumps(data, indent=2))
    except OSError as exc:
        logger.warning("could not write %s: %s", path, exc)


@dataclass(frozen=True)
class Settings:
    """Validated arcade settings.

    Values come from ``arcade_settings.json`` merged over ``DEFAULT_SETTINGS``.
    """

    fps: int = FPS
    frame_clamp_ms: int = FRAME_CLAMP_MS
    pong_max_score: int = 7
    breakout_lives: int = 3
    keys: dict = field(default_factory=lambda: dict(DEFAULT_KEYS))

    @classmethod
    def from_dict(cls, data):
        merged = dict(DEFAULT_SETTINGS)
        if isinstance(data, dict):
            merged.update({k: v for k, v in data.items() if k in DEFAULT_SETTINGS})
        keys = dict(DEFAULT_KEYS)
        if isinstance(merged["keys"], dict):
            keys.update({k: int(v) for k, v in merged["keys"].items() if k in DEFAULT_KEYS})
        return cls(
            fps=max(1, int(merged["fps"])),
            frame_clamp_ms=max(1, int(merged["frame_clamp_ms"])),
            pong_max_score=max(1, int(merged["pong_max_score"])),
            breakout_lives=max(1, int(merged["breakout_lives"])),
            keys=keys,
        )

    def to_dict(self):
        return {
            "fps": self.fps,
            "frame_clamp_ms": self.frame_clamp_ms,
            "pong_max_score": self.pong_max_score,
            "breakout_lives": self.breakout_lives,
            "keys": dict(self.keys),
        }


def load_settings(path=SETTINGS_FILE):
    try:
        return Settings.from_dict(load_json(path, {}))
    except (TypeError, ValueError) as exc:
        logger.warning("bad settings in %s, using defaults: %s", path, exc)
        return Settings()


def save_settings(settings, path=SETTINGS_FILE):
    save_json(path, settings.to_dict())
