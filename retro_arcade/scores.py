# High scores and end-of-game results.

import enum
import logging
from dataclasses import dataclass

from .config import SCORES_FILE, load_json, save_json

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    WIN = "win"
    LOSE = "lose"
    NONE = "none"


@dataclass(frozen=True)
class GameResult:
    outcome: Outcome
    final_score: int
    high_score: bool = False


class ScoreStore:
    """In-memory best score per game key."""
    def __init__(self, scores=None):
        self.scores = {k: int(v) for k, v in (scores or {}).items()}

    def get(self, key):
        return self.scores.get(key, 0)

    def set(self, key, value):
        self.scores[key] = int(value)


class JsonScoreStore(ScoreStore):
    """Best scores persisted to ``arcade_scores.json`` on every write."""
    def __init__(self, path=SCORES_FILE):
        self.path = path
        data = load_json(path, {})
        if not isinstance(data, dict):
            logger.warning("ignoring malformed score file %s", path)
            data = {}
        super().__init__({k: v for k, v in data.items() if isinstance(v, int)})

    def set(self, key, value):
        super().set(key, value)
        save_json(self.path, self.scores)


class ScoreSink:
    """Where sessions send live HUD text and their single final result.

    ``display`` receives plain strings such as ``"Score: 3"``; ``notifier``
    receives the ``GameResult``. Both are optional.
    """
    def __init__(self, store=None, notifier=None, display=None):
        self.store = store if store is not None else ScoreStore()
        self.notifier = notifier
        self.display = display

    def show(self, text):
        if self.display:
            self.display(text)

    def report(self, key, outcome, final_score):
        best = self.store.get(key)
        record = final_score > best
        if record:
            self.store.set(key, final_score)
            logger.info("new high score for %s: %d (was %d)", key, final_score, best)
        result = GameResult(outcome, final_score, record)
        logger.info("%s finished: %s, score %d", key, outcome.value, final_score)
        if self.notifier:
            self.notifier(result)
        return result
