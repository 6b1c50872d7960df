"""Game session state machine: score, streak, lives and level navigation.

A ``GameSession`` is the single owner of one player's ``GameState``. Every
event from the view layer (line clicked, level picked, language switched)
maps to one method here and runs to completion before the next one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from levels import DEFAULT_SEED, Language, Level, find_level, first_level, next_level

from .store import INITIAL_LIVES, Progress, ProgressStore, User

logger = logging.getLogger(__name__)

BASE_POINTS = 100
STREAK_BONUS = 50
MISS_PENALTY = 50


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAMEOVER = "gameover"
    LEVEL_COMPLETE = "level-complete"


class UnknownLevel(LookupError):
    """Level id not in the active language's catalog."""


@dataclass
class GameState:
    score: int = 0
    streak: int = 0
    lives: int = INITIAL_LIVES
    current_level_id: Optional[int] = None
    game_status: GameStatus = GameStatus.IDLE

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "streak": self.streak,
            "lives": self.lives,
            "currentLevelId": self.current_level_id,
            "gameStatus": self.game_status.value,
        }


@dataclass
class GuessResult:
    correct: bool
    points: int
    level: Level
    game_over: bool = False


@dataclass
class GameSession:
    language: Language
    state: GameState = field(default_factory=GameState)
    completed_levels: set[int] = field(default_factory=set)
    selected_line: Optional[int] = None
    load_token: int = 0
    store: Optional[ProgressStore] = None  # saves only while a user is attached
    user: Optional[User] = None
    seed: str = DEFAULT_SEED

    @classmethod
    def restore(cls, language, progress: Optional[Progress] = None, **kwargs) -> GameSession:
        """Build a session from persisted progress (or a fresh one)."""
        session = cls(language=Language(language), **kwargs)
        if progress is not None:
            session.completed_levels = set(progress.completed_levels)
            session.state.score = max(0, progress.score)
            session.state.streak = max(0, progress.streak)
            session.state.lives = max(0, progress.lives)
        return session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find(self, level_id) -> Optional[Level]:
        return find_level(self.language, level_id, self.seed)

    @property
    def current_level(self) -> Optional[Level]:
        if self.state.current_level_id is None:
            return None
        return self.find(self.state.current_level_id)

    @property
    def is_over(self) -> bool:
        return self.state.game_status == GameStatus.GAMEOVER

    def is_current(self, token: int) -> bool:
        """False once a newer level load has superseded ``token``."""
        return token == self.load_token

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self) -> Level:
        """Enter play on the first level of the active language."""
        return self._load(first_level(self.language, self.seed))

    def select_level(self, level_id: int) -> Level:
        level = self.find(level_id)
        if level is None:
            raise UnknownLevel(level_id)
        return self._load(level)

    def retry(self) -> Optional[Level]:
        level = self.current_level
        if level is None:
            return None
        return self._load(level)

    def change_language(self, language) -> Level:
        """Jump to the first level of ``language``; score, streak and lives carry over."""
        self.language = Language(language)
        return self._load(first_level(self.language, self.seed))

    def advance_level(self) -> Optional[Level]:
        """Move to the next catalog level; None when the language is exhausted."""
        if self.current_level is None:
            return self.start()
        level = next_level(self.language, self.state.current_level_id, self.seed)
        if level is None:
            logger.info("All %s levels played through", self.language.value)
            return None
        return self._load(level)

    def guess_line(self, line: int) -> Optional[GuessResult]:
        """Score a clicked line. Ignored unless a level is being played."""
        level = self.current_level
        if self.state.game_status != GameStatus.PLAYING or level is None:
            return None

        self.selected_line = line
        state = self.state
        if line == level.bug_line:
            points = BASE_POINTS + STREAK_BONUS * state.streak
            state.score += points
            state.streak += 1
            state.game_status = GameStatus.LEVEL_COMPLETE
            self.completed_levels.add(level.id)
            result = GuessResult(correct=True, points=points, level=level)
        else:
            before = state.score
            state.lives = max(0, state.lives - 1)
            state.streak = 0
            state.score = max(0, state.score - MISS_PENALTY)
            if state.lives == 0:
                state.game_status = GameStatus.GAMEOVER
                logger.info("Out of lives on level %s", level.id)
            result = GuessResult(
                correct=False,
                points=state.score - before,
                level=level,
                game_over=state.lives == 0,
            )
        self._persist()
        return result

    def restart(self) -> Level:
        """Explicit session reset: fresh score, streak and lives; completions kept."""
        self.state.score = 0
        self.state.streak = 0
        self.state.lives = INITIAL_LIVES
        self.state.game_status = GameStatus.IDLE
        level = self.current_level or first_level(self.language, self.seed)
        return self._load(level)

    def _load(self, level: Level) -> Level:
        self.state.current_level_id = level.id
        self.selected_line = None
        self.load_token += 1
        if self.state.lives == 0:
            self.state.game_status = GameStatus.GAMEOVER
        else:
            self.state.game_status = GameStatus.PLAYING
        self._persist()
        return level

    def _persist(self):
        if self.store is not None and self.user is not None:
            self.store.save_progress(self.completed_levels, self.state)

    def to_dict(self) -> dict:
        level = self.current_level
        return {
            "language": self.language.value,
            "state": self.state.to_dict(),
            "level": level.to_dict(include_answer=False) if level else None,
            "selectedLine": self.selected_line,
            "loadToken": self.load_token,
            "completedLevels": sorted(self.completed_levels),
        }
