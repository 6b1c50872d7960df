"""Progress store: the user record and game progress, kept as JSON under two keys.

Layout of the stored documents::

    bh_user     -> {"username", "email", "avatarId", "joinedAt" (epoch millis)}
    bh_progress -> {"completedLevels": [int], "score", "streak", "lives"}

Any backend failure is logged and swallowed; callers keep their in-memory
state and carry on as if nothing had been persisted.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from flask_login import UserMixin

from .models import StoredValue, db

logger = logging.getLogger(__name__)

USER_KEY = "bh_user"
PROGRESS_KEY = "bh_progress"

AVATAR_IDS = range(1, 6)
INITIAL_LIVES = 3


def _now_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class User(UserMixin):
    username: str
    email: str = ""
    avatar_id: int = 1
    joined_at: int = field(default_factory=_now_millis)

    def __post_init__(self):
        if not isinstance(self.username, str) or not isinstance(self.email or "", str):
            raise ValueError("Username and email must be text.")
        self.username = (self.username or "").strip()
        self.email = (self.email or "").strip()
        if not self.username:
            raise ValueError("Username is required.")
        if self.avatar_id not in AVATAR_IDS:
            raise ValueError(f"Avatar must be between {AVATAR_IDS.start} and {AVATAR_IDS.stop - 1}.")

    def get_id(self):
        return self.username

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "email": self.email,
            "avatarId": self.avatar_id,
            "joinedAt": self.joined_at,
        }

    @classmethod
    def from_dict(cls, d: dict) -> User:
        return cls(
            username=d.get("username", ""),
            email=d.get("email") or "",
            avatar_id=int(d.get("avatarId", 1)),
            joined_at=int(d.get("joinedAt") or _now_millis()),
        )


@dataclass
class Progress:
    completed_levels: set[int] = field(default_factory=set)
    score: int = 0
    streak: int = 0
    lives: int = INITIAL_LIVES

    def to_dict(self) -> dict:
        return {
            "completedLevels": sorted(self.completed_levels),
            "score": self.score,
            "streak": self.streak,
            "lives": self.lives,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Progress:
        lives = d.get("lives")
        return cls(
            completed_levels={int(i) for i in d.get("completedLevels") or []},
            score=int(d.get("score") or 0),
            streak=int(d.get("streak") or 0),
            lives=INITIAL_LIVES if lives is None else int(lives),
        )


# -----------------------------------------------------------------------------
# Backends
# -----------------------------------------------------------------------------
class MemoryBackend:
    """Dict-backed storage, used by tests and offline sessions."""

    def __init__(self, data: Optional[dict] = None):
        self.data = data if data is not None else {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def rollback(self):
        pass


class DatabaseBackend:
    """Storage rows scoped to one browser (``owner`` is its client id)."""

    def __init__(self, owner: str):
        self.owner = owner

    def _row(self, key):
        return StoredValue.query.filter_by(owner=self.owner, key=key).first()

    def get(self, key):
        row = self._row(key)
        return row.value if row else None

    def set(self, key, value):
        row = self._row(key)
        if row is None:
            db.session.add(StoredValue(owner=self.owner, key=key, value=value))
        else:
            row.value = value
        db.session.commit()

    def delete(self, key):
        row = self._row(key)
        if row is not None:
            db.session.delete(row)
            db.session.commit()

    def rollback(self):
        db.session.rollback()


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------
class ProgressStore:
    def __init__(self, backend):
        self.backend = backend

    def _read(self, key):
        raw = self.backend.get(key)
        return json.loads(raw) if raw else None

    def _write(self, key, doc):
        self.backend.set(key, json.dumps(doc))

    def _recover(self):
        try:
            self.backend.rollback()
        except Exception:
            logger.exception("Rollback after storage failure also failed")

    def load_user(self) -> Optional[User]:
        try:
            doc = self._read(USER_KEY)
            return User.from_dict(doc) if doc else None
        except Exception:
            logger.exception("Failed to load user")
            self._recover()
            return None

    def save_user(self, user: User) -> None:
        try:
            self._write(USER_KEY, user.to_dict())
        except Exception:
            logger.exception("Failed to save user")
            self._recover()

    def logout_user(self) -> None:
        """Forget the identity; progress stays for the next sign-in."""
        try:
            self.backend.delete(USER_KEY)
        except Exception:
            logger.exception("Failed to clear user")
            self._recover()

    def load_progress(self) -> Optional[Progress]:
        try:
            doc = self._read(PROGRESS_KEY)
            return Progress.from_dict(doc) if doc else None
        except Exception:
            logger.exception("Failed to load progress")
            self._recover()
            return None

    def save_progress(self, completed_levels: Iterable[int], state) -> None:
        progress = Progress(
            completed_levels=set(completed_levels),
            score=state.score,
            streak=state.streak,
            lives=state.lives,
        )
        try:
            self._write(PROGRESS_KEY, progress.to_dict())
        except Exception:
            logger.exception("Failed to save progress")
            self._recover()
