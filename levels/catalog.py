"""Per-language level catalog: hand-authored levels topped up with generated ones.

The order returned by :func:`levels_for` is the "next level" sequence:
hand-authored levels in authored order, then generated levels by id.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from .data import GENERATED_ID_OFFSET, HAND_AUTHORED_LEVELS, LEVEL_QUOTA
from .generator import generate_level, level_rng
from .models import Language, Level

DEFAULT_SEED = "bughunt"


def _check_hand_authored_ids():
    ids = [level.id for level in HAND_AUTHORED_LEVELS]
    if len(ids) != len(set(ids)):
        raise RuntimeError("hand-authored level ids must be unique")
    if ids and max(ids) >= GENERATED_ID_OFFSET:
        raise RuntimeError(
            f"hand-authored ids must stay below the generated offset {GENERATED_ID_OFFSET}"
        )


_check_hand_authored_ids()


@lru_cache(maxsize=None)
def _catalog(language: Language, seed: str) -> tuple[Level, ...]:
    authored = [level for level in HAND_AUTHORED_LEVELS if level.language == language]
    needed = LEVEL_QUOTA - len(authored)
    generated = [
        generate_level(language, GENERATED_ID_OFFSET + i, level_rng(seed, language, GENERATED_ID_OFFSET + i))
        for i in range(max(0, needed))
    ]
    return tuple(authored + generated)


def levels_for(language: Language, seed: str = DEFAULT_SEED) -> list[Level]:
    """All levels for ``language``; ``max(hand-authored, LEVEL_QUOTA)`` of them."""
    return list(_catalog(Language(language), str(seed)))


def find_level(language: Language, level_id: int, seed: str = DEFAULT_SEED) -> Optional[Level]:
    for level in _catalog(Language(language), str(seed)):
        if level.id == level_id:
            return level
    return None


def first_level(language: Language, seed: str = DEFAULT_SEED) -> Level:
    return _catalog(Language(language), str(seed))[0]


def next_level(language: Language, level_id: int, seed: str = DEFAULT_SEED) -> Optional[Level]:
    """Level after ``level_id`` in catalog order, or None at the end."""
    levels = _catalog(Language(language), str(seed))
    for index, level in enumerate(levels):
        if level.id == level_id:
            return levels[index + 1] if index + 1 < len(levels) else None
    return None
