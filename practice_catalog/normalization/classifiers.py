"""
Preset Classifier.

The single home of the duration / difficulty / video / featured heuristics
used both for preset counts and for live filtering, so the two can never
disagree.
"""

import re
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional, Tuple

from practice_catalog.configs.config import Config
from practice_catalog.normalization.media import has_video
from practice_catalog.normalization.text import fold
from practice_catalog.schemas.practice import (
    DifficultyLevel,
    NormalizedPractice,
    Preset,
    PresetStats,
)

DEFAULT_SHORT_MAX_MINUTES = 10

_DURATION_PATTERN = re.compile(r"(\d+)\s*(p|perc|min)", re.IGNORECASE)

_FALSY_STRINGS = {"", "0", "false", "no", "off", "null", "none"}

__all__ = [
    "classify_difficulty",
    "compute_preset_stats",
    "has_video",
    "is_featured",
    "is_short",
    "matches_preset",
    "parse_duration_minutes",
]


# =============================================================================
# DURATION
# =============================================================================


def parse_duration_minutes(text: Any) -> Optional[int]:
    """
    Parse minutes from a free-text duration ("5p", "20 perc", "15 min").

    Returns:
        Minutes as int, or None when no number + unit is present
    """
    if text is None:
        return None
    match = _DURATION_PATTERN.search(str(text))
    return int(match.group(1)) if match else None


def is_short(minutes: Optional[int], threshold: int = DEFAULT_SHORT_MAX_MINUTES) -> bool:
    return minutes is not None and minutes <= threshold


# =============================================================================
# DIFFICULTY
# =============================================================================


@lru_cache
def _difficulty_keywords() -> Tuple[Tuple[DifficultyLevel, Tuple[str, ...]], ...]:
    configured = Config.get_difficulty_keywords()
    out = []
    for level in (DifficultyLevel.EASY, DifficultyLevel.MID, DifficultyLevel.HARD):
        keywords = tuple(fold(k) for k in configured.get(level.value, []) if fold(k))
        out.append((level, keywords))
    return tuple(out)


def classify_difficulty(text: Any) -> DifficultyLevel:
    """
    Map a free-text difficulty value to a level.

    Buckets are checked easy -> mid -> hard; the first with a keyword hit wins.

    Example:
        >>> classify_difficulty("Könnyű")
        <DifficultyLevel.EASY: 'easy'>
        >>> classify_difficulty("Mittel")
        <DifficultyLevel.MID: 'mid'>
    """
    value = fold(text)
    if not value:
        return DifficultyLevel.UNKNOWN

    for level, keywords in _difficulty_keywords():
        if any(k in value for k in keywords):
            return level
    return DifficultyLevel.UNKNOWN


# =============================================================================
# FEATURED
# =============================================================================


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY_STRINGS
    return bool(value)


def is_featured(record: Any) -> bool:
    """
    True when the first present featured-style field is truthy.

    Field names are tried in configured order (featured, is_featured,
    highlighted, isHighlighted); ``None`` counts as absent.
    """
    if not isinstance(record, dict):
        return False
    for field in Config.get_featured_fields():
        value = record.get(field)
        if value is not None:
            return _truthy(value)
    return False


# =============================================================================
# PRESETS
# =============================================================================


def matches_preset(
    practice: NormalizedPractice,
    preset: Any,
    short_max_minutes: int = DEFAULT_SHORT_MAX_MINUTES,
) -> bool:
    """Preset predicate; the empty preset matches everything."""
    preset = Preset.parse(preset)

    if preset is Preset.NONE:
        return True
    if preset is Preset.SHORT:
        return is_short(practice.duration_minutes, short_max_minutes)
    if preset is Preset.VIDEO:
        return practice.is_video
    if preset is Preset.EASY:
        return practice.difficulty is DifficultyLevel.EASY
    if preset is Preset.MID:
        return practice.difficulty is DifficultyLevel.MID
    if preset is Preset.HARD:
        return practice.difficulty is DifficultyLevel.HARD
    return True


def compute_preset_stats(
    normalized: Iterable[NormalizedPractice],
    short_max_minutes: int = DEFAULT_SHORT_MAX_MINUTES,
) -> PresetStats:
    """
    Count practices per preset bucket in one pass.

    Uses ``matches_preset`` so every count equals the size of the
    corresponding filtered list.
    """
    counts: Dict[str, int] = {p.value: 0 for p in Preset if p is not Preset.NONE}
    total = 0
    for practice in normalized:
        total += 1
        for key in counts:
            if matches_preset(practice, Preset(key), short_max_minutes):
                counts[key] += 1
    return PresetStats(total=total, **counts)
