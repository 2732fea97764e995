"""
Filter Engine.

Recomputes the visible practice list from a ``FilterState``:

    category matches AND query is a substring of ``searchable`` AND preset matches

The result keeps the indexed (CMS) order. No ranking, no fuzzy matching.
The chip helpers implement single-select toggling: picking the active
category or preset again switches it off.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from practice_catalog.normalization.classifiers import (
    DEFAULT_SHORT_MAX_MINUTES,
    matches_preset,
)
from practice_catalog.schemas.practice import (
    CatalogIndex,
    FilterState,
    NormalizedPractice,
    Preset,
    PresetStats,
)

logger = logging.getLogger(__name__)

PRESET_LABEL_KEYS = {
    Preset.SHORT: "preset_short",
    Preset.EASY: "preset_easy",
    Preset.MID: "preset_mid",
    Preset.HARD: "preset_hard",
    Preset.VIDEO: "preset_video",
}

# Presets offered as one-click chips above the grid.
CHIP_PRESETS = (Preset.SHORT, Preset.EASY, Preset.VIDEO)


def matches(
    practice: NormalizedPractice,
    state: FilterState,
    short_max_minutes: int = DEFAULT_SHORT_MAX_MINUTES,
) -> bool:
    """Single-practice predicate for ``state``."""
    if state.active_category_key and state.active_category_key not in practice.cat_keys:
        return False
    query = state.normalized_query
    if query and query not in practice.searchable:
        return False
    return matches_preset(practice, state.active_preset, short_max_minutes)


def filter_practices(
    source: Union[CatalogIndex, Sequence[NormalizedPractice]],
    state: Optional[FilterState] = None,
    short_max_minutes: Optional[int] = None,
) -> List[NormalizedPractice]:
    """
    Apply a filter state to an index (or a list of indexed practices).

    Args:
        source: CatalogIndex or list of NormalizedPractice
        state: Filter state; None means no filter
        short_max_minutes: Override for the "short" threshold; defaults to
            the threshold the index was built with

    Returns:
        Matching practices in input order
    """
    state = state or FilterState()

    if isinstance(source, CatalogIndex):
        practices: Sequence[NormalizedPractice] = source.normalized
        threshold = source.short_max_minutes
    else:
        practices = source if isinstance(source, (list, tuple)) else []
        threshold = DEFAULT_SHORT_MAX_MINUTES
    if short_max_minutes is not None:
        threshold = short_max_minutes

    result = [p for p in practices if matches(p, state, threshold)]
    logger.debug(
        f"Filter query={state.normalized_query!r} category={state.active_category_key!r} "
        f"preset={state.active_preset.value!r} -> {len(result)}/{len(practices)}"
    )
    return result


# =============================================================================
# STATE TRANSITIONS
# =============================================================================


def set_query(state: FilterState, query: Optional[str]) -> FilterState:
    return state.model_copy(update={"query": query or ""})


def toggle_category(state: FilterState, key: Optional[str]) -> FilterState:
    """Select a category; selecting the active one (or an empty key) clears it."""
    key = key or ""
    new_key = "" if key == state.active_category_key else key
    return state.model_copy(update={"active_category_key": new_key})


def toggle_preset(state: FilterState, preset: Any) -> FilterState:
    """Select a preset; selecting the active one clears it."""
    preset = Preset.parse(preset)
    new_preset = Preset.NONE if preset is state.active_preset else preset
    return state.model_copy(update={"active_preset": new_preset})


def clear(state: Optional[FilterState] = None) -> FilterState:
    return FilterState()


# =============================================================================
# LABELS & CHIPS
# =============================================================================


def active_filter_count(state: FilterState) -> int:
    """Number of active criteria (query, category, preset)."""
    return (
        (1 if state.active_category_key else 0)
        + (1 if state.active_preset is not Preset.NONE else 0)
        + (1 if state.normalized_query else 0)
    )


def preset_label(preset: Any, labels: Mapping[str, str]) -> str:
    preset = Preset.parse(preset)
    key = PRESET_LABEL_KEYS.get(preset)
    return labels.get(key, preset.value) if key else ""


def active_label(
    state: FilterState,
    labels: Mapping[str, str],
    cat_label_by_key: Optional[Dict[str, str]] = None,
) -> str:
    """
    Heading for the current selection: "preset · category", either one alone,
    or the "all" label when neither is active.
    """
    cat_label_by_key = cat_label_by_key or {}
    p_label = preset_label(state.active_preset, labels)
    c_label = ""
    if state.active_category_key:
        c_label = cat_label_by_key.get(state.active_category_key) or state.active_category_key

    if p_label and c_label:
        return f"{p_label} · {c_label}"
    return p_label or c_label or labels.get("all", "")


def preset_chips(
    stats: PresetStats,
    labels: Mapping[str, str],
    presets: Sequence[Preset] = CHIP_PRESETS,
) -> List[Tuple[Preset, str, int]]:
    """(preset, label, count) for each chip, in display order."""
    return [(p, preset_label(p, labels), stats.count_for(p)) for p in presets]
