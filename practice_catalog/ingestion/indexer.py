"""
Practice Indexer.

Turns raw CMS practice/category lists into an immutable ``CatalogIndex``.

``build_index`` is pure: the same inputs always give an equal index, and any
change to the inputs means a full rebuild. Memoization is left to the caller
through ``IndexCache``, keyed by a content fingerprint of the inputs.
"""

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from practice_catalog.configs.settings import Settings, get_settings
from practice_catalog.normalization.cards import (
    coerce_cards,
    find_difficulty_card,
    pick_icon_cards,
    select_kpis,
)
from practice_catalog.normalization.categories import (
    build_category_catalog,
    build_label_lookup,
    count_by_category,
    extract_practice_categories,
)
from practice_catalog.normalization.classifiers import (
    classify_difficulty,
    compute_preset_stats,
    is_featured,
    parse_duration_minutes,
)
from practice_catalog.normalization.media import extract_thumb, has_video
from practice_catalog.normalization.strapi import get_text, unwrap, unwrap_media
from practice_catalog.schemas.practice import CatalogIndex, NormalizedPractice
from practice_catalog.search.editorial import select_category_tiles, select_editorial

logger = logging.getLogger(__name__)


def normalize_practice(
    raw: Any,
    cat_label_by_key: Optional[Dict[str, str]] = None,
    kpi_limit: int = 4,
) -> NormalizedPractice:
    """
    Normalize one raw practice record.

    Args:
        raw: Practice record in any Strapi envelope
        cat_label_by_key: Category key -> display name, for the primary label
        kpi_limit: Maximum number of extra footer cards

    Returns:
        NormalizedPractice
    """
    cat_label_by_key = cat_label_by_key or {}
    p = unwrap(raw)
    if not isinstance(p, dict):
        p = {}

    name = get_text(p, "name")
    slug = get_text(p, "slug")
    description = get_text(p, "practice.description", "description")

    cards = coerce_cards(p.get("practice_card"))
    card_text = " ".join(c.text for c in cards if c.text)
    searchable = f"{name} {description} {card_text}".lower()

    cat_keys = [c.key for c in extract_practice_categories(p) if c.key]
    primary_cat = cat_keys[0] if cat_keys else None
    primary_cat_label = cat_label_by_key.get(primary_cat) if primary_cat else None

    icon_cards = pick_icon_cards(cards)
    difficulty_card = find_difficulty_card(cards, icon_cards)
    clock_value = icon_cards.clock.value if icon_cards.clock else None
    difficulty_value = difficulty_card.value if difficulty_card else None

    return NormalizedPractice(
        slug=slug,
        name=name,
        description=description,
        searchable=searchable,
        cat_keys=cat_keys,
        primary_cat=primary_cat,
        primary_cat_label=primary_cat_label,
        cards=cards,
        icon_cards=icon_cards,
        difficulty_card=difficulty_card,
        kpis=select_kpis(cards, icon_cards, kpi_limit),
        thumb=extract_thumb(p),
        is_video=has_video(unwrap_media(p.get("media"))),
        is_featured=is_featured(p),
        duration_minutes=parse_duration_minutes(clock_value),
        difficulty=classify_difficulty(difficulty_value),
        raw=p,
    )


def _as_list(value: Any, name: str) -> List[Any]:
    if isinstance(value, list):
        return value
    if value:
        logger.debug(f"Expected a list for {name}, got {type(value).__name__}; treating as empty")
    return []


def build_index(
    practices: Any,
    categories: Any,
    settings: Optional[Settings] = None,
) -> CatalogIndex:
    """
    Build the catalog index from raw CMS lists.

    Args:
        practices: Raw practice records (CMS order is preserved)
        categories: Raw category records
        settings: Thresholds and limits (defaults to ``get_settings()``)

    Returns:
        CatalogIndex snapshot
    """
    settings = settings or get_settings()
    practices = _as_list(practices, "practices")
    categories = _as_list(categories, "categories")

    cats = build_category_catalog(categories, practices)
    cat_label_by_key = build_label_lookup(cats)

    normalized = []
    for raw in practices:
        if not isinstance(unwrap(raw), dict):
            logger.debug(f"Skipping malformed practice record: {raw!r}")
            continue
        normalized.append(normalize_practice(raw, cat_label_by_key, settings.KPI_LIMIT))

    category_counts = count_by_category(normalized)
    tiles = select_category_tiles(categories, category_counts)

    index = CatalogIndex(
        cats=cats,
        cat_label_by_key=cat_label_by_key,
        normalized=normalized,
        preset_stats=compute_preset_stats(normalized, settings.SHORT_MAX_MINUTES),
        editorial=select_editorial(normalized, tiles),
        category_counts=category_counts,
        short_max_minutes=settings.SHORT_MAX_MINUTES,
    )

    logger.info(
        f"Indexed {len(normalized)} practices across {len(cats)} categories "
        f"({len(practices) - len(normalized)} skipped)"
    )
    return index


def fingerprint(practices: Any, categories: Any, settings: Optional[Settings] = None) -> str:
    """
    Content fingerprint of the index inputs.

    Two calls with equal inputs (and equal thresholds) give the same value,
    regardless of object identity.
    """
    settings = settings or get_settings()
    payload = {
        "practices": practices,
        "categories": categories,
        "short_max_minutes": settings.SHORT_MAX_MINUTES,
        "kpi_limit": settings.KPI_LIMIT,
    }
    try:
        encoded = json.dumps(payload, sort_keys=True, default=str, ensure_ascii=False)
    except TypeError:
        # Mixed key types cannot be sorted; compare them as strings instead.
        logger.debug("Fingerprint inputs have mixed key types; stringifying keys")
        encoded = json.dumps(_stringify_keys(payload), sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(v) for v in value]
    return value


class IndexCache:
    """
    Caller-owned LRU cache of built indexes.

    Example:
        >>> cache = IndexCache(max_size=4)
        >>> index = cache.get(practices, categories)
    """

    def __init__(self, max_size: Optional[int] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.max_size = max_size or self.settings.INDEX_CACHE_SIZE
        self._entries: "OrderedDict[str, CatalogIndex]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, practices: Any, categories: Any) -> CatalogIndex:
        """Return the cached index for these inputs, building it on a miss."""
        key = fingerprint(practices, categories, self.settings)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached

        # Built outside the lock; a concurrent duplicate build yields an equal index.
        index = build_index(practices, categories, self.settings)

        with self._lock:
            self.misses += 1
            self._entries[key] = index
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted index {evicted[:12]} from cache")
        return index

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
