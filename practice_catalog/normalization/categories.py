"""
Category Index Builder.

Merges the explicit CMS category list with categories discovered on the
practices themselves, de-duplicated by category key (``slug or name``).
Explicit categories always win over discovered ones with the same key.
"""

import logging
from typing import Any, Dict, Iterable, List

from practice_catalog.normalization.strapi import unwrap, unwrap_relation
from practice_catalog.normalization.text import fold
from practice_catalog.schemas.practice import NormalizedPractice, PracticeCategory

logger = logging.getLogger(__name__)

_ID_FIELDS = ("id", "_id", "documentId", "slug", "name")


def normalize_category(raw: Any) -> PracticeCategory:
    """
    Convert one raw category record into a PracticeCategory.

    ``id`` falls back through id, _id, documentId, slug and name.
    """
    c = unwrap(raw)
    if not isinstance(c, dict):
        return PracticeCategory()

    cat_id = None
    for field in _ID_FIELDS:
        if c.get(field) is not None:
            cat_id = c[field]
            break

    return PracticeCategory(
        id=cat_id,
        name=str(c.get("name") or ""),
        slug=str(c.get("slug") or ""),
    )


def extract_practice_categories(practice: Any) -> List[PracticeCategory]:
    """Categories attached to a practice record; unnamed ones are dropped."""
    p = unwrap(practice)
    if not isinstance(p, dict):
        return []
    cats = [normalize_category(c) for c in unwrap_relation(p.get("categories"))]
    return [c for c in cats if c.name]


def collation_key(cat: PracticeCategory) -> tuple:
    """
    Locale-aware sort key: accent- and case-insensitive name first, then the
    raw name and key so that equal-looking names still order deterministically.
    """
    return (fold(cat.name), cat.name, cat.key)


def _canonical_by_key(
    categories: Iterable[PracticeCategory],
) -> Dict[str, PracticeCategory]:
    """
    One category per key. When several records share a key, the one with the
    smallest collation key (then id) is kept, independent of input order.
    """
    chosen: Dict[str, PracticeCategory] = {}
    for cat in categories:
        if not cat.name or not cat.key:
            continue
        current = chosen.get(cat.key)
        if current is None or (collation_key(cat), str(cat.id)) < (
            collation_key(current),
            str(current.id),
        ):
            chosen[cat.key] = cat
    return chosen


def build_category_catalog(
    categories: Any,
    practices: Any,
) -> List[PracticeCategory]:
    """
    Build the sorted category catalog.

    Args:
        categories: Explicit category records (CMS "Category" content type)
        practices: Practice records, scanned for attached categories

    Returns:
        Categories unique by key, sorted by name
    """
    categories = categories if isinstance(categories, list) else []
    practices = practices if isinstance(practices, list) else []

    explicit = _canonical_by_key(normalize_category(c) for c in categories)
    discovered = _canonical_by_key(
        cat for practice in practices for cat in extract_practice_categories(practice)
    )

    merged = dict(explicit)
    added = 0
    for key, cat in discovered.items():
        if key not in merged:
            merged[key] = cat
            added += 1

    if added:
        logger.debug(f"Discovered {added} categories on practices not in the category list")

    return sorted(merged.values(), key=collation_key)


def build_label_lookup(cats: Iterable[PracticeCategory]) -> Dict[str, str]:
    """Map category key -> display name."""
    return {c.key: c.name for c in cats if c.key}


def count_by_category(normalized: Iterable[NormalizedPractice]) -> Dict[str, int]:
    """Number of practices in each category key."""
    counts: Dict[str, int] = {}
    for practice in normalized:
        for key in practice.cat_keys:
            counts[key] = counts.get(key, 0) + 1
    return counts


def quick_categories(
    cats: List[PracticeCategory], limit: int = 24
) -> List[PracticeCategory]:
    """The leading slice of the catalog shown as quick-filter chips."""
    return cats[: max(limit, 0)]
