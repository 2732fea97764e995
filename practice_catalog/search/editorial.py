"""
Editorial Selector.

Lays out the filter-free default grid: a hero, a wide card, three practice
tiles and three category tiles. Selection depends only on the order and
content of the indexed practices and the explicit category list.
"""

from typing import Any, Dict, List, Optional, Sequence

from practice_catalog.normalization.categories import normalize_category
from practice_catalog.schemas.practice import (
    CatalogIndex,
    CategoryTile,
    Editorial,
    FilterState,
    NormalizedPractice,
)

CATEGORY_TILE_COUNT = 3


def select_category_tiles(
    categories: Any,
    category_counts: Dict[str, int],
    limit: int = CATEGORY_TILE_COUNT,
) -> List[CategoryTile]:
    """
    The leading explicit categories for the editorial grid.

    Unlike the sorted catalog, tiles follow the CMS order of the category
    list; the first record per key wins and unnamed ones are skipped.

    Args:
        categories: Raw explicit category records
        category_counts: Practice count per category key
        limit: Number of tiles

    Returns:
        Up to ``limit`` tiles, each with its practice count (0 when unused)
    """
    if not isinstance(categories, list):
        return []

    tiles: List[CategoryTile] = []
    seen = set()
    for raw in categories:
        if len(tiles) >= limit:
            break
        cat = normalize_category(raw)
        if not cat.name or not cat.key or cat.key in seen:
            continue
        seen.add(cat.key)
        tiles.append(CategoryTile(category=cat, count=category_counts.get(cat.key, 0)))
    return tiles


def select_editorial(
    normalized: Sequence[NormalizedPractice],
    category_tiles: Optional[List[CategoryTile]] = None,
) -> Editorial:
    """
    Assign editorial slots.

    - hero: first featured practice, else the first practice
    - wide: first practice that is not the hero
    - daily_pick, tile_right, tile_bottom_left: the rest, in order
    - category_tiles: passed through from ``select_category_tiles``

    Args:
        normalized: Indexed practices in CMS order
        category_tiles: Category tiles for the grid

    Returns:
        Editorial with unfilled slots set to None
    """
    category_tiles = category_tiles or []
    if not normalized:
        return Editorial(category_tiles=category_tiles)

    hero = next((p for p in normalized if p.is_featured), normalized[0])
    wide = next((p for p in normalized if p is not hero), None)
    pool: List[NormalizedPractice] = [
        p for p in normalized if p is not hero and p is not wide
    ]

    def slot(i: int) -> Optional[NormalizedPractice]:
        return pool[i] if i < len(pool) else None

    return Editorial(
        hero=hero,
        wide=wide,
        daily_pick=slot(0),
        tile_right=slot(1),
        tile_bottom_left=slot(2),
        category_tiles=category_tiles,
    )


def layout_for(index: CatalogIndex, state: FilterState) -> Optional[Editorial]:
    """The editorial layout, only while no filter is active."""
    if not state.is_empty:
        return None
    return index.editorial
