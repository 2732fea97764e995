"""
Unit tests for editorial slot selection.
"""

from practice_catalog.schemas.practice import Editorial, FilterState, NormalizedPractice
from practice_catalog.search.editorial import layout_for, select_category_tiles, select_editorial


def _practice(slug, featured=False):
    return NormalizedPractice(slug=slug, is_featured=featured)


class TestSelectEditorial:
    """Tests for select_editorial."""

    def test_featured_becomes_hero(self):
        """The first featured practice is the hero; wide is the first other one."""
        a, b, c = _practice("a"), _practice("b", featured=True), _practice("c")
        editorial = select_editorial([a, b, c])

        assert editorial.hero is b
        assert editorial.wide is a
        assert editorial.daily_pick is c
        assert editorial.tile_right is None
        assert editorial.tile_bottom_left is None

    def test_no_featured(self):
        """Without a featured practice the list order decides."""
        practices = [_practice(s) for s in "abcdef"]
        editorial = select_editorial(practices)

        assert [
            editorial.hero.slug,
            editorial.wide.slug,
            editorial.daily_pick.slug,
            editorial.tile_right.slug,
            editorial.tile_bottom_left.slug,
        ] == ["a", "b", "c", "d", "e"]

    def test_first_featured_wins(self):
        """Only the first featured practice is promoted."""
        practices = [_practice("a"), _practice("b", True), _practice("c", True)]
        editorial = select_editorial(practices)
        assert editorial.hero.slug == "b"
        assert editorial.daily_pick.slug == "c"

    def test_no_practice_repeats(self):
        """Equal-looking practices are still distinct slot entries."""
        practices = [_practice("same"), _practice("same"), _practice("same")]
        editorial = select_editorial(practices)
        slots = [editorial.hero, editorial.wide, editorial.daily_pick]
        assert len({id(p) for p in slots}) == 3

    def test_single_and_empty(self):
        """Missing slots are None."""
        only = _practice("only")
        editorial = select_editorial([only])
        assert editorial.hero is only
        assert editorial.wide is None
        assert select_editorial([]) == Editorial()


class TestLayoutFor:
    """Tests for layout_for."""

    def test_visible_only_without_filters(self, sample_index):
        """Any active criterion hides the editorial layout."""
        assert layout_for(sample_index, FilterState()) is sample_index.editorial
        assert layout_for(sample_index, FilterState(query="   ")) is sample_index.editorial
        assert layout_for(sample_index, FilterState(active_category_key="nyak")) is None
        assert layout_for(sample_index, FilterState(active_preset="video")) is None


class TestSelectCategoryTiles:
    """Tests for select_category_tiles."""

    def test_cms_order_with_counts(self, sample_categories):
        """Tiles follow the category list order, not the sorted catalog."""
        counts = {"nyak": 2, "derek": 1}
        tiles = select_category_tiles(sample_categories, counts)

        assert [t.category.key for t in tiles] == ["nyak", "derek", "agyek"]
        assert [t.count for t in tiles] == [2, 1, 0]

    def test_fewer_than_three(self, create_category):
        """Short category lists give fewer tiles."""
        tiles = select_category_tiles([create_category("Nyak")], {})
        assert len(tiles) == 1
        assert select_category_tiles([], {}) == []
        assert select_category_tiles(None, {}) == []

    def test_duplicate_key_first_wins(self):
        """A repeated key keeps the first record and frees the slot."""
        categories = [
            {"name": "Nyak", "slug": "nyak"},
            {"name": "Nyak (copy)", "slug": "nyak"},
            {"slug": "unnamed"},
            {"name": "Váll", "slug": "vall"},
        ]
        tiles = select_category_tiles(categories, {"nyak": 1})
        assert [(t.category.name, t.count) for t in tiles] == [("Nyak", 1), ("Váll", 0)]

    def test_limit(self):
        """At most three tiles by default."""
        categories = [{"name": f"C{i}", "slug": f"c{i}"} for i in range(5)]
        assert len(select_category_tiles(categories, {})) == 3
        assert len(select_category_tiles(categories, {}, limit=1)) == 1

    def test_tiles_carried_by_editorial(self):
        """select_editorial keeps the tiles even without practices."""
        tiles = select_category_tiles([{"name": "Nyak", "slug": "nyak"}], {})
        assert select_editorial([], tiles).category_tiles == tiles
        assert select_editorial([_practice("a")], tiles).category_tiles == tiles
