"""
Unit tests for the filter engine and chip helpers.
"""

import itertools

import pytest

from practice_catalog.schemas.labels import get_labels
from practice_catalog.schemas.practice import FilterState, Preset
from practice_catalog.search.editorial import layout_for
from practice_catalog.search.filters import (
    active_filter_count,
    active_label,
    clear,
    filter_practices,
    preset_chips,
    preset_label,
    set_query,
    toggle_category,
    toggle_preset,
)


def _slugs(practices):
    return [p.slug for p in practices]


class TestFilterPractices:
    """Tests for filter_practices."""

    def test_empty_state_returns_everything(self, sample_index):
        """No active criteria keeps the whole list in CMS order."""
        result = filter_practices(sample_index, FilterState())
        assert _slugs(result) == _slugs(sample_index.normalized)
        assert filter_practices(sample_index) == result

    def test_query_is_case_insensitive_substring(self, sample_index):
        """The trimmed, lower-cased query is matched as a substring."""
        assert _slugs(filter_practices(sample_index, FilterState(query="nyak"))) == ["nyak-nyujtas"]
        assert _slugs(filter_practices(sample_index, FilterState(query="  NYÚJTÁS "))) == [
            "nyak-nyujtas"
        ]

    def test_query_matches_card_text(self, sample_index):
        """Card labels and values are searchable."""
        assert _slugs(filter_practices(sample_index, FilterState(query="20 perc"))) == [
            "derek-erosites"
        ]

    def test_category_filter(self, sample_index):
        """Any membership counts, not only the primary category."""
        assert _slugs(filter_practices(sample_index, FilterState(active_category_key="nyak"))) == [
            "nyak-nyujtas",
            "legzes",
        ]
        assert _slugs(filter_practices(sample_index, FilterState(active_category_key="vall"))) == [
            "derek-erosites"
        ]

    @pytest.mark.parametrize(
        "preset, expected",
        [
            (Preset.SHORT, ["nyak-nyujtas", "csipo-mobilizalas"]),
            (Preset.EASY, ["nyak-nyujtas"]),
            (Preset.MID, ["csipo-mobilizalas"]),
            (Preset.HARD, ["derek-erosites"]),
            (Preset.VIDEO, ["nyak-nyujtas"]),
        ],
    )
    def test_preset_filter(self, sample_index, preset, expected):
        """Each preset keeps its bucket."""
        assert _slugs(filter_practices(sample_index, FilterState(active_preset=preset))) == expected

    def test_criteria_compose_as_intersection(self, sample_index):
        """Combined criteria equal the intersection of the single-criterion results."""
        queries = ["", "nyak", "légzés"]
        categories = ["", "nyak", "derek"]
        presets = [Preset.NONE, Preset.SHORT, Preset.HARD]

        for query, cat, preset in itertools.product(queries, categories, presets):
            combined = filter_practices(
                sample_index,
                FilterState(query=query, active_category_key=cat, active_preset=preset),
            )
            by_query = set(_slugs(filter_practices(sample_index, FilterState(query=query))))
            by_cat = set(
                _slugs(filter_practices(sample_index, FilterState(active_category_key=cat)))
            )
            by_preset = set(
                _slugs(filter_practices(sample_index, FilterState(active_preset=preset)))
            )
            assert set(_slugs(combined)) == by_query & by_cat & by_preset

    def test_order_preserved(self, sample_index):
        """Results are an order-preserving subsequence of the index."""
        order = _slugs(sample_index.normalized)
        result = _slugs(filter_practices(sample_index, FilterState(active_preset="short")))
        assert result == [slug for slug in order if slug in result]

    def test_no_match_hides_editorial(self, sample_index):
        """A query with no hits returns nothing and the editorial layout is hidden."""
        state = FilterState(query="zzz-no-match")
        assert filter_practices(sample_index, state) == []
        assert layout_for(sample_index, state) is None
        assert layout_for(sample_index, FilterState()) is sample_index.editorial

    def test_plain_list_source(self, sample_index):
        """A list of practices can be filtered with an explicit threshold."""
        practices = list(sample_index.normalized)
        state = FilterState(active_preset="short")
        assert len(filter_practices(practices, state)) == 2
        assert len(filter_practices(practices, state, short_max_minutes=20)) == 3
        assert filter_practices(None, state) == []


class TestStateTransitions:
    """Tests for the single-select toggles."""

    def test_toggle_category(self):
        """Selecting the active category again clears it."""
        state = toggle_category(FilterState(), "nyak")
        assert state.active_category_key == "nyak"
        assert toggle_category(state, "derek").active_category_key == "derek"
        assert toggle_category(state, "nyak").active_category_key == ""
        assert toggle_category(state, None).active_category_key == ""

    def test_toggle_preset(self):
        """Selecting the active preset again clears it."""
        state = toggle_preset(FilterState(), "short")
        assert state.active_preset is Preset.SHORT
        assert toggle_preset(state, Preset.VIDEO).active_preset is Preset.VIDEO
        assert toggle_preset(state, "short").active_preset is Preset.NONE

    def test_toggle_preset_invalid(self):
        """Unknown presets are rejected."""
        with pytest.raises(ValueError):
            toggle_preset(FilterState(), "long")

    def test_set_query_and_clear(self):
        """set_query keeps the other criteria; clear resets everything."""
        state = FilterState(active_category_key="nyak")
        state = set_query(state, "nyújtás")
        assert state.query == "nyújtás"
        assert state.active_category_key == "nyak"
        assert set_query(state, None).query == ""
        assert clear(state) == FilterState()
        assert clear().is_empty

    def test_states_are_immutable(self):
        """Transitions return new states."""
        state = FilterState()
        toggle_category(state, "nyak")
        assert state.active_category_key == ""


class TestLabels:
    """Tests for active_filter_count, active_label and preset_chips."""

    def test_active_filter_count(self):
        """Whitespace-only queries do not count."""
        assert active_filter_count(FilterState()) == 0
        assert active_filter_count(FilterState(query="   ")) == 0
        assert (
            active_filter_count(
                FilterState(query=" x ", active_category_key="nyak", active_preset="easy")
            )
            == 3
        )

    def test_active_label(self, sample_index):
        """Preset and category labels are joined with a middle dot."""
        labels = get_labels("hu")
        lookup = sample_index.cat_label_by_key

        assert active_label(FilterState(), labels, lookup) == "Összes gyakorlat"
        assert active_label(FilterState(active_preset="short"), labels, lookup) == "Rövid rutinok"
        assert active_label(FilterState(active_category_key="derek"), labels, lookup) == "Derék"
        assert (
            active_label(
                FilterState(active_preset="short", active_category_key="derek"), labels, lookup
            )
            == "Rövid rutinok · Derék"
        )

    def test_active_label_unknown_category_uses_key(self):
        """A key without a label is shown as-is."""
        labels = get_labels("en")
        assert active_label(FilterState(active_category_key="foo"), labels, {}) == "foo"

    def test_preset_label(self):
        """The empty preset has no label."""
        labels = get_labels("en")
        assert preset_label(Preset.NONE, labels) == ""
        assert preset_label("video", labels) == "Video practices"

    def test_preset_chips(self, sample_index):
        """Chips carry the localized label and the preset count."""
        chips = preset_chips(sample_index.preset_stats, get_labels("hu"))
        assert chips == [
            (Preset.SHORT, "Rövid rutinok", 2),
            (Preset.EASY, "Kezdőknek", 1),
            (Preset.VIDEO, "Videós gyakorlatok", 1),
        ]
