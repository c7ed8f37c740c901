"""
Tests for app/taxonomy.py.

Covers:
  - build_hierarchy(): cumulative labels, de-duplication, "/" handling
  - process_categories(): validation errors, attribute flattening
"""
from __future__ import annotations

import pytest

from app.taxonomy import CategoryInputError, build_hierarchy, process_categories, split_path


# ── build_hierarchy ───────────────────────────────────────────────────────────

class TestBuildHierarchy:
    def test_levels_are_cumulative(self):
        h = build_hierarchy(["Jewelry > Earrings > Studs"])
        assert h == {
            "lvl0": ["Jewelry"],
            "lvl1": ["Jewelry > Earrings"],
            "lvl2": ["Jewelry > Earrings > Studs"],
        }

    def test_lvl0_is_distinct_top_segments_in_first_seen_order(self):
        h = build_hierarchy([
            "Home > Kitchen",
            "Jewelry > Rings",
            "Home > Garden",
            "Jewelry",
        ])
        assert h["lvl0"] == ["Home", "Jewelry"]
        assert h["lvl1"] == ["Home > Kitchen", "Jewelry > Rings", "Home > Garden"]

    def test_level_k_entries_have_k_plus_one_segments(self):
        h = build_hierarchy(["A > B > C > D", "A > X", "Q"])
        for key, values in h.items():
            depth = int(key[3:])
            for value in values:
                assert len(value.split(" > ")) == depth + 1

    def test_single_segment_only_populates_lvl0(self):
        assert build_hierarchy(["Toys"]) == {"lvl0": ["Toys"]}

    def test_segments_are_trimmed(self):
        assert build_hierarchy(["  Toys >Puzzles  "])["lvl1"] == ["Toys > Puzzles"]

    def test_slash_is_a_separator(self):
        assert build_hierarchy(["Home/Kitchen"])["lvl1"] == ["Home > Kitchen"]

    def test_only_first_slash_is_rewritten(self):
        assert split_path("Home/Audio/Video > Cables") == ["Home", "Audio/Video", "Cables"]

    def test_empty_input(self):
        assert build_hierarchy([]) == {}


# ── process_categories ────────────────────────────────────────────────────────

class TestProcessCategories:
    def test_empty_list_is_caller_error(self):
        with pytest.raises(CategoryInputError, match="No valid categories"):
            process_categories([], {})

    def test_not_a_list_is_caller_error(self):
        with pytest.raises(CategoryInputError, match="No valid categories"):
            process_categories({"type": "shape"}, {})

    def test_empty_attributes_names_the_category(self):
        with pytest.raises(CategoryInputError, match="'shape'"):
            process_categories([{"type": "shape", "attributes": []}], {})

    def test_missing_attributes_names_the_category(self):
        with pytest.raises(CategoryInputError, match="'color'"):
            process_categories([{"type": "color"}], {})

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            process_categories([], {})

    def test_flattens_attribute_values(self):
        record = {
            "collection": "Jewelry > Ear Cuffs",
            "tags": ["Jewelry > Rings", "Gifts/For Her"],
        }
        categories = [
            {"type": "collection", "attributes": ["collection"]},
            {"type": "tags", "attributes": ["tags", "missing"]},
        ]
        result = process_categories(categories, record)

        assert result.category_identifiers == [
            "Jewelry > Ear Cuffs",
            "Jewelry > Rings",
            "Gifts/For Her",
        ]
        assert result.hierarchical_categories == {
            "lvl0": ["Jewelry", "Gifts"],
            "lvl1": ["Jewelry > Ear Cuffs", "Jewelry > Rings", "Gifts > For Her"],
        }

    def test_missing_and_empty_values_contribute_nothing(self):
        record = {"a": "", "b": None, "c": []}
        result = process_categories([{"type": "t", "attributes": ["a", "b", "c", "d"]}], record)
        assert result.category_identifiers == []
        assert result.hierarchical_categories == {}

    def test_serializes_with_camel_case(self):
        result = process_categories([{"type": "t", "attributes": ["cat"]}], {"cat": "Toys"})
        assert result.model_dump(by_alias=True) == {
            "categoryIdentifiers": ["Toys"],
            "hierarchicalCategories": {"lvl0": ["Toys"]},
        }
