"""
Unit tests for rich_menu_manager/rich_menu_normalizer.py.

The layout editor emits floats for geometry; the normalizer rounds them
half away from zero and leaves every other value alone.
"""

import pytest

from rich_menu_manager.rich_menu_normalizer import (
    normalize_rich_menu_numbers,
    round_half_away_from_zero,
)

pytestmark = pytest.mark.unit


class TestRoundHalfAwayFromZero:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (10.5, 11),
            (-10.5, -11),
            (10.4, 10),
            (10.6, 11),
            (-10.4, -10),
            (0.5, 1),
            (2.5, 3),
            (0.49999999999999994, 0),
            (1249.9999, 1250),
            (2500.0, 2500),
            (1e300, int(1e300)),
        ],
    )
    def test_rounding(self, value, expected):
        result = round_half_away_from_zero(value)
        assert result == expected
        assert type(result) is int


class TestNormalizeSize:
    def test_float_size_becomes_int(self):
        document = {"size": {"width": 2500.0, "height": 1686.5}}
        normalize_rich_menu_numbers(document)
        assert document["size"] == {"width": 2500, "height": 1687}
        assert type(document["size"]["width"]) is int

    def test_integer_size_unchanged(self):
        document = {"size": {"width": 2500, "height": 843}}
        normalize_rich_menu_numbers(document)
        assert document["size"] == {"width": 2500, "height": 843}

    def test_only_present_keys_are_touched(self):
        document = {"size": {"width": 800.7}}
        normalize_rich_menu_numbers(document)
        assert document["size"] == {"width": 801}

    def test_non_numeric_width_passes_through(self):
        document = {"size": {"width": "wide", "height": 1686.2}}
        normalize_rich_menu_numbers(document)
        assert document["size"] == {"width": "wide", "height": 1686}

    def test_boolean_and_null_pass_through(self):
        document = {"size": {"width": True, "height": None}}
        normalize_rich_menu_numbers(document)
        assert document["size"]["width"] is True
        assert document["size"]["height"] is None

    def test_non_finite_float_passes_through(self):
        document = {"size": {"width": float("inf"), "height": 10.0}}
        normalize_rich_menu_numbers(document)
        assert document["size"]["width"] == float("inf")
        assert document["size"]["height"] == 10

    def test_size_that_is_not_a_mapping_is_ignored(self):
        document = {"size": [2500.5, 1686.5]}
        normalize_rich_menu_numbers(document)
        assert document["size"] == [2500.5, 1686.5]


class TestNormalizeAreas:
    def test_bounds_are_rounded_and_order_is_kept(self):
        document = {
            "areas": [
                {"bounds": {"x": 0.4, "y": 0.5, "width": 100.5, "height": 99.49}, "action": {"type": "message", "text": "a"}},
                {"bounds": {"x": 10.5, "y": 20, "width": 30.2, "height": 40.8}, "action": {"type": "message", "text": "b"}},
            ]
        }
        normalize_rich_menu_numbers(document)
        assert [area["bounds"] for area in document["areas"]] == [
            {"x": 0, "y": 1, "width": 101, "height": 99},
            {"x": 11, "y": 20, "width": 30, "height": 41},
        ]
        assert [area["action"]["text"] for area in document["areas"]] == ["a", "b"]

    def test_action_is_not_modified(self):
        action = {"type": "postback", "data": "n=1.5", "label": "x", "extra": 2.5}
        document = {"areas": [{"bounds": {"x": 1.5}, "action": dict(action)}]}
        normalize_rich_menu_numbers(document)
        assert document["areas"][0]["action"] == action

    def test_malformed_areas_are_skipped(self):
        document = {
            "areas": [
                "not-an-area",
                {"action": {"type": "message", "text": "no bounds"}},
                {"bounds": "nope"},
                {"bounds": {"x": 5.5}},
            ]
        }
        normalize_rich_menu_numbers(document)
        assert document["areas"][:3] == [
            "not-an-area",
            {"action": {"type": "message", "text": "no bounds"}},
            {"bounds": "nope"},
        ]
        assert document["areas"][3] == {"bounds": {"x": 6}}

    def test_areas_that_are_not_a_list_are_ignored(self):
        document = {"areas": {"bounds": {"x": 1.5}}}
        normalize_rich_menu_numbers(document)
        assert document["areas"] == {"bounds": {"x": 1.5}}


class TestNormalizeDocument:
    def test_absent_keys_stay_absent(self):
        document = {"name": "menu"}
        normalize_rich_menu_numbers(document)
        assert document == {"name": "menu"}

    def test_returns_same_object(self):
        document = {"size": {"width": 1.5}}
        assert normalize_rich_menu_numbers(document) is document

    def test_unrelated_numbers_are_left_alone(self):
        document = {"size": {"width": 2500.5}, "version": 1.5, "meta": {"x": 2.5}}
        normalize_rich_menu_numbers(document)
        assert document["version"] == 1.5
        assert document["meta"] == {"x": 2.5}
