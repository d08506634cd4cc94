"""Tests for wire key conversion helpers."""
from __future__ import annotations

import pytest

from sellerhub.utils.string_helpers import (
    denormalize_keys,
    normalize_keys,
    sanitize_postgrest_value,
    to_camel_case,
    to_snake_case,
)


class TestCaseConversion:

    @pytest.mark.parametrize(
        "camel, snake",
        [
            ("locationTitle", "location_title"),
            ("sellerCategoryId", "seller_category_id"),
            ("ImageURL", "image_url"),
            ("title", "title"),
            ("food_category_id", "food_category_id"),
        ],
    )
    def test_to_snake_case(self, camel, snake):
        assert to_snake_case(camel) == snake

    @pytest.mark.parametrize(
        "snake, camel",
        [
            ("location_title", "locationTitle"),
            ("seller_category_id", "sellerCategoryId"),
            ("id", "id"),
            ("isActive", "isActive"),
        ],
    )
    def test_to_camel_case(self, snake, camel):
        assert to_camel_case(snake) == camel


class TestKeyNormalization:

    def test_normalize_is_recursive(self):
        data = {"resultTitle": "x", "tags": [{"foodCategoryId": 1}]}
        assert normalize_keys(data) == {
            "result_title": "x",
            "tags": [{"food_category_id": 1}],
        }

    def test_denormalize_leaves_values_untouched(self):
        data = {"location_title": "north_side", "rating": 4.5}
        assert denormalize_keys(data) == {"locationTitle": "north_side", "rating": 4.5}

    def test_scalars_pass_through(self):
        assert normalize_keys(5) == 5
        assert denormalize_keys(None) is None


class TestSanitize:

    def test_strips_postgrest_operators(self):
        assert sanitize_postgrest_value("pizza,(id.eq.1)%") == "pizzaideq1"

    def test_keeps_non_latin_letters(self):
        assert sanitize_postgrest_value("کافه تهران") == "کافه تهران"

    def test_strips_underscore_wildcard(self):
        assert sanitize_postgrest_value("a_b-c") == "ab-c"
