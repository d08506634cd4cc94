"""Tests for domain / cache / wire conversions."""
from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from sellerhub.mappers import (
    dto_from_row,
    dto_to_entity,
    dto_to_payload,
    dto_to_seller,
    entity_to_seller,
    seller_to_dto,
    seller_to_entity,
)
from sellerhub.models.seller import Seller, SellerDto, SellerEntity


def _seller() -> Seller:
    return Seller(
        id=7,
        title="Pizza Roma",
        description="Wood-fired",
        location_title="Tehran",
        result_title="Best pizza",
        seller_category_id=1,
        result_category_id=2,
        food_category_id=3,
        rating=4.5,
    )


class TestRoundTrip:

    def test_domain_survives_cache_form(self):
        seller = _seller()
        assert entity_to_seller(seller_to_entity(seller)) == seller

    def test_domain_survives_wire_form(self):
        seller = _seller()
        assert dto_to_seller(seller_to_dto(seller)) == seller

    def test_cache_timestamp_does_not_leak(self):
        entity = SellerEntity(id=1, title="A", cached_at=datetime(2024, 1, 1))
        assert "cached_at" not in entity_to_seller(entity).model_dump()
        assert dto_to_entity(SellerDto(id=1, title="A")).cached_at is None


class TestWireFormat:

    def test_payload_is_camel_case_without_id(self):
        payload = dto_to_payload(seller_to_dto(_seller()))
        assert "id" not in payload
        assert payload["locationTitle"] == "Tehran"
        assert payload["sellerCategoryId"] == 1
        assert payload["isActive"] is True

    def test_payload_can_include_id(self):
        assert dto_to_payload(SellerDto(id=9, title="A"), include_id=True)["id"] == 9

    def test_row_is_read_from_camel_case(self):
        dto = dto_from_row({
            "id": 3,
            "title": "Kebab House",
            "locationTitle": "Shiraz",
            "foodCategoryId": 8,
            "createdAt": "2024-01-01T00:00:00Z",
        })
        assert dto.id == 3
        assert dto.location_title == "Shiraz"
        assert dto.food_category_id == 8


class TestRatingBounds:
    """Every layer accepts the same ratings, so mapping between them cannot fail."""

    @pytest.mark.parametrize("model", [Seller, SellerDto, SellerEntity])
    @pytest.mark.parametrize("rating", [-1.0, 7.0])
    def test_out_of_range_rating_is_rejected(self, model, rating):
        with pytest.raises(ValidationError):
            model(id=1, title="A", rating=rating)

    @pytest.mark.parametrize("rating", [0.0, 5.0, None])
    def test_boundary_ratings_map_through_every_layer(self, rating):
        dto = SellerDto(id=1, title="A", rating=rating)
        assert dto_to_seller(dto).rating == rating
        assert entity_to_seller(dto_to_entity(dto)).rating == rating
