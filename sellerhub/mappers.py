"""
Seller Mappers.

Pure conversions between the domain, cache and wire representations.
The three models share field names, so each mapper is a field copy that
drops whatever the target layer does not carry (``cached_at`` never leaves
the cache).
"""

from __future__ import annotations

from collections.abc import Mapping

from sellerhub.models.seller import Seller, SellerDto, SellerEntity
from sellerhub.utils.string_helpers import JsonValue, denormalize_keys, normalize_keys

_CACHE_ONLY_FIELDS: frozenset[str] = frozenset({"cached_at"})


def seller_to_entity(seller: Seller) -> SellerEntity:
    return SellerEntity(**seller.model_dump())


def entity_to_seller(entity: SellerEntity) -> Seller:
    return Seller(**entity.model_dump(exclude=_CACHE_ONLY_FIELDS))


def entity_to_dto(entity: SellerEntity) -> SellerDto:
    return SellerDto(**entity.model_dump(exclude=_CACHE_ONLY_FIELDS))


def dto_to_entity(dto: SellerDto) -> SellerEntity:
    return SellerEntity(**dto.model_dump())


def seller_to_dto(seller: Seller) -> SellerDto:
    """Domain → wire, by way of the cache form (the path writes take)."""
    return entity_to_dto(seller_to_entity(seller))


def dto_to_seller(dto: SellerDto) -> Seller:
    """Wire → domain, by way of the cache form (the path reads take)."""
    return entity_to_seller(dto_to_entity(dto))


def dto_from_row(row: Mapping[str, JsonValue]) -> SellerDto:
    """Build a DTO from a camelCase row returned by the remote API."""
    return SellerDto(**normalize_keys(dict(row)))


def dto_to_payload(dto: SellerDto, *, include_id: bool = False) -> dict[str, JsonValue]:
    """Serialise a DTO to the camelCase JSON body the remote API expects.

    The id is omitted by default: inserts let the server assign it and
    updates carry it in the filter, not the body.
    """
    exclude = None if include_id else {"id"}
    return denormalize_keys(dto.model_dump(mode="json", exclude=exclude))
