"""
Seller Models.

Three representations of the same record, one per layer:

- :class:`Seller` — domain model handed to and returned from the repository.
- :class:`SellerDto` — wire format exchanged with the remote API (camelCase keys).
- :class:`SellerEntity` — row stored in the local SQLite cache.

Conversions between them live in :mod:`sellerhub.mappers`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Seller(BaseModel):
    """A seller as seen by business logic and the UI layer.

    Instances are immutable; changes are expressed by building a new
    ``Seller`` with the same ``id`` and passing it to ``update_seller``.
    """

    id: Optional[int] = None
    title: str
    description: Optional[str] = None
    location_title: Optional[str] = None
    result_title: Optional[str] = None
    seller_category_id: Optional[int] = None
    result_category_id: Optional[int] = None
    food_category_id: Optional[int] = None
    image_url: Optional[str] = None
    phone_number: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True

    model_config = {"frozen": True, "from_attributes": True}


class SellerDto(BaseModel):
    """Remote API representation of a seller.

    Field names are snake_case in Python; the remote source converts
    payloads to and from camelCase at the network boundary.
    """

    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    location_title: Optional[str] = None
    result_title: Optional[str] = None
    seller_category_id: Optional[int] = None
    result_category_id: Optional[int] = None
    food_category_id: Optional[int] = None
    image_url: Optional[str] = None
    phone_number: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True

    model_config = {"extra": "ignore"}


class SellerEntity(BaseModel):
    """Local cache row.  ``cached_at`` is assigned by SQLite on insert."""

    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    location_title: Optional[str] = None
    result_title: Optional[str] = None
    seller_category_id: Optional[int] = None
    result_category_id: Optional[int] = None
    food_category_id: Optional[int] = None
    image_url: Optional[str] = None
    phone_number: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True
    cached_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
