"""
Seller list query filters.

A single :class:`SellerFilter` value describes every filtered list query
the repository supports, so the repository needs one generic list
operation instead of one per field.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional, Union

from pydantic import BaseModel, model_validator


class SellerFilterField(StrEnum):
    """Seller attributes a list query can filter on.

    Values are the snake_case column names shared by the remote table and
    the local cache.
    """

    TITLE = "title"
    DESCRIPTION = "description"
    LOCATION_TITLE = "location_title"
    RESULT_TITLE = "result_title"
    SELLER_CATEGORY_ID = "seller_category_id"
    RESULT_CATEGORY_ID = "result_category_id"
    FOOD_CATEGORY_ID = "food_category_id"

    @property
    def is_text(self) -> bool:
        """``True`` for free-text fields matched by substring."""
        return self in _TEXT_FIELDS


_TEXT_FIELDS: frozenset[SellerFilterField] = frozenset({
    SellerFilterField.TITLE,
    SellerFilterField.DESCRIPTION,
    SellerFilterField.LOCATION_TITLE,
    SellerFilterField.RESULT_TITLE,
})


class SellerFilter(BaseModel):
    """One filtered list query.

    Text fields take an optional string; ``None`` means "no constraint"
    and returns every seller.  Category fields require an integer id.
    """

    field: SellerFilterField
    value: Union[int, str, None] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_value_type(self) -> "SellerFilter":
        if self.field.is_text:
            if self.value is not None and not isinstance(self.value, str):
                raise ValueError(f"{self.field} filter expects a string, got {self.value!r}")
        elif isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{self.field} filter expects an integer id, got {self.value!r}")
        return self

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}"

    # -- Constructors ---------------------------------------------------------

    @classmethod
    def by_title(cls, title: Optional[str]) -> "SellerFilter":
        return cls(field=SellerFilterField.TITLE, value=title)

    @classmethod
    def by_description(cls, description: Optional[str]) -> "SellerFilter":
        return cls(field=SellerFilterField.DESCRIPTION, value=description)

    @classmethod
    def by_location_title(cls, location_title: Optional[str]) -> "SellerFilter":
        return cls(field=SellerFilterField.LOCATION_TITLE, value=location_title)

    @classmethod
    def by_result_title(cls, result_title: Optional[str]) -> "SellerFilter":
        return cls(field=SellerFilterField.RESULT_TITLE, value=result_title)

    @classmethod
    def by_seller_category_id(cls, seller_category_id: int) -> "SellerFilter":
        return cls(field=SellerFilterField.SELLER_CATEGORY_ID, value=seller_category_id)

    @classmethod
    def by_result_category_id(cls, result_category_id: int) -> "SellerFilter":
        return cls(field=SellerFilterField.RESULT_CATEGORY_ID, value=result_category_id)

    @classmethod
    def by_food_category_id(cls, food_category_id: int) -> "SellerFilter":
        return cls(field=SellerFilterField.FOOD_CATEGORY_ID, value=food_category_id)
