"""Shared utility functions for the SellerHub package.

Convenience re-exports so consumers can import directly from
``sellerhub.utils`` (e.g. ``from sellerhub.utils import normalize_keys``).
"""

from sellerhub.utils.string_helpers import (
    JsonValue,
    denormalize_keys,
    normalize_keys,
    sanitize_postgrest_value,
    to_camel_case,
    to_snake_case,
)

__all__ = [
    "JsonValue",
    "denormalize_keys",
    "normalize_keys",
    "sanitize_postgrest_value",
    "to_camel_case",
    "to_snake_case",
]
