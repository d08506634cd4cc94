"""
String Helpers — Wire Naming Convention Converter.

The remote seller API speaks camelCase (``locationTitle``,
``sellerCategoryId``); the models and the SQLite cache use snake_case.
Every key conversion at the network boundary flows through here.
"""

from __future__ import annotations

import re
from typing import Union, overload

__all__ = [
    "JsonValue",
    "to_snake_case",
    "to_camel_case",
    "normalize_keys",
    "denormalize_keys",
    "sanitize_postgrest_value",
]

JsonValue = Union[
    str,
    int,
    float,
    bool,
    None,
    dict[str, "JsonValue"],
    list["JsonValue"],
]

# e.g. "URLValue" -> "URL_Value"
_RE_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")

# e.g. "locationTitle" -> "location_Title"
_RE_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")

_RE_MULTI_UNDERSCORE = re.compile(r"_+")


def to_snake_case(name: str) -> str:
    """Convert a camelCase, PascalCase, or mixed-case string to snake_case.

    ::

        locationTitle     -> location_title
        sellerCategoryId  -> seller_category_id
        ImageURL          -> image_url
        food_category_id  -> food_category_id
    """
    s1 = _RE_UPPER_RUN.sub(r"\1_\2", name)
    s2 = _RE_CAMEL_BOUNDARY.sub(r"\1_\2", s1)
    s3 = _RE_MULTI_UNDERSCORE.sub("_", s2)
    return s3.lower()


def to_camel_case(name: str) -> str:
    """Convert a snake_case string to lower camelCase.

    Leading underscores are dropped; a string without underscores is
    returned unchanged, so already-camelCase keys pass through.
    """
    head, *rest = name.lstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest if part)


@overload
def normalize_keys(data: dict[str, JsonValue]) -> dict[str, JsonValue]: ...


@overload
def normalize_keys(data: list[JsonValue]) -> list[JsonValue]: ...


@overload
def normalize_keys(data: JsonValue) -> JsonValue: ...


def normalize_keys(
    data: Union[dict[str, JsonValue], list[JsonValue], JsonValue],
) -> Union[dict[str, JsonValue], list[JsonValue], JsonValue]:
    """Recursively convert all dictionary keys to snake_case (inbound rows)."""
    if isinstance(data, dict):
        return {to_snake_case(k): normalize_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data


@overload
def denormalize_keys(data: dict[str, JsonValue]) -> dict[str, JsonValue]: ...


@overload
def denormalize_keys(data: list[JsonValue]) -> list[JsonValue]: ...


@overload
def denormalize_keys(data: JsonValue) -> JsonValue: ...


def denormalize_keys(
    data: Union[dict[str, JsonValue], list[JsonValue], JsonValue],
) -> Union[dict[str, JsonValue], list[JsonValue], JsonValue]:
    """Recursively convert all dictionary keys to camelCase (outbound payloads)."""
    if isinstance(data, dict):
        return {to_camel_case(k): denormalize_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [denormalize_keys(item) for item in data]
    return data


# Characters unsafe for PostgREST filter interpolation: commas (OR
# predicates), periods (operator separators), parentheses (grouping),
# percent/underscore (SQL wildcards), backslash (ILIKE escape), colon
# (cast syntax).  Letters in any script are kept: seller titles are
# frequently non-Latin.
_POSTGREST_UNSAFE_RE: re.Pattern[str] = re.compile(r"[^\w\s\-]|_")


def sanitize_postgrest_value(value: str) -> str:
    """Strip characters unsafe for PostgREST ``ilike`` interpolation.

    Keeps letters and digits of any script, whitespace, and hyphens.
    """
    return _POSTGREST_UNSAFE_RE.sub("", value)
