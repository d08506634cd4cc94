"""
ServiceResult — the state contract between the repository and its callers.

A discriminated union of three frozen models tagged by ``kind``:

- :class:`Loading` — a request is in flight (``is_loading=True``) or has
  finished (``is_loading=False``).
- :class:`Success` — carries the payload, which may be ``None`` (e.g. an
  empty cache).
- :class:`Error` — carries a human-readable message.  ``data`` is always
  ``None``.

Consumers branch with ``match`` and close the match with
``typing.assert_never`` so a new variant is a type error, not a silent
fall-through::

    match result:
        case Loading(is_loading=flag):
            spinner.set(flag)
        case Success(data=sellers):
            render(sellers)
        case Error(message=message):
            toast(message)
        case _:
            assert_never(result)
"""

from __future__ import annotations

from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class Loading(BaseModel):
    kind: Literal["loading"] = "loading"
    is_loading: bool = True

    model_config = {"frozen": True}

    @property
    def data(self) -> None:
        return None


class Success(BaseModel, Generic[T]):
    kind: Literal["success"] = "success"
    data: Optional[T] = None

    model_config = {"frozen": True}


class Error(BaseModel):
    kind: Literal["error"] = "error"
    message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def data(self) -> None:
        return None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Error":
        """Build an ``Error`` whose message is never empty."""
        return cls(message=str(exc) or type(exc).__name__)


ServiceResult = Union[Loading, Success[T], Error]
"""Alias: ``ServiceResult[list[Seller]]`` reads like the generic it stands for."""


def is_terminal(result: ServiceResult[T]) -> bool:
    """``True`` for states after which a stream emits nothing more."""
    return isinstance(result, Error) or (
        isinstance(result, Loading) and not result.is_loading
    )
