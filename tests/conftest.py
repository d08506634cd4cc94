"""Shared pytest fixtures."""
from __future__ import annotations

import io
import re
from types import SimpleNamespace
from typing import Optional

import pytest

from sellerhub.config import reset_config
from sellerhub.database import IN_MEMORY, DatabaseManager
from sellerhub.logger import StructuredLogger
from sellerhub.models.seller import Seller, SellerDto
from sellerhub.models.seller_filter import SellerFilter
from sellerhub.repositories.seller_repository import SellerRepository
from sellerhub.schema import initialize_schema
from sellerhub.sources.seller_dao import SellerDao


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Fresh configuration per test: offline, no log file, cache in tmp."""
    for key in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SELLERS_TABLE", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOG_FILE", "")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "cache.db"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def logger(request) -> StructuredLogger:
    name = re.sub(r"\W", "_", request.node.name)
    return StructuredLogger(name=f"sellerhub.tests.{name}", stream=io.StringIO(), log_file="")


@pytest.fixture
def db(logger):
    manager = DatabaseManager(
        supabase_url="",
        supabase_key="",
        sqlite_path=IN_MEMORY,
        logger=logger,
    )
    initialize_schema(manager.sqlite, logger)
    yield manager
    manager.close()


@pytest.fixture
def dao(db, logger) -> SellerDao:
    return SellerDao(db=db, logger=logger)


class FakeRemote:
    """In-memory stand-in for ``SellerApi``.

    ``fail_with`` makes every call raise that exception; ``calls`` records
    the operations in order.
    """

    def __init__(self) -> None:
        self.sellers: dict[int, SellerDto] = {}
        self.fail_with: Optional[BaseException] = None
        self.calls: list[str] = []
        self._next_id = 100

    def add(self, *dtos: SellerDto) -> None:
        for dto in dtos:
            self.sellers[dto.id] = dto

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def insert(self, dto: SellerDto) -> SellerDto:
        self._enter("insert")
        created = dto.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self.sellers[created.id] = created
        return created

    def fetch_all(self) -> list[SellerDto]:
        self._enter("fetch_all")
        return [self.sellers[key] for key in sorted(self.sellers)]

    def fetch_by_id(self, seller_id: int) -> SellerDto:
        self._enter("fetch_by_id")
        if seller_id not in self.sellers:
            raise LookupError(f"Seller {seller_id} not found")
        return self.sellers[seller_id]

    def fetch_by_filter(self, seller_filter: SellerFilter) -> list[SellerDto]:
        self._enter("fetch_by_filter")
        field = seller_filter.field.value
        matches = []
        for dto in self.fetch_all():
            actual = getattr(dto, field)
            if seller_filter.field.is_text:
                wanted = seller_filter.value
                if wanted is None or (actual and str(wanted).lower() in actual.lower()):
                    matches.append(dto)
            elif actual == seller_filter.value:
                matches.append(dto)
        return matches

    def update(self, seller_id: int, dto: SellerDto) -> SellerDto:
        self._enter("update")
        updated = dto.model_copy(update={"id": seller_id})
        self.sellers[seller_id] = updated
        return updated


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def repository(remote, dao, logger) -> SellerRepository:
    return SellerRepository(remote=remote, cache=dao, logger=logger)


def make_dto(seller_id: int, title: str, **fields) -> SellerDto:
    return SellerDto(id=seller_id, title=title, **fields)


def make_seller(title: str, seller_id: Optional[int] = None, **fields) -> Seller:
    return Seller(id=seller_id, title=title, **fields)


class FakeQuery:
    """Chainable stand-in for a PostgREST request builder."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self._client = client
        self._client.calls.append(("table", table))

    def _record(self, *call) -> "FakeQuery":
        self._client.calls.append(call)
        return self

    def select(self, *columns):
        return self._record("select", *columns)

    def insert(self, payload):
        return self._record("insert", payload)

    def update(self, payload):
        return self._record("update", payload)

    def eq(self, column, value):
        return self._record("eq", column, value)

    def ilike(self, column, pattern):
        return self._record("ilike", column, pattern)

    def order(self, column, desc=False):
        return self._record("order", column)

    def limit(self, count):
        return self._record("limit", count)

    def execute(self):
        self._client.calls.append(("execute",))
        if self._client.raise_on_execute is not None:
            raise self._client.raise_on_execute
        return SimpleNamespace(data=self._client.data)


class FakeSupabase:
    """Minimal Supabase client: ``table()`` plus a canned response."""

    def __init__(self, data=None) -> None:
        self.data = data if data is not None else []
        self.raise_on_execute: Optional[BaseException] = None
        self.calls: list[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def online_db(logger, fake_supabase):
    manager = DatabaseManager(
        supabase_url="",
        supabase_key="",
        sqlite_path=IN_MEMORY,
        logger=logger,
        supabase_client=fake_supabase,
    )
    initialize_schema(manager.sqlite, logger)
    yield manager
    manager.close()
