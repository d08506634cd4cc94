"""
Seller DAO — the local cache.

Reads and writes :class:`SellerEntity` rows in the SQLite ``sellers``
table created by :func:`sellerhub.schema.initialize_schema`.  Inserts
replace any row with the same id, so the cache never holds two copies of
one seller.  Every read and write takes ``DatabaseManager.write_lock``.

``sqlite3.Error`` never escapes: it is logged and re-raised as
:class:`LocalCacheError`.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from typing import Optional

from pydantic import ValidationError

from sellerhub.database import DatabaseManager
from sellerhub.exceptions import LocalCacheError
from sellerhub.logger import StructuredLogger
from sellerhub.models.seller import SellerEntity
from sellerhub.sources.base_source import BaseSource

_COLUMNS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "location_title",
    "result_title",
    "seller_category_id",
    "result_category_id",
    "food_category_id",
    "image_url",
    "phone_number",
    "rating",
    "is_active",
)


class SellerDao(BaseSource):
    """Local SQLite cache of Seller records."""

    TABLE = "sellers"

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(db, logger)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def fetch_all(self) -> list[SellerEntity]:
        """Every cached seller, ordered by id.  Empty when nothing is cached.

        Reads take the write lock so a replace in progress on another
        thread is never seen half-applied.
        """
        with self._db.write_lock:
            try:
                rows = self.sqlite.execute(
                    f"SELECT * FROM {self.TABLE} ORDER BY id"
                ).fetchall()
            except sqlite3.Error as exc:
                raise self._cache_error("fetch_all", exc) from exc
        return [self._to_entity("fetch_all", row) for row in rows]

    def fetch_by_id(self, seller_id: int) -> Optional[SellerEntity]:
        with self._db.write_lock:
            try:
                row = self.sqlite.execute(
                    f"SELECT * FROM {self.TABLE} WHERE id = ?", (seller_id,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise self._cache_error("fetch_by_id", exc) from exc
        return self._to_entity("fetch_by_id", row) if row else None

    def count(self) -> int:
        with self._db.write_lock:
            try:
                row = self.sqlite.execute(f"SELECT COUNT(*) FROM {self.TABLE}").fetchone()
            except sqlite3.Error as exc:
                raise self._cache_error("count", exc) from exc
        return int(row[0])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, entity: SellerEntity) -> SellerEntity:
        """Insert (or replace by id) one seller and return the stored row.

        The returned entity is read back from SQLite, so it carries the
        storage-assigned ``cached_at`` (and ``id``, when the input had none).
        """
        with self._db.write_lock:
            try:
                cursor = self.sqlite.execute(self._insert_sql(), self._values(entity))
                row_id = entity.id if entity.id is not None else cursor.lastrowid
                self._commit()
            except sqlite3.Error as exc:
                raise self._cache_error("insert", exc) from exc

            stored = self.fetch_by_id(row_id)
        if stored is None:
            raise LocalCacheError(f"Seller {row_id} missing from cache after insert")
        return stored

    def insert_all(self, entities: Iterable[SellerEntity]) -> int:
        """Insert (or replace by id) many sellers.  Returns the number written."""
        values = [self._values(entity) for entity in entities]
        with self._db.write_lock:
            try:
                self.sqlite.executemany(self._insert_sql(), values)
                self._commit()
            except sqlite3.Error as exc:
                raise self._cache_error("insert_all", exc) from exc
        return len(values)

    def delete_all(self) -> None:
        with self._db.write_lock:
            try:
                self.sqlite.execute(f"DELETE FROM {self.TABLE}")
                self._commit()
            except sqlite3.Error as exc:
                raise self._cache_error("delete_all", exc) from exc

    def replace_all(self, entities: Iterable[SellerEntity]) -> list[SellerEntity]:
        """Make the cache hold exactly *entities*, atomically.

        Delete and insert run in one ``batch_write``: either the whole new
        set becomes visible or, on failure, the previous cache is restored
        by rollback.  Concurrent callers serialise on the write lock.
        Returns the cache content re-read after the commit.
        """
        entities = list(entities)
        with self._db.write_lock:
            try:
                with self._db.batch_write():
                    self.delete_all()
                    self.insert_all(entities)
            except sqlite3.Error as exc:
                # Commit failure inside batch_write itself.
                raise self._cache_error("replace_all", exc) from exc
            self._logger.info("Seller cache replaced with %d record(s).", len(entities))
            return self.fetch_all()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _insert_sql(self) -> str:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        return (
            f"INSERT OR REPLACE INTO {self.TABLE} ({', '.join(_COLUMNS)}, cached_at) "
            f"VALUES ({placeholders}, CURRENT_TIMESTAMP)"
        )

    @staticmethod
    def _values(entity: SellerEntity) -> tuple[object, ...]:
        data = entity.model_dump(include=set(_COLUMNS))
        data["is_active"] = int(data["is_active"])
        return tuple(data[column] for column in _COLUMNS)

    def _to_entity(self, operation: str, row: sqlite3.Row) -> SellerEntity:
        try:
            return SellerEntity(**dict(row))
        except ValidationError as exc:
            raise self._cache_error(operation, exc) from exc

    def _cache_error(
        self, operation: str, exc: sqlite3.Error | ValidationError
    ) -> LocalCacheError:
        self._logger.error("SQLite %s on %s failed: %s", operation, self.TABLE, exc)
        return LocalCacheError(f"Local seller cache {operation} failed: {exc}")
