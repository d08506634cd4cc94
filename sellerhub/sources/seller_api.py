"""
Seller API — the remote source.

Talks to the ``sellers`` table through the Supabase PostgREST client.
Rows on the wire use camelCase column names; conversion to and from
:class:`SellerDto` happens here so nothing above this layer sees them.

Every failure leaves this class as a :class:`RemoteSourceError`:

- no client (offline mode), ``httpx.TransportError`` and ``OSError``
  become :class:`TransportError`;
- anything else (PostgREST ``APIError``, malformed rows, a missing
  record) becomes :class:`UnexpectedError`.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import httpx
from pydantic import ValidationError

from sellerhub.database import DatabaseManager
from sellerhub.exceptions import RemoteSourceError, TransportError, UnexpectedError
from sellerhub.logger import StructuredLogger
from sellerhub.mappers import dto_from_row, dto_to_payload
from sellerhub.models.seller import SellerDto
from sellerhub.models.seller_filter import SellerFilter
from sellerhub.sources.base_source import BaseSource
from sellerhub.utils.string_helpers import sanitize_postgrest_value, to_camel_case

T = TypeVar("T")


class SellerApi(BaseSource):
    """Remote data source for Seller records."""

    TABLE = "sellers"

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: str = "",
    ) -> None:
        super().__init__(db, logger, table)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(self, dto: SellerDto) -> SellerDto:
        """Create a seller and return the server's canonical copy (with its id)."""
        def _op() -> SellerDto:
            response = self.supabase.table(self.TABLE).insert(dto_to_payload(dto)).execute()
            return self._single(response.data, "insert")

        return self._call("insert", _op)

    def fetch_all(self) -> list[SellerDto]:
        def _op() -> list[SellerDto]:
            response = self.supabase.table(self.TABLE).select("*").order("id").execute()
            return [dto_from_row(row) for row in response.data or []]

        return self._call("fetch_all", _op)

    def fetch_by_id(self, seller_id: int) -> SellerDto:
        def _op() -> SellerDto:
            response = (
                self.supabase.table(self.TABLE)
                .select("*")
                .eq("id", seller_id)
                .limit(1)
                .execute()
            )
            if not response.data:
                raise UnexpectedError(
                    f"Seller {seller_id} not found", operation="fetch_by_id"
                )
            return dto_from_row(response.data[0])

        return self._call("fetch_by_id", _op)

    def fetch_by_filter(self, seller_filter: SellerFilter) -> list[SellerDto]:
        """Fetch sellers matching one filter.

        Text filters match case-insensitively on a substring; a ``None``
        text value applies no constraint.  Category filters match exactly.
        """
        column = to_camel_case(seller_filter.field.value)

        def _op() -> list[SellerDto]:
            query = self.supabase.table(self.TABLE).select("*")
            if seller_filter.field.is_text:
                if seller_filter.value is not None:
                    term = sanitize_postgrest_value(str(seller_filter.value))
                    query = query.ilike(column, f"%{term}%")
            else:
                query = query.eq(column, seller_filter.value)
            response = query.order("id").execute()
            return [dto_from_row(row) for row in response.data or []]

        return self._call(f"fetch_by_filter ({seller_filter})", _op)

    def update(self, seller_id: int, dto: SellerDto) -> SellerDto:
        def _op() -> SellerDto:
            response = (
                self.supabase.table(self.TABLE)
                .update(dto_to_payload(dto))
                .eq("id", seller_id)
                .execute()
            )
            return self._single(response.data, "update")

        return self._call("update", _op)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _call(self, operation: str, op: Callable[[], T]) -> T:
        """Run *op* and translate whatever it raises into a ``RemoteSourceError``."""
        if not self._db.is_online:
            raise TransportError(
                "Remote seller source unavailable: running in offline mode",
                operation=operation,
            )
        try:
            return op()
        except RemoteSourceError:
            raise
        except (httpx.TransportError, OSError) as exc:
            raise TransportError(
                f"{operation} failed: {_describe(exc)}", operation=operation
            ) from exc
        except ValidationError as exc:
            raise UnexpectedError(
                f"{operation} returned a malformed seller: {exc.error_count()} error(s)",
                operation=operation,
            ) from exc
        except Exception as exc:
            raise UnexpectedError(
                f"{operation} failed: {_describe(exc)}", operation=operation
            ) from exc

    @staticmethod
    def _single(rows: list[dict] | None, operation: str) -> SellerDto:
        if not rows:
            raise UnexpectedError(
                f"{operation} returned no seller", operation=operation
            )
        return dto_from_row(rows[0])


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
