"""
Seller Repository.

Synchronizes seller records between the remote API and the on-device
cache and reports progress as :data:`ServiceResult` states.

Reads
    ``get_sellers()`` serves the cache first, then refreshes it from the
    network and serves the fresh list.  Filtered queries go to the
    network only and never touch the cache.

Writes
    ``insert_seller`` / ``update_seller`` write to the network first and
    mirror the server's copy into the cache only on success.

List operations are generators: each state is produced when the caller
asks for the next one, and the caller cancels by simply not iterating
further (or calling ``close()``).  A stream ends after ``Loading(False)``
or after an ``Error``.

No failure escapes a repository call.  Remote and cache errors are logged
with their traceback and returned as ``Error``.  The one exception is
``update_seller`` on a seller without an id, which is a caller bug and
raises ``ValueError``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional, Protocol

from pydantic import ValidationError

from sellerhub.exceptions import LocalCacheError
from sellerhub.logger import StructuredLogger
from sellerhub.mappers import dto_to_entity, dto_to_seller, entity_to_seller, seller_to_dto
from sellerhub.models.seller import Seller, SellerDto, SellerEntity
from sellerhub.models.seller_filter import SellerFilter
from sellerhub.models.service_result import Loading, ServiceResult, Success
from sellerhub.repositories.base_repository import BaseRepository


class SellerRemoteSource(Protocol):
    """What the repository needs from the remote API (see ``SellerApi``)."""

    def insert(self, dto: SellerDto) -> SellerDto: ...

    def fetch_all(self) -> list[SellerDto]: ...

    def fetch_by_id(self, seller_id: int) -> SellerDto: ...

    def fetch_by_filter(self, seller_filter: SellerFilter) -> list[SellerDto]: ...

    def update(self, seller_id: int, dto: SellerDto) -> SellerDto: ...


class SellerLocalCache(Protocol):
    """What the repository needs from the on-device cache (see ``SellerDao``)."""

    def fetch_all(self) -> list[SellerEntity]: ...

    def insert(self, entity: SellerEntity) -> SellerEntity: ...

    def replace_all(self, entities: Iterable[SellerEntity]) -> list[SellerEntity]: ...


SellerListStream = Iterator["ServiceResult[list[Seller]]"]


class SellerRepository(BaseRepository):
    """Cache-then-network access to Seller records."""

    def __init__(
        self,
        remote: SellerRemoteSource,
        cache: SellerLocalCache,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._remote = remote
        self._cache = cache

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def get_sellers(self) -> SellerListStream:
        """Stream all sellers: the cached list first, then the refreshed one.

        Emits ``Loading(True)``, ``Success(cached)``, ``Success(fresh)``,
        ``Loading(False)``.  On a remote failure the stream ends with
        ``Error`` right after the cached ``Success``, which stays valid, and
        the cache is left as it was.
        """
        yield Loading(is_loading=True)

        try:
            cached = [entity_to_seller(entity) for entity in self._cache.fetch_all()]
        except (LocalCacheError, ValidationError) as exc:
            yield self._failure("get_sellers (cache read)", exc)
            return
        yield Success(data=cached)

        try:
            entities = [dto_to_entity(dto) for dto in self._remote.fetch_all()]
        except Exception as exc:
            yield self._failure("get_sellers", exc)
            return

        try:
            fresh = [entity_to_seller(entity) for entity in self._cache.replace_all(entities)]
        except (LocalCacheError, ValidationError) as exc:
            yield self._failure("get_sellers (cache refresh)", exc)
            return

        self._logger.info(
            "Seller cache refreshed: %d cached, %d fetched.", len(cached), len(fresh)
        )
        yield Success(data=fresh)
        yield Loading(is_loading=False)

    def get_sellers_by(self, seller_filter: SellerFilter) -> SellerListStream:
        """Stream sellers matching *seller_filter*, straight from the network.

        Emits ``Loading(True)``, ``Success(sellers)``, ``Loading(False)``,
        or ``Loading(True)``, ``Error``.  There is no cache fallback.
        """
        yield Loading(is_loading=True)

        try:
            sellers = [dto_to_seller(dto) for dto in self._remote.fetch_by_filter(seller_filter)]
        except Exception as exc:
            yield self._failure(f"get_sellers_by ({seller_filter})", exc)
            return

        self._logger.debug("Fetched %d seller(s) for %s.", len(sellers), seller_filter)
        yield Success(data=sellers)
        yield Loading(is_loading=False)

    def get_sellers_by_title(self, title: Optional[str]) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_title(title))

    def get_sellers_by_description(self, description: Optional[str]) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_description(description))

    def get_sellers_by_location_title(self, location_title: Optional[str]) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_location_title(location_title))

    def get_sellers_by_result_title(self, result_title: Optional[str]) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_result_title(result_title))

    def get_sellers_by_seller_category_id(self, seller_category_id: int) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_seller_category_id(seller_category_id))

    def get_sellers_by_result_category_id(self, result_category_id: int) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_result_category_id(result_category_id))

    def get_sellers_by_food_category_id(self, food_category_id: int) -> SellerListStream:
        return self.get_sellers_by(SellerFilter.by_food_category_id(food_category_id))

    # ------------------------------------------------------------------
    # Single-shot operations
    # ------------------------------------------------------------------

    def get_seller_by_id(self, seller_id: int) -> ServiceResult[Seller]:
        """Fetch one seller from the network.  The cache is not consulted."""
        try:
            seller = dto_to_seller(self._remote.fetch_by_id(seller_id))
        except Exception as exc:
            return self._failure(f"get_seller_by_id ({seller_id})", exc)
        return Success(data=seller)

    def insert_seller(self, seller: Seller) -> ServiceResult[Seller]:
        """Create *seller* remotely, then cache the server's copy.

        The returned seller is the cache's read-back of what it stored, so
        it carries the server-assigned id.  Nothing is cached when the
        remote insert fails.
        """
        try:
            created = dto_to_entity(self._remote.insert(seller_to_dto(seller)))
        except Exception as exc:
            return self._failure("insert_seller", exc)

        try:
            stored = entity_to_seller(self._cache.insert(created))
        except (LocalCacheError, ValidationError) as exc:
            return self._failure(f"insert_seller (cache write {created.id})", exc)

        self._logger.info("Seller %s inserted.", stored.id)
        return Success(data=stored)

    def update_seller(self, seller: Seller) -> ServiceResult[bool]:
        """Update *seller* remotely, then upsert the server's copy into the cache.

        Other cached sellers are kept.  Nothing is cached when the remote
        update fails.

        Raises:
            ValueError: If ``seller.id`` is ``None``.
        """
        if seller.id is None:
            raise ValueError("update_seller requires a seller with an id")

        try:
            updated = dto_to_entity(self._remote.update(seller.id, seller_to_dto(seller)))
        except Exception as exc:
            return self._failure(f"update_seller ({seller.id})", exc)

        try:
            self._cache.insert(updated)
        except LocalCacheError as exc:
            return self._failure(f"update_seller (cache write {seller.id})", exc)

        self._logger.info("Seller %s updated.", seller.id)
        return Success(data=True)
