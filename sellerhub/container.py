"""
Composition Root.

``create_container()`` opens the databases, bootstraps the cache schema
and wires the sources into the repository, returning a typed dict that
the application layer (CLI, UI) consumes without knowing the dependency
graph.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from supabase import Client as SupabaseClient

from sellerhub.config import AppConfig, get_config
from sellerhub.database import DatabaseManager
from sellerhub.logger import StructuredLogger, get_logger
from sellerhub.repositories.seller_repository import SellerRepository
from sellerhub.schema import initialize_schema
from sellerhub.sources.seller_api import SellerApi
from sellerhub.sources.seller_dao import SellerDao


class Container(TypedDict):
    """Typed container for the wired data-access layer."""

    config: AppConfig
    db: DatabaseManager
    seller_api: SellerApi
    seller_dao: SellerDao
    seller_repository: SellerRepository


def create_container(
    config: Optional[AppConfig] = None,
    logger: Optional[StructuredLogger] = None,
    supabase_client: Optional[SupabaseClient] = None,
) -> Container:
    """Wire the seller data-access layer together.

    Args:
        config: Application configuration; defaults to ``get_config()``.
        logger: Root logger; each component logs through a named child.
        supabase_client: Pre-built client, bypassing ``create_client``.

    Returns:
        Container mapping component names to fully-wired instances.  The
        caller owns ``db`` and must ``close()`` it.
    """
    config = config or get_config()
    logger = logger or get_logger("sellerhub")

    db = DatabaseManager(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        sqlite_path=config.SQLITE_PATH,
        logger=logger.child("database"),
        supabase_client=supabase_client,
    )
    initialize_schema(db.sqlite, logger.child("schema"))

    seller_api = SellerApi(db=db, logger=logger.child("seller_api"), table=config.SELLERS_TABLE)
    seller_dao = SellerDao(db=db, logger=logger.child("seller_dao"))
    seller_repository = SellerRepository(
        remote=seller_api,
        cache=seller_dao,
        logger=logger.child("seller_repository"),
    )

    return Container(
        config=config,
        db=db,
        seller_api=seller_api,
        seller_dao=seller_dao,
        seller_repository=seller_repository,
    )
