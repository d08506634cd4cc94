"""
Repository Layer Package.

The seller repository synchronizes the remote seller API with the local
SQLite cache.  Callers never touch the sources in :mod:`sellerhub.sources`
directly.

Usage:
    from sellerhub.repositories import SellerRepository
"""

from sellerhub.repositories.base_repository import BaseRepository
from sellerhub.repositories.seller_repository import (
    SellerLocalCache,
    SellerRemoteSource,
    SellerRepository,
)

__all__ = [
    "BaseRepository",
    "SellerLocalCache",
    "SellerRemoteSource",
    "SellerRepository",
]
