"""
Data Sources Package.

- :class:`SellerApi` — remote seller records over Supabase.
- :class:`SellerDao` — on-device seller cache over SQLite.
"""

from sellerhub.sources.base_source import BaseSource
from sellerhub.sources.seller_api import SellerApi
from sellerhub.sources.seller_dao import SellerDao

__all__ = ["BaseSource", "SellerApi", "SellerDao"]
