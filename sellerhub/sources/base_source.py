"""
Base Source.

Shared infrastructure for the two seller data sources:
- DatabaseManager reference (Supabase + SQLite)
- Logger reference
- Convenience properties for accessing clients
- Commit handling that cooperates with ``DatabaseManager.batch_write``
"""

from __future__ import annotations

import sqlite3

from supabase import Client as SupabaseClient

from sellerhub.database import DatabaseManager
from sellerhub.logger import StructuredLogger


class BaseSource:
    """Base class for data sources. Receives dependencies via __init__."""

    TABLE: str = ""

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: str = "",
    ) -> None:
        self._db = db
        self._logger = logger
        if table:
            self.TABLE = table

    @property
    def supabase(self) -> SupabaseClient:
        """The Supabase client.  Raises ``RuntimeError`` in offline mode."""
        return self._db.supabase

    @property
    def sqlite(self) -> sqlite3.Connection:
        """The SQLite connection backing the local cache."""
        return self._db.sqlite

    def _commit(self) -> None:
        """Commit the SQLite transaction unless a batch is active.

        Inside :meth:`DatabaseManager.batch_write` this is a no-op; the
        batch issues a single commit (or rollback) when it exits.
        """
        if not self._db.in_batch:
            self.sqlite.commit()
