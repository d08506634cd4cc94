"""
Database Abstraction Layer.

Manages the two stores behind the seller repository:

- **SQLite (local)**: the on-device cache of seller records.  Always
  available; the repository serves the cached list from here before the
  network answers.

- **Supabase (cloud PostgreSQL)**: the authoritative remote store,
  reached through its PostgREST client.  Optional: without credentials
  the application runs in offline mode and every remote call fails with
  a transport error.

This module only manages the raw *connections*; query logic lives in
:mod:`sellerhub.sources`.

Usage (dependency injection at app startup)::

    from sellerhub.database import DatabaseManager
    from sellerhub.logger import StructuredLogger

    db = DatabaseManager(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        sqlite_path=config.SQLITE_PATH,
        logger=StructuredLogger(name="sellerhub.database"),
    )
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from supabase import create_client, Client as SupabaseClient

from sellerhub.logger import StructuredLogger

IN_MEMORY = Path(":memory:")


class DatabaseManager:
    """Manages connections to the local SQLite database and cloud Supabase instance.

    Fully configured at construction time via dependency injection.

    When ``supabase_url`` or ``supabase_key`` is empty the Supabase client
    is **not** created.  The ``supabase`` property then raises
    ``RuntimeError``, which the remote source reports as a transport
    error.

    Parameters
    ----------
    supabase_url:
        The Supabase project URL (e.g. ``https://xyz.supabase.co``).
        May be empty to run in offline mode.
    supabase_key:
        The Supabase anonymous key.  May be empty to run in offline mode.
    sqlite_path:
        Filesystem path for the local SQLite database file, or
        ``Path(":memory:")`` for a throwaway cache.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    supabase_client:
        Pre-built client to use instead of calling ``create_client``.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        sqlite_path: Path,
        logger: StructuredLogger,
        supabase_client: Optional[SupabaseClient] = None,
    ) -> None:
        self._logger: StructuredLogger = logger
        self._write_lock: threading.RLock = threading.RLock()
        self._in_batch: bool = False
        self._closed: bool = False

        self._supabase: Optional[SupabaseClient] = supabase_client
        if self._supabase is not None:
            self._logger.info("Using injected Supabase client.")
        elif supabase_url and supabase_key:
            try:
                self._supabase = create_client(supabase_url, supabase_key)
                self._logger.info("Supabase client initialized.")
            except (ValueError, TypeError) as exc:
                self._logger.warning(
                    "Supabase credential format error: %s. Running in offline mode.",
                    exc,
                )
            except Exception as exc:
                self._logger.error(
                    "Unexpected Supabase initialization failure: %s. "
                    "Running in offline mode.",
                    exc,
                    exc_info=True,
                )
        else:
            self._logger.warning(
                "Supabase credentials not configured — running in offline mode."
            )

        self._sqlite_conn: sqlite3.Connection = self._connect_sqlite(sqlite_path)

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def supabase(self) -> SupabaseClient:
        """Return the initialised Supabase client.

        Raises
        ------
        RuntimeError
            If the Supabase client was not initialised (offline mode).
        """
        if self._supabase is None:
            raise RuntimeError(
                "Supabase client is not initialised. "
                "The application is running in offline mode."
            )
        return self._supabase

    @property
    def is_online(self) -> bool:
        """``True`` when the Supabase client is available."""
        return self._supabase is not None

    @property
    def sqlite(self) -> sqlite3.Connection:
        """Return the initialised SQLite connection."""
        return self._sqlite_conn

    @property
    def write_lock(self) -> threading.RLock:
        """Return the write lock serialising SQLite writes.

        ::

            with db.write_lock:
                db.sqlite.execute("DELETE FROM sellers")
                db.sqlite.commit()
        """
        return self._write_lock

    @property
    def in_batch(self) -> bool:
        """``True`` when a :meth:`batch_write` context is active."""
        return self._in_batch

    @contextmanager
    def batch_write(self) -> Generator[None, None, None]:
        """Hold the write lock and defer SQLite commits until the block exits.

        While the context is active, :pyattr:`in_batch` is ``True`` and
        DAO ``_commit()`` calls become no-ops.  On normal exit a single
        ``commit()`` is issued.  On exception the transaction is rolled
        back and the error re-raised, so a half-applied replace never
        becomes visible.

        Re-entrant: nested batches join the outer one.
        """
        with self._write_lock:
            if self._in_batch:
                yield
                return

            self._in_batch = True
            try:
                yield
                self._sqlite_conn.commit()
                self._logger.debug("Batch write committed.")
            except Exception:
                self._sqlite_conn.rollback()
                self._logger.error(
                    "Batch write rolled back due to exception.", exc_info=True,
                )
                raise
            finally:
                self._in_batch = False

    # ------------------------------------------------------------------
    # Lifecycle helpers
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the local SQLite connection.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        with self._write_lock:
            if self._closed:
                return
            self._sqlite_conn.close()
            self._closed = True
            self._logger.info("SQLite connection closed.")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _connect_sqlite(self, path: Path) -> sqlite3.Connection:
        """Open (or create) the SQLite cache database.

        Returns
        -------
        sqlite3.Connection
            A connection with ``row_factory`` set to ``sqlite3.Row``.

        Raises
        ------
        PermissionError
            If the OS denies access to the database file or its directory.
        """
        try:
            conn = sqlite3.connect(str(path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            if path != IN_MEMORY:
                conn.execute("PRAGMA journal_mode=WAL;")
            self._logger.info("SQLite database opened at %s", path)
            return conn
        except PermissionError as exc:
            msg = (
                f"Cannot open the local database at '{path}'. "
                "The file or its directory may be read-only or locked by "
                "another process."
            )
            self._logger.error(msg)
            raise PermissionError(msg) from exc
