"""
Centralized SQLite Schema Initialization.

Defines the local seller cache schema and provides a single entry-point,
:func:`initialize_schema`, that creates it idempotently.  A single-row
``schema_version`` table records which version has been applied so that
later column additions can be rolled forward without dropping the cache.

- **Fresh databases** (version 0): all tables are created from
  :data:`_TABLE_DEFINITIONS`.
- **Existing databases** (version N > 0): migrations registered in
  :data:`_MIGRATIONS` for versions in ``(N, CURRENT_SCHEMA_VERSION]`` run
  in ascending order.

The upgrade and the version bump commit together; on failure the database
stays at version N and the next startup retries.

Usage::

    from sellerhub.schema import initialize_schema

    initialize_schema(db.sqlite, logger)
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable

from sellerhub.logger import StructuredLogger

__all__ = ["CURRENT_SCHEMA_VERSION", "initialize_schema"]

CURRENT_SCHEMA_VERSION: int = 1

_TABLE_DEFINITIONS: list[str] = [
    # -- single-row version tracker -------------------------------------------
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        version INTEGER NOT NULL,
        applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    # -- sellers (local cache — mirrors the remote sellers table) -------------
    """
    CREATE TABLE IF NOT EXISTS sellers (
        id INTEGER PRIMARY KEY,
        title TEXT NOT NULL DEFAULT '',
        description TEXT,
        location_title TEXT,
        result_title TEXT,
        seller_category_id INTEGER,
        result_category_id INTEGER,
        food_category_id INTEGER,
        image_url TEXT,
        phone_number TEXT,
        rating REAL,
        is_active INTEGER NOT NULL DEFAULT 1,
        cached_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_sellers_seller_category_id ON sellers(seller_category_id)",
]


def _ensure_version_table(conn: sqlite3.Connection) -> None:
    """Create the ``schema_version`` table if it does not yet exist."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_version (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            version INTEGER NOT NULL,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.commit()


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version, or ``0`` if unset."""
    row = conn.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    return row[0] if row is not None else 0


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Upsert the single-row version tracker.  Does **not** commit."""
    conn.execute(
        """
        INSERT INTO schema_version (id, version) VALUES (1, ?)
        ON CONFLICT(id) DO UPDATE SET version = excluded.version,
                                      applied_at = CURRENT_TIMESTAMP
        """,
        (version,),
    )


def _create_all_tables(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    for ddl in _TABLE_DEFINITIONS:
        conn.execute(ddl)
    logger.info("Created %d schema objects.", len(_TABLE_DEFINITIONS))


MigrationFunc = Callable[[sqlite3.Connection, StructuredLogger], None]

# Register ``version: migration`` pairs here when the cache schema changes.
_MIGRATIONS: dict[int, MigrationFunc] = {}


def _run_incremental_migrations(
    conn: sqlite3.Connection,
    logger: StructuredLogger,
    from_version: int,
    to_version: int,
) -> None:
    """Run migrations in ``(from_version, to_version]`` in ascending order.

    Does **not** commit.
    """
    versions_to_apply = sorted(v for v in _MIGRATIONS if from_version < v <= to_version)
    if not versions_to_apply:
        logger.info("No incremental migrations to apply.")
        return

    for version in versions_to_apply:
        logger.info("Running migration to version %d …", version)
        _MIGRATIONS[version](conn, logger)


def initialize_schema(conn: sqlite3.Connection, logger: StructuredLogger) -> None:
    """Ensure the local SQLite cache matches :data:`CURRENT_SCHEMA_VERSION`.

    Safe to call on every startup.

    Args:
        conn: An open SQLite connection.
        logger: Logger for migration progress.
    """
    _ensure_version_table(conn)
    current = _get_schema_version(conn)

    if current >= CURRENT_SCHEMA_VERSION:
        logger.info("Schema is up to date (version %d).", current)
        return

    logger.info(
        "Upgrading schema from version %d to %d …", current, CURRENT_SCHEMA_VERSION
    )

    try:
        if current == 0:
            _create_all_tables(conn, logger)
        else:
            _run_incremental_migrations(conn, logger, current, CURRENT_SCHEMA_VERSION)

        _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
        conn.commit()
    except Exception:
        conn.rollback()
        logger.error("Schema migration failed — rolled back to version %d.", current)
        raise

    logger.info("Schema initialised at version %d.", CURRENT_SCHEMA_VERSION)
