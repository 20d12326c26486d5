"""
Database connection and query utilities.

Provides a Database handle that owns a psycopg connection pool and hands
out scoped connections and transactional cursors, returning rows as
dictionaries.

For testing, use Database.from_connection() to wrap a connection that
will be used instead of the pool. This enables transaction rollback
between tests.
"""

from contextlib import contextmanager
from typing import Any, Iterator

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from matester.config import Config, config as default_config
from matester.errors import translate_error
from matester.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Explicitly owned handle to the relational store.

    Backed either by a connection pool (normal operation) or by a single
    externally managed connection (testing).
    """

    def __init__(
        self,
        pool: ConnectionPool | None = None,
        connection: psycopg.Connection | None = None,
    ):
        if (pool is None) == (connection is None):
            raise ValueError("Database needs exactly one of pool or connection")
        self._pool = pool
        self._connection = connection

    @classmethod
    def open(cls, cfg: Config | None = None) -> "Database":
        """
        Open a bounded connection pool.

        Args:
            cfg: Configuration to use, defaults to the environment config

        Returns:
            Database backed by the new pool
        """
        cfg = cfg or default_config
        if not cfg.database_url:
            logger.warning("No database configured, set MATESTER_DB")
        try:
            pool = ConnectionPool(
                cfg.database_url,
                min_size=cfg.pool_min_size,
                max_size=cfg.pool_max_size,
                max_lifetime=cfg.pool_max_lifetime,
                timeout=cfg.pool_timeout,
                open=True,
            )
        except psycopg.Error as e:
            raise translate_error(e) from e
        logger.info(
            f"Database pool opened (max_size={cfg.pool_max_size}, "
            f"max_lifetime={cfg.pool_max_lifetime}s)"
        )
        return cls(pool=pool)

    @classmethod
    def from_connection(cls, conn: psycopg.Connection) -> "Database":
        """
        Wrap an open connection instead of creating a pool.

        Used by test fixtures to ensure all database operations run
        within a single transaction that can be rolled back.
        """
        return cls(connection=conn)

    # =========================================================================
    # Connection Management
    # =========================================================================

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        """
        Context manager for database connections.

        In normal operation:
            - Borrows a connection from the pool
            - Commits on successful exit
            - Rolls back on exception
            - Returns the connection to the pool when done

        With a wrapped connection (testing):
            - Returns the wrapped connection
            - Does NOT commit, rollback, or close

        Driver errors are re-raised as RepositoryError subclasses.
        """
        try:
            if self._connection is not None:
                yield self._connection
                return

            with self._pool.connection() as conn:
                yield conn
        except psycopg.Error as e:
            raise translate_error(e) from e

    @contextmanager
    def transaction(self) -> Iterator[psycopg.Cursor]:
        """
        Context manager for a dict-row cursor inside a transaction.

        Every statement run on the cursor commits together or not at all.
        Nested inside an outer transaction (as in tests) it becomes a
        savepoint.

        Usage:
            with database.transaction() as cur:
                cur.execute("INSERT ...")
                cur.execute("INSERT ...")
        """
        with self.connection() as conn:
            with conn.transaction():
                with conn.cursor(row_factory=dict_row) as cur:
                    yield cur

    def close(self) -> None:
        """Close the pool. Safe to call more than once."""
        if self._pool is None or self._pool.closed:
            return
        self._pool.close()
        logger.info("Database pool closed.")

    # =========================================================================
    # Query Helpers
    # =========================================================================

    def execute(self, query: str, params: tuple = None) -> None:
        """
        Execute a query without returning results.

        Args:
            query: SQL query with %s placeholders
            params: Tuple of parameter values
        """
        with self.transaction() as cur:
            cur.execute(query, params)

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute a query and return a single row as dict.

        Returns:
            Dict of column names to values, or None if no row found
        """
        with self.transaction() as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """
        Execute a query and return all rows as list of dicts.

        Returns:
            List of dicts, empty list if no rows found
        """
        with self.transaction() as cur:
            cur.execute(query, params)
            return cur.fetchall()

