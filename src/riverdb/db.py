"""
PostgreSQL access for the whole application.

Queries run on connections borrowed from a process-wide
psycopg_pool.ConnectionPool, created lazily so that importing this
module never touches the network. Rows come back as dicts (dict_row),
or as a pandas DataFrame via fetch_dataframe().

Test fixtures pin every helper to one connection with
set_connection_override() and roll that connection back afterwards.
"""

import atexit
import decimal
from contextlib import contextmanager
from typing import Any, Iterator

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from riverdb.config import config

_pool: ConnectionPool | None = None
_connection_override: psycopg.Connection | None = None


# =============================================================================
# Pool Lifecycle
# =============================================================================


def get_pool() -> ConnectionPool:
    """The shared pool, sized from DB_POOL_MIN_SIZE / DB_POOL_MAX_SIZE."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool(
            config.database_url,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            open=True,
        )
    return _pool


def close_pool() -> None:
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None


atexit.register(close_pool)


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Route all queries through `conn` instead of the pool.

    The caller owns the transaction: nothing here commits, rolls back
    or closes an override connection.
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    global _connection_override
    _connection_override = None


# =============================================================================
# Connections and Cursors
# =============================================================================


@contextmanager
def get_connection() -> Iterator[psycopg.Connection]:
    """
    Yield a connection for one unit of work.

    Pool connections are committed when the block exits cleanly and
    rolled back when it raises, then handed back to the pool.
    """
    if _connection_override is not None:
        yield _connection_override
        return

    with get_pool().connection() as conn:
        yield conn


@contextmanager
def get_cursor() -> Iterator[psycopg.Cursor]:
    """Yield a dict_row cursor on a fresh unit of work."""
    with get_connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


# =============================================================================
# Query Helpers
# =============================================================================


def execute(query: str, params: tuple = None) -> int:
    """Run a statement and return the affected row count."""
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.rowcount


def fetch_one(query: str, params: tuple = None) -> dict[str, Any] | None:
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: str, params: tuple = None) -> list[dict[str, Any]]:
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchall()


def fetch_scalar(query: str, params: tuple = None) -> Any:
    """First column of the first row, or None when there are no rows."""
    row = fetch_one(query, params)
    return next(iter(row.values())) if row else None


def fetch_dataframe(query: str, params: tuple = None):
    """
    Run a query and load the result into a pandas DataFrame.

    Columns keep the query's column names even when no rows match.
    NUMERIC columns arrive as Decimal and are converted to float.
    """
    import pandas as pd

    with get_cursor() as cur:
        cur.execute(query, params)
        columns = [desc.name for desc in cur.description] if cur.description else []
        df = pd.DataFrame(cur.fetchall(), columns=columns)

    for col in df.columns:
        if len(df) and df[col].map(lambda v: isinstance(v, decimal.Decimal)).all():
            df[col] = df[col].astype(float)
    return df
