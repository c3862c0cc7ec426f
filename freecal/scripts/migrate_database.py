"""
Copy Database Script
Copies every FreeCal table from SOURCE_DATABASE_URL into DATABASE_URL, e.g.
when moving between hosted Postgres providers. Rows that already exist in the
target are left untouched, so the script can be re-run after a partial copy.

    SOURCE_DATABASE_URL=postgresql://... DATABASE_URL=postgresql://... \
        python -m freecal.scripts.migrate_database
"""

import asyncio
import logging
import os
import sys

from sqlalchemy import inspect, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from freecal.config import DATABASE_URL
from freecal.models import Base

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BATCH_SIZE = 500


def async_url(url: str) -> str:
    if url.startswith('postgresql://'):
        return url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    if url.startswith('postgres://'):
        return url.replace('postgres://', 'postgresql+asyncpg://', 1)
    return url


def insert_ignoring_conflicts(table, dialect_name: str):
    if dialect_name == 'sqlite':
        return sqlite.insert(table).on_conflict_do_nothing()
    return postgresql.insert(table).on_conflict_do_nothing()


async def test_connection(engine, label: str):
    async with engine.connect() as conn:
        await conn.execute(text('SELECT 1'))
    logger.info(f"Connected to {label} database")


async def source_columns(conn, table_name: str):
    def _columns(sync_conn):
        inspector = inspect(sync_conn)
        if not inspector.has_table(table_name):
            return None
        return {c['name'] for c in inspector.get_columns(table_name)}
    return await conn.run_sync(_columns)


async def copy_table(source, target, table) -> int:
    """Copy one table; columns missing on the source side fall back to target defaults."""
    async with source.connect() as src:
        available = await source_columns(src, table.name)
        if available is None:
            logger.warning(f"Table {table.name} missing in source, skipping")
            return 0
        columns = [c for c in table.columns if c.name in available]
        result = await src.execute(select(*columns))
        rows = [dict(r._mapping) for r in result]

    if not rows:
        logger.info(f"{table.name}: nothing to copy")
        return 0

    async with target.begin() as dst:
        stmt = insert_ignoring_conflicts(table, target.dialect.name)
        for i in range(0, len(rows), BATCH_SIZE):
            await dst.execute(stmt, rows[i:i + BATCH_SIZE])
    logger.info(f"{table.name}: copied {len(rows)} rows")
    return len(rows)


async def migrate(source_url: str, target_url: str) -> dict:
    source = create_async_engine(async_url(source_url), poolclass=NullPool)
    target = create_async_engine(async_url(target_url), poolclass=NullPool)
    copied = {}
    try:
        await test_connection(source, 'source')
        await test_connection(target, 'target')
        # parents before children so foreign keys resolve
        for table in Base.metadata.sorted_tables:
            try:
                copied[table.name] = await copy_table(source, target, table)
            except Exception as e:
                logger.error(f"Error copying {table.name}: {e}")
                copied[table.name] = None
    finally:
        await source.dispose()
        await target.dispose()
    return copied


def main():
    source_url = os.getenv('SOURCE_DATABASE_URL')
    if not source_url:
        logger.error("SOURCE_DATABASE_URL is not set")
        sys.exit(1)
    try:
        copied = asyncio.run(migrate(source_url, DATABASE_URL))
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        sys.exit(1)

    failed = [name for name, count in copied.items() if count is None]
    logger.info(f"Migration finished: {sum(c or 0 for c in copied.values())} rows, {len(failed)} failed tables")
    if failed:
        logger.error(f"Failed tables: {', '.join(failed)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
