"""
Periodic removal of expired dedup markers.

Runs as a background task for the lifetime of the application. Deletion is
idempotent, so several instances sweeping the same table need no
coordination.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from audit_trail.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from audit_trail.app.services.dedup_service import DedupService

logger = logging.getLogger(__name__)


async def sweep_expired_events(session_factory: async_sessionmaker, ttl_days: int) -> int:
    """Run one cleanup pass in its own session"""
    async with session_factory() as session:
        dedup = DedupService(SqlAlchemyUnitOfWork(session), ttl_days=ttl_days)
        return await dedup.cleanup_expired()


async def dedup_sweeper_loop(
    session_factory: async_sessionmaker, interval_seconds: int, ttl_days: int
) -> None:
    """Continuously sweep expired markers on a fixed interval"""
    logger.info("Dedup sweeper started (interval=%ss)", interval_seconds)
    while True:
        try:
            await sweep_expired_events(session_factory, ttl_days)
        except Exception:
            logger.exception("Dedup sweep failed, retrying in %ss", interval_seconds)
        await asyncio.sleep(interval_seconds)
