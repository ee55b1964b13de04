"""
Dedup Gate

Guards the ingestion path against at-least-once redelivery. Store failures
never block processing: a failed lookup counts as "not a duplicate" and a
failed marker is only logged.
"""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.base import utc_now
from audit_trail.domain.entities import EventDedup

logger = logging.getLogger(__name__)

DEFAULT_TTL_DAYS = 7


class DedupService:
    def __init__(self, uow: UnitOfWork, ttl_days: int = DEFAULT_TTL_DAYS):
        self.uow = uow
        self.ttl_days = ttl_days

    async def is_duplicate(self, event_id: Optional[str], source_service: Optional[str] = None) -> bool:
        """True if the event id already has a processed marker"""
        if not event_id:
            return False

        try:
            async with self.uow:
                existing = await self.uow.event_dedup.get_by_event_id(event_id)
        except SQLAlchemyError:
            logger.error(
                "Dedup lookup failed for event %s from %s, treating as new",
                event_id,
                source_service,
                exc_info=True,
            )
            return False

        if existing is not None:
            logger.info("Duplicate event detected: %s (source=%s)", event_id, source_service)
            return True
        return False

    async def mark_as_processed(self, event_id: Optional[str], source_service: Optional[str] = None) -> None:
        """Store a marker for the event that expires after ttl_days"""
        if not event_id:
            return

        try:
            async with self.uow:
                marker = EventDedup(
                    event_id=event_id,
                    source_service=source_service,
                    expires_at=utc_now() + timedelta(days=self.ttl_days),
                )
                await self.uow.event_dedup.create(marker)
                await self.uow.commit()
        except SQLAlchemyError:
            logger.error(
                "Failed to mark event %s from %s as processed",
                event_id,
                source_service,
                exc_info=True,
            )
            return

        logger.info("Event marked as processed: %s", event_id)

    async def cleanup_expired(self) -> int:
        """Delete expired markers. Returns the number removed, 0 on failure."""
        try:
            async with self.uow:
                removed = await self.uow.event_dedup.delete_expired(utc_now())
                await self.uow.commit()
        except SQLAlchemyError:
            logger.error("Failed to clean up expired dedup records", exc_info=True)
            return 0

        logger.info("Cleaned up %d expired dedup records", removed)
        return removed
