from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from audit_trail.app.repositories.event_dedup_repository import IEventDedupRepository
from audit_trail.domain.entities import EventDedup


class EventDedupRepository(IEventDedupRepository):
    """EventDedup repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_event_id(self, event_id: str) -> Optional[EventDedup]:
        """Get the processed-event marker for an event id"""
        return await self.session.get(EventDedup, event_id)

    async def create(self, marker: EventDedup) -> EventDedup:
        """Record an event as processed"""
        self.session.add(marker)
        await self.session.flush()
        return marker

    async def delete_expired(self, now: datetime) -> int:
        """Delete markers that expired before now"""
        stmt = delete(EventDedup).where(EventDedup.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
