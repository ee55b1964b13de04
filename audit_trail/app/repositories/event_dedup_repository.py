from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from audit_trail.domain.entities import EventDedup


class IEventDedupRepository(ABC):
    """EventDedup repository interface - application layer"""

    @abstractmethod
    async def get_by_event_id(self, event_id: str) -> Optional[EventDedup]:
        """Get the processed-event marker for an event id"""
        pass

    @abstractmethod
    async def create(self, marker: EventDedup) -> EventDedup:
        """Record an event as processed"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete markers whose expires_at is before now. Returns count deleted."""
        pass
