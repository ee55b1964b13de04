"""
EventDedup Entity

Marker for an inbound event that has already been processed.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from audit_trail.domain.base import utc_now


class EventDedup(SQLModel, table=True):
    """
    EventDedup entity - one row per processed event id.

    Business Rules:
    - event_id is the primary key, so a second marker for the same event fails
    - source_service is recorded but not part of the uniqueness key
    - Swept once expires_at has passed (default 7 days after processing)
    """

    __tablename__ = "event_dedup"

    event_id: str = Field(primary_key=True, max_length=255)
    source_service: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_event_dedup_expires_at", "expires_at"),)
