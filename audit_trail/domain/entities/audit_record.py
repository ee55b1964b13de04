"""
AuditRecord Entity

Immutable entry describing one action taken against one business entity.
"""

from datetime import datetime
from typing import Any, Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from audit_trail.domain.base import utc_now


class AuditRecord(SQLModel, table=True):
    """
    AuditRecord entity - append-only history of business entity changes.

    Business Rules:
    - Immutable once created; only an administrative delete removes a row
    - version increases by 1 per (entity_type, entity_id), starting at 1
    - Deleting a row never renumbers the remaining versions
    - action_by is None for system actions
    - previous_data/new_data are opaque snapshots; a missing snapshot is NULL
    """

    __tablename__ = "audit_records"

    id: Optional[int] = Field(default=None, primary_key=True)

    entity_type: str = Field(max_length=100)
    # Natural id, or a synthetic reference such as EXPORT-2026-01-05-001
    entity_id: str = Field(max_length=255)
    action_type_id: int = Field(foreign_key="action_types.id", nullable=False, index=True)
    action_by: Optional[str] = Field(default=None, max_length=255)
    action_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime, nullable=False)
    )

    previous_data: Optional[Any] = Field(
        default=None, sa_column=Column(JSON(none_as_null=True))
    )
    new_data: Optional[Any] = Field(
        default=None, sa_column=Column(JSON(none_as_null=True))
    )

    version: int = Field(default=1)
    ip_address: Optional[str] = Field(default=None, max_length=45)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_record_entity_version", "entity_type", "entity_id", "version"),
        Index("idx_audit_record_action_at", "action_at"),
        Index("idx_audit_record_action_by", "action_by"),
    )
