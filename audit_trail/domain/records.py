"""
Read models for audit records.

An AuditRecordView is what callers see: the stored row joined with its
action type summary and, once rendered, the narrative in `details`.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from .entities import AuditRecord


class ActionTypeSummary(BaseModel):
    """Action type fields exposed alongside a record"""

    id: int
    code: str
    description: Optional[str] = None


class AuditRecordView(BaseModel):
    """Audit record joined with its action type"""

    id: Optional[int] = None
    entity_type: str
    entity_id: str
    action_type: Optional[ActionTypeSummary] = None
    action_by: Optional[str] = None
    action_at: datetime
    previous_data: Optional[Any] = None
    new_data: Optional[Any] = None
    version: int
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None
    details: Optional[str] = None

    @classmethod
    def from_record(
        cls, record: AuditRecord, action_type: Optional[ActionTypeSummary]
    ) -> "AuditRecordView":
        return cls(
            id=record.id,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            action_type=action_type,
            action_by=record.action_by,
            action_at=record.action_at,
            previous_data=record.previous_data,
            new_data=record.new_data,
            version=record.version,
            ip_address=record.ip_address,
            created_at=record.created_at,
        )
