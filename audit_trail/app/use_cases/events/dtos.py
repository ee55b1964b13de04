"""
Event Ingestion DTOs
"""

from typing import Optional

from pydantic import BaseModel

from audit_trail.app.use_cases.audit.dtos import CreateAuditRecordCommand
from audit_trail.domain.records import AuditRecordView


class IngestAuditEventCommand(CreateAuditRecordCommand):
    """
    Audit event delivered by another service.

    event_id is the idempotency key; events without one are always recorded.
    """

    event_id: Optional[str] = None
    source_service: Optional[str] = None


class IngestAuditEventResponse(BaseModel):
    status: str  # "recorded" or "duplicate"
    event_id: Optional[str]
    record: Optional[AuditRecordView] = None
