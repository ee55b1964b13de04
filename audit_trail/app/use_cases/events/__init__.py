"""
Event Use Cases

Ingestion of audit events delivered by other services.
"""

from .dtos import IngestAuditEventCommand, IngestAuditEventResponse
from .ingest_audit_event_use_case import IngestAuditEventUseCase

__all__ = [
    "IngestAuditEventCommand",
    "IngestAuditEventResponse",
    "IngestAuditEventUseCase",
]
