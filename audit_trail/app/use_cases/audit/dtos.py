"""
Audit Use Case DTOs (Data Transfer Objects)

All Command, Query and Response classes for the audit record domain.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from audit_trail.domain.entities import SortOrder
from audit_trail.domain.records import ActionTypeSummary, AuditRecordView

DEFAULT_PAGE_SIZE = 10


# ============================================================================
# Commands / Queries
# ============================================================================


class CreateAuditRecordCommand(BaseModel):
    """
    Create command - one action against one business entity.

    Payload shapes are not validated per action type; the narrative
    builder copes with malformed records at read time.
    """

    entity_type: str
    entity_id: str
    action_type_code: str
    action_by: Optional[str] = None
    previous_data: Optional[Any] = None
    new_data: Optional[Any] = None
    action_at: Optional[datetime] = None
    ip_address: Optional[str] = None


class AuditRecordQuery(BaseModel):
    """
    List query - every filter is optional and AND-combined.

    date_from/date_to accept an ISO date (whole UTC day) or an ISO datetime.
    """

    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    action_type_code: Optional[str] = None
    action_by: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = "action_at"
    sort_order: SortOrder = SortOrder.desc


# ============================================================================
# Response DTOs
# ============================================================================


class AuditRecordPage(BaseModel):
    """One page of list results"""

    records: List[AuditRecordView]
    total: int
    page: int
    limit: int


class AuditRecordSearchResult(BaseModel):
    """One page of search results"""

    records: List[AuditRecordView]
    total: int
    page: int
    limit: int


class ActionBreakdownItem(BaseModel):
    action_type: Optional[ActionTypeSummary]
    count: int


class EntityBreakdownItem(BaseModel):
    entity_type: str
    count: int


class AuditStatsResponse(BaseModel):
    """Counts visible to the caller"""

    total_records: int
    recent_activity: int
    action_breakdown: List[ActionBreakdownItem]
    entity_breakdown: List[EntityBreakdownItem]


class DeleteAuditRecordResponse(BaseModel):
    status: str
    record_id: int
