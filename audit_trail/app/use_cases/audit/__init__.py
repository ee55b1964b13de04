"""
Audit Use Cases

All audit record business logic.
"""

from .create_audit_record_use_case import CreateAuditRecordUseCase
from .delete_audit_record_use_case import DeleteAuditRecordUseCase
from .dtos import (
    ActionBreakdownItem,
    AuditRecordPage,
    AuditRecordQuery,
    AuditRecordSearchResult,
    AuditStatsResponse,
    CreateAuditRecordCommand,
    DeleteAuditRecordResponse,
    EntityBreakdownItem,
)
from .get_audit_record_use_case import GetAuditRecordUseCase
from .get_audit_stats_use_case import GetAuditStatsUseCase
from .get_entity_history_use_case import GetEntityHistoryUseCase
from .list_audit_records_use_case import ListAuditRecordsUseCase
from .search_audit_records_use_case import SearchAuditRecordsUseCase

__all__ = [
    "CreateAuditRecordUseCase",
    "DeleteAuditRecordUseCase",
    "GetAuditRecordUseCase",
    "GetAuditStatsUseCase",
    "GetEntityHistoryUseCase",
    "ListAuditRecordsUseCase",
    "SearchAuditRecordsUseCase",
    # DTOs
    "ActionBreakdownItem",
    "AuditRecordPage",
    "AuditRecordQuery",
    "AuditRecordSearchResult",
    "AuditStatsResponse",
    "CreateAuditRecordCommand",
    "DeleteAuditRecordResponse",
    "EntityBreakdownItem",
]
