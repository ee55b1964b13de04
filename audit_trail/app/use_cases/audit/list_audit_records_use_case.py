"""
List Audit Records Use Case

Filtered, paginated, sortable listing within the caller's access scope.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.repositories.audit_record_repository import (
    SORTABLE_COLUMNS,
    AuditRecordFilter,
)
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.access import CallerIdentity, build_access_scope
from .dtos import AuditRecordPage, AuditRecordQuery
from .filters import resolve_date_range, validate_paging
from .presenter import present_record

logger = logging.getLogger(__name__)


class ListAuditRecordsUseCase:
    """
    Use case for listing audit records.

    Business Rules:
    - The caller's access scope is always applied and ANDed with the filters
    - Date-only bounds cover whole UTC days
    - An unknown action_type_code yields an empty page, not an error
    - Malformed dates, reversed ranges and unknown sort columns are
      rejected before querying
    - Default ordering is action_at DESC
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, query: AuditRecordQuery, caller: CallerIdentity) -> Result[AuditRecordPage]:
        try:
            validate_paging(query.page, query.limit)
            action_from, action_to = resolve_date_range(query.date_from, query.date_to)
        except ValueError as exc:
            return Return.err(Error("VALIDATION_ERROR", str(exc)))

        if query.sort_by not in SORTABLE_COLUMNS:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Cannot sort by '{query.sort_by}'",
                    reason=f"Sortable columns: {', '.join(SORTABLE_COLUMNS)}",
                )
            )

        empty_page = AuditRecordPage(records=[], total=0, page=query.page, limit=query.limit)

        action_type_id = None
        if query.action_type_code:
            action_type = self.catalog.resolve(query.action_type_code)
            if action_type is None:
                return Return.ok(empty_page)
            action_type_id = action_type.id

        filters = AuditRecordFilter(
            entity_type=query.entity_type or None,
            entity_id=query.entity_id or None,
            action_type_id=action_type_id,
            action_by=query.action_by or None,
            action_from=action_from,
            action_to=action_to,
        )
        scope = build_access_scope(caller)

        try:
            async with self.uow:
                records, total = await self.uow.audit_records.list_paginated(
                    filters,
                    scope,
                    page=query.page,
                    limit=query.limit,
                    sort_by=query.sort_by,
                    sort_order=query.sort_order,
                )
                views = [present_record(record, self.catalog) for record in records]
        except SQLAlchemyError:
            logger.error("Failed to list audit records", exc_info=True)
            return Return.err(Error("RETRIEVAL_FAILED", "Failed to retrieve audit records"))

        return Return.ok(
            AuditRecordPage(
                records=views,
                total=total,
                page=query.page,
                limit=query.limit,
            )
        )
