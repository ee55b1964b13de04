"""
Search Audit Records Use Case

Free-text search across entity_type, entity_id and action_by.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.access import CallerIdentity, build_access_scope
from .dtos import DEFAULT_PAGE_SIZE, AuditRecordSearchResult
from .filters import validate_paging
from .presenter import present_record

logger = logging.getLogger(__name__)


class SearchAuditRecordsUseCase:
    """
    Use case for searching audit records.

    Business Rules:
    - Case-insensitive substring match, any of the three fields may match
    - The match is ANDed with the caller's access scope
    - Results ordered by action_at DESC
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(
        self,
        term: str,
        caller: CallerIdentity,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Result[AuditRecordSearchResult]:
        term = (term or "").strip()
        if not term:
            return Return.err(Error("VALIDATION_ERROR", "Search term is required"))
        try:
            validate_paging(page, limit)
        except ValueError as exc:
            return Return.err(Error("VALIDATION_ERROR", str(exc)))

        scope = build_access_scope(caller)

        try:
            async with self.uow:
                records, total = await self.uow.audit_records.search(term, scope, page, limit)
                views = [present_record(record, self.catalog) for record in records]
        except SQLAlchemyError:
            logger.error("Failed to search audit records for '%s'", term, exc_info=True)
            return Return.err(Error("RETRIEVAL_FAILED", "Failed to search audit records"))

        return Return.ok(
            AuditRecordSearchResult(
                records=views,
                total=total,
                page=page,
                limit=limit,
            )
        )
