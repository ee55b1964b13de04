"""
Get Audit Record Use Case

Single record lookup that never reveals records outside the caller's scope.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.access import CallerIdentity, build_access_scope
from audit_trail.domain.records import AuditRecordView
from .presenter import present_record

logger = logging.getLogger(__name__)


class GetAuditRecordUseCase:
    """
    Use case for fetching one audit record by id.

    Business Rules:
    - A record outside the caller's scope is reported exactly like a
      missing one (AUDIT_RECORD_NOT_FOUND) so ids cannot be probed
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, record_id: int, caller: CallerIdentity) -> Result[AuditRecordView]:
        scope = build_access_scope(caller)

        try:
            async with self.uow:
                record = await self.uow.audit_records.get_by_id(record_id, scope)
                view = present_record(record, self.catalog) if record is not None else None
        except SQLAlchemyError:
            logger.error("Failed to load audit record %s", record_id, exc_info=True)
            return Return.err(Error("RETRIEVAL_FAILED", "Failed to retrieve audit record"))

        if view is None:
            return Return.err(Error("AUDIT_RECORD_NOT_FOUND", "Audit record not found"))

        return Return.ok(view)
