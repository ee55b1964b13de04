"""
Get Entity History Use Case

Timeline of one entity's lifecycle, oldest version first.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.access import CallerIdentity, build_access_scope
from audit_trail.domain.records import AuditRecordView
from .presenter import present_record

logger = logging.getLogger(__name__)


class GetEntityHistoryUseCase:
    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(
        self, entity_type: str, entity_id: str, caller: CallerIdentity
    ) -> Result[List[AuditRecordView]]:
        scope = build_access_scope(caller)

        try:
            async with self.uow:
                records = await self.uow.audit_records.get_entity_history(
                    entity_type, entity_id, scope
                )
                views = [present_record(record, self.catalog) for record in records]
        except SQLAlchemyError:
            logger.error(
                "Failed to load history for %s/%s", entity_type, entity_id, exc_info=True
            )
            return Return.err(Error("RETRIEVAL_FAILED", "Failed to retrieve entity history"))

        return Return.ok(views)
