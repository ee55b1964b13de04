"""
Delete Audit Record Use Case

Administrative hard delete. Callers are authorized upstream (admin API key).
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.unit_of_work import UnitOfWork
from .dtos import DeleteAuditRecordResponse

logger = logging.getLogger(__name__)


class DeleteAuditRecordUseCase:
    """
    Business Rules:
    - No access scope is applied
    - Versions of the remaining records for the entity are left untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, record_id: int) -> Result[DeleteAuditRecordResponse]:
        try:
            async with self.uow:
                deleted = await self.uow.audit_records.delete(record_id)
                if not deleted:
                    return Return.err(Error("AUDIT_RECORD_NOT_FOUND", "Audit record not found"))
                await self.uow.commit()
        except SQLAlchemyError:
            logger.error("Failed to delete audit record %s", record_id, exc_info=True)
            return Return.err(Error("PERSISTENCE_FAILED", "Failed to delete audit record"))

        logger.warning("Audit record %s deleted by administrator", record_id)
        return Return.ok(DeleteAuditRecordResponse(status="deleted", record_id=record_id))
