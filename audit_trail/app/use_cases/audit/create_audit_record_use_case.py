"""
Create Audit Record Use Case

Write path: resolve action type, assign the next version, persist.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.app.services.version_resolver import VersionResolver
from audit_trail.domain.base import to_naive_utc, utc_now
from audit_trail.domain.entities import AuditRecord
from audit_trail.domain.records import AuditRecordView
from .dtos import CreateAuditRecordCommand
from .presenter import present_record

logger = logging.getLogger(__name__)


class CreateAuditRecordUseCase:
    """
    Use case for recording one action against one business entity.

    Business Rules:
    - action_type_code is resolved case-insensitively against the catalog
    - Unknown or deactivated codes are rejected, never coerced
    - version = current max for (entity_type, entity_id) + 1, starting at 1
    - Omitted payloads are stored as NULL
    - action_at defaults to now
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, command: CreateAuditRecordCommand) -> Result[AuditRecordView]:
        """
        Execute create audit record use case.

        Args:
            command: Entity key, action type code, actor and snapshots

        Returns:
            Result with the stored record (action type and narrative included), or Error
        """
        action_type = self.catalog.resolve(command.action_type_code)
        if action_type is None:
            return Return.err(
                Error(
                    "UNKNOWN_ACTION_TYPE",
                    f"Invalid action type code: {command.action_type_code}",
                )
            )
        if not self.catalog.is_active(action_type.id):
            return Return.err(
                Error(
                    "UNKNOWN_ACTION_TYPE",
                    f"Action type {action_type.code} is no longer active",
                )
            )

        try:
            async with self.uow:
                version = await VersionResolver(self.uow).next_version(
                    command.entity_type, command.entity_id
                )

                record = AuditRecord(
                    entity_type=command.entity_type,
                    entity_id=command.entity_id,
                    action_type_id=action_type.id,
                    action_by=command.action_by or None,
                    action_at=to_naive_utc(command.action_at) or utc_now(),
                    previous_data=command.previous_data,
                    new_data=command.new_data,
                    version=version,
                    ip_address=command.ip_address,
                )
                record = await self.uow.audit_records.create(record)

                await self.uow.commit()
                view = present_record(record, self.catalog)
        except SQLAlchemyError:
            logger.error(
                "Failed to store audit record for %s/%s",
                command.entity_type,
                command.entity_id,
                exc_info=True,
            )
            return Return.err(Error("PERSISTENCE_FAILED", "Failed to store audit record"))

        logger.info(
            "Recorded %s on %s/%s (version %d)",
            action_type.code,
            view.entity_type,
            view.entity_id,
            view.version,
        )
        return Return.ok(view)
