"""
Ingest Audit Event Use Case

Inbound event -> dedup gate -> version + persist -> mark processed.
"""

import logging

from libs.result import Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.dedup_service import DedupService
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.app.use_cases.audit import CreateAuditRecordUseCase
from .dtos import IngestAuditEventCommand, IngestAuditEventResponse

logger = logging.getLogger(__name__)


class IngestAuditEventUseCase:
    """
    Use case for recording an event delivered at-least-once.

    Business Rules:
    - A previously processed event_id is acknowledged without writing
    - The event is marked processed only after the record is stored
    - Dedup store failures never block the write (fail-open)
    - Two concurrent deliveries of the same event can both pass the check;
      only one marker survives because event_id is the marker's key
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog, dedup: DedupService):
        self.uow = uow
        self.catalog = catalog
        self.dedup = dedup

    async def execute(self, command: IngestAuditEventCommand) -> Result[IngestAuditEventResponse]:
        if await self.dedup.is_duplicate(command.event_id, command.source_service):
            return Return.ok(
                IngestAuditEventResponse(status="duplicate", event_id=command.event_id)
            )

        result = await CreateAuditRecordUseCase(self.uow, self.catalog).execute(command)
        if result.is_err():
            return result

        await self.dedup.mark_as_processed(command.event_id, command.source_service)

        return Return.ok(
            IngestAuditEventResponse(
                status="recorded",
                event_id=command.event_id,
                record=result.value,
            )
        )
