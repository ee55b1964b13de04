"""
Get Audit Stats Use Case

Counts over the records visible to the caller.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.access import CallerIdentity, build_access_scope
from audit_trail.domain.base import utc_now
from .dtos import ActionBreakdownItem, AuditStatsResponse, EntityBreakdownItem

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_WINDOW = timedelta(hours=24)


class GetAuditStatsUseCase:
    """
    Use case for audit statistics.

    Returns:
    - total_records: all visible records
    - recent_activity: visible records with action_at in the last 24 hours
    - action_breakdown: counts per action type (resolved to code/description)
    - entity_breakdown: counts per entity type, most frequent first
    """

    def __init__(self, uow: UnitOfWork, catalog: ActionTypeCatalog):
        self.uow = uow
        self.catalog = catalog

    async def execute(self, caller: CallerIdentity) -> Result[AuditStatsResponse]:
        scope = build_access_scope(caller)
        since = utc_now() - RECENT_ACTIVITY_WINDOW

        try:
            async with self.uow:
                total = await self.uow.audit_records.count(scope)
                recent = await self.uow.audit_records.count(scope, since=since)
                by_action_type = await self.uow.audit_records.count_by_action_type(scope)
                by_entity_type = await self.uow.audit_records.count_by_entity_type(scope)
        except SQLAlchemyError:
            logger.error("Failed to compute audit statistics", exc_info=True)
            return Return.err(Error("RETRIEVAL_FAILED", "Failed to retrieve audit statistics"))

        return Return.ok(
            AuditStatsResponse(
                total_records=total,
                recent_activity=recent,
                action_breakdown=[
                    ActionBreakdownItem(action_type=self.catalog.get(action_type_id), count=count)
                    for action_type_id, count in by_action_type
                ],
                entity_breakdown=[
                    EntityBreakdownItem(entity_type=entity_type, count=count)
                    for entity_type, count in by_entity_type
                ],
            )
        )
