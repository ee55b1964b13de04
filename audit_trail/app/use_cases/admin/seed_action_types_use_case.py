"""
Use Case: Seed Action Types

Runs at start-up. Inserts the standard catalog entries that are missing;
existing entries (including deactivated ones) are left as they are.
"""

import logging
from typing import List

from pydantic import BaseModel

from libs.result import Result, Return
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.entities import ActionCode, ActionType

logger = logging.getLogger(__name__)

DEFAULT_ACTION_TYPES = {
    ActionCode.CREATE: "A new record was created",
    ActionCode.UPDATE: "An existing record was modified",
    ActionCode.DELETE: "A record was deleted",
    ActionCode.ARCHIVE: "A record was archived",
    ActionCode.UNARCHIVE: "A record was restored from the archive",
    ActionCode.EXPORT: "Data was exported",
    ActionCode.IMPORT: "Data was imported",
    ActionCode.LOGIN: "A user logged in",
    ActionCode.LOGOUT: "A user logged out",
}


class SeedActionTypesResponse(BaseModel):
    created: List[str]
    existing: List[str]


class SeedActionTypesUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SeedActionTypesResponse]:
        created, existing = [], []

        async with self.uow:
            for code, description in DEFAULT_ACTION_TYPES.items():
                if await self.uow.action_types.get_by_code(code.value) is not None:
                    existing.append(code.value)
                    continue
                await self.uow.action_types.create(
                    ActionType(code=code.value, description=description, is_active=True)
                )
                created.append(code.value)

            await self.uow.commit()

        if created:
            logger.info("Seeded action types: %s", ", ".join(created))

        return Return.ok(SeedActionTypesResponse(created=created, existing=existing))
