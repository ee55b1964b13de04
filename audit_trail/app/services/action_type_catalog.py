"""
Read-only action type lookup.

Loaded once at start-up and passed into the use cases that need to resolve
codes or render action types, instead of querying the catalog table on
every request.
"""

from typing import Dict, Iterable, List, Optional

from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.domain.entities import ActionType
from audit_trail.domain.records import ActionTypeSummary


class ActionTypeCatalog:
    def __init__(self, action_types: Iterable[ActionType]):
        self._by_code: Dict[str, ActionTypeSummary] = {}
        self._by_id: Dict[int, ActionTypeSummary] = {}
        self._active: Dict[int, bool] = {}
        for action_type in action_types:
            summary = ActionTypeSummary(
                id=action_type.id,
                code=action_type.code.upper(),
                description=action_type.description,
            )
            self._by_code[summary.code] = summary
            self._by_id[summary.id] = summary
            self._active[summary.id] = action_type.is_active

    @classmethod
    async def load(cls, uow: UnitOfWork) -> "ActionTypeCatalog":
        async with uow:
            action_types = await uow.action_types.list_all()
            return cls(action_types)

    def resolve(self, code: Optional[str]) -> Optional[ActionTypeSummary]:
        """Look up a code case-insensitively"""
        if not code:
            return None
        return self._by_code.get(code.strip().upper())

    def get(self, action_type_id: int) -> Optional[ActionTypeSummary]:
        return self._by_id.get(action_type_id)

    def is_active(self, action_type_id: int) -> bool:
        return self._active.get(action_type_id, False)

    def codes(self) -> List[str]:
        return sorted(self._by_code)

    def __len__(self) -> int:
        return len(self._by_id)
