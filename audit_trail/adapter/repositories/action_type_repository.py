from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from audit_trail.app.repositories.action_type_repository import IActionTypeRepository
from audit_trail.domain.entities import ActionType


class ActionTypeRepository(IActionTypeRepository):
    """ActionType repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_code(self, code: str) -> Optional[ActionType]:
        """Get action type by its upper-case code"""
        stmt = select(ActionType).where(ActionType.code == code.upper())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[ActionType]:
        """Get every action type, active or not"""
        stmt = select(ActionType).order_by(ActionType.id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, action_type: ActionType) -> ActionType:
        """Create a new catalog entry"""
        self.session.add(action_type)
        await self.session.flush()
        await self.session.refresh(action_type)
        return action_type
