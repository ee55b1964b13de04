from abc import ABC, abstractmethod
from typing import List, Optional

from audit_trail.domain.entities import ActionType


class IActionTypeRepository(ABC):
    """ActionType repository interface - application layer"""

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[ActionType]:
        """Get action type by its upper-case code"""
        pass

    @abstractmethod
    async def list_all(self) -> List[ActionType]:
        """Get every action type, active or not"""
        pass

    @abstractmethod
    async def create(self, action_type: ActionType) -> ActionType:
        """Create a new catalog entry"""
        pass
