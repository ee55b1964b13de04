from abc import ABC, abstractmethod

from audit_trail.app.repositories.action_type_repository import IActionTypeRepository
from audit_trail.app.repositories.audit_record_repository import IAuditRecordRepository
from audit_trail.app.repositories.event_dedup_repository import IEventDedupRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    action_types: IActionTypeRepository
    audit_records: IAuditRecordRepository
    event_dedup: IEventDedupRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
