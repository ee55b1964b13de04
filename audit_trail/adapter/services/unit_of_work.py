from sqlmodel.ext.asyncio.session import AsyncSession

from audit_trail.adapter.repositories.action_type_repository import ActionTypeRepository
from audit_trail.adapter.repositories.audit_record_repository import AuditRecordRepository
from audit_trail.adapter.repositories.event_dedup_repository import EventDedupRepository
from audit_trail.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.action_types = ActionTypeRepository(self.session)
        self.audit_records = AuditRecordRepository(self.session)
        self.event_dedup = EventDedupRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
