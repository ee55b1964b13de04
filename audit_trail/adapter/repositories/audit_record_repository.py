from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_, true
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from audit_trail.app.repositories.audit_record_repository import (
    SORTABLE_COLUMNS,
    AuditRecordFilter,
    IAuditRecordRepository,
)
from audit_trail.domain.access import AccessScope
from audit_trail.domain.entities import AccessScopeKind, AuditRecord, SortOrder


def scope_clause(scope: AccessScope):
    """SQL form of an AccessScope"""
    if scope.kind == AccessScopeKind.unrestricted:
        return true()
    if scope.kind == AccessScopeKind.department:
        # case-sensitive prefix; LIKE ignores case on SQLite
        return func.substr(AuditRecord.action_by, 1, len(scope.value)) == scope.value
    return AuditRecord.action_by == scope.value


def filter_clauses(filters: AuditRecordFilter) -> list:
    clauses = []
    if filters.entity_type:
        clauses.append(AuditRecord.entity_type == filters.entity_type)
    if filters.entity_id:
        clauses.append(AuditRecord.entity_id == filters.entity_id)
    if filters.action_type_id is not None:
        clauses.append(AuditRecord.action_type_id == filters.action_type_id)
    if filters.action_by:
        clauses.append(AuditRecord.action_by == filters.action_by)
    if filters.action_from is not None:
        clauses.append(AuditRecord.action_at >= filters.action_from)
    if filters.action_to is not None:
        clauses.append(AuditRecord.action_at <= filters.action_to)
    return clauses


def search_clause(term: str):
    """Case-insensitive substring match on any of the searchable columns"""
    needle = term.lower()
    return or_(
        func.lower(AuditRecord.entity_type).contains(needle, autoescape=True),
        func.lower(AuditRecord.entity_id).contains(needle, autoescape=True),
        func.lower(AuditRecord.action_by).contains(needle, autoescape=True),
    )


class AuditRecordRepository(IAuditRecordRepository):
    """AuditRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: AuditRecord) -> AuditRecord:
        """Create a new audit record (immutable)"""
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def get_max_version(self, entity_type: str, entity_id: str) -> Optional[int]:
        stmt = select(func.max(AuditRecord.version)).where(
            AuditRecord.entity_type == entity_type,
            AuditRecord.entity_id == entity_id,
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def get_by_id(self, record_id: int, scope: AccessScope) -> Optional[AuditRecord]:
        stmt = select(AuditRecord).where(AuditRecord.id == record_id, scope_clause(scope))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_paginated(
        self,
        filters: AuditRecordFilter,
        scope: AccessScope,
        page: int,
        limit: int,
        sort_by: str = "action_at",
        sort_order: SortOrder = SortOrder.desc,
    ) -> Tuple[List[AuditRecord], int]:
        """
        Get one page of records.

        The access scope goes first in the WHERE clause; ties in the sort
        column are broken by id in the same direction so pages are stable.
        """
        if sort_by not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {sort_by}")

        clauses = [scope_clause(scope), *filter_clauses(filters)]

        sort_column = getattr(AuditRecord, sort_by)
        if sort_order == SortOrder.asc:
            order = (sort_column.asc(), AuditRecord.id.asc())
        else:
            order = (sort_column.desc(), AuditRecord.id.desc())

        stmt = (
            select(AuditRecord)
            .where(*clauses)
            .order_by(*order)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        records = list(result.all())

        total = await self._count(clauses)
        return records, total

    async def get_entity_history(
        self, entity_type: str, entity_id: str, scope: AccessScope
    ) -> List[AuditRecord]:
        stmt = (
            select(AuditRecord)
            .where(
                scope_clause(scope),
                AuditRecord.entity_type == entity_type,
                AuditRecord.entity_id == entity_id,
            )
            .order_by(AuditRecord.version.asc(), AuditRecord.id.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def search(
        self, term: str, scope: AccessScope, page: int, limit: int
    ) -> Tuple[List[AuditRecord], int]:
        clauses = [scope_clause(scope), search_clause(term)]

        stmt = (
            select(AuditRecord)
            .where(*clauses)
            .order_by(AuditRecord.action_at.desc(), AuditRecord.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        records = list(result.all())

        total = await self._count(clauses)
        return records, total

    async def count(self, scope: AccessScope, since: Optional[datetime] = None) -> int:
        clauses = [scope_clause(scope)]
        if since is not None:
            clauses.append(AuditRecord.action_at >= since)
        return await self._count(clauses)

    async def count_by_action_type(self, scope: AccessScope) -> List[Tuple[int, int]]:
        stmt = (
            select(AuditRecord.action_type_id, func.count(AuditRecord.id))
            .where(scope_clause(scope))
            .group_by(AuditRecord.action_type_id)
            .order_by(AuditRecord.action_type_id)
        )
        result = await self.session.exec(stmt)
        return [(action_type_id, count) for action_type_id, count in result.all()]

    async def count_by_entity_type(self, scope: AccessScope) -> List[Tuple[str, int]]:
        count_column = func.count(AuditRecord.id).label("record_count")
        stmt = (
            select(AuditRecord.entity_type, count_column)
            .where(scope_clause(scope))
            .group_by(AuditRecord.entity_type)
            .order_by(count_column.desc(), AuditRecord.entity_type)
        )
        result = await self.session.exec(stmt)
        return [(entity_type, count) for entity_type, count in result.all()]

    async def delete(self, record_id: int) -> bool:
        """Hard-delete a record by id"""
        stmt = delete(AuditRecord).where(AuditRecord.id == record_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def _count(self, clauses: list) -> int:
        stmt = select(func.count(AuditRecord.id)).where(*clauses)
        result = await self.session.exec(stmt)
        return result.one()
