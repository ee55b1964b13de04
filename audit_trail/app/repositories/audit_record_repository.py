from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel

from audit_trail.domain.access import AccessScope
from audit_trail.domain.entities import AuditRecord, SortOrder

# Columns list results may be ordered by
SORTABLE_COLUMNS = (
    "id",
    "entity_type",
    "entity_id",
    "action_type_id",
    "action_by",
    "action_at",
    "version",
    "ip_address",
    "created_at",
)


class AuditRecordFilter(BaseModel):
    """Caller-supplied list filters, already resolved to stored values"""

    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    action_type_id: Optional[int] = None
    action_by: Optional[str] = None
    action_from: Optional[datetime] = None
    action_to: Optional[datetime] = None


class IAuditRecordRepository(ABC):
    """
    AuditRecord repository interface - application layer

    Every read method takes the caller's AccessScope and ANDs it with its
    own predicates. delete() is the only method without a scope.
    """

    @abstractmethod
    async def create(self, record: AuditRecord) -> AuditRecord:
        """Create a new audit record (immutable)"""
        pass

    @abstractmethod
    async def get_max_version(self, entity_type: str, entity_id: str) -> Optional[int]:
        """Highest version stored for the entity key, None if there is none"""
        pass

    @abstractmethod
    async def get_by_id(self, record_id: int, scope: AccessScope) -> Optional[AuditRecord]:
        """Get a record by id if it is visible within the scope"""
        pass

    @abstractmethod
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
        Get one page of records matching filters within the scope.

        Returns:
            Tuple of (records on the page, total matching records)
        """
        pass

    @abstractmethod
    async def get_entity_history(
        self, entity_type: str, entity_id: str, scope: AccessScope
    ) -> List[AuditRecord]:
        """Get all visible records for an entity key ordered by version ascending"""
        pass

    @abstractmethod
    async def search(
        self, term: str, scope: AccessScope, page: int, limit: int
    ) -> Tuple[List[AuditRecord], int]:
        """
        Case-insensitive substring search over entity_type, entity_id, action_by.

        Returns:
            Tuple of (records ordered by action_at DESC, total matches)
        """
        pass

    @abstractmethod
    async def count(self, scope: AccessScope, since: Optional[datetime] = None) -> int:
        """Count visible records, optionally only those with action_at >= since"""
        pass

    @abstractmethod
    async def count_by_action_type(self, scope: AccessScope) -> List[Tuple[int, int]]:
        """Visible record counts grouped by action_type_id"""
        pass

    @abstractmethod
    async def count_by_entity_type(self, scope: AccessScope) -> List[Tuple[str, int]]:
        """Visible record counts grouped by entity_type, most frequent first"""
        pass

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        """Hard-delete a record. Returns True if a row was removed."""
        pass
