"""
Audit Trail Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AccessScopeKind,
    ActionCode,
    SortOrder,
)

# Export all entities
from .action_type import ActionType
from .audit_record import AuditRecord
from .event_dedup import EventDedup

__all__ = [
    # Enums
    "AccessScopeKind",
    "ActionCode",
    "SortOrder",
    # Entities
    "ActionType",
    "AuditRecord",
    "EventDedup",
]
