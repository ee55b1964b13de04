"""
Audit Trail Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum
from typing import Optional


class ActionCode(str, Enum):
    """Action type codes the narrative builder knows how to describe"""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ARCHIVE = "ARCHIVE"
    UNARCHIVE = "UNARCHIVE"
    EXPORT = "EXPORT"
    IMPORT = "IMPORT"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    @classmethod
    def parse(cls, code: Optional[str]) -> Optional["ActionCode"]:
        """Return the matching code (case-insensitive) or None if unrecognized"""
        if not code:
            return None
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None


class AccessScopeKind(str, Enum):
    """How far a caller's read access reaches"""

    unrestricted = "unrestricted"
    department = "department"
    self_only = "self_only"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"
