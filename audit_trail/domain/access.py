"""
Role-based read scope.

Every read path narrows its query by the scope derived here. The scope is a
plain value; the repository adapter translates it into a SQL predicate.
"""

import re
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from .entities.enums import AccessScopeKind

SUPER_ADMIN_ROLE = "SuperAdmin"

# Department word in "<Department> Admin" -> prefix of action_by identities
DEPARTMENT_CODES: Dict[str, str] = {
    "finance": "FIN",
    "hr": "HR",
    "inventory": "INV",
    "operations": "OPS",
}

_DEPARTMENT_ADMIN_PATTERN = re.compile(r"(?P<department>\S+) Admin")


class CallerIdentity(BaseModel):
    """Authenticated caller as resolved by the request layer"""

    model_config = ConfigDict(frozen=True)

    id: str
    role: str


class AccessScope(BaseModel):
    """Which audit records a caller may see"""

    model_config = ConfigDict(frozen=True)

    kind: AccessScopeKind
    value: Optional[str] = None

    @classmethod
    def unrestricted(cls) -> "AccessScope":
        return cls(kind=AccessScopeKind.unrestricted)

    @classmethod
    def department(cls, code: str) -> "AccessScope":
        return cls(kind=AccessScopeKind.department, value=code)

    @classmethod
    def self_only(cls, caller_id: str) -> "AccessScope":
        return cls(kind=AccessScopeKind.self_only, value=caller_id)

    def allows(self, action_by: Optional[str]) -> bool:
        """In-memory form of the same predicate the repository applies"""
        if self.kind == AccessScopeKind.unrestricted:
            return True
        if action_by is None:
            return False
        if self.kind == AccessScopeKind.department:
            return action_by.startswith(self.value)
        return action_by == self.value


def department_code_for_role(role: str) -> Optional[str]:
    """Department prefix for a "<Department> Admin" role, None otherwise"""
    match = _DEPARTMENT_ADMIN_PATTERN.fullmatch(role.strip())
    if match is None:
        return None
    return DEPARTMENT_CODES.get(match.group("department").lower())


def build_access_scope(caller: CallerIdentity) -> AccessScope:
    """
    Derive the read scope for a caller.

    - SuperAdmin sees everything
    - "<Department> Admin" sees records whose action_by starts with the
      department code; an unknown department falls through to self-only
    - Everyone else sees only the records they authored
    """
    if caller.role == SUPER_ADMIN_ROLE:
        return AccessScope.unrestricted()

    department_code = department_code_for_role(caller.role)
    if department_code:
        return AccessScope.department(department_code)

    return AccessScope.self_only(caller.id)
