"""
Unit tests for role-based access scopes
"""

import pytest

from audit_trail.domain.access import (
    AccessScope,
    CallerIdentity,
    build_access_scope,
    department_code_for_role,
)
from audit_trail.domain.entities import AccessScopeKind

ACTORS = [
    "FIN-001",
    "FIN-jane.smith@company.com",
    "HR-alice@company.com",
    "INV-carol@company.com",
    "OPS-erin@company.com",
    "dave@company.com",
    None,
]


def test_super_admin_is_unrestricted():
    scope = build_access_scope(CallerIdentity(id="root", role="SuperAdmin"))

    assert scope.kind == AccessScopeKind.unrestricted
    assert [actor for actor in ACTORS if scope.allows(actor)] == ACTORS


@pytest.mark.parametrize(
    "role, code",
    [
        ("Finance Admin", "FIN"),
        ("HR Admin", "HR"),
        ("Inventory Admin", "INV"),
        ("Operations Admin", "OPS"),
        ("finance Admin", "FIN"),
    ],
)
def test_department_admin_is_scoped_to_department_prefix(role, code):
    scope = build_access_scope(CallerIdentity(id="someone", role=role))

    assert scope.kind == AccessScopeKind.department
    assert scope.value == code


def test_finance_admin_sees_only_fin_prefixed_actors():
    scope = build_access_scope(CallerIdentity(id="FIN-ADMIN-01", role="Finance Admin"))

    visible = [actor for actor in ACTORS if scope.allows(actor)]

    assert visible == ["FIN-001", "FIN-jane.smith@company.com"]


@pytest.mark.parametrize("role", ["Marketing Admin", "Employee", "Admin", "Finance Admins", ""])
def test_other_roles_fall_back_to_self_only(role):
    scope = build_access_scope(CallerIdentity(id="dave@company.com", role=role))

    assert scope == AccessScope.self_only("dave@company.com")
    assert [actor for actor in ACTORS if scope.allows(actor)] == ["dave@company.com"]


def test_department_code_for_role_requires_admin_suffix():
    assert department_code_for_role("Finance Admin") == "FIN"
    assert department_code_for_role("Finance Manager") is None
    assert department_code_for_role("SuperAdmin") is None


def test_scope_is_a_pure_function_of_the_caller():
    caller = CallerIdentity(id="HR-7", role="HR Admin")

    assert build_access_scope(caller) == build_access_scope(caller)
