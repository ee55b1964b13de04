import pytest
from unittest.mock import AsyncMock, MagicMock

from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.use_cases.admin import DEFAULT_ACTION_TYPES
from audit_trail.domain.access import CallerIdentity
from audit_trail.domain.entities import ActionType

# id assigned to each seeded code in the test catalog
ACTION_TYPE_IDS = {code.value: index for index, code in enumerate(DEFAULT_ACTION_TYPES, start=1)}
INACTIVE_ACTION_TYPE_ID = 99


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def catalog():
    action_types = [
        ActionType(id=ACTION_TYPE_IDS[code.value], code=code.value, description=description)
        for code, description in DEFAULT_ACTION_TYPES.items()
    ]
    action_types.append(
        ActionType(id=INACTIVE_ACTION_TYPE_ID, code="APPROVE", description="Retired", is_active=False)
    )
    return ActionTypeCatalog(action_types)


@pytest.fixture
def super_admin():
    return CallerIdentity(id="root@company.com", role="SuperAdmin")


@pytest.fixture
def finance_admin():
    return CallerIdentity(id="FIN-ADMIN-01", role="Finance Admin")


@pytest.fixture
def plain_user():
    return CallerIdentity(id="dave@company.com", role="Employee")
