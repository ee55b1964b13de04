import pytest
from unittest.mock import AsyncMock

from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.domain.entities import ActionType


def test_resolve_is_case_insensitive(catalog):
    create = catalog.resolve("CREATE")

    assert create is not None
    assert catalog.resolve("create") == create
    assert catalog.resolve(" Create ") == create


@pytest.mark.parametrize("code", ["APPROVED", "", None])
def test_resolve_unknown_code(catalog, code):
    assert catalog.resolve(code) is None


def test_get_by_id_and_activity(catalog):
    login = catalog.resolve("LOGIN")

    assert catalog.get(login.id) == login
    assert catalog.is_active(login.id) is True
    assert catalog.is_active(catalog.resolve("APPROVE").id) is False
    assert catalog.get(12345) is None
    assert catalog.is_active(12345) is False


def test_codes_are_sorted(catalog):
    assert catalog.codes() == sorted(catalog.codes())
    assert "UNARCHIVE" in catalog.codes()
    assert len(catalog) == 10


def test_codes_are_normalized_to_upper_case():
    catalog = ActionTypeCatalog([ActionType(id=1, code="approve", description="Approve")])

    assert catalog.codes() == ["APPROVE"]
    assert catalog.resolve("APPROVE").code == "APPROVE"


@pytest.mark.asyncio
async def test_load_reads_all_action_types(mock_uow):
    mock_uow.action_types.list_all = AsyncMock(
        return_value=[
            ActionType(id=1, code="CREATE", description="Create"),
            ActionType(id=2, code="UPDATE", description="Update"),
        ]
    )

    catalog = await ActionTypeCatalog.load(mock_uow)

    assert catalog.codes() == ["CREATE", "UPDATE"]
    assert catalog.resolve("update").id == 2
    mock_uow.__aenter__.assert_awaited_once()
