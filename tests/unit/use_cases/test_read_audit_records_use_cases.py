"""
Unit tests for single-record, entity history and search use cases
"""
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from audit_trail.app.use_cases.audit import (
    GetAuditRecordUseCase,
    GetEntityHistoryUseCase,
    SearchAuditRecordsUseCase,
)
from audit_trail.domain.access import AccessScope
from audit_trail.domain.entities import AuditRecord


def make_record(catalog, record_id, code, version, **fields):
    values = dict(
        id=record_id,
        entity_type="ExpenseRecord",
        entity_id="EXP-123",
        action_type_id=catalog.resolve(code).id,
        action_by="FIN-jane.smith@company.com",
        action_at=datetime(2026, 1, 5 + version, 14, 42),
        version=version,
        created_at=datetime(2026, 1, 5 + version, 14, 42),
    )
    values.update(fields)
    return AuditRecord(**values)


def _db_error():
    return OperationalError("SELECT", {}, Exception("database is locked"))


# ============================================================================
# GetAuditRecordUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_get_record_within_scope(mock_uow, catalog, finance_admin):
    record = make_record(
        catalog,
        7,
        "UPDATE",
        2,
        previous_data={"status": "pending"},
        new_data={"status": "approved"},
    )
    mock_uow.audit_records.get_by_id = AsyncMock(return_value=record)

    result = await GetAuditRecordUseCase(mock_uow, catalog).execute(7, finance_admin)

    assert result.is_ok()
    assert result.value.id == 7
    assert result.value.details.endswith('Changes:\nstatus: "pending" → "approved"')
    mock_uow.audit_records.get_by_id.assert_awaited_once_with(7, AccessScope.department("FIN"))


@pytest.mark.asyncio
async def test_get_record_outside_scope_looks_missing(mock_uow, catalog, plain_user):
    """The repository returns None for out-of-scope rows; callers get NOT_FOUND"""
    mock_uow.audit_records.get_by_id = AsyncMock(return_value=None)

    result = await GetAuditRecordUseCase(mock_uow, catalog).execute(7, plain_user)

    assert result.is_err()
    assert result.error.code == "AUDIT_RECORD_NOT_FOUND"
    assert result.error.message == "Audit record not found"


@pytest.mark.asyncio
async def test_get_record_store_failure(mock_uow, catalog, super_admin):
    mock_uow.audit_records.get_by_id = AsyncMock(side_effect=_db_error())

    result = await GetAuditRecordUseCase(mock_uow, catalog).execute(7, super_admin)

    assert result.error.code == "RETRIEVAL_FAILED"


# ============================================================================
# GetEntityHistoryUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_history_keeps_repository_order(mock_uow, catalog, super_admin):
    records = [
        make_record(catalog, 1, "CREATE", 1, new_data={"amount": 1500}),
        make_record(catalog, 5, "UPDATE", 2, previous_data={"amount": 1500}, new_data={"amount": 1800}),
        make_record(catalog, 9, "ARCHIVE", 3),
    ]
    mock_uow.audit_records.get_entity_history = AsyncMock(return_value=records)

    result = await GetEntityHistoryUseCase(mock_uow, catalog).execute(
        "ExpenseRecord", "EXP-123", super_admin
    )

    assert result.is_ok()
    assert [view.version for view in result.value] == [1, 2, 3]
    assert [view.action_type.code for view in result.value] == ["CREATE", "UPDATE", "ARCHIVE"]
    assert all(view.details for view in result.value)
    mock_uow.audit_records.get_entity_history.assert_awaited_once_with(
        "ExpenseRecord", "EXP-123", AccessScope.unrestricted()
    )


@pytest.mark.asyncio
async def test_history_of_unknown_entity_is_empty(mock_uow, catalog, plain_user):
    mock_uow.audit_records.get_entity_history = AsyncMock(return_value=[])

    result = await GetEntityHistoryUseCase(mock_uow, catalog).execute(
        "ExpenseRecord", "EXP-404", plain_user
    )

    assert result.is_ok()
    assert result.value == []


@pytest.mark.asyncio
async def test_history_store_failure(mock_uow, catalog, super_admin):
    mock_uow.audit_records.get_entity_history = AsyncMock(side_effect=_db_error())

    result = await GetEntityHistoryUseCase(mock_uow, catalog).execute(
        "ExpenseRecord", "EXP-123", super_admin
    )

    assert result.error.code == "RETRIEVAL_FAILED"


# ============================================================================
# SearchAuditRecordsUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_search_trims_term_and_applies_scope(mock_uow, catalog, finance_admin):
    mock_uow.audit_records.search = AsyncMock(
        return_value=([make_record(catalog, 3, "DELETE", 1)], 1)
    )

    result = await SearchAuditRecordsUseCase(mock_uow, catalog).execute(
        "  exp-12 ", finance_admin, page=1, limit=20
    )

    assert result.is_ok()
    assert result.value.total == 1
    assert result.value.limit == 20
    assert result.value.records[0].details.startswith("User FIN-jane.smith@company.com deleted")
    mock_uow.audit_records.search.assert_awaited_once_with(
        "exp-12", AccessScope.department("FIN"), 1, 20
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "   ", None])
async def test_search_requires_term(mock_uow, catalog, super_admin, term):
    mock_uow.audit_records.search = AsyncMock()

    result = await SearchAuditRecordsUseCase(mock_uow, catalog).execute(term, super_admin)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "Search term is required"
    mock_uow.audit_records.search.assert_not_called()


@pytest.mark.asyncio
async def test_search_rejects_bad_paging(mock_uow, catalog, super_admin):
    result = await SearchAuditRecordsUseCase(mock_uow, catalog).execute("EXP", super_admin, page=0)

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_search_store_failure(mock_uow, catalog, super_admin):
    mock_uow.audit_records.search = AsyncMock(side_effect=_db_error())

    result = await SearchAuditRecordsUseCase(mock_uow, catalog).execute("EXP", super_admin)

    assert result.error.code == "RETRIEVAL_FAILED"
