"""
Unit tests for IngestAuditEventUseCase

Dedup gate and write path wired together with mocked collaborators.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from audit_trail.app.use_cases.events import IngestAuditEventCommand, IngestAuditEventUseCase


def _stored(record):
    record.id = 1
    return record


@pytest.fixture
def dedup():
    dedup = MagicMock()
    dedup.is_duplicate = AsyncMock(return_value=False)
    dedup.mark_as_processed = AsyncMock()
    return dedup


@pytest.fixture
def command():
    return IngestAuditEventCommand(
        event_id="evt-expense-123-created",
        source_service="expense-service",
        entity_type="ExpenseRecord",
        entity_id="EXP-123",
        action_type_code="CREATE",
        action_by="FIN-john.doe@company.com",
        new_data={"amount": 1500},
    )


@pytest.fixture
def repo(mock_uow):
    mock_uow.audit_records.get_max_version = AsyncMock(return_value=None)
    mock_uow.audit_records.create = AsyncMock(side_effect=_stored)
    return mock_uow.audit_records


@pytest.mark.asyncio
async def test_new_event_is_recorded_then_marked(mock_uow, catalog, dedup, repo, command):
    result = await IngestAuditEventUseCase(mock_uow, catalog, dedup).execute(command)

    assert result.is_ok()
    assert result.value.status == "recorded"
    assert result.value.event_id == "evt-expense-123-created"
    assert result.value.record.version == 1
    dedup.is_duplicate.assert_awaited_once_with("evt-expense-123-created", "expense-service")
    dedup.mark_as_processed.assert_awaited_once_with("evt-expense-123-created", "expense-service")
    repo.create.assert_awaited_once()


@pytest.mark.asyncio
async def test_duplicate_event_is_acknowledged_without_writing(mock_uow, catalog, dedup, repo, command):
    dedup.is_duplicate.return_value = True

    result = await IngestAuditEventUseCase(mock_uow, catalog, dedup).execute(command)

    assert result.is_ok()
    assert result.value.status == "duplicate"
    assert result.value.record is None
    repo.create.assert_not_called()
    dedup.mark_as_processed.assert_not_called()


@pytest.mark.asyncio
async def test_failed_write_is_not_marked(mock_uow, catalog, dedup, repo, command):
    """A rejected event can be redelivered and succeed later"""
    command.action_type_code = "APPROVED"

    result = await IngestAuditEventUseCase(mock_uow, catalog, dedup).execute(command)

    assert result.is_err()
    assert result.error.code == "UNKNOWN_ACTION_TYPE"
    dedup.mark_as_processed.assert_not_called()


@pytest.mark.asyncio
async def test_event_without_id_is_always_recorded(mock_uow, catalog, dedup, repo, command):
    command.event_id = None

    result = await IngestAuditEventUseCase(mock_uow, catalog, dedup).execute(command)

    assert result.value.status == "recorded"
    assert result.value.event_id is None
