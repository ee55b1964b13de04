from datetime import timedelta

import pytest

from audit_trail.app.services.dedup_service import DedupService
from audit_trail.domain.base import utc_now
from audit_trail.domain.entities import EventDedup


@pytest.mark.asyncio
async def test_dedup_lifecycle(uow):
    dedup = DedupService(uow, ttl_days=7)

    assert await dedup.is_duplicate("evt-1", "expense-service") is False
    await dedup.mark_as_processed("evt-1", "expense-service")
    assert await dedup.is_duplicate("evt-1", "expense-service") is True
    # source_service is not part of the key
    assert await dedup.is_duplicate("evt-1", "inventory-service") is True
    assert await dedup.is_duplicate("evt-2") is False


@pytest.mark.asyncio
async def test_second_marker_for_same_event_is_ignored(uow):
    dedup = DedupService(uow)

    await dedup.mark_as_processed("evt-1", "expense-service")
    await dedup.mark_as_processed("evt-1", "expense-service")

    async with uow:
        marker = await uow.event_dedup.get_by_event_id("evt-1")
    assert marker is not None


@pytest.mark.asyncio
async def test_cleanup_removes_expired_markers(uow):
    now = utc_now()
    async with uow:
        await uow.event_dedup.create(EventDedup(event_id="evt-old", expires_at=now - timedelta(seconds=1)))
        await uow.event_dedup.create(EventDedup(event_id="evt-new", expires_at=now + timedelta(days=1)))
        await uow.commit()

    removed = await DedupService(uow).cleanup_expired()

    assert removed == 1
    dedup = DedupService(uow)
    assert await dedup.is_duplicate("evt-old") is False
    assert await dedup.is_duplicate("evt-new") is True
