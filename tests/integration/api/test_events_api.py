import pytest
from httpx import AsyncClient

API = "/api/events"
EVENT_ID = "evt-expense-123-created"


@pytest.mark.asyncio
async def test_event_is_recorded_once(client: AsyncClient, test_data, service_headers, auth_headers):
    """Redelivery of the same event id is acknowledged without a second record"""
    first = await client.post(API, json=test_data.event("expense_create", EVENT_ID), headers=service_headers)
    second = await client.post(API, json=test_data.event("expense_create", EVENT_ID), headers=service_headers)

    assert first.status_code == 201
    assert first.json()["status"] == "recorded"
    assert first.json()["record"]["version"] == 1
    assert second.status_code == 200
    assert second.json() == {
        "status": "duplicate",
        "event_id": "evt-expense-123-created",
        "record": None,
    }

    history = await client.get(
        "/api/audit-records/history/ExpenseRecord/EXP-123",
        headers=auth_headers("root@company.com", "SuperAdmin"),
    )
    assert len(history.json()) == 1


@pytest.mark.asyncio
async def test_distinct_events_version_the_same_entity(client: AsyncClient, test_data, service_headers):
    first = await client.post(API, json=test_data.event("expense_create", "evt-1"), headers=service_headers)
    update = test_data.event("expense_update", "evt-2")
    second = await client.post(API, json=update, headers=service_headers)

    assert first.json()["record"]["version"] == 1
    assert second.json()["record"]["version"] == 2


@pytest.mark.asyncio
async def test_events_without_id_are_not_deduplicated(client: AsyncClient, test_data, service_headers):
    payload = test_data.get_copy("user_login")

    first = await client.post(API, json=payload, headers=service_headers)
    second = await client.post(API, json=payload, headers=service_headers)

    assert first.status_code == second.status_code == 201
    assert second.json()["record"]["version"] == 2


@pytest.mark.asyncio
async def test_rejected_event_can_be_redelivered(client: AsyncClient, test_data, service_headers):
    payload = test_data.event("expense_create", EVENT_ID)
    payload["action_type_code"] = "APPROVED"

    rejected = await client.post(API, json=payload, headers=service_headers)
    payload["action_type_code"] = "CREATE"
    accepted = await client.post(API, json=payload, headers=service_headers)

    assert rejected.status_code == 400
    assert accepted.status_code == 201
    assert accepted.json()["status"] == "recorded"


@pytest.mark.asyncio
async def test_events_require_service_key(client: AsyncClient, test_data):
    response = await client.post(API, json=test_data.event("expense_create", EVENT_ID))

    assert response.status_code == 401
