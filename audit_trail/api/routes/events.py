"""
Event Ingestion API Routes

Entry point for services delivering audit events at-least-once.
"""

from fastapi import APIRouter, Depends, Response, status

from audit_trail.api.error import raise_for_error
from audit_trail.api.utils.api_key_auth import verify_service_api_key
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.dedup_service import DedupService
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.app.use_cases.events import (
    IngestAuditEventCommand,
    IngestAuditEventResponse,
    IngestAuditEventUseCase,
)
from audit_trail.depends import get_action_type_catalog, get_dedup_service, get_unit_of_work

router = APIRouter(prefix="/events", tags=["Events"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IngestAuditEventResponse,
    dependencies=[Depends(verify_service_api_key)],
)
async def ingest_event(
    command: IngestAuditEventCommand,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
    dedup: DedupService = Depends(get_dedup_service),
):
    """
    Record an audit event unless its event_id was already processed.

    Returns:
        - 201 Created: status=recorded with the stored record
        - 200 OK: status=duplicate, nothing written

    Raises:
        - 400 Bad Request: UNKNOWN_ACTION_TYPE
        - 401 Unauthorized: Missing or invalid API key
    """
    result = await IngestAuditEventUseCase(uow, catalog, dedup).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    if result.value.status == "duplicate":
        response.status_code = status.HTTP_200_OK
    return result.value
