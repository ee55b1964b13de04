"""
Admin API Routes - Maintenance Endpoints

Authentication is via Admin API Key, not caller tokens.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from audit_trail.api.error import raise_for_error
from audit_trail.api.utils.api_key_auth import verify_admin_api_key
from audit_trail.app.services.dedup_service import DedupService
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.app.use_cases.audit import DeleteAuditRecordResponse, DeleteAuditRecordUseCase
from audit_trail.depends import get_dedup_service, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class DedupCleanupResponse(BaseModel):
    removed: int


@router.delete(
    "/audit-records/{record_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteAuditRecordResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def delete_audit_record(
    record_id: int,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Hard-delete one audit record. Sibling versions are not renumbered.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: AUDIT_RECORD_NOT_FOUND
    """
    result = await DeleteAuditRecordUseCase(uow).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/event-dedup/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=DedupCleanupResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_event_dedup(dedup: DedupService = Depends(get_dedup_service)):
    """Remove expired dedup markers now instead of waiting for the sweep"""
    removed = await dedup.cleanup_expired()
    return DedupCleanupResponse(removed=removed)
