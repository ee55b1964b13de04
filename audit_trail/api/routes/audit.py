"""
Audit Record API Routes

Write endpoint for services and role-scoped read endpoints for callers.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from audit_trail.api.error import raise_for_error
from audit_trail.api.utils.api_key_auth import verify_service_api_key
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.unit_of_work import UnitOfWork
from audit_trail.app.use_cases.audit import (
    AuditRecordPage,
    AuditRecordQuery,
    AuditRecordSearchResult,
    AuditStatsResponse,
    CreateAuditRecordCommand,
    CreateAuditRecordUseCase,
    GetAuditRecordUseCase,
    GetAuditStatsUseCase,
    GetEntityHistoryUseCase,
    ListAuditRecordsUseCase,
    SearchAuditRecordsUseCase,
)
from audit_trail.depends import get_action_type_catalog, get_current_caller, get_unit_of_work
from audit_trail.domain.access import CallerIdentity
from audit_trail.domain.entities import SortOrder
from audit_trail.domain.records import AuditRecordView

router = APIRouter(prefix="/audit-records", tags=["Audit Records"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AuditRecordView,
    dependencies=[Depends(verify_service_api_key)],
)
async def create_audit_record(
    command: CreateAuditRecordCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
):
    """
    Record one action against one business entity.

    Requires: X-API-Key header

    Raises:
        - 400 Bad Request: UNKNOWN_ACTION_TYPE
        - 401 Unauthorized: Missing or invalid API key
        - 500 Internal Server Error: PERSISTENCE_FAILED
    """
    result = await CreateAuditRecordUseCase(uow, catalog).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=AuditRecordPage)
async def list_audit_records(
    caller: CallerIdentity = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
    entity_type: Optional[str] = Query(None),
    entity_id: Optional[str] = Query(None),
    action_type_code: Optional[str] = Query(None),
    action_by: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, description="ISO date or datetime, inclusive"),
    date_to: Optional[str] = Query(None, description="ISO date or datetime, inclusive"),
    page: int = Query(1, ge=1),
    limit: int = Query(ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    sort_by: str = Query("action_at"),
    sort_order: SortOrder = Query(SortOrder.desc),
):
    """
    List audit records visible to the caller.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (bad dates, reversed range, unknown sort column)
        - 401 Unauthorized: Invalid or expired token
        - 500 Internal Server Error: RETRIEVAL_FAILED
    """
    query = AuditRecordQuery(
        entity_type=entity_type,
        entity_id=entity_id,
        action_type_code=action_type_code,
        action_by=action_by,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = await ListAuditRecordsUseCase(uow, catalog).execute(query, caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/search", status_code=status.HTTP_200_OK, response_model=AuditRecordSearchResult)
async def search_audit_records(
    q: str = Query(..., description="Matched against entity_type, entity_id and action_by"),
    page: int = Query(1, ge=1),
    limit: int = Query(ApplicationConfig.DEFAULT_PAGE_SIZE, ge=1, le=ApplicationConfig.MAX_PAGE_SIZE),
    caller: CallerIdentity = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
):
    result = await SearchAuditRecordsUseCase(uow, catalog).execute(q, caller, page=page, limit=limit)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=AuditStatsResponse)
async def get_audit_stats(
    caller: CallerIdentity = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
):
    result = await GetAuditStatsUseCase(uow, catalog).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/history/{entity_type}/{entity_id}",
    status_code=status.HTTP_200_OK,
    response_model=List[AuditRecordView],
)
async def get_entity_history(
    entity_type: str,
    entity_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
):
    """Timeline of one entity, oldest version first"""
    result = await GetEntityHistoryUseCase(uow, catalog).execute(entity_type, entity_id, caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{record_id}", status_code=status.HTTP_200_OK, response_model=AuditRecordView)
async def get_audit_record(
    record_id: int,
    caller: CallerIdentity = Depends(get_current_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: ActionTypeCatalog = Depends(get_action_type_catalog),
):
    """
    Raises:
        - 404 Not Found: AUDIT_RECORD_NOT_FOUND (absent or outside the caller's scope)
    """
    result = await GetAuditRecordUseCase(uow, catalog).execute(record_id, caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
