from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from audit_trail.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from audit_trail.api.utils.jwt import decode_access_token
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.services.dedup_service import DedupService
from audit_trail.domain.access import CallerIdentity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_action_type_catalog(request: Request) -> ActionTypeCatalog:
    """Catalog loaded by the application lifespan"""
    catalog = getattr(request.app.state, "action_type_catalog", None)
    if catalog is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Action type catalog not loaded",
        )
    return catalog


def get_dedup_service(uow=Depends(get_unit_of_work)) -> DedupService:
    return DedupService(uow, ttl_days=ApplicationConfig.DEDUP_TTL_DAYS)


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CallerIdentity:
    """
    Dependency to extract the caller identity from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        CallerIdentity built from the user_id and role claims

    Raises:
        HTTPException: 401 if token is invalid, expired or lacks claims
    """
    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return CallerIdentity(id=payload["user_id"], role=payload["role"])
