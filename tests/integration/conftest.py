import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from audit_trail.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from audit_trail.api.utils.jwt import create_access_token
from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
from audit_trail.app.use_cases.admin import SeedActionTypesUseCase
from audit_trail.depends import get_action_type_catalog, get_unit_of_work
from config import ApplicationConfig


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
async def catalog(uow):
    await SeedActionTypesUseCase(uow).execute()
    return await ActionTypeCatalog.load(uow)


@pytest_asyncio.fixture
async def client(db_session, catalog):
    from audit_trail.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_action_type_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def service_headers():
    return {"X-API-Key": ApplicationConfig.SERVICE_API_KEY}


@pytest_asyncio.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
def auth_headers():
    def build(user_id: str, role: str):
        return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}

    return build
