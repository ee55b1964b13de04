import asyncio
import logging
import time
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


def build_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from audit_trail.adapter.services.dedup_sweeper import dedup_sweeper_loop
        from audit_trail.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
        from audit_trail.app.services.action_type_catalog import ActionTypeCatalog
        from audit_trail.app.use_cases.admin import SeedActionTypesUseCase
        from audit_trail.depends import AsyncSessionLocal, engine

        if ApplicationConfig.AUTO_CREATE_SCHEMA:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        async with AsyncSessionLocal() as session:
            uow = SqlAlchemyUnitOfWork(session)
            if ApplicationConfig.SEED_ACTION_TYPES:
                await SeedActionTypesUseCase(uow).execute()
            app.state.action_type_catalog = await ActionTypeCatalog.load(uow)
        logger.info(
            f"Action type catalog loaded: {', '.join(app.state.action_type_catalog.codes())}"
        )

        sweeper = None
        if ApplicationConfig.DEDUP_CLEANUP_INTERVAL_SECONDS > 0:
            sweeper = asyncio.create_task(
                dedup_sweeper_loop(
                    AsyncSessionLocal,
                    ApplicationConfig.DEDUP_CLEANUP_INTERVAL_SECONDS,
                    ApplicationConfig.DEDUP_TTL_DAYS,
                )
            )

        yield

        try:
            if sweeper is not None:
                sweeper.cancel()
                with suppress(asyncio.CancelledError):
                    await sweeper
        finally:
            await engine.dispose()

    return lifespan


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Audit Trail Service", version="0.1.0", lifespan=build_lifespan(ApplicationConfig))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from audit_trail.api.routes import admin, audit, events

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(audit.router, prefix=prefix, tags=["Audit Records"])
    app.include_router(events.router, prefix=prefix, tags=["Events"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
