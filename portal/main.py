import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from portal.api import (
    admin_api,
    assignment_api,
    auth_api,
    dashboard_api,
    event_api,
    message_api,
    notice_api,
    resource_api,
    schedule_api,
    submission_api,
    todo_api,
)
from portal.auth.sessions import DatabaseSessionDirectory, MemorySessionDirectory, SessionDirectory
from portal.configs.database import create_db_engine, init_db
from portal.configs.settings import Settings
from portal.errors import PortalError, validation_details
from portal.services.database_storage import DatabaseStorage
from portal.services.memory_storage import MemStorage
from portal.services.seed_service import seed_demo_data
from portal.services.storage import Storage

logger = logging.getLogger(__name__)


def build_backends(settings: Settings) -> tuple[Storage, SessionDirectory]:
    """Construct the storage and the session directory the settings ask for."""
    ttl = timedelta(seconds=settings.SESSION_TTL_SECONDS)
    if settings.STORAGE_BACKEND == "database":
        engine = create_db_engine(settings.database_url, echo=settings.DB_ECHO)
        return DatabaseStorage(engine), DatabaseSessionDirectory(engine, ttl, sliding=settings.SESSION_SLIDING)
    if settings.STORAGE_BACKEND == "memory":
        sessions = MemorySessionDirectory(
            ttl,
            sliding=settings.SESSION_SLIDING,
            check_period=timedelta(seconds=settings.SESSION_CHECK_PERIOD_SECONDS),
        )
        return MemStorage(), sessions
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")


def _install_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.__cause__)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": validation_details(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None,
               sessions: Optional[SessionDirectory] = None) -> FastAPI:
    settings = settings or Settings()
    if storage is None or sessions is None:
        default_storage, default_sessions = build_backends(settings)
        storage = storage or default_storage
        sessions = sessions or default_sessions

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(storage, DatabaseStorage):
            init_db(storage.engine)
        if settings.SEED_DEMO_DATA:
            seed_demo_data(storage)
        logger.info(f"Portal started with {type(storage).__name__}")
        yield
        sessions.close()
        storage.close()

    app = FastAPI(title="Campus Portal", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.sessions = sessions

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,  # Allowed origins
        allow_credentials=True,  # Allow cookies/auth headers
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    # Include routers
    app.include_router(auth_api.router)
    app.include_router(assignment_api.router)
    app.include_router(submission_api.router)
    app.include_router(resource_api.router)
    app.include_router(notice_api.router)
    app.include_router(schedule_api.router)
    app.include_router(todo_api.router)
    app.include_router(event_api.router)
    app.include_router(message_api.router)
    app.include_router(admin_api.router)
    app.include_router(dashboard_api.router)
    return app


def build_default_app() -> FastAPI:
    from portal.configs import settings

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return create_app(settings)
