import os

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import settings
from .db import Base, engine, SessionLocal
from .logging import setup_logging, RequestIdMiddleware
from .models import models  # noqa: F401  (registers tables on Base.metadata)
from .auth.router import router as auth_router
from .routes.team_members import router as team_members_router
from .routes.categories import router as categories_router
from .routes.tasks import router as tasks_router
from .routes.time_entries import router as time_entries_router
from .routes.activities import router as activities_router
from .routes.dashboard import router as dashboard_router
from .routes.analytics import router as analytics_router
from .routes.data import router as data_router
from .services.workspace import seed_sample_data
from .storage import DatabaseStorageProvider, get_memory_storage


logger = structlog.get_logger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Reject malformed input with 400 before any write happens
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid data", "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "unhandled_error",
        path=request.url.path,
        method=request.method,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name)

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Routers
    app.include_router(auth_router)
    app.include_router(team_members_router)
    app.include_router(categories_router)
    app.include_router(tasks_router)
    app.include_router(time_entries_router)
    app.include_router(activities_router)
    app.include_router(dashboard_router)
    app.include_router(analytics_router)
    app.include_router(data_router)

    # Metrics
    Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def _startup():
        logger.info("startup", storage_backend=settings.storage_backend, environment=settings.environment)
        if settings.storage_backend == "memory":
            if settings.seed_sample_data:
                seed_sample_data(get_memory_storage())
            return
        # Ensure local SQLite directory exists
        if settings.database_url.startswith("sqlite:///./"):
            os.makedirs("var", exist_ok=True)
        if settings.auto_create_db:
            Base.metadata.create_all(bind=engine)
        if settings.seed_sample_data:
            db = SessionLocal()
            try:
                seed_sample_data(DatabaseStorageProvider(db))
            finally:
                db.close()

    @app.get("/health")
    def health():
        return {"status": "ok", "app": settings.app_name}

    return app


app = create_app()
