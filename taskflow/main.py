"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow import __version__
from taskflow.core.config import settings
from taskflow.core.middleware import setup_middleware
from taskflow.core.exceptions import TaskFlowError
from taskflow.db.memory import EntityStore
from taskflow.db.session import init_store

from taskflow.api.auth import router as auth_router
from taskflow.api.users import router as users_router
from taskflow.api.projects import router as projects_router
from taskflow.api.tasks import router as tasks_router
from taskflow.api.time_entries import router as time_entries_router
from taskflow.api.analytics import router as analytics_router
from taskflow.api.settings import router as settings_router
from taskflow.api.activity import router as activity_router
from taskflow.api.admin import router as admin_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("taskflow")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the entity store on startup unless one was injected."""
    logger.info("Starting %s API", settings.APP_NAME)
    if getattr(app.state, "store", None) is None:
        app.state.store = init_store()
    logger.info("Entity store ready: %s", app.state.store.stats())

    yield

    logger.info("Shutting down %s API", settings.APP_NAME)


def _validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err.get("msg"), "type": err.get("type")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ..., "errors"?: [...]}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Validation error", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(TaskFlowError)
    async def taskflow_exception_handler(request: Request, exc: TaskFlowError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error"},
        )


def create_app(store: Optional[EntityStore] = None) -> FastAPI:
    """Build the API. Pass ``store`` to run against an isolated store."""
    app = FastAPI(
        title="TaskFlow API",
        description="Team task management: projects, tasks, time tracking, analytics",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.store = store

    # Middleware
    setup_middleware(app)
    register_exception_handlers(app)

    # Register routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(projects_router, prefix="/api")
    app.include_router(tasks_router, prefix="/api")
    app.include_router(time_entries_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")
    app.include_router(settings_router, prefix="/api")
    app.include_router(activity_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": __version__,
            "docs": "/docs",
        }

    @app.get("/api/health")
    async def health():
        """Quick health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
