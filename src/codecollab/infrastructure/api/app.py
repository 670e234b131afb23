"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from codecollab.core.config import Settings, get_settings
from codecollab.core.hooks import HookEvent, HookRegistry
from codecollab.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from codecollab.domain.entities.hook_context import HookContext
from codecollab.domain.exceptions import CodeCollabError, ValidationError
from codecollab.domain.services.input_validation import field_errors_from_pydantic
from codecollab.infrastructure.auth import JWTService
from codecollab.infrastructure.hooks import register_builtin_hooks
from codecollab.infrastructure.persistence.database import DatabaseManager, init_database

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the database on startup and disposes of it on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    db: DatabaseManager = app.state.db_manager

    configure_logging(settings)
    logger.info(
        "Starting CodeCollab",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    if settings.uses_default_secret and settings.is_production:
        logger.warning("Using the default JWT secret in production")

    try:
        await init_database(db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    await app.state.hook_registry.trigger(
        event=HookEvent.ON_BOOTSTRAP,
        context=HookContext(app=app),
    )

    yield

    logger.info("Shutting down CodeCollab")
    await app.state.hook_registry.trigger(
        event=HookEvent.ON_TERMINATE,
        context=HookContext(app=app),
    )
    await db.disconnect()
    logger.info("Database connection closed")


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseManager | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Loaded from environment if omitted.
        db_manager: Database manager to use. Built from settings if omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Share and review code snippets",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    hook_registry = HookRegistry()
    register_builtin_hooks(hook_registry, settings)

    app.state.settings = settings
    app.state.db_manager = db_manager or DatabaseManager(settings)
    app.state.jwt_service = JWTService(
        secret_key=settings.secret_key, issuer=settings.jwt_issuer
    )
    app.state.hook_registry = hook_registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app, settings)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Liveness check. Does not touch the database."""
        settings: Settings = app.state.settings
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check including database connectivity."""
        settings: Settings = app.state.settings
        db: DatabaseManager = app.state.db_manager

        if await db.check_connection():
            return {
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
        settings: Application settings (for the API prefix).
    """
    from codecollab.infrastructure.api.routes import (
        auth_router,
        snippets_router,
        users_router,
    )

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
    app.include_router(
        snippets_router, prefix=f"{settings.api_prefix}/snippets", tags=["snippets"]
    )
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])

    @app.get("/", tags=["root"])
    async def root():
        """Service name and version."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
        }


def _error_body(message: str, details: list[dict] | None = None) -> dict:
    body: dict = {"success": False, "error": message}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Every error leaves as ``{"success": false, "error": ..., "details"?: [...]}``.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(CodeCollabError)
    async def codecollab_error_handler(request: Request, exc: CodeCollabError):
        """Map classified business errors to their status codes."""
        details = None
        if isinstance(exc, ValidationError):
            details = [d.to_dict() for d in exc.details]
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, details),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed JSON or bad path/query types."""
        details = [d.to_dict() for d in field_errors_from_pydantic(exc.errors())]
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation error", details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes, wrong methods and other framework-level errors."""
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404:
            message = f"Route {request.method} {request.url.path} not found"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        body = _error_body("Internal server error")
        if app.state.settings.debug:
            body["detail"] = str(exc)
        return JSONResponse(status_code=500, content=body)


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and tag it with a correlation ID."""
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
