"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount auth, workspace and file routers under the /api prefix
  - Expose health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: business endpoints

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
  - create_app() builds a fresh app (tests); `app` is the module-level instance
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..container import get_blob_store
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Settings are validated on first access."""
    settings = get_settings()

    # Fail-fast: storage mal configurado corta el arranque.
    get_blob_store()

    logger.info(
        "ShareSpace API starting up",
        extra={
            "app_env": settings.app_env,
            "storage_backend": settings.storage_backend,
            "anonymous_ttl_hours": settings.anonymous_ttl_hours,
            "max_upload_bytes": settings.max_upload_bytes,
        },
    )
    try:
        yield
    finally:
        logger.info("ShareSpace API shutting down")


def _get_allowed_origins() -> list[str]:
    return get_settings().get_allowed_origins_list()


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShareSpace API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "User registration and JWT login"},
            {"name": "workspaces", "description": "Workspaces and membership"},
            {"name": "files", "description": "File lifecycle and share links"},
        ],
    )

    # Middleware order (bottom = first to execute):
    # 1. CORSMiddleware - handles preflight
    # 2. RequestContextMiddleware - sets request_id
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
        expose_headers=["X-Request-Id", "Content-Disposition"],
    )

    app.include_router(build_router(), prefix="/api")
    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        Liveness: el proceso responde.

        Returns:
            ok: True
            storage: backend configurado
            request_id: Correlation ID for this request
        """
        return {
            "ok": True,
            "storage": get_settings().storage_backend,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
