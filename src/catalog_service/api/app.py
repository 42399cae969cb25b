"""FastAPI application factory for the catalog service."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_service import __version__
from catalog_service.api.deps import init_catalog_store, reset_catalog_store
from catalog_service.api.middleware import RequestTimingMiddleware
from catalog_service.api.routers import catalogs, ranges, templates
from catalog_service.api.schemas import HealthResponse
from catalog_service.models.errors import CatalogError
from catalog_service.parser.manifest import load_manifest, seed_repository
from catalog_service.service.catalog_store import CatalogStore
from catalog_service.settings import Settings
from catalog_service.storage.memory_repo import InMemoryCatalogRepository

logger = logging.getLogger("catalog_service.api")


def build_store(settings: Settings) -> CatalogStore:
    """Create the repository, seeding it from the configured manifest."""
    repo = InMemoryCatalogRepository(global_scope=settings.global_scope)
    if settings.catalog_manifest is not None:
        bundles = load_manifest(settings.catalog_manifest, global_scope=settings.global_scope)
        count = seed_repository(repo, bundles)
        logger.info(
            "Seeded %d catalogs / %d templates from %s",
            len(bundles), count, settings.catalog_manifest,
        )
    return CatalogStore(repo)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the CatalogStore alongside the application."""
    init_catalog_store(build_store(app.state.settings))
    try:
        yield
    finally:
        reset_catalog_store()


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = CatalogError(status=str(exc.status_code), message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    body = CatalogError(status="422", message=message or "Invalid request")
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Catalog Service",
        description="Serves deployable application templates per environment.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)

    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]

    app.include_router(catalogs.router, prefix="/catalogs", tags=["catalogs"])
    app.include_router(templates.router, prefix="/templates", tags=["templates"])
    app.include_router(ranges.router, prefix="/ranges", tags=["ranges"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "Catalog Service API v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "catalog_service.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
