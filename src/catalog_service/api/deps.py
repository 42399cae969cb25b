"""Dependency injection for FastAPI: CatalogStore singleton and request scoping."""

from __future__ import annotations

from fastapi import HTTPException, Request

from catalog_service.service.catalog_store import CatalogStore
from catalog_service.service.links import LinkBuilder
from catalog_service.settings import Settings

_catalog_store: CatalogStore | None = None


def init_catalog_store(store: CatalogStore) -> None:
    """Set the global CatalogStore (called at app startup)."""
    global _catalog_store  # noqa: PLW0603
    _catalog_store = store


def get_catalog_store() -> CatalogStore:
    """FastAPI ``Depends`` provider for CatalogStore."""
    if _catalog_store is None:
        raise RuntimeError("CatalogStore not initialised; call init_catalog_store() first")
    return _catalog_store


def reset_catalog_store() -> None:
    """Clear the global CatalogStore (for tests)."""
    global _catalog_store  # noqa: PLW0603
    _catalog_store = None


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def get_environment_id(request: Request) -> str:
    """Tenant scope of the caller: header first, then query parameter."""
    settings = _settings(request)
    environment = request.headers.get(settings.environment_header)
    if not environment:
        environment = request.query_params.get(settings.environment_query_param)
    if not environment:
        raise HTTPException(status_code=400, detail="Request is missing environment header")
    return environment


def get_link_builder(request: Request) -> LinkBuilder:
    return LinkBuilder(str(request.base_url))


def get_platform_version(request: Request) -> str | None:
    """Platform version from ``?platformVersion=``, else the configured default."""
    value = request.query_params.get("platformVersion")
    if value is None:
        value = _settings(request).default_platform_version
    return value or None
