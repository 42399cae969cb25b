"""Catalog endpoints: GET /catalogs, GET/DELETE /catalogs/{name}."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from catalog_service.api.deps import get_catalog_store, get_environment_id, get_link_builder
from catalog_service.api.schemas import CatalogListResponse, CatalogResponse
from catalog_service.models.errors import NotFoundError
from catalog_service.service.catalog_store import CatalogStore
from catalog_service.service.links import LinkBuilder

router = APIRouter()


@router.get("", response_model=CatalogListResponse)
async def list_catalogs(
    environment_id: str = Depends(get_environment_id),
    links: LinkBuilder = Depends(get_link_builder),  # noqa: B008
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> CatalogListResponse:
    """List catalogs visible to the caller's environment."""
    resources = store.list_catalogs(environment_id, links)
    return CatalogListResponse(data=[CatalogResponse.from_resource(r) for r in resources])


@router.get("/{name}", response_model=CatalogResponse)
async def get_catalog(
    name: str,
    environment_id: str = Depends(get_environment_id),
    links: LinkBuilder = Depends(get_link_builder),  # noqa: B008
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> CatalogResponse:
    """Get a catalog; an environment catalog shadows a global one of the same name."""
    try:
        resource = store.get_catalog(environment_id, name, links)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    return CatalogResponse.from_resource(resource)


@router.delete("/{name}", status_code=204)
async def delete_catalog(
    name: str,
    environment_id: str = Depends(get_environment_id),
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> None:
    """Delete a catalog of the caller's environment, with its templates."""
    try:
        store.delete_catalog(environment_id, name)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
