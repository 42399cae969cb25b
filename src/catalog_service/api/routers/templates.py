"""Template endpoints: listing, template / version lookup, icon and readme blobs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from catalog_service.api.deps import (
    get_catalog_store,
    get_environment_id,
    get_link_builder,
    get_platform_version,
)
from catalog_service.api.schemas import (
    TemplateListResponse,
    TemplateResponse,
    TemplateVersionResponse,
)
from catalog_service.identifiers import parse_id
from catalog_service.models.errors import (
    AmbiguousIdentifierError,
    DescriptorParseError,
    NotFoundError,
)
from catalog_service.service.catalog_store import CatalogStore
from catalog_service.service.links import LinkBuilder

router = APIRouter()

_IMAGE_TYPES = {
    "svg": "image/svg+xml",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
}


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    catalog_id: str = Query("", alias="catalogId"),
    category: list[str] = Query([]),  # noqa: B008
    category_ne: list[str] = Query([]),  # noqa: B008
    environment_id: str = Depends(get_environment_id),
    platform_version: str | None = Depends(get_platform_version),
    links: LinkBuilder = Depends(get_link_builder),  # noqa: B008
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> TemplateListResponse:
    """List templates, filtered by catalog and included / excluded categories."""
    resources = store.list_templates(
        environment_id,
        links,
        catalog_name=catalog_id,
        categories=category,
        categories_ne=category_ne,
        platform_version=platform_version,
    )
    return TemplateListResponse(data=[TemplateResponse.from_resource(r) for r in resources])


@router.get("/{identifier}/icon")
async def get_icon(
    identifier: str,
    environment_id: str = Depends(get_environment_id),
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> Response:
    """Serve the template icon."""
    try:
        blob = store.get_icon(environment_id, identifier)
    except (NotFoundError, AmbiguousIdentifierError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    ext = blob.filename.rsplit(".", 1)[-1].lower() if "." in blob.filename else ""
    return Response(content=blob.content, media_type=_IMAGE_TYPES.get(ext, "application/octet-stream"))


@router.get("/{identifier}/readme", response_class=PlainTextResponse)
async def get_readme(
    identifier: str,
    environment_id: str = Depends(get_environment_id),
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> str:
    """Serve the readme of a template or template version."""
    try:
        return store.get_readme(environment_id, identifier)
    except (NotFoundError, AmbiguousIdentifierError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None


@router.get("/{identifier}")
async def get_template(
    identifier: str,
    environment_id: str = Depends(get_environment_id),
    platform_version: str | None = Depends(get_platform_version),
    links: LinkBuilder = Depends(get_link_builder),  # noqa: B008
    store: CatalogStore = Depends(get_catalog_store),  # noqa: B008
) -> dict:  # type: ignore[type-arg]
    """Get a template (``catalog:folder``) or a template version (``catalog:folder:ref``)."""
    try:
        parsed = parse_id(identifier)
        if parsed.is_version:
            version = store.get_template_version(environment_id, identifier, links, platform_version)
            return TemplateVersionResponse.from_resource(version).model_dump(by_alias=True)
        template = store.get_template(environment_id, identifier, links, platform_version)
        return TemplateResponse.from_resource(template).model_dump(by_alias=True)
    except (NotFoundError, AmbiguousIdentifierError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    except DescriptorParseError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid template descriptor: {exc}") from None
