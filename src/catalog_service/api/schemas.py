"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from catalog_service.models.descriptor import Question
from catalog_service.service.catalog_store import (
    CatalogResource,
    TemplateResource,
    TemplateVersionResource,
)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class CatalogResponse(BaseModel):
    """A catalog with its self link."""

    id: str
    type: str = "catalog"
    links: dict[str, str] = {}
    environment_id: str = Field(alias="environmentId")
    name: str
    url: str = ""
    branch: str = ""
    commit: str = ""
    catalog_type: str = Field("", alias="catalogType")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_resource(cls, res: CatalogResource) -> CatalogResponse:
        c = res.catalog
        return cls(
            id=res.id,
            type=res.type,
            links=res.links,
            environment_id=c.environment_id,
            name=c.name,
            url=c.url,
            branch=c.branch,
            commit=c.commit,
            catalog_type=c.type,
        )


class CatalogListResponse(BaseModel):
    """Response for GET /catalogs."""

    data: list[CatalogResponse] = []


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TemplateResponse(BaseModel):
    """A template with its installable version links."""

    id: str
    type: str = "template"
    links: dict[str, str] = {}
    environment_id: str = Field("", alias="environmentId")
    catalog_id: str = Field("", alias="catalogId")
    name: str = ""
    is_system: str = Field("", alias="isSystem")
    description: str = ""
    default_version: str = Field("", alias="defaultVersion")
    path: str = ""
    maintainer: str = ""
    license: str = ""
    project_url: str = Field("", alias="projectURL")
    upgrade_from: str = Field("", alias="upgradeFrom")
    folder_name: str = Field("", alias="folderName")
    template_base: str = Field("", alias="templateBase")
    icon_filename: str = Field("", alias="iconFilename")
    categories: list[str] = []
    labels: dict[str, str] = {}
    version_links: dict[str, str] = Field({}, alias="versionLinks")
    default_template_version_id: str | None = Field(None, alias="defaultTemplateVersionId")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_resource(cls, res: TemplateResource) -> TemplateResponse:
        t = res.template
        return cls(
            id=res.id,
            type=res.type,
            links=res.links,
            environment_id=t.environment_id,
            catalog_id=t.catalog,
            name=t.name,
            is_system=t.is_system,
            description=t.description,
            default_version=t.default_version,
            path=t.path,
            maintainer=t.maintainer,
            license=t.license,
            project_url=t.project_url,
            upgrade_from=t.upgrade_from,
            folder_name=t.folder_name,
            template_base=t.base,
            icon_filename=t.icon_filename,
            categories=list(t.categories),
            labels=dict(t.labels),
            version_links=res.version_links,
            default_template_version_id=res.default_template_version_id,
        )


class TemplateListResponse(BaseModel):
    """Response for GET /templates."""

    data: list[TemplateResponse] = []


class TemplateVersionResponse(BaseModel):
    """A template version with its questions and upgrade links."""

    id: str
    type: str = "templateVersion"
    links: dict[str, str] = {}
    template_id: str = Field(alias="templateId")
    version: str
    revision: int | None = None
    minimum_platform_version: str = Field("", alias="minimumPlatformVersion")
    maximum_platform_version: str = Field("", alias="maximumPlatformVersion")
    upgrade_from: str = Field("", alias="upgradeFrom")
    files: dict[str, str] = {}
    questions: list[Question] = []
    upgrade_version_links: dict[str, str] = Field({}, alias="upgradeVersionLinks")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_resource(cls, res: TemplateVersionResource) -> TemplateVersionResponse:
        v = res.version
        return cls(
            id=res.id,
            type=res.type,
            links=res.links,
            template_id=res.template_id,
            version=v.version,
            revision=v.revision,
            minimum_platform_version=v.minimum_platform_version,
            maximum_platform_version=v.maximum_platform_version,
            upgrade_from=v.upgrade_from,
            files=res.files,
            questions=res.questions,
            upgrade_version_links=res.upgrade_version_links,
        )


# ---------------------------------------------------------------------------
# Range check
# ---------------------------------------------------------------------------


class RangeCheckRequest(BaseModel):
    """Request body for POST /ranges/check."""

    version: str = Field(description="Version label to test")
    range: str = Field(description="Range expression, e.g. '>=1.2.0 <2.0.0'")


class RangeCheckResponse(BaseModel):
    """Response body for POST /ranges/check."""

    version: str
    range: str
    satisfied: bool
