"""Catalog, template and template version entities."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from catalog_service.identifiers import check_label, check_name


class Catalog(BaseModel):
    """A named source of templates, scoped to a tenant or to the global scope."""

    environment_id: str = Field(alias="environmentId")
    name: str
    url: str = ""
    branch: str = ""
    commit: str = ""
    type: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def _reserved_chars(cls, value: str) -> str:
        if not value:
            raise ValueError("catalog name must not be empty")
        return check_name(value, "catalog name")


class TemplateFile(BaseModel):
    """A raw file shipped with a template version."""

    name: str
    contents: bytes = b""

    @property
    def text(self) -> str:
        return self.contents.decode("utf-8", errors="replace")


class Version(BaseModel):
    """One published release of a template."""

    version: str
    revision: int | None = None
    minimum_platform_version: str = Field("", alias="minimumPlatformVersion")
    maximum_platform_version: str = Field("", alias="maximumPlatformVersion")
    upgrade_from: str = Field("", alias="upgradeFrom")
    readme: str = ""
    files: list[TemplateFile] = []

    model_config = {"populate_by_name": True}

    @field_validator("version")
    @classmethod
    def _label(cls, value: str) -> str:
        return check_label(value)

    def file_map(self) -> dict[str, bytes]:
        return {f.name: f.contents for f in self.files}


class Template(BaseModel):
    """A deployable application definition owned by one catalog."""

    environment_id: str = Field("", alias="environmentId")
    catalog: str = Field("", alias="catalogId")
    name: str = ""
    is_system: str = Field("", alias="isSystem")
    description: str = ""
    default_version: str = Field("", alias="defaultVersion")
    path: str = ""
    maintainer: str = ""
    license: str = ""
    project_url: str = Field("", alias="projectURL")
    upgrade_from: str = Field("", alias="upgradeFrom")
    folder_name: str = Field(alias="folderName")
    base: str = Field("", alias="templateBase")
    icon: bytes = Field(b"", exclude=True)
    icon_filename: str = Field("", alias="iconFilename")
    readme: str = ""

    categories: list[str] = []
    labels: dict[str, str] = {}
    versions: list[Version] = Field([], exclude=True)

    model_config = {"populate_by_name": True}

    @field_validator("folder_name")
    @classmethod
    def _folder_name(cls, value: str) -> str:
        if not value:
            raise ValueError("folder name must not be empty")
        return check_name(value, "folder name")

    @field_validator("base")
    @classmethod
    def _base(cls, value: str) -> str:
        return check_name(value, "template base")

    @field_validator("catalog")
    @classmethod
    def _catalog(cls, value: str) -> str:
        return check_name(value, "catalog name")

    def has_category(self, names: list[str] | set[str]) -> bool:
        return any(c in names for c in self.categories)
