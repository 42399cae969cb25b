"""Catalog service layer: registry lookups turned into linked API resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from catalog_service.identifiers import ParsedId, parse_id, parse_template_id, template_id, version_id
from catalog_service.models.catalog import Catalog, Template, Version
from catalog_service.models.descriptor import Question
from catalog_service.models.errors import NotFoundError
from catalog_service.parser.descriptor import questions_for_version
from catalog_service.service import resolution
from catalog_service.service.links import LinkBuilder
from catalog_service.storage.repository import CatalogRepository

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


@dataclass
class CatalogResource:
    id: str
    catalog: Catalog
    links: dict[str, str] = field(default_factory=dict)
    type: str = "catalog"


@dataclass
class TemplateResource:
    id: str
    template: Template
    links: dict[str, str] = field(default_factory=dict)
    version_links: dict[str, str] = field(default_factory=dict)
    default_template_version_id: str | None = None
    type: str = "template"


@dataclass
class TemplateVersionResource:
    id: str
    template_id: str
    version: Version
    links: dict[str, str] = field(default_factory=dict)
    files: dict[str, str] = field(default_factory=dict)
    questions: list[Question] = field(default_factory=list)
    upgrade_version_links: dict[str, str] = field(default_factory=dict)
    type: str = "templateVersion"


@dataclass
class Blob:
    """Raw icon or readme content."""

    content: bytes
    filename: str = ""


# ---------------------------------------------------------------------------
# CatalogStore
# ---------------------------------------------------------------------------


class CatalogStore:
    """Read facade over a :class:`CatalogRepository`.

    Every method takes the caller's tenant scope and, where links are
    produced, a :class:`LinkBuilder` bound to the request's base URL.
    Missing entities raise :class:`NotFoundError`.
    """

    def __init__(self, repository: CatalogRepository) -> None:
        self._repo = repository

    @property
    def repository(self) -> CatalogRepository:
        return self._repo

    # -- helpers -------------------------------------------------------------

    def _template(self, scope: str, parsed: ParsedId) -> Template:
        template = self._repo.find_template(scope, parsed.catalog, parsed.folder, parsed.base)
        if template is None:
            raise NotFoundError("template", parsed.template_id)
        return template

    def _version(self, scope: str, parsed: ParsedId) -> tuple[Template, Version]:
        template = self._template(scope, parsed)
        version = resolution.find_version(template, parsed.version or "")
        if version is None:
            raise NotFoundError("template version", f"{parsed.template_id}:{parsed.version}")
        return template, version

    @staticmethod
    def _common_links(
        template: Template, tid: str, links: LinkBuilder, scope: str
    ) -> dict[str, str]:
        result = {"icon": links.reference("template", tid, "icon", {"projectId": scope})}
        if template.project_url:
            result["project"] = template.project_url
        return result

    def _catalog_resource(self, catalog: Catalog, links: LinkBuilder, scope: str) -> CatalogResource:
        return CatalogResource(
            id=catalog.name,
            catalog=catalog,
            links={"self": links.reference("catalog", catalog.name, query={"projectId": scope})},
        )

    def _template_resource(
        self, template: Template, links: LinkBuilder, scope: str, platform_version: str | None
    ) -> TemplateResource:
        tid = template_id(template.catalog, template.base, template.folder_name)
        resource_links = self._common_links(template, tid, links, scope)
        if template.readme:
            resource_links["readme"] = links.reference("template", tid, "readme")
        version_links = {
            label: links.reference("template", vid)
            for label, vid in resolution.installable_version_ids(
                template.catalog, template, platform_version
            ).items()
        }
        return TemplateResource(
            id=tid,
            template=template,
            links=resource_links,
            version_links=version_links,
            default_template_version_id=resolution.default_version_id(template.catalog, template),
        )

    # -- catalogs ------------------------------------------------------------

    def list_catalogs(self, scope: str, links: LinkBuilder) -> list[CatalogResource]:
        return [self._catalog_resource(c, links, scope) for c in self._repo.list_catalogs(scope)]

    def get_catalog(self, scope: str, name: str, links: LinkBuilder) -> CatalogResource:
        catalog = self._repo.find_catalog(scope, name)
        if catalog is None:
            raise NotFoundError("catalog", name)
        return self._catalog_resource(catalog, links, scope)

    def delete_catalog(self, scope: str, name: str) -> None:
        if not self._repo.delete_catalog(scope, name):
            raise NotFoundError("catalog", name)

    # -- templates -----------------------------------------------------------

    def list_templates(
        self,
        scope: str,
        links: LinkBuilder,
        catalog_name: str = "",
        categories: list[str] | None = None,
        categories_ne: list[str] | None = None,
        platform_version: str | None = None,
    ) -> list[TemplateResource]:
        templates = self._repo.list_templates(scope, catalog_name, categories, categories_ne)
        return [self._template_resource(t, links, scope, platform_version) for t in templates]

    def get_template(
        self, scope: str, identifier: str, links: LinkBuilder, platform_version: str | None = None
    ) -> TemplateResource:
        template = self._template(scope, parse_template_id(identifier))
        return self._template_resource(template, links, scope, platform_version)

    def get_template_version(
        self, scope: str, identifier: str, links: LinkBuilder, platform_version: str | None = None
    ) -> TemplateVersionResource:
        """Resolve a version id.  Raises ``DescriptorParseError`` for a broken descriptor."""
        parsed = parse_id(identifier)
        if not parsed.is_version:
            raise NotFoundError("template version", identifier)
        template, version = self._version(scope, parsed)
        tid = parsed.template_id
        vid = version_id(template.catalog, template, version)

        resource_links = self._common_links(template, tid, links, scope)
        if version.readme:
            resource_links["readme"] = links.reference("template", vid, "readme")
        elif template.readme:
            resource_links["readme"] = links.reference("template", tid, "readme")
        resource_links["template"] = links.reference("template", tid)

        upgrade_links = {
            label: links.reference("template", target_id)
            for label, target_id in resolution.upgrade_version_ids(
                template.catalog, template, version, platform_version
            ).items()
        }
        return TemplateVersionResource(
            id=vid,
            template_id=tid,
            version=version,
            links=resource_links,
            files={f.name: f.text for f in version.files},
            questions=questions_for_version(version),
            upgrade_version_links=upgrade_links,
        )

    # -- blobs ---------------------------------------------------------------

    def get_icon(self, scope: str, identifier: str) -> Blob:
        template = self._template(scope, parse_id(identifier))
        if not template.icon:
            raise NotFoundError("icon", identifier)
        return Blob(content=template.icon, filename=template.icon_filename)

    def get_readme(self, scope: str, identifier: str) -> str:
        """Readme of a version (version ids) or of a template (template ids)."""
        parsed = parse_id(identifier)
        if parsed.is_version:
            template, version = self._version(scope, parsed)
            readme = version.readme or template.readme
        else:
            readme = self._template(scope, parsed).readme
        if not readme:
            raise NotFoundError("readme", identifier)
        return readme
