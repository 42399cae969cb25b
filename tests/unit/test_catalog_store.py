"""Unit tests for the CatalogStore service layer."""

from __future__ import annotations

import pytest

from catalog_service.models.catalog import Template, TemplateFile, Version
from catalog_service.models.errors import (
    AmbiguousIdentifierError,
    DescriptorParseError,
    NotFoundError,
)
from catalog_service.service.catalog_store import CatalogStore
from catalog_service.service.links import LinkBuilder

BASE = "http://catalog.test/v1-catalog"


class TestCatalogs:
    def test_list(self, store: CatalogStore, links: LinkBuilder) -> None:
        resources = store.list_catalogs("tenant-B", links)
        assert sorted(r.id for r in resources) == ["community", "library"]
        library = next(r for r in resources if r.id == "library")
        assert library.type == "catalog"
        assert library.links["self"] == f"{BASE}/catalogs/library?projectId=tenant-B"

    def test_get_prefers_tenant(self, store: CatalogStore, links: LinkBuilder) -> None:
        assert store.get_catalog("tenant-A", "community", links).catalog.url == "https://git/a"
        assert store.get_catalog("tenant-B", "community", links).catalog.url == "https://git/global"

    def test_get_missing(self, store: CatalogStore, links: LinkBuilder) -> None:
        with pytest.raises(NotFoundError, match="Catalog 'nope' not found"):
            store.get_catalog("tenant-A", "nope", links)

    def test_delete(self, store: CatalogStore, links: LinkBuilder) -> None:
        store.delete_catalog("tenant-A", "community")
        assert store.get_catalog("tenant-A", "community", links).catalog.environment_id == "global"
        with pytest.raises(NotFoundError):
            store.delete_catalog("tenant-A", "community")


class TestTemplates:
    def test_template_resource(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template("tenant-A", "library:mysql", links, "1.2")
        assert res.id == "library:mysql"
        assert res.type == "template"
        assert res.version_links == {
            "1.0.0": f"{BASE}/templates/library:mysql:1.0.0",
            "1.5.0": f"{BASE}/templates/library:mysql:1.5.0",
        }
        assert res.default_template_version_id == "library:mysql:1.5.0"
        assert res.links["icon"] == f"{BASE}/templates/library:mysql/icon?projectId=tenant-A"
        assert res.links["readme"] == f"{BASE}/templates/library:mysql/readme"
        assert res.links["project"] == "https://www.mysql.com"

    def test_without_platform_version_lists_all(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template("tenant-A", "library:mysql", links)
        assert set(res.version_links) == {"1.0.0", "1.5.0", "2.0.0"}

    def test_optional_links_absent(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template("tenant-A", "library:redis", links)
        assert "readme" not in res.links
        assert "project" not in res.links
        assert res.default_template_version_id is None

    def test_base_variant_id(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template("tenant-A", "community:kubernetes*wiki", links)
        assert res.id == "community:kubernetes*wiki"
        assert res.version_links == {"2.0": f"{BASE}/templates/community:kubernetes*wiki:7"}

    def test_list_with_filters(self, store: CatalogStore, links: LinkBuilder) -> None:
        resources = store.list_templates(
            "tenant-A", links, categories=["database"], categories_ne=["deprecated"]
        )
        assert sorted(r.id for r in resources) == ["community:kubernetes*wiki", "library:mysql"]

    def test_listed_ids_resolve(self, store: CatalogStore, links: LinkBuilder) -> None:
        resources = store.list_templates("tenant-A", links)
        ids = [r.id for r in resources]
        assert len(ids) == len(set(ids))
        for res in resources:
            assert store.get_template("tenant-A", res.id, links).template.name == res.template.name
            for link in res.version_links.values():
                identifier = link.rsplit("/", 1)[-1]
                assert store.get_template_version("tenant-A", identifier, links).template_id == res.id

    def test_missing_template(self, store: CatalogStore, links: LinkBuilder) -> None:
        with pytest.raises(NotFoundError, match="library:nope"):
            store.get_template("tenant-A", "library:nope", links)

    def test_version_id_rejected_as_template(self, store: CatalogStore, links: LinkBuilder) -> None:
        with pytest.raises(AmbiguousIdentifierError):
            store.get_template("tenant-A", "library:mysql:1.0.0", links)


class TestTemplateVersions:
    def test_version_resource(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template_version("tenant-A", "library:mysql:1.0.0", links, "1.2")
        assert res.id == "library:mysql:1.0.0"
        assert res.type == "templateVersion"
        assert res.template_id == "library:mysql"
        assert res.upgrade_version_links == {"1.5.0": f"{BASE}/templates/library:mysql:1.5.0"}
        assert [q.variable for q in res.questions] == ["db_name"]
        assert "template-version.yml" in res.files
        assert res.links["template"] == f"{BASE}/templates/library:mysql"
        # no version readme: falls back to the template readme
        assert res.links["readme"] == f"{BASE}/templates/library:mysql/readme"

    def test_version_readme_link(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template_version("tenant-A", "library:mysql:1.5.0", links, "1.2")
        assert res.links["readme"] == f"{BASE}/templates/library:mysql:1.5.0/readme"
        assert [q.variable for q in res.questions] == ["root_password", "storage"]
        assert res.upgrade_version_links == {}

    def test_by_revision(self, store: CatalogStore, links: LinkBuilder) -> None:
        res = store.get_template_version("tenant-A", "community:kubernetes*wiki:7", links)
        assert res.version.version == "2.0"

    def test_missing_version(self, store: CatalogStore, links: LinkBuilder) -> None:
        with pytest.raises(NotFoundError, match="library:mysql:9.9"):
            store.get_template_version("tenant-A", "library:mysql:9.9", links)

    def test_template_id_is_not_a_version(self, store: CatalogStore, links: LinkBuilder) -> None:
        with pytest.raises(NotFoundError):
            store.get_template_version("tenant-A", "library:mysql", links)

    def test_broken_descriptor(self, store: CatalogStore, links: LinkBuilder) -> None:
        store.repository.save_template(
            Template(
                environment_id="global",
                catalog="library",
                folder_name="broken",
                versions=[
                    Version(
                        version="1",
                        files=[TemplateFile(name="rancher-compose.yml", contents=b".catalog: [")],
                    )
                ],
            )
        )
        with pytest.raises(DescriptorParseError):
            store.get_template_version("tenant-A", "library:broken:1", links)


class TestBlobs:
    def test_icon(self, store: CatalogStore) -> None:
        blob = store.get_icon("tenant-A", "library:mysql")
        assert blob.content == b"<svg/>"
        assert blob.filename == "catalogIcon-mysql.svg"

    def test_missing_icon(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError, match="Icon"):
            store.get_icon("tenant-A", "library:redis")

    def test_readme(self, store: CatalogStore) -> None:
        assert store.get_readme("tenant-A", "library:mysql") == "# MySQL"
        assert store.get_readme("tenant-A", "library:mysql:1.5.0") == "# MySQL 1.5"
        assert store.get_readme("tenant-A", "library:mysql:1.0.0") == "# MySQL"

    def test_missing_readme(self, store: CatalogStore) -> None:
        with pytest.raises(NotFoundError, match="Readme"):
            store.get_readme("tenant-A", "library:redis")


class TestLinkBuilder:
    def test_reference(self) -> None:
        links = LinkBuilder("http://host/api/")
        assert links.reference("template", "lib:app") == "http://host/api/templates/lib:app"

    def test_quotes_unsafe_characters(self) -> None:
        links = LinkBuilder("http://host")
        assert links.reference("template", "lib:my app:1.0 beta") == (
            "http://host/templates/lib:my%20app:1.0%20beta"
        )

    def test_query_skips_empty_values(self) -> None:
        links = LinkBuilder("http://host")
        assert links.reference("catalog", "lib", query={"projectId": ""}) == "http://host/catalogs/lib"
