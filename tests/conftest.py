"""Shared test fixtures for the catalog service."""

from __future__ import annotations

import pytest

from catalog_service.models.catalog import Catalog, Template, TemplateFile, Version
from catalog_service.service.catalog_store import CatalogStore
from catalog_service.service.links import LinkBuilder
from catalog_service.storage.memory_repo import InMemoryCatalogRepository

RANCHER_COMPOSE_YML = b"""\
.catalog:
  name: MySQL
  version: 1.5.0
  description: Relational database
  minimum_rancher_version: v1.0.0
  questions:
    - variable: root_password
      label: Root password
      type: password
      required: true
    - variable: storage
      label: Storage driver
      type: enum
      default: local
      options:
        - local
        - nfs
mysql:
  scale: 1
"""

TEMPLATE_VERSION_YML = b"""\
name: MySQL
version: 1.0.0
questions:
  - variable: db_name
    label: Database name
    default: app
"""


def make_version(
    label: str,
    minimum: str = "",
    maximum: str = "",
    upgrade_from: str = "",
    revision: int | None = None,
    **kwargs: object,
) -> Version:
    return Version(
        version=label,
        minimum_platform_version=minimum,
        maximum_platform_version=maximum,
        upgrade_from=upgrade_from,
        revision=revision,
        **kwargs,
    )


@pytest.fixture
def scenario_versions() -> list[Version]:
    """Three versions with platform bounds and one upgrade-from range."""
    return [
        make_version(
            "1.0.0",
            minimum="1.0",
            files=[TemplateFile(name="template-version.yml", contents=TEMPLATE_VERSION_YML)],
        ),
        make_version(
            "1.5.0",
            minimum="1.0",
            maximum="2.0",
            upgrade_from=">=1.0.0 <1.5.0",
            readme="# MySQL 1.5",
            files=[
                TemplateFile(name="rancher-compose.yml", contents=RANCHER_COMPOSE_YML),
                TemplateFile(name="template-version.yml", contents=TEMPLATE_VERSION_YML),
            ],
        ),
        make_version("2.0.0", minimum="2.0"),
    ]


@pytest.fixture
def mysql_template(scenario_versions: list[Version]) -> Template:
    return Template(
        environment_id="global",
        catalog="library",
        name="MySQL",
        folder_name="mysql",
        default_version="1.5.0",
        project_url="https://www.mysql.com",
        readme="# MySQL",
        icon=b"<svg/>",
        icon_filename="catalogIcon-mysql.svg",
        categories=["database"],
        labels={"io.example.certified": "partner"},
        versions=scenario_versions,
    )


@pytest.fixture
def repo(mysql_template: Template) -> InMemoryCatalogRepository:
    """Repository with a global and a tenant-A ``community`` catalog plus ``library``."""
    repo = InMemoryCatalogRepository()
    repo.save_catalog(Catalog(environment_id="global", name="library", url="https://git/library"))
    repo.save_catalog(Catalog(environment_id="global", name="community", url="https://git/global"))
    repo.save_catalog(Catalog(environment_id="tenant-A", name="community", url="https://git/a"))

    repo.save_template(mysql_template)
    repo.save_template(
        Template(
            environment_id="global",
            catalog="library",
            name="Postgres (legacy)",
            folder_name="postgres",
            categories=["database", "deprecated"],
            versions=[make_version("9.6")],
        )
    )
    repo.save_template(
        Template(
            environment_id="global",
            catalog="library",
            name="Redis",
            folder_name="redis",
            categories=["cache"],
            versions=[make_version("5.0")],
        )
    )
    repo.save_template(
        Template(
            environment_id="global",
            catalog="community",
            name="Wiki",
            folder_name="wiki",
            versions=[make_version("1.0")],
        )
    )
    repo.save_template(
        Template(
            environment_id="tenant-A",
            catalog="community",
            name="Wiki (k8s)",
            base="kubernetes",
            folder_name="wiki",
            categories=["database"],
            versions=[make_version("2.0", revision=7)],
        )
    )
    return repo


@pytest.fixture
def store(repo: InMemoryCatalogRepository) -> CatalogStore:
    return CatalogStore(repo)


@pytest.fixture
def links() -> LinkBuilder:
    return LinkBuilder("http://catalog.test/v1-catalog")
