"""Tests for catalog manifest loading and repository seeding."""

from __future__ import annotations

from pathlib import Path

import pytest

from catalog_service.models.errors import AmbiguousIdentifierError
from catalog_service.parser.loader import SafeLoader
from catalog_service.parser.manifest import (
    ManifestError,
    load_manifest,
    parse_manifest,
    seed_repository,
)
from catalog_service.service.resolution import default_version_id, upgrade_targets
from catalog_service.storage.memory_repo import InMemoryCatalogRepository

MANIFEST_YAML = """\
catalogs:
  - name: library
    url: https://git.example.com/library.git
    branch: master
    type: git
    templates:
      - folderName: mysql
        name: MySQL
        categories: [database]
        labels:
          io.example.certified: partner
        defaultVersion: 5.7
        versions:
          - version: 5.6
            maximumPlatformVersion: v1.5.99
          - version: 5.7
            revision: 2
            minimumPlatformVersion: v1.2.0
            upgradeFrom: ">=5.6"
            files:
              rancher-compose.yml: |
                .catalog:
                  questions:
                    - variable: password
  - name: private
    environmentId: tenant-A
    templates:
      - folderName: app
        templateBase: kubernetes
        versions:
          - version: "1.0"
"""


def _bundles(text: str = MANIFEST_YAML):  # noqa: ANN202
    return parse_manifest(SafeLoader().load_string(text))


class TestParseManifest:
    def test_catalogs(self) -> None:
        bundles = _bundles()
        assert [(b.catalog.environment_id, b.catalog.name) for b in bundles] == [
            ("global", "library"),
            ("tenant-A", "private"),
        ]
        assert bundles[0].catalog.type == "git"

    def test_templates_inherit_catalog_scope(self) -> None:
        mysql = _bundles()[0].templates[0]
        assert mysql.catalog == "library"
        assert mysql.environment_id == "global"
        app = _bundles()[1].templates[0]
        assert app.environment_id == "tenant-A"
        assert app.base == "kubernetes"

    def test_float_versions_become_strings(self) -> None:
        mysql = _bundles()[0].templates[0]
        assert mysql.default_version == "5.7"
        assert [v.version for v in mysql.versions] == ["5.6", "5.7"]
        assert mysql.versions[1].revision == 2
        assert mysql.versions[1].upgrade_from == ">=5.6"

    def test_files(self) -> None:
        version = _bundles()[0].templates[0].versions[1]
        assert list(version.file_map()) == ["rancher-compose.yml"]
        assert b"variable: password" in version.file_map()["rancher-compose.yml"]

    def test_labels_keep_trailing_zeros(self) -> None:
        text = (
            "catalogs:\n  - name: c\n    templates:\n      - folderName: a\n"
            "        defaultVersion: 1.10\n        versions:\n"
            "          - version: 1.9\n"
            "          - version: 1.10\n            minimumPlatformVersion: 2.20\n"
            "            upgradeFrom: '>=1.9'\n"
        )
        template = _bundles(text)[0].templates[0]
        assert [v.version for v in template.versions] == ["1.9", "1.10"]
        assert template.default_version == "1.10"
        assert template.versions[1].minimum_platform_version == "2.20"
        current, newer = template.versions
        assert upgrade_targets(template, current, "2.20") == [newer]

    def test_label_with_slash_rejected(self) -> None:
        text = (
            "catalogs:\n  - name: c\n    templates:\n      - folderName: a\n"
            "        versions:\n          - version: 1.0/beta\n"
        )
        with pytest.raises(ManifestError, match="must not contain"):
            _bundles(text)

    def test_invalid_name_rejected(self) -> None:
        with pytest.raises(ManifestError, match="invalid catalog"):
            _bundles("catalogs:\n  - name: 'bad:name'\n")

    def test_root_must_list_catalogs(self) -> None:
        with pytest.raises(ManifestError):
            _bundles("catalogs: library\n")

    def test_custom_global_scope(self) -> None:
        data = SafeLoader().load_string("catalogs:\n  - name: library\n")
        assert parse_manifest(data, global_scope="shared")[0].catalog.environment_id == "shared"


class TestSeedRepository:
    def test_seed_and_lookup(self, tmp_path: Path) -> None:
        path = tmp_path / "catalogs.yaml"
        path.write_text(MANIFEST_YAML, encoding="utf-8")
        repo = InMemoryCatalogRepository()

        assert seed_repository(repo, load_manifest(path)) == 2

        mysql = repo.find_template("tenant-B", "library", "mysql")
        assert mysql is not None
        assert default_version_id("library", mysql) == "library:mysql:2"
        assert repo.find_template("tenant-A", "private", "app", "kubernetes") is not None
        assert repo.find_template("tenant-B", "private", "app", "kubernetes") is None

    def test_duplicate_versions_rejected(self) -> None:
        text = (
            "catalogs:\n  - name: c\n    templates:\n      - folderName: a\n"
            "        versions:\n          - version: '1'\n          - version: '1'\n"
        )
        with pytest.raises(AmbiguousIdentifierError):
            seed_repository(InMemoryCatalogRepository(), _bundles(text))

    def test_bad_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("catalogs: [unclosed\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="broken.yaml"):
            load_manifest(path)
