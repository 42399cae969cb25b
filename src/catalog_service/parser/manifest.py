"""Catalog manifest loading: seeds a repository from a YAML document.

A manifest lists catalogs, each with its templates and their versions::

    catalogs:
      - name: library
        environmentId: global
        url: https://git.example.com/library.git
        branch: master
        templates:
          - folderName: mysql
            name: MySQL
            categories: [database]
            defaultVersion: 5.7.1
            versions:
              - version: 5.7.1
                revision: 2
                minimumPlatformVersion: v1.2.0
                files:
                  rancher-compose.yml: |
                    .catalog:
                      questions: []
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from catalog_service.models.catalog import Catalog, Template, TemplateFile, Version
from catalog_service.parser.loader import SafeLoader, YAMLError, YAMLSafetyError
from catalog_service.storage.repository import CatalogRepository

logger = logging.getLogger(__name__)

_VERSION_STRINGS = (
    "version", "minimumPlatformVersion", "maximumPlatformVersion", "upgradeFrom",
    "minimum_platform_version", "maximum_platform_version", "upgrade_from",
)
_TEMPLATE_STRINGS = ("defaultVersion", "default_version", "upgradeFrom", "upgrade_from")


class ManifestError(Exception):
    """Raised when a catalog manifest is malformed."""


@dataclass
class CatalogBundle:
    """A catalog together with the templates it owns."""

    catalog: Catalog
    templates: list[Template] = field(default_factory=list)


def _stringify(raw: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    # YAML turns `version: 2` into an int
    return {k: str(v) if k in keys and v is not None else v for k, v in raw.items()}


def _version(raw: Any) -> Version:
    if not isinstance(raw, dict):
        raise ManifestError(f"version entry must be a mapping, got {type(raw).__name__}")
    data = _stringify(raw, _VERSION_STRINGS)
    files = data.pop("files", None) or {}
    if not isinstance(files, dict):
        raise ManifestError("version files must be a mapping of filename to contents")
    data["files"] = [
        TemplateFile(name=str(name), contents=str(body).encode("utf-8"))
        for name, body in files.items()
    ]
    return Version(**data)


def _template(raw: Any, catalog: Catalog) -> Template:
    if not isinstance(raw, dict):
        raise ManifestError(f"template entry must be a mapping, got {type(raw).__name__}")
    data = _stringify(raw, _TEMPLATE_STRINGS)
    versions = [_version(v) for v in data.pop("versions", None) or []]
    for key in ("environmentId", "environment_id", "catalogId", "catalog"):
        data.pop(key, None)
    return Template(
        **data,
        environmentId=catalog.environment_id,
        catalogId=catalog.name,
        versions=versions,
    )


def parse_manifest(data: Any, global_scope: str = "global") -> list[CatalogBundle]:
    """Convert a loaded manifest document into catalog bundles."""
    if not isinstance(data, dict) or not isinstance(data.get("catalogs", []), list):
        raise ManifestError("manifest must be a mapping with a 'catalogs' list")
    bundles: list[CatalogBundle] = []
    for raw in data.get("catalogs", []):
        if not isinstance(raw, dict):
            raise ManifestError("catalog entry must be a mapping")
        raw = dict(raw)
        templates = raw.pop("templates", None) or []
        raw.setdefault("environmentId", global_scope)
        try:
            catalog = Catalog(**raw)
            bundle = CatalogBundle(catalog=catalog)
            bundle.templates = [_template(t, catalog) for t in templates]
        except ValidationError as exc:
            raise ManifestError(f"invalid catalog '{raw.get('name', '?')}': {exc}") from exc
        bundles.append(bundle)
    return bundles


def load_manifest(path: Path, global_scope: str = "global") -> list[CatalogBundle]:
    try:
        data = SafeLoader().load(path)
    except (YAMLError, YAMLSafetyError) as exc:
        raise ManifestError(f"{path}: {exc}") from exc
    return parse_manifest(data, global_scope=global_scope)


def seed_repository(repo: CatalogRepository, bundles: list[CatalogBundle]) -> int:
    """Write *bundles* into *repo*.  Returns the number of templates saved."""
    count = 0
    for bundle in bundles:
        repo.save_catalog(bundle.catalog)
        for template in bundle.templates:
            repo.save_template(template)
            count += 1
        logger.info(
            "Loaded catalog %s (scope=%s, %d templates)",
            bundle.catalog.name, bundle.catalog.environment_id, len(bundle.templates),
        )
    return count
