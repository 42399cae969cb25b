"""In-memory catalog repository."""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field

from catalog_service.identifiers import version_ref
from catalog_service.models.catalog import Catalog, Template
from catalog_service.models.errors import AmbiguousIdentifierError, NotFoundError
from catalog_service.storage.repository import CatalogRepository

GLOBAL_SCOPE = "global"

logger = logging.getLogger(__name__)


@dataclass
class _CatalogEntry:
    catalog: Catalog
    # (base, folder) -> template
    templates: dict[tuple[str, str], Template] = field(default_factory=dict)


class InMemoryCatalogRepository(CatalogRepository):
    """Catalog repository backed by dicts.  Thread-safe via ``threading.Lock``.

    Reads return deep copies, so callers get a snapshot that later writes
    cannot mutate underneath them.
    """

    def __init__(self, global_scope: str = GLOBAL_SCOPE) -> None:
        self._global_scope = global_scope
        self._lock = threading.Lock()
        self._catalogs: dict[tuple[str, str], _CatalogEntry] = {}

    @property
    def global_scope(self) -> str:
        return self._global_scope

    # -- helpers -------------------------------------------------------------

    def _scopes(self, scope: str) -> tuple[str, ...]:
        """Visible scopes in precedence order."""
        if scope == self._global_scope:
            return (self._global_scope,)
        return (scope, self._global_scope)

    def _resolve(self, scope: str, name: str) -> _CatalogEntry | None:
        for candidate in self._scopes(scope):
            entry = self._catalogs.get((candidate, name))
            if entry is not None:
                return entry
        return None

    def _visible(self, scope: str) -> list[_CatalogEntry]:
        """One entry per catalog name; a tenant catalog hides the global one."""
        entries: dict[str, _CatalogEntry] = {}
        for candidate in self._scopes(scope):
            for (env, name), entry in self._catalogs.items():
                if env == candidate:
                    entries.setdefault(name, entry)
        return list(entries.values())

    @staticmethod
    def _check_version_ids(template: Template) -> None:
        refs = Counter(version_ref(v) for v in template.versions)
        dupes = sorted(ref for ref, n in refs.items() if n > 1)
        if dupes:
            raise AmbiguousIdentifierError(
                f"Template '{template.folder_name}' has versions sharing an identifier: "
                f"{', '.join(dupes)}"
            )

    @staticmethod
    def _matches(
        template: Template, include: list[str] | None, exclude: list[str] | None
    ) -> bool:
        if include and not template.has_category(include):
            return False
        if exclude and template.has_category(exclude):
            return False
        return True

    # -- reads ---------------------------------------------------------------

    def find_catalog(self, scope: str, name: str) -> Catalog | None:
        with self._lock:
            entry = self._resolve(scope, name)
            return entry.catalog.model_copy(deep=True) if entry else None

    def list_catalogs(self, scope: str) -> list[Catalog]:
        with self._lock:
            return [e.catalog.model_copy(deep=True) for e in self._visible(scope)]

    def find_template(
        self, scope: str, catalog_name: str, folder: str, base: str = ""
    ) -> Template | None:
        with self._lock:
            entry = self._resolve(scope, catalog_name)
            if entry is None:
                return None
            template = entry.templates.get((base, folder))
            return template.model_copy(deep=True) if template else None

    def list_templates(
        self,
        scope: str,
        catalog_name: str = "",
        include_categories: list[str] | None = None,
        exclude_categories: list[str] | None = None,
    ) -> list[Template]:
        with self._lock:
            return [
                t.model_copy(deep=True)
                for entry in self._visible(scope)
                if not catalog_name or entry.catalog.name == catalog_name
                for t in entry.templates.values()
                if self._matches(t, include_categories, exclude_categories)
            ]

    # -- writes --------------------------------------------------------------

    def save_catalog(self, catalog: Catalog) -> Catalog:
        key = (catalog.environment_id, catalog.name)
        with self._lock:
            entry = self._catalogs.get(key)
            if entry is None:
                self._catalogs[key] = _CatalogEntry(catalog=catalog.model_copy(deep=True))
            else:
                entry.catalog = catalog.model_copy(deep=True)
        logger.debug("Saved catalog %s (scope=%s)", catalog.name, catalog.environment_id)
        return catalog

    def save_template(self, template: Template) -> Template:
        """Insert or replace a template in the catalog of its exact scope."""
        self._check_version_ids(template)
        key = (template.environment_id, template.catalog)
        with self._lock:
            entry = self._catalogs.get(key)
            if entry is None:
                raise NotFoundError("catalog", f"{template.environment_id}/{template.catalog}")
            entry.templates[(template.base, template.folder_name)] = template.model_copy(deep=True)
        logger.debug(
            "Saved template %s in catalog %s (%d versions)",
            template.folder_name, template.catalog, len(template.versions),
        )
        return template

    def delete_catalog(self, scope: str, name: str) -> bool:
        """Delete a catalog of the exact scope with its templates and versions."""
        with self._lock:
            entry = self._catalogs.pop((scope, name), None)
        if entry is None:
            return False
        logger.info(
            "Deleted catalog %s (scope=%s) with %d templates", name, scope, len(entry.templates)
        )
        return True
