"""Abstract repository interface for catalogs and their templates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog_service.models.catalog import Catalog, Template


class CatalogRepository(ABC):
    """Tenant-scoped store of catalogs, templates and versions.

    Lookups see the caller's own scope plus the shared global scope; a
    tenant catalog shadows a global one of the same name.  Absence is
    reported as ``None`` or an empty list, never as an exception.
    """

    # -- reads ---------------------------------------------------------------

    @abstractmethod
    def find_catalog(self, scope: str, name: str) -> Catalog | None: ...

    @abstractmethod
    def list_catalogs(self, scope: str) -> list[Catalog]: ...

    @abstractmethod
    def find_template(
        self, scope: str, catalog_name: str, folder: str, base: str = ""
    ) -> Template | None: ...

    @abstractmethod
    def list_templates(
        self,
        scope: str,
        catalog_name: str = "",
        include_categories: list[str] | None = None,
        exclude_categories: list[str] | None = None,
    ) -> list[Template]: ...

    # -- writes (catalog synchronisation) ------------------------------------

    @abstractmethod
    def save_catalog(self, catalog: Catalog) -> Catalog: ...

    @abstractmethod
    def save_template(self, template: Template) -> Template: ...

    @abstractmethod
    def delete_catalog(self, scope: str, name: str) -> bool: ...
