"""Catalog persistence."""

from catalog_service.storage.memory_repo import GLOBAL_SCOPE, InMemoryCatalogRepository
from catalog_service.storage.repository import CatalogRepository

__all__ = ["GLOBAL_SCOPE", "CatalogRepository", "InMemoryCatalogRepository"]
