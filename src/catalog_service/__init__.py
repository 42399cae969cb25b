"""Catalog Service: tenant-scoped template catalog with version resolution."""

__version__ = "0.1.0"
