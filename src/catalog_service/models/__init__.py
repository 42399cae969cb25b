"""Pydantic domain models for the catalog service."""
