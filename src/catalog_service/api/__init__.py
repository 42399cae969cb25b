"""REST API for the catalog service."""
