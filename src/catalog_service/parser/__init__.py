"""Descriptor and manifest parsing for the catalog service."""

from catalog_service.parser.descriptor import (
    catalog_info_from_rancher_compose,
    catalog_info_from_template_version,
    questions_for_version,
)
from catalog_service.parser.loader import SafeLoader, YAMLSafetyError

__all__ = [
    "SafeLoader",
    "YAMLSafetyError",
    "catalog_info_from_rancher_compose",
    "catalog_info_from_template_version",
    "questions_for_version",
]
