"""Version resolution: installable versions, default version, upgrade targets.

All functions are pure and operate on already-loaded entities.  "No
result" is never an error: an empty mapping or ``None`` is returned.
Bulk computations contain a malformed ``upgradeFrom`` range on a single
candidate by excluding that candidate.

``platform_version`` may be ``None`` (or empty) when the caller does not
know the platform version; the min/max bounds are then not applied.
"""

from __future__ import annotations

import logging

from catalog_service.identifiers import version_id
from catalog_service.models.catalog import Template, Version
from catalog_service.models.errors import ParseError
from catalog_service.versioning import between, greater_than, satisfies_range

logger = logging.getLogger(__name__)


def is_installable(version: Version, platform_version: str | None) -> bool:
    if not platform_version:
        return True
    return between(
        version.minimum_platform_version, platform_version, version.maximum_platform_version
    )


def installable_versions(template: Template, platform_version: str | None) -> list[Version]:
    return [v for v in template.versions if is_installable(v, platform_version)]


def installable_version_ids(
    catalog_name: str, template: Template, platform_version: str | None
) -> dict[str, str]:
    """Map version label to version id for each installable version.

    Versions sharing a label collapse to the last one seen.
    """
    return {
        v.version: version_id(catalog_name, template, v)
        for v in installable_versions(template, platform_version)
    }


def default_version(template: Template) -> Version | None:
    found = None
    for version in template.versions:
        if version.version == template.default_version:
            found = version
    return found


def default_version_id(catalog_name: str, template: Template) -> str | None:
    """Id of the template's default version, or ``None`` if it is not published."""
    version = default_version(template)
    if version is None:
        return None
    return version_id(catalog_name, template, version)


def is_upgrade_target(current: Version, candidate: Version, platform_version: str | None) -> bool:
    """True if *candidate* is a valid upgrade from *current*."""
    if not greater_than(candidate.version, current.version):
        return False
    if not is_installable(candidate, platform_version):
        return False
    if not candidate.upgrade_from:
        return True
    try:
        return satisfies_range(current.version, candidate.upgrade_from)
    except ParseError as exc:
        logger.warning(
            "Ignoring upgrade candidate %s: invalid upgradeFrom range %r (%s)",
            candidate.version, candidate.upgrade_from, exc,
        )
        return False


def upgrade_targets(
    template: Template, current: Version, platform_version: str | None
) -> list[Version]:
    return [v for v in template.versions if is_upgrade_target(current, v, platform_version)]


def upgrade_version_ids(
    catalog_name: str, template: Template, current: Version, platform_version: str | None
) -> dict[str, str]:
    """Map version label to version id for every upgrade target of *current*."""
    return {
        v.version: version_id(catalog_name, template, v)
        for v in upgrade_targets(template, current, platform_version)
    }


def find_version(template: Template, ref: str) -> Version | None:
    """Dereference the version segment of a version id.

    A numeric reference matches a revision first, then falls back to the
    label; the last matching entry wins, as for label lookups.
    """
    if ref.isdigit():
        revision = int(ref)
        for version in reversed(template.versions):
            if version.revision == revision:
                return version
    for version in reversed(template.versions):
        if version.revision is None and version.version == ref:
            return version
    for version in reversed(template.versions):
        if version.version == ref:
            return version
    return None


def check_range(version: str, expression: str) -> bool:
    """Evaluate one version against one range.  Malformed ranges raise ``ParseError``."""
    return satisfies_range(version, expression)
