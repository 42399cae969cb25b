"""External identifiers for templates and template versions.

Template ids are ``<catalog>:<folder>`` or ``<catalog>:<base>*<folder>``;
version ids append ``:<revision>`` (preferred) or ``:<version label>``.
Catalog names, bases and folders may not contain ``:`` or ``*`` so the ids
can be parsed back unambiguously.  Neither names nor version labels may
contain ``/``, since ids appear as a single URL path segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalog_service.models.errors import AmbiguousIdentifierError

if TYPE_CHECKING:
    from catalog_service.models.catalog import Template, Version

ID_SEPARATOR = ":"
BASE_SEPARATOR = "*"
PATH_SEPARATOR = "/"
RESERVED_CHARS = frozenset(ID_SEPARATOR + BASE_SEPARATOR + PATH_SEPARATOR)


def check_name(value: str, field: str = "name") -> str:
    """Reject names that contain an identifier separator."""
    bad = sorted(RESERVED_CHARS.intersection(value))
    if bad:
        raise ValueError(f"{field} '{value}' must not contain {' or '.join(repr(c) for c in bad)}")
    return value


def check_label(value: str) -> str:
    """Reject version labels that would split the URL path."""
    if PATH_SEPARATOR in value:
        raise ValueError(f"version label '{value}' must not contain '{PATH_SEPARATOR}'")
    return value


def template_id(catalog_name: str, base: str, folder: str) -> str:
    if not base:
        return f"{catalog_name}{ID_SEPARATOR}{folder}"
    return f"{catalog_name}{ID_SEPARATOR}{base}{BASE_SEPARATOR}{folder}"


def version_ref(version: Version) -> str:
    """The last segment of a version id: revision if set, else the label."""
    if version.revision is None:
        return version.version
    return str(version.revision)


def version_id(catalog_name: str, template: Template, version: Version) -> str:
    tid = template_id(catalog_name, template.base, template.folder_name)
    return f"{tid}{ID_SEPARATOR}{version_ref(version)}"


@dataclass(frozen=True)
class ParsedId:
    """Structured form of a template or version id."""

    catalog: str
    base: str
    folder: str
    version: str | None = None

    @property
    def template_id(self) -> str:
        return template_id(self.catalog, self.base, self.folder)

    @property
    def is_version(self) -> bool:
        return self.version is not None


def parse_id(identifier: str) -> ParsedId:
    """Parse a template id or a version id.

    The version segment is everything after the second ``:`` so labels that
    themselves contain ``:`` survive the round trip.
    """
    parts = identifier.split(ID_SEPARATOR, 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise AmbiguousIdentifierError(f"Malformed template identifier '{identifier}'")
    catalog, middle = parts[0], parts[1]
    if middle.count(BASE_SEPARATOR) > 1:
        raise AmbiguousIdentifierError(f"Malformed template identifier '{identifier}'")
    base, _, folder = middle.rpartition(BASE_SEPARATOR)
    if not folder:
        raise AmbiguousIdentifierError(f"Malformed template identifier '{identifier}'")
    version = None
    if len(parts) == 3:
        version = parts[2]
        if not version:
            raise AmbiguousIdentifierError(f"Malformed version identifier '{identifier}'")
    return ParsedId(catalog=catalog, base=base, folder=folder, version=version)


def parse_template_id(identifier: str) -> ParsedId:
    parsed = parse_id(identifier)
    if parsed.is_version:
        raise AmbiguousIdentifierError(f"'{identifier}' is a version identifier")
    return parsed


def parse_version_id(identifier: str) -> ParsedId:
    parsed = parse_id(identifier)
    if not parsed.is_version:
        raise AmbiguousIdentifierError(f"'{identifier}' is not a version identifier")
    return parsed
