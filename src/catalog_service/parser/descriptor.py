"""Template descriptor parsing: ``rancher-compose.yml`` and ``template-version.yml``."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from catalog_service.models.catalog import Version
from catalog_service.models.descriptor import CatalogInfo, Question
from catalog_service.models.errors import DescriptorParseError
from catalog_service.parser.loader import SafeLoader, YAMLError, YAMLSafetyError

RANCHER_COMPOSE_FILE = "rancher-compose.yml"
TEMPLATE_VERSION_FILE = "template-version.yml"
CATALOG_SECTION = ".catalog"

_loader = SafeLoader()


def _load(contents: bytes, filename: str) -> dict[str, Any]:
    try:
        data = _loader.load_bytes(contents)
    except (YAMLError, YAMLSafetyError) as exc:
        raise DescriptorParseError(str(exc), filename) from exc
    if not isinstance(data, dict):
        raise DescriptorParseError("document root must be a mapping", filename)
    return data


def _normalise_question(raw: Any, filename: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise DescriptorParseError(f"question must be a mapping, got {type(raw).__name__}", filename)
    question = {str(k): v for k, v in raw.items()}
    options = question.get("options")
    if options is not None:
        if not isinstance(options, list):
            raise DescriptorParseError("question options must be a list", filename)
        question["options"] = [str(o) for o in options]
    return question


def _catalog_info(section: Any, filename: str) -> CatalogInfo:
    if section is None:
        return CatalogInfo()
    if not isinstance(section, dict):
        raise DescriptorParseError("catalog section must be a mapping", filename)
    fields = {str(k): v for k, v in section.items()}
    raw_questions = fields.pop("questions", None) or []
    if not isinstance(raw_questions, list):
        raise DescriptorParseError("questions must be a list", filename)
    # Scalars such as `version: 2` arrive as ints.
    for key in ("name", "version", "description", "uuid", "minimum_rancher_version",
                "maximum_rancher_version", "upgrade_from"):
        if key in fields and fields[key] is not None:
            fields[key] = str(fields[key])
    try:
        questions = [Question(**_normalise_question(q, filename)) for q in raw_questions]
        known = {k: v for k, v in fields.items() if k in CatalogInfo.model_fields}
        return CatalogInfo(**known, questions=questions)
    except (ValidationError, TypeError) as exc:
        raise DescriptorParseError(str(exc), filename) from exc


def catalog_info_from_rancher_compose(contents: bytes) -> CatalogInfo:
    """Parse the ``.catalog`` section of a ``rancher-compose.yml`` file."""
    data = _load(contents, RANCHER_COMPOSE_FILE)
    return _catalog_info(data.get(CATALOG_SECTION), RANCHER_COMPOSE_FILE)


def catalog_info_from_template_version(contents: bytes) -> CatalogInfo:
    """Parse a ``template-version.yml`` file."""
    data = _load(contents, TEMPLATE_VERSION_FILE)
    return _catalog_info(data, TEMPLATE_VERSION_FILE)


def questions_for_version(version: Version) -> list[Question]:
    """Return the questions of *version*, preferring ``rancher-compose.yml``.

    Versions with neither descriptor have no questions.  Raises
    :class:`DescriptorParseError` for a malformed descriptor.
    """
    files = version.file_map()
    if RANCHER_COMPOSE_FILE in files:
        return catalog_info_from_rancher_compose(files[RANCHER_COMPOSE_FILE]).questions
    if TEMPLATE_VERSION_FILE in files:
        return catalog_info_from_template_version(files[TEMPLATE_VERSION_FILE]).questions
    return []
