"""Link construction for API resources."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

_COLLECTIONS = {
    "catalog": "catalogs",
    "template": "templates",
}


class LinkBuilder:
    """Builds absolute links from a base URL, resource kind and identifier."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def collection(self, kind: str) -> str:
        return f"{self._base_url}/{_COLLECTIONS.get(kind, kind)}"

    def reference(
        self,
        kind: str,
        identifier: str,
        suffix: str = "",
        query: dict[str, str] | None = None,
    ) -> str:
        """Link to a single resource, optionally to a sub-resource (``icon``, ``readme``)."""
        path = f"{self.collection(kind)}/{quote(identifier, safe=':*@')}"
        if suffix:
            path += f"/{suffix}"
        params = {k: v for k, v in (query or {}).items() if v}
        if params:
            path += "?" + urlencode(params)
        return normalise_url(path)


def normalise_url(url: str) -> str:
    """Round-trip *url* through the URL parser; invalid URLs are returned as-is."""
    try:
        return urlunsplit(urlsplit(url))
    except ValueError as exc:
        logger.error("Error encoding the url: %s, error: %s", url, exc)
        return url
