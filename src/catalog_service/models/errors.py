"""Error types raised by the catalog core, plus the wire error body."""

from __future__ import annotations

from pydantic import BaseModel


class CatalogServiceError(Exception):
    """Base class for all catalog service errors."""


class ParseError(CatalogServiceError, ValueError):
    """Raised when a version range / constraint expression is malformed."""

    def __init__(self, message: str, expression: str = "") -> None:
        self.expression = expression
        super().__init__(message)


class DescriptorParseError(ParseError):
    """Raised when a template descriptor file cannot be parsed."""

    def __init__(self, message: str, filename: str = "") -> None:
        self.filename = filename
        super().__init__(f"{filename}: {message}" if filename else message)


class NotFoundError(CatalogServiceError, KeyError):
    """Raised when a requested catalog, template, version or blob is absent."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.title()} '{identifier}' not found")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class AmbiguousIdentifierError(CatalogServiceError):
    """Raised when an identifier cannot be mapped to exactly one entity."""


class CatalogError(BaseModel):
    """Error response body."""

    type: str = "error"
    status: str
    message: str
