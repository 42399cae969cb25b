"""Metadata extracted from template descriptor files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Question(BaseModel):
    """A user-facing installation parameter."""

    variable: str
    label: str = ""
    description: str = ""
    type: str = "string"
    required: bool = False
    default: Any = None
    group: str = ""
    min_length: int = Field(0, alias="minLength")
    max_length: int = Field(0, alias="maxLength")
    min: int = 0
    max: int = 0
    options: list[str] = []
    valid_chars: str = Field("", alias="validChars")
    invalid_chars: str = Field("", alias="invalidChars")

    model_config = {"populate_by_name": True}


class CatalogInfo(BaseModel):
    """Catalog metadata block of a descriptor file."""

    name: str = ""
    version: str = ""
    description: str = ""
    uuid: str = ""
    minimum_rancher_version: str = Field("", alias="minimumRancherVersion")
    maximum_rancher_version: str = Field("", alias="maximumRancherVersion")
    upgrade_from: str = Field("", alias="upgradeFrom")
    questions: list[Question] = []

    model_config = {"populate_by_name": True}
