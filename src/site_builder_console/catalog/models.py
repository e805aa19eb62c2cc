"""Pydantic models describing what the site offers: entity types and field types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictModel(BaseModel):
    """Shared strict model settings for catalog and config contracts."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def _normalize_string_list(values: list[str]) -> list[str]:
    """Trim whitespace and drop empty entries while preserving order."""
    normalized: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        cleaned = value.strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


class BundleEntityTypeDefinition(_StrictModel):
    """The config entity type whose entities are the bundles of a content type.

    ``permissions`` holds templates such as ``"create {bundle} content"``
    that get granted to roles when a bundle is created.
    """

    id: str
    config_prefix: str
    id_key: str = "id"
    label_key: str = "label"
    description_key: str = "description"
    permissions: list[str] = Field(default_factory=list)

    @field_validator("id", "config_prefix", "id_key", "label_key", "description_key")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("permissions")
    @classmethod
    def normalize_lists(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)


class EntityTypeDefinition(_StrictModel):
    id: str
    label: str = ""
    content: bool = True
    bundle_entity_type: BundleEntityTypeDefinition | None = None

    @field_validator("id", "label")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return value.strip()

    @property
    def is_bundleable(self) -> bool:
        return self.bundle_entity_type is not None


class FieldTypeDefinition(_StrictModel):
    """A field type plugin: its default settings and display plugins.

    A non-null ``cardinality`` fixes the storage cardinality, so it is not
    asked for.
    """

    id: str
    label: str = ""
    cardinality: int | None = None
    storage_settings: dict[str, Any] = Field(default_factory=dict)
    field_settings: dict[str, Any] = Field(default_factory=dict)
    default_widget: str | None = None
    default_formatter: str | None = None
    no_ui: bool = False

    @field_validator("id", "label")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return value.strip()


class SiteCatalog(_StrictModel):
    entity_types: list[EntityTypeDefinition] = Field(default_factory=list)
    field_types: list[FieldTypeDefinition] = Field(default_factory=list)
    modules: list[str] = Field(default_factory=list)

    @field_validator("modules")
    @classmethod
    def normalize_modules(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)
