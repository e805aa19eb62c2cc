"""Catalog registry -- in-memory indexes over the site's entity and field types.

The registry maintains:
  - _entity_types: entity type definitions by ID
  - _field_types: field type definitions by ID
  - _modules: the set of enabled module names

All mutations go through the register_*() methods, which reject duplicate IDs.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from site_builder_console.catalog.models import EntityTypeDefinition, FieldTypeDefinition
from site_builder_console.errors import CatalogError, DuplicateEntityError


class CatalogRegistry:
    """In-memory registry of the entity types and field types a site offers."""

    def __init__(self, modules: Iterable[str] = ()) -> None:
        self._entity_types: dict[str, EntityTypeDefinition] = {}
        self._field_types: dict[str, FieldTypeDefinition] = {}
        self._modules: set[str] = set(modules)

    def register_entity_type(self, definition: EntityTypeDefinition) -> None:
        if definition.id in self._entity_types:
            raise DuplicateEntityError(f"Duplicate entity type registered: {definition.id!r}")
        self._entity_types[definition.id] = definition

    def register_field_type(self, definition: FieldTypeDefinition) -> None:
        if definition.id in self._field_types:
            raise DuplicateEntityError(f"Duplicate field type registered: {definition.id!r}")
        self._field_types[definition.id] = definition

    def get_entity_type(self, entity_type_id: str) -> EntityTypeDefinition:
        try:
            return self._entity_types[entity_type_id]
        except KeyError:
            raise CatalogError(f'The "{entity_type_id}" entity type does not exist.') from None

    def content_entity_types(self) -> list[str]:
        """IDs of the content entity types, in registration order."""
        return [d.id for d in self._entity_types.values() if d.content]

    def bundle_entity_types(self) -> list[EntityTypeDefinition]:
        """Content entity types that keep their bundles as config entities."""
        return [d for d in self._entity_types.values() if d.bundle_entity_type is not None]

    def get_field_type(self, field_type_id: str) -> FieldTypeDefinition:
        try:
            return self._field_types[field_type_id]
        except KeyError:
            raise CatalogError(f'The "{field_type_id}" field type does not exist.') from None

    def field_type_ids(self, *, ui_only: bool = True) -> list[str]:
        return [
            d.id for d in self._field_types.values() if not (ui_only and d.no_ui)
        ]

    def default_storage_settings(self, field_type_id: str) -> dict[str, Any]:
        return copy.deepcopy(self.get_field_type(field_type_id).storage_settings)

    def default_field_settings(self, field_type_id: str) -> dict[str, Any]:
        return copy.deepcopy(self.get_field_type(field_type_id).field_settings)

    def module_exists(self, module: str) -> bool:
        return module in self._modules
