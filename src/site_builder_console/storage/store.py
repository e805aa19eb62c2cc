"""Configuration entity storage backed by a directory of YAML files.

Every entity is one ``<config_name>.yml`` file in the config directory,
the layout of a site's config export. ConfigStore hands out one
EntityStorage per entity type; bundle entity types come from the catalog.

Saves and deletes are atomic per file only. A command that writes several
entities can leave some of them behind if it fails halfway.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from site_builder_console.catalog.models import BundleEntityTypeDefinition
from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.errors import DuplicateEntityError, EntityNotFoundError
from site_builder_console.storage.models import (
    CONFIG_ENTITY_CLASSES,
    BundleConfig,
    ConfigEntity,
)
from site_builder_console.telemetry import ConfigEvent, NoOpTelemetrySink, TelemetrySink

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = ".yml"


class EntityStorage:
    """CRUD over the config entities of one entity type."""

    def __init__(
        self,
        store: ConfigStore,
        entity_type_id: str,
        prefix: str,
        entity_class: type[ConfigEntity],
        bundle_definition: BundleEntityTypeDefinition | None = None,
    ) -> None:
        self.store = store
        self.entity_type_id = entity_type_id
        self.prefix = prefix
        self.entity_class = entity_class
        self._bundle_definition = bundle_definition

    def _path(self, entity_id: str) -> Path:
        return self.store.config_dir / f"{self.prefix}.{entity_id}{CONFIG_SUFFIX}"

    def _from_config(self, data: dict[str, Any]) -> ConfigEntity:
        if self._bundle_definition is not None:
            return BundleConfig.from_config(data, self._bundle_definition)
        return self.entity_class.model_validate(data)

    def create(self, values: dict[str, Any]) -> ConfigEntity:
        """Build an unsaved entity from ``values``."""
        if self._bundle_definition is not None:
            return BundleConfig(definition=self._bundle_definition, **values)
        return self.entity_class(**values)

    def exists(self, entity_id: str) -> bool:
        return self._path(entity_id).is_file()

    def load(self, entity_id: str) -> ConfigEntity | None:
        path = self._path(entity_id)
        if not path.is_file():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return self._from_config(data)
        except (yaml.YAMLError, ValidationError, KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed config file %s: %s", path, exc)
            return None

    def load_multiple(self) -> dict[str, ConfigEntity]:
        entities: dict[str, ConfigEntity] = {}
        pattern = f"{self.prefix}.*{CONFIG_SUFFIX}"
        for path in sorted(self.store.config_dir.glob(pattern)):
            entity_id = path.name[len(self.prefix) + 1 : -len(CONFIG_SUFFIX)]
            entity = self.load(entity_id)
            if entity is not None:
                entities[entity.config_id()] = entity
        return entities

    def load_by_properties(self, **properties: Any) -> dict[str, ConfigEntity]:
        """Entities whose attributes equal every given property; ``id`` matches the config id."""

        def matches(entity: ConfigEntity) -> bool:
            for key, expected in properties.items():
                actual = entity.config_id() if key == "id" else getattr(entity, key, None)
                if actual != expected:
                    return False
            return True

        return {k: v for k, v in self.load_multiple().items() if matches(v)}

    def save(self, entity: ConfigEntity) -> bool:
        """Write the entity; returns True when it was new."""
        return self.store.save(entity)

    def delete(self, entity: ConfigEntity) -> None:
        self.store.delete(entity)


class ConfigStore:
    def __init__(
        self,
        config_dir: str | Path,
        catalog: CatalogRegistry,
        telemetry_sink: TelemetrySink | None = None,
    ) -> None:
        self.config_dir = Path(config_dir)
        self.catalog = catalog
        self.telemetry = telemetry_sink or NoOpTelemetrySink()

    def get_storage(self, entity_type_id: str) -> EntityStorage:
        entity_class = CONFIG_ENTITY_CLASSES.get(entity_type_id)
        if entity_class is not None:
            return EntityStorage(self, entity_type_id, entity_class.config_prefix, entity_class)

        for definition in self.catalog.bundle_entity_types():
            bundle = definition.bundle_entity_type
            if bundle is not None and bundle.id == entity_type_id:
                return EntityStorage(
                    self, entity_type_id, bundle.config_prefix, BundleConfig, bundle
                )
        raise EntityNotFoundError(f'No storage for the "{entity_type_id}" entity type.')

    def bundle_storage(self, entity_type_id: str) -> EntityStorage | None:
        """Storage of the bundles of a content entity type, or None if it has none."""
        definition = self.catalog.get_entity_type(entity_type_id)
        if definition.bundle_entity_type is None:
            return None
        return self.get_storage(definition.bundle_entity_type.id)

    def bundle_info(self, entity_type_id: str) -> list[str]:
        """Bundle names of an entity type; a type without bundle entities is its own bundle."""
        storage = self.bundle_storage(entity_type_id)
        if storage is None:
            return [entity_type_id]
        return list(storage.load_multiple())

    def _path(self, entity: ConfigEntity) -> Path:
        return self.config_dir / f"{entity.config_name()}{CONFIG_SUFFIX}"

    def save(self, entity: ConfigEntity) -> bool:
        path = self._path(entity)
        is_new = not path.exists()
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(entity.to_config(), f, sort_keys=False, allow_unicode=True)
        logger.debug("Saved %s to %s", entity.config_name(), path)
        self.telemetry.emit(
            ConfigEvent.saved(entity.config_name(), entity.type_id(), is_new=is_new)
        )
        return is_new

    def save_new(self, entity: ConfigEntity) -> None:
        """Save an entity that must not exist yet."""
        if self._path(entity).exists():
            raise DuplicateEntityError(f'Config "{entity.config_name()}" already exists.')
        self.save(entity)

    def delete(self, entity: ConfigEntity) -> None:
        path = self._path(entity)
        if not path.exists():
            raise EntityNotFoundError(f'Config "{entity.config_name()}" does not exist.')
        path.unlink()
        logger.debug("Deleted %s", path)
        self.telemetry.emit(ConfigEvent.deleted(entity.config_name(), entity.type_id()))
