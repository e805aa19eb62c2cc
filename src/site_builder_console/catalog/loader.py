"""YAML catalog loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from site_builder_console.catalog.models import (
    BundleEntityTypeDefinition,
    EntityTypeDefinition,
    FieldTypeDefinition,
    SiteCatalog,
)
from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.errors import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "default_site.yaml"


def _entity_type(entity_id: str, data: dict[str, Any]) -> EntityTypeDefinition:
    bundle = data.get("bundle_entity_type")
    return EntityTypeDefinition(
        id=entity_id,
        label=data.get("label", entity_id),
        content=data.get("content", True),
        bundle_entity_type=BundleEntityTypeDefinition(**bundle) if bundle else None,
    )


def _field_type(type_id: str, data: dict[str, Any]) -> FieldTypeDefinition:
    return FieldTypeDefinition(
        id=type_id,
        label=data.get("label", type_id),
        cardinality=data.get("cardinality"),
        storage_settings=data.get("storage_settings") or {},
        field_settings=data.get("field_settings") or {},
        default_widget=data.get("default_widget"),
        default_formatter=data.get("default_formatter"),
        no_ui=data.get("no_ui", False),
    )


def parse_catalog(data: dict[str, Any]) -> SiteCatalog:
    """Build a catalog from the ``entity_types``/``field_types`` mappings."""
    entity_types = data.get("entity_types") or {}
    field_types = data.get("field_types") or {}
    if not isinstance(entity_types, dict) or not isinstance(field_types, dict):
        raise CatalogError("entity_types and field_types must be mappings keyed by id")

    return SiteCatalog(
        entity_types=[_entity_type(k, v or {}) for k, v in entity_types.items()],
        field_types=[_field_type(k, v or {}) for k, v in field_types.items()],
        modules=data.get("modules") or [],
    )


def load_catalog_file(path: str | Path) -> SiteCatalog:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise CatalogError(f"Catalog file does not exist: {path}") from None
    except yaml.YAMLError as exc:
        raise CatalogError(f"Catalog file {path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {path} must contain a mapping")
    try:
        return parse_catalog(data)
    except (ValidationError, TypeError) as exc:
        raise CatalogError(f"Catalog file {path} is malformed: {exc}") from exc


def build_registry(catalog: SiteCatalog) -> CatalogRegistry:
    registry = CatalogRegistry(modules=catalog.modules)
    for entity_type in catalog.entity_types:
        registry.register_entity_type(entity_type)
    for field_type in catalog.field_types:
        registry.register_field_type(field_type)
    return registry


def load_catalog(path: str | Path | None = None) -> CatalogRegistry:
    """Load a catalog file (the packaged default when ``path`` is None) into a registry."""
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    catalog = load_catalog_file(catalog_path)
    logger.debug(
        "Loaded catalog %s: %d entity types, %d field types",
        catalog_path,
        len(catalog.entity_types),
        len(catalog.field_types),
    )
    return build_registry(catalog)
