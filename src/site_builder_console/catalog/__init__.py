"""Site catalog -- entity types, field types and enabled modules."""

from site_builder_console.catalog.loader import (
    DEFAULT_CATALOG_PATH,
    build_registry,
    load_catalog,
    load_catalog_file,
    parse_catalog,
)
from site_builder_console.catalog.models import (
    BundleEntityTypeDefinition,
    EntityTypeDefinition,
    FieldTypeDefinition,
    SiteCatalog,
)
from site_builder_console.catalog.registry import CatalogRegistry

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "BundleEntityTypeDefinition",
    "CatalogRegistry",
    "EntityTypeDefinition",
    "FieldTypeDefinition",
    "SiteCatalog",
    "build_registry",
    "load_catalog",
    "load_catalog_file",
    "parse_catalog",
]
