"""Configuration entity storage."""

from site_builder_console.storage.models import (
    BundleConfig,
    ConfigEntity,
    EntityFormDisplay,
    EntityViewDisplay,
    FieldConfig,
    FieldStorageConfig,
    ImageEffect,
    ImageStyle,
    ImageStyleMapping,
    ResponsiveImageStyle,
    Role,
)
from site_builder_console.storage.store import ConfigStore, EntityStorage

__all__ = [
    "BundleConfig",
    "ConfigEntity",
    "ConfigStore",
    "EntityFormDisplay",
    "EntityStorage",
    "EntityViewDisplay",
    "FieldConfig",
    "FieldStorageConfig",
    "ImageEffect",
    "ImageStyle",
    "ImageStyleMapping",
    "ResponsiveImageStyle",
    "Role",
]
