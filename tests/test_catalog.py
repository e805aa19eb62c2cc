"""Tests for catalog loading and the catalog registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from site_builder_console.catalog.loader import load_catalog, load_catalog_file
from site_builder_console.catalog.models import EntityTypeDefinition, FieldTypeDefinition
from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.errors import CatalogError, DuplicateEntityError


def _write_yaml(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaultCatalog:
    def test_content_entity_types(self, catalog: CatalogRegistry):
        content = catalog.content_entity_types()
        assert content[0] == "node"
        assert "taxonomy_term" in content
        assert "image_style" not in content

    def test_node_bundle_entity_type(self, catalog: CatalogRegistry):
        bundle = catalog.get_entity_type("node").bundle_entity_type
        assert bundle is not None
        assert bundle.config_prefix == "node.type"
        assert (bundle.id_key, bundle.label_key) == ("type", "name")

    def test_user_has_no_bundle_entity_type(self, catalog: CatalogRegistry):
        assert not catalog.get_entity_type("user").is_bundleable

    def test_ui_field_types_exclude_hidden(self, catalog: CatalogRegistry):
        assert "string" in catalog.field_type_ids()
        assert "uuid" not in catalog.field_type_ids()
        assert "uuid" in catalog.field_type_ids(ui_only=False)

    def test_default_settings_are_copies(self, catalog: CatalogRegistry):
        settings = catalog.default_storage_settings("image")
        settings["default_image"]["alt"] = "changed"
        assert catalog.default_storage_settings("image")["default_image"]["alt"] == ""

    def test_fixed_cardinality(self, catalog: CatalogRegistry):
        assert catalog.get_field_type("created").cardinality == 1
        assert catalog.get_field_type("string").cardinality is None

    def test_modules(self, catalog: CatalogRegistry):
        assert catalog.module_exists("responsive_image")
        assert not catalog.module_exists("lazy_image")

    def test_unknown_lookups(self, catalog: CatalogRegistry):
        with pytest.raises(CatalogError, match="entity type does not exist"):
            catalog.get_entity_type("comment")
        with pytest.raises(CatalogError, match="field type does not exist"):
            catalog.get_field_type("geofield")


class TestCatalogFile:
    def test_load_custom_catalog(self, tmp_path: Path):
        path = _write_yaml(
            tmp_path / "catalog.yaml",
            """
modules: [lazy_image]
entity_types:
  product:
    label: Product
    bundle_entity_type:
      id: product_type
      config_prefix: commerce_product.type
field_types:
  string:
    storage_settings: {max_length: 64}
""".strip(),
        )
        registry = load_catalog(path)
        assert registry.content_entity_types() == ["product"]
        assert registry.get_entity_type("product").bundle_entity_type.id_key == "id"
        assert registry.default_storage_settings("string") == {"max_length": 64}
        assert registry.module_exists("lazy_image")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(CatalogError, match="does not exist"):
            load_catalog_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "bad.yaml", "entity_types: [unclosed")
        with pytest.raises(CatalogError, match="not valid YAML"):
            load_catalog_file(path)

    def test_entity_types_must_be_mapping(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "list.yaml", "entity_types:\n  - node\n")
        with pytest.raises(CatalogError, match="must be mappings"):
            load_catalog_file(path)

    def test_unknown_keys_rejected(self, tmp_path: Path):
        path = _write_yaml(
            tmp_path / "extra.yaml",
            "entity_types:\n  node:\n    bundle_entity_type:\n      id: node_type\n"
            "      config_prefix: node.type\n      colour: blue\n",
        )
        with pytest.raises(CatalogError, match="malformed"):
            load_catalog_file(path)


class TestCatalogRegistry:
    def test_duplicate_entity_type(self):
        registry = CatalogRegistry()
        registry.register_entity_type(EntityTypeDefinition(id="node"))
        with pytest.raises(DuplicateEntityError, match="Duplicate"):
            registry.register_entity_type(EntityTypeDefinition(id="node"))

    def test_duplicate_field_type(self):
        registry = CatalogRegistry()
        registry.register_field_type(FieldTypeDefinition(id="string"))
        with pytest.raises(DuplicateEntityError, match="Duplicate"):
            registry.register_field_type(FieldTypeDefinition(id="string"))

    def test_non_content_types_filtered(self):
        registry = CatalogRegistry()
        registry.register_entity_type(EntityTypeDefinition(id="node"))
        registry.register_entity_type(EntityTypeDefinition(id="image_style", content=False))
        assert registry.content_entity_types() == ["node"]
        assert registry.bundle_entity_types() == []
