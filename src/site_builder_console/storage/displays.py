"""Default form and view displays of a bundle."""

from __future__ import annotations

from site_builder_console.catalog.models import FieldTypeDefinition
from site_builder_console.storage.models import EntityDisplay, FieldConfig
from site_builder_console.storage.store import ConfigStore

DISPLAY_ENTITY_TYPES = ("entity_form_display", "entity_view_display")
DEFAULT_MODE = "default"


def load_or_create_displays(
    store: ConfigStore, entity_type: str, bundle: str
) -> list[EntityDisplay]:
    displays: list[EntityDisplay] = []
    for display_type in DISPLAY_ENTITY_TYPES:
        storage = store.get_storage(display_type)
        display = storage.load(f"{entity_type}.{bundle}.{DEFAULT_MODE}")
        if display is None:
            display = storage.create(
                {"target_entity_type": entity_type, "bundle": bundle, "mode": DEFAULT_MODE}
            )
        assert isinstance(display, EntityDisplay)
        displays.append(display)
    return displays


def add_field_to_displays(
    store: ConfigStore, field: FieldConfig, field_type: FieldTypeDefinition
) -> None:
    """Place the field on the default form (widget) and view (formatter) displays."""
    form_display, view_display = load_or_create_displays(store, field.entity_type, field.bundle)
    form_display.set_component(field.field_name, field_type.default_widget)
    view_display.set_component(field.field_name, field_type.default_formatter)
    store.save(form_display)
    store.save(view_display)


def remove_field_from_displays(store: ConfigStore, field: FieldConfig) -> None:
    for display_type in DISPLAY_ENTITY_TYPES:
        storage = store.get_storage(display_type)
        display = storage.load(f"{field.entity_type}.{field.bundle}.{DEFAULT_MODE}")
        if isinstance(display, EntityDisplay) and field.field_name in display.content:
            store.save(display.remove_component(field.field_name))


def delete_displays(store: ConfigStore, entity_type: str, bundle: str) -> int:
    """Delete every display of a bundle, in any mode. Returns the count deleted."""
    count = 0
    for display_type in DISPLAY_ENTITY_TYPES:
        storage = store.get_storage(display_type)
        for display in storage.load_by_properties(
            target_entity_type=entity_type, bundle=bundle
        ).values():
            storage.delete(display)
            count += 1
    return count
