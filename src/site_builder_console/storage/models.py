"""Pydantic models for the configuration entities the commands create.

Each model knows its config prefix; ``config_name()`` is the name the
entity is exported under (``field.field.node.article.field_tags``).
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal
from uuid import uuid4

from pydantic import Field, field_validator

from site_builder_console.catalog.models import BundleEntityTypeDefinition, _StrictModel


class ConfigEntity(_StrictModel):
    """Base for every configuration entity."""

    entity_type_id: ClassVar[str] = ""
    config_prefix: ClassVar[str] = ""

    status: bool = True

    def config_id(self) -> str:
        raise NotImplementedError

    def prefix(self) -> str:
        return self.config_prefix

    def type_id(self) -> str:
        return self.entity_type_id

    def config_name(self) -> str:
        return f"{self.prefix()}.{self.config_id()}"

    def to_config(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class BundleConfig(ConfigEntity):
    """A bundle of a content entity type, stored as its bundle entity type.

    The id/label/description keys of the exported config come from the
    bundle entity type definition (``type``/``name`` for node types).
    """

    id: str
    label: str
    description: str = ""
    definition: BundleEntityTypeDefinition = Field(exclude=True)

    def config_id(self) -> str:
        return self.id

    def prefix(self) -> str:
        return self.definition.config_prefix

    def type_id(self) -> str:
        return self.definition.id

    def to_config(self) -> dict[str, Any]:
        return {
            self.definition.id_key: self.id,
            self.definition.label_key: self.label,
            self.definition.description_key: self.description,
            "status": self.status,
        }

    @classmethod
    def from_config(
        cls, data: dict[str, Any], definition: BundleEntityTypeDefinition
    ) -> BundleConfig:
        return cls(
            id=data[definition.id_key],
            label=data.get(definition.label_key, ""),
            description=data.get(definition.description_key) or "",
            status=data.get("status", True),
            definition=definition,
        )

    def permissions(self) -> list[str]:
        return [template.format(bundle=self.id) for template in self.definition.permissions]


class FieldStorageConfig(ConfigEntity):
    entity_type_id: ClassVar[str] = "field_storage_config"
    config_prefix: ClassVar[str] = "field.storage"

    entity_type: str
    field_name: str
    type: str
    cardinality: int = 1
    settings: dict[str, Any] = Field(default_factory=dict)
    translatable: bool = True
    locked: bool = False

    @field_validator("cardinality")
    @classmethod
    def check_cardinality(cls, value: int) -> int:
        if value == 0 or value < -1:
            raise ValueError("cardinality must be a positive integer or -1")
        return value

    def config_id(self) -> str:
        return f"{self.entity_type}.{self.field_name}"


class FieldConfig(ConfigEntity):
    entity_type_id: ClassVar[str] = "field_config"
    config_prefix: ClassVar[str] = "field.field"

    entity_type: str
    bundle: str
    field_name: str
    field_type: str
    label: str = ""
    description: str = ""
    required: bool = False
    settings: dict[str, Any] = Field(default_factory=dict)

    def config_id(self) -> str:
        return f"{self.entity_type}.{self.bundle}.{self.field_name}"

    def storage_id(self) -> str:
        return f"{self.entity_type}.{self.field_name}"


class DisplayComponent(_StrictModel):
    type: str | None = None
    weight: int = 0
    region: str = "content"
    settings: dict[str, Any] = Field(default_factory=dict)


class EntityDisplay(ConfigEntity):
    """Shared shape of form and view displays."""

    target_entity_type: str
    bundle: str
    mode: str = "default"
    content: dict[str, DisplayComponent] = Field(default_factory=dict)
    hidden: dict[str, bool] = Field(default_factory=dict)

    def config_id(self) -> str:
        return f"{self.target_entity_type}.{self.bundle}.{self.mode}"

    def set_component(self, name: str, plugin: str | None) -> EntityDisplay:
        weight = max((c.weight for c in self.content.values()), default=-1) + 1
        content = dict(self.content)
        content[name] = DisplayComponent(type=plugin, weight=weight)
        self.content = content
        self.hidden = {k: v for k, v in self.hidden.items() if k != name}
        return self

    def remove_component(self, name: str) -> EntityDisplay:
        self.content = {k: v for k, v in self.content.items() if k != name}
        self.hidden = {k: v for k, v in self.hidden.items() if k != name}
        return self


class EntityFormDisplay(EntityDisplay):
    entity_type_id: ClassVar[str] = "entity_form_display"
    config_prefix: ClassVar[str] = "core.entity_form_display"


class EntityViewDisplay(EntityDisplay):
    entity_type_id: ClassVar[str] = "entity_view_display"
    config_prefix: ClassVar[str] = "core.entity_view_display"


class ImageEffect(_StrictModel):
    id: str
    uuid: str = Field(default_factory=lambda: str(uuid4()))
    weight: int = 0
    data: dict[str, Any] = Field(default_factory=dict)


class ImageStyle(ConfigEntity):
    entity_type_id: ClassVar[str] = "image_style"
    config_prefix: ClassVar[str] = "image.style"

    name: str
    label: str
    effects: list[ImageEffect] = Field(default_factory=list)

    def config_id(self) -> str:
        return self.name

    def add_image_effect(self, effect: dict[str, Any]) -> ImageStyle:
        self.effects = [*self.effects, ImageEffect(**effect)]
        return self


class ImageStyleMapping(_StrictModel):
    breakpoint_id: str
    multiplier: str = "1x"
    image_mapping_type: Literal["sizes", "image_style", "_none"] = "sizes"
    image_mapping: Any = None


class ResponsiveImageStyle(ConfigEntity):
    entity_type_id: ClassVar[str] = "responsive_image_style"
    config_prefix: ClassVar[str] = "responsive_image.styles"

    id: str
    label: str
    breakpoint_group: str = ""
    fallback_image_style: str = ""
    image_style_mappings: list[ImageStyleMapping] = Field(default_factory=list)

    def config_id(self) -> str:
        return self.id

    def set_fallback_image_style(self, style_id: str) -> ResponsiveImageStyle:
        self.fallback_image_style = style_id
        return self

    def set_breakpoint_group(self, group: str) -> ResponsiveImageStyle:
        self.breakpoint_group = group
        return self

    def add_image_style_mapping(
        self, breakpoint_id: str, multiplier: str, mapping: dict[str, Any]
    ) -> ResponsiveImageStyle:
        kept = [
            m
            for m in self.image_style_mappings
            if (m.breakpoint_id, m.multiplier) != (breakpoint_id, multiplier)
        ]
        kept.append(
            ImageStyleMapping(breakpoint_id=breakpoint_id, multiplier=multiplier, **mapping)
        )
        self.image_style_mappings = kept
        return self


class Role(ConfigEntity):
    entity_type_id: ClassVar[str] = "user_role"
    config_prefix: ClassVar[str] = "user.role"

    id: str
    label: str = ""
    weight: int = 0
    is_admin: bool = False
    permissions: list[str] = Field(default_factory=list)

    def config_id(self) -> str:
        return self.id

    def grant_permission(self, permission: str) -> Role:
        if permission not in self.permissions:
            self.permissions = sorted([*self.permissions, permission])
        return self

    def revoke_permission(self, permission: str) -> Role:
        self.permissions = [p for p in self.permissions if p != permission]
        return self


CONFIG_ENTITY_CLASSES: dict[str, type[ConfigEntity]] = {
    cls.entity_type_id: cls
    for cls in (
        FieldStorageConfig,
        FieldConfig,
        EntityFormDisplay,
        EntityViewDisplay,
        ImageStyle,
        ResponsiveImageStyle,
        Role,
    )
}
