"""Questions shared by the bundle and field commands."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Collection
from dataclasses import dataclass

from site_builder_console.errors import EntityNotFoundError, InvalidArgumentError
from site_builder_console.interaction.settings import settings_question
from site_builder_console.storage.displays import (
    add_field_to_displays,
    remove_field_from_displays,
)
from site_builder_console.storage.models import BundleConfig, FieldConfig, FieldStorageConfig
from site_builder_console.translation import Translator
from site_builder_console.validation import (
    humanize_machine_name,
    validate_cardinality,
    validate_machine_name,
)

logger = logging.getLogger(__name__)


@dataclass
class FieldPlan:
    """A field collected through questions, not saved yet.

    ``storage`` is None when the entity type already has a storage with
    this field name and the instance reuses it.
    """

    type: str
    name: str
    instance: FieldConfig
    storage: FieldStorageConfig | None = None


class BundleMixin:
    """Entity type and bundle questions. Mixed into Command subclasses."""

    @staticmethod
    def add_entity_type_option(parser: argparse.ArgumentParser, translator: Translator) -> None:
        parser.add_argument(
            "--entity-type",
            dest="entity_type",
            help=translator.trans("commands.bundle.options.entity-type"),
        )

    @staticmethod
    def add_bundle_name_option(parser: argparse.ArgumentParser, translator: Translator) -> None:
        parser.add_argument(
            "--bundle-name",
            dest="bundle_name",
            help=translator.trans("commands.bundle.options.bundle-name"),
        )

    def get_content_entity_types(self) -> list[str]:
        return self.catalog.content_entity_types()

    def entity_type_question(self) -> str:
        return self.io.choice_no_list(
            self.trans("commands.bundle.questions.entity-type"),
            self.get_content_entity_types(),
        )

    def validate_entity_type(self, entity_type: str) -> str:
        if entity_type not in self.get_content_entity_types():
            raise InvalidArgumentError(
                f'"{entity_type}" is not a content entity type.'
            )
        return entity_type

    def bundle_choice_question(self, entity_type: str) -> str:
        return self.io.choice_no_list(
            self.trans("commands.bundle.questions.bundle-name"),
            self.store.bundle_info(entity_type),
        )

    def validate_existing_bundle(self, entity_type: str, bundle: str) -> str:
        if bundle not in self.store.bundle_info(entity_type):
            raise InvalidArgumentError(
                self.trans(
                    "commands.bundle.messages.missing-error",
                    entity_type=entity_type,
                    bundle=bundle,
                )
            )
        return bundle

    def validate_new_bundle_name(self, entity_type: str, bundle: str) -> str:
        """Return ``bundle`` if it is a valid machine name not used by ``entity_type``."""
        bundle = validate_machine_name(bundle)
        if bundle not in self.store.bundle_info(entity_type):
            return bundle
        raise InvalidArgumentError(
            self.trans("commands.bundle.messages.exists-error", bundle=bundle)
        )

    def entity_and_bundle_questions(self, options: argparse.Namespace) -> None:
        """Fill ``entity_type`` and an existing ``bundle_name`` on ``options``."""
        if options.entity_type:
            self.validate_entity_type(options.entity_type)
        else:
            options.entity_type = self.entity_type_question()

        if options.bundle_name:
            self.validate_existing_bundle(options.entity_type, options.bundle_name)
        else:
            options.bundle_name = self.bundle_choice_question(options.entity_type)

    def load_bundle(self, entity_type: str, bundle: str) -> BundleConfig | None:
        storage = self.store.bundle_storage(entity_type)
        if storage is None:
            return None
        entity = storage.load(bundle)
        return entity if isinstance(entity, BundleConfig) else None


class FieldMixin:
    """Field storage and instance questions. Mixed into Command subclasses."""

    @staticmethod
    def add_field_name_option(parser: argparse.ArgumentParser, translator: Translator) -> None:
        parser.add_argument(
            "--field-name",
            dest="field_name",
            help=translator.trans("commands.field.options.name"),
        )

    @staticmethod
    def add_field_type_option(parser: argparse.ArgumentParser, translator: Translator) -> None:
        parser.add_argument(
            "--field-type",
            dest="field_type",
            help=translator.trans("commands.field.options.type"),
        )

    def field_create_question(
        self,
        entity_type: str,
        bundle: str,
        field_type: str = "",
        field_name: str = "",
        taken: Collection[str] = (),
    ) -> FieldPlan:
        """Ask everything needed to create one field on a bundle.

        ``taken`` holds names already planned for the bundle but not saved yet.
        """
        if field_type:
            self.catalog.get_field_type(field_type)
        else:
            field_type = self.io.choice_no_list(
                self.trans("commands.field.questions.type"),
                self.catalog.field_type_ids(),
            )

        def check_name(name: str) -> str:
            name = validate_machine_name(name)
            if name in taken:
                raise self.field_exists_error(entity_type, bundle, name)
            return self.validate_field_instance_not_exists(entity_type, bundle, name)

        if field_name:
            field_name = check_name(field_name)
        else:
            field_name = self.io.ask(
                self.trans("commands.field.questions.name"),
                f"field_{field_type}",
                check_name,
            )

        storage = self.field_storage_question(entity_type, field_type, field_name)
        instance = self.field_instance_question(
            entity_type, bundle, field_type, field_name, storage
        )
        return FieldPlan(type=instance.field_type, name=field_name, instance=instance, storage=storage)

    def field_storage_question(
        self, entity_type: str, field_type: str, field_name: str
    ) -> FieldStorageConfig | None:
        """Ask for a new storage definition; None when one already exists."""
        storage_id = f"{entity_type}.{field_name}"
        if self.store.get_storage("field_storage_config").exists(storage_id):
            self.io.comment(self.trans("commands.field.messages.storage-reused", storage=storage_id))
            return None

        storage = FieldStorageConfig(
            entity_type=entity_type,
            field_name=field_name,
            type=field_type,
            settings=self.catalog.default_storage_settings(field_type),
        )

        type_definition = self.catalog.get_field_type(field_type)
        if type_definition.cardinality is None:
            storage.cardinality = self.io.ask(
                self.trans("commands.field.questions.cardinality"),
                storage.cardinality,
                validate_cardinality,
            )
        else:
            storage.cardinality = type_definition.cardinality

        storage.settings = settings_question(self.io, storage.settings)
        return storage

    def field_instance_question(
        self,
        entity_type: str,
        bundle: str,
        field_type: str,
        field_name: str,
        storage: FieldStorageConfig | None,
    ) -> FieldConfig:
        if storage is None:
            existing = self.store.get_storage("field_storage_config").load(
                f"{entity_type}.{field_name}"
            )
            if isinstance(existing, FieldStorageConfig):
                field_type = existing.type

        instance = FieldConfig(
            entity_type=entity_type,
            bundle=bundle,
            field_name=field_name,
            field_type=field_type,
        )

        instance.label = self.io.ask(
            self.trans("commands.field.questions.label"),
            humanize_machine_name(field_name, strip_prefix="field_"),
        )
        instance.description = self.io.ask_empty(
            self.trans("commands.field.questions.description"), ""
        ) or ""
        instance.required = self.io.confirm(
            self.trans("commands.field.questions.required"), False
        )

        settings = {**self.catalog.default_field_settings(field_type), **instance.settings}
        instance.settings = settings_question(self.io, settings)
        return instance

    def validate_field_instance_not_exists(
        self, entity_type: str, bundle: str, field_name: str
    ) -> str:
        if not self.store.get_storage("field_config").exists(
            f"{entity_type}.{bundle}.{field_name}"
        ):
            return field_name
        raise self.field_exists_error(entity_type, bundle, field_name)

    def field_exists_error(
        self, entity_type: str, bundle: str, field_name: str
    ) -> InvalidArgumentError:
        return InvalidArgumentError(
            self.trans(
                "commands.field.messages.exists-error",
                field=field_name,
                entity_type=entity_type,
                bundle=bundle,
            )
        )

    def get_configurable_fields(self, entity_type: str, bundle: str) -> list[str]:
        definitions = self.store.get_storage("field_config").load_by_properties(
            entity_type=entity_type, bundle=bundle
        )
        return [d.field_name for d in definitions.values() if isinstance(d, FieldConfig)]

    def save_field(self, field: FieldPlan) -> None:
        if field.storage is not None:
            self.store.save(field.storage)
        self.store.save(field.instance)
        add_field_to_displays(
            self.store, field.instance, self.catalog.get_field_type(field.instance.field_type)
        )

    def delete_field(self, entity_type: str, bundle: str, field_name: str) -> None:
        """Delete a field instance, and its storage once no bundle uses it."""
        storage = self.store.get_storage("field_config")
        instance = storage.load(f"{entity_type}.{bundle}.{field_name}")
        if not isinstance(instance, FieldConfig):
            raise EntityNotFoundError(
                self.trans(
                    "commands.field.messages.missing-error",
                    field=field_name,
                    entity_type=entity_type,
                    bundle=bundle,
                )
            )

        storage.delete(instance)
        remove_field_from_displays(self.store, instance)

        if storage.load_by_properties(entity_type=entity_type, field_name=field_name):
            return
        field_storage = self.store.get_storage("field_storage_config").load(instance.storage_id())
        if field_storage is not None:
            self.store.delete(field_storage)
            self.io.comment(
                self.trans(
                    "commands.field.messages.storage-deleted", storage=instance.storage_id()
                )
            )
        logger.debug("Deleted field %s", instance.config_name())
