"""``field:create`` and ``field:delete``."""

from __future__ import annotations

import argparse

from site_builder_console.commands.base import Command
from site_builder_console.commands.mixins import BundleMixin, FieldMixin
from site_builder_console.errors import InvalidArgumentError
from site_builder_console.translation import Translator


class FieldCreateCommand(BundleMixin, FieldMixin, Command):
    """Creates a field instance on a content bundle."""

    name = "field:create"
    aliases = ("sfc",)
    translation_key = "commands.field.create"

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        cls.add_entity_type_option(parser, translator)
        cls.add_bundle_name_option(parser, translator)
        cls.add_field_name_option(parser, translator)
        cls.add_field_type_option(parser, translator)

    def interact(self, options: argparse.Namespace) -> None:
        self.entity_and_bundle_questions(options)
        options.field = self.field_create_question(
            options.entity_type,
            options.bundle_name,
            options.field_type or "",
            options.field_name or "",
        )
        options.field_name = options.field.name
        options.field_type = options.field.type

    def execute(self, options: argparse.Namespace) -> None:
        self.save_field(options.field)
        self.io.success(
            self.trans(
                "commands.field.messages.created",
                field=options.field_name,
                entity_type=options.entity_type,
                bundle=options.bundle_name,
            )
        )


class FieldDeleteCommand(BundleMixin, FieldMixin, Command):
    """Deletes a field instance from a content bundle."""

    name = "field:delete"
    aliases = ("sfd",)
    translation_key = "commands.field.delete"

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        cls.add_entity_type_option(parser, translator)
        cls.add_bundle_name_option(parser, translator)
        cls.add_field_name_option(parser, translator)

    def interact(self, options: argparse.Namespace) -> None:
        self.entity_and_bundle_questions(options)

        fields = self.get_configurable_fields(options.entity_type, options.bundle_name)
        if options.field_name:
            if options.field_name not in fields:
                raise InvalidArgumentError(
                    self.trans(
                        "commands.field.messages.missing-error",
                        field=options.field_name,
                        entity_type=options.entity_type,
                        bundle=options.bundle_name,
                    )
                )
        else:
            options.field_name = self.io.choice_no_list(
                self.trans("commands.field.questions.name"), fields
            )

    def execute(self, options: argparse.Namespace) -> None:
        self.delete_field(options.entity_type, options.bundle_name, options.field_name)
        self.io.success(
            self.trans(
                "commands.field.messages.deleted",
                field=options.field_name,
                entity_type=options.entity_type,
                bundle=options.bundle_name,
            )
        )
