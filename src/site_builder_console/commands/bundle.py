"""``bundle:create`` and ``bundle:delete``."""

from __future__ import annotations

import argparse
import logging

from site_builder_console.commands.base import Command
from site_builder_console.commands.mixins import BundleMixin, FieldMixin, FieldPlan
from site_builder_console.errors import EntityNotFoundError, InvalidArgumentError
from site_builder_console.storage.displays import delete_displays, load_or_create_displays
from site_builder_console.storage.models import Role
from site_builder_console.translation import Translator
from site_builder_console.validation import humanize_machine_name

logger = logging.getLogger(__name__)

DEFAULT_BUNDLE_NAME = "custom_bundle"


def _parse_field_option(value: str) -> tuple[str, str]:
    field_type, _, field_name = value.partition(":")
    if not field_type:
        raise argparse.ArgumentTypeError(f"expected TYPE[:NAME], got {value!r}")
    return field_type, field_name


class BundleCreateCommand(BundleMixin, FieldMixin, Command):
    """Creates an entity bundle, its default displays and any number of fields."""

    name = "bundle:create"
    aliases = ("sbc",)
    translation_key = "commands.bundle.create"

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        cls.add_entity_type_option(parser, translator)
        cls.add_bundle_name_option(parser, translator)
        parser.add_argument(
            "--bundle-label",
            dest="bundle_label",
            help=translator.trans("commands.bundle.options.bundle-label"),
        )
        parser.add_argument(
            "--description",
            dest="description",
            help=translator.trans("commands.bundle.options.description"),
        )
        parser.add_argument(
            "--field",
            dest="field_specs",
            action="append",
            default=[],
            type=_parse_field_option,
            metavar="TYPE[:NAME]",
            help=translator.trans("commands.bundle.options.field"),
        )
        parser.add_argument(
            "--grant-role",
            dest="grant_roles",
            action="append",
            default=[],
            metavar="ROLE",
            help=translator.trans("commands.bundle.options.grant-role"),
        )

    def interact(self, options: argparse.Namespace) -> None:
        if options.entity_type:
            self.validate_entity_type(options.entity_type)
        else:
            options.entity_type = self.entity_type_question()
        entity_type = options.entity_type

        if self.store.bundle_storage(entity_type) is None:
            raise InvalidArgumentError(
                self.trans("commands.bundle.messages.not-bundleable", entity_type=entity_type)
            )

        if options.bundle_name:
            self.validate_new_bundle_name(entity_type, options.bundle_name)
        else:
            options.bundle_name = self.io.ask(
                self.trans("commands.bundle.questions.bundle-name"),
                DEFAULT_BUNDLE_NAME,
                lambda bundle: self.validate_new_bundle_name(entity_type, bundle),
            )

        if not options.bundle_label:
            options.bundle_label = self.io.ask(
                self.trans("commands.bundle.questions.bundle-label"),
                humanize_machine_name(options.bundle_name),
            )

        if options.description is None:
            options.description = self.io.ask_empty(
                self.trans("commands.bundle.questions.description"), ""
            ) or ""

        for role in options.grant_roles:
            if not self.store.get_storage("user_role").exists(role):
                raise InvalidArgumentError(
                    self.trans("commands.bundle.messages.role-missing", role=role)
                )

        options.fields = self.field_question(
            entity_type, options.bundle_name, options.field_specs
        )

    def field_question(
        self,
        entity_type: str,
        bundle: str,
        field_specs: list[tuple[str, str]] | None = None,
    ) -> list[FieldPlan]:
        """Collect the fields given as options, then ask for more until declined."""
        fields: list[FieldPlan] = []
        taken: set[str] = set()

        def add(field: FieldPlan) -> None:
            taken.add(field.name)
            fields.append(field)

        for field_type, field_name in field_specs or []:
            add(self.field_create_question(entity_type, bundle, field_type, field_name, taken))

        while self.io.confirm(self.trans("commands.bundle.questions.new-field"), False):
            add(self.field_create_question(entity_type, bundle, taken=taken))

        return fields

    def execute(self, options: argparse.Namespace) -> None:
        storage = self.store.bundle_storage(options.entity_type)
        if storage is None:
            raise InvalidArgumentError(
                self.trans(
                    "commands.bundle.messages.not-bundleable", entity_type=options.entity_type
                )
            )

        bundle = storage.create(
            {
                "id": options.bundle_name,
                "label": options.bundle_label,
                "description": options.description or "",
            }
        )
        self.store.save_new(bundle)

        for display in load_or_create_displays(
            self.store, options.entity_type, options.bundle_name
        ):
            self.store.save(display)

        for field in options.fields:
            self.save_field(field)

        for role_id in options.grant_roles:
            self.grant_bundle_permissions(role_id, bundle.permissions())

        self.io.success(self.trans("commands.bundle.messages.created", label=options.bundle_label))

    def grant_bundle_permissions(self, role_id: str, permissions: list[str]) -> None:
        role = self.store.get_storage("user_role").load(role_id)
        if not isinstance(role, Role):
            raise EntityNotFoundError(
                self.trans("commands.bundle.messages.role-missing", role=role_id)
            )
        for permission in permissions:
            role.grant_permission(permission)
        self.store.save(role)
        self.io.comment(
            self.trans(
                "commands.bundle.messages.permissions-granted",
                count=len(permissions),
                role=role_id,
            )
        )


class BundleDeleteCommand(BundleMixin, FieldMixin, Command):
    """Deletes an entity bundle with its fields, displays and role permissions."""

    name = "bundle:delete"
    aliases = ("sbd",)
    translation_key = "commands.bundle.delete"

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        cls.add_entity_type_option(parser, translator)
        cls.add_bundle_name_option(parser, translator)

    def interact(self, options: argparse.Namespace) -> None:
        self.entity_and_bundle_questions(options)

    def execute(self, options: argparse.Namespace) -> None:
        entity_type = options.entity_type
        bundle = self.load_bundle(entity_type, options.bundle_name)
        if bundle is None:
            raise EntityNotFoundError(
                self.trans(
                    "commands.bundle.messages.missing-error",
                    entity_type=entity_type,
                    bundle=options.bundle_name,
                )
            )

        for field_name in self.get_configurable_fields(entity_type, bundle.id):
            self.delete_field(entity_type, bundle.id, field_name)
        delete_displays(self.store, entity_type, bundle.id)
        self.revoke_bundle_permissions(bundle.permissions())
        self.store.delete(bundle)

        self.io.success(self.trans("commands.bundle.messages.deleted", name=bundle.id))

    def revoke_bundle_permissions(self, permissions: list[str]) -> None:
        if not permissions:
            return
        for role in self.store.get_storage("user_role").load_multiple().values():
            assert isinstance(role, Role)
            if any(p in role.permissions for p in permissions):
                for permission in permissions:
                    role.revoke_permission(permission)
                self.store.save(role)
                logger.debug("Revoked %d permissions from %s", len(permissions), role.id)
