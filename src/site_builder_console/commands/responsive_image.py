"""``responsive-image:create``."""

from __future__ import annotations

import argparse
import logging

from site_builder_console.commands.base import Command
from site_builder_console.errors import InvalidArgumentError
from site_builder_console.imaging.planner import DerivativeSize, lazy_size, plan
from site_builder_console.storage.models import ImageStyle, ResponsiveImageStyle
from site_builder_console.translation import Translator
from site_builder_console.validation import (
    humanize_machine_name,
    validate_dimension_length,
    validate_machine_name,
)

logger = logging.getLogger(__name__)

DEFAULT_STYLE_ID = "style"
LAZY_IMAGE_MODULE = "lazy_image"


def derivative_label(label: str, size: DerivativeSize) -> str:
    height = size.height if size.height is not None else "h"
    return f"{label} ({size.width}×{height})"


class ResponsiveImageCreateCommand(Command):
    """Creates a responsive image style and one image style per derivative width."""

    name = "responsive-image:create"
    aliases = ("src",)
    translation_key = "commands.responsive-image.create"

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        parser.add_argument(
            "--id", dest="id", help=translator.trans("commands.responsive-image.options.id")
        )
        parser.add_argument(
            "--label", dest="label", help=translator.trans("commands.responsive-image.options.label")
        )
        parser.add_argument(
            "--width", dest="width", help=translator.trans("commands.responsive-image.options.width")
        )
        parser.add_argument(
            "--height",
            dest="height",
            help=translator.trans("commands.responsive-image.options.height"),
        )
        parser.add_argument(
            "--lazy",
            dest="lazy",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=translator.trans("commands.responsive-image.options.lazy"),
        )

    def interact(self, options: argparse.Namespace) -> None:
        if options.id:
            self.validate_new_responsive_image_id(options.id)
        else:
            options.id = self.io.ask(
                self.trans("commands.responsive-image.questions.id"),
                DEFAULT_STYLE_ID,
                self.validate_new_responsive_image_id,
            )

        if not options.label:
            options.label = self.io.ask(
                self.trans("commands.responsive-image.questions.label"),
                humanize_machine_name(options.id),
            )

        if options.width:
            options.width = validate_dimension_length(options.width)
        else:
            options.width = self.io.ask(
                self.trans("commands.responsive-image.questions.width"),
                None,
                validate_dimension_length,
            )

        if options.height:
            options.height = validate_dimension_length(options.height)
        else:
            options.height = self.io.ask_empty(
                self.trans("commands.responsive-image.questions.height"),
                None,
                validate_dimension_length,
            ) or None

        if self.lazy_enabled(options) and options.height:
            if lazy_size(options.width, options.height).height == 0:
                raise InvalidArgumentError(
                    self.trans("commands.responsive-image.messages.lazy-error")
                )

    def validate_new_responsive_image_id(self, style_id: str) -> str:
        style_id = validate_machine_name(style_id)
        if self.store.get_storage("responsive_image_style").exists(style_id):
            raise InvalidArgumentError(
                self.trans("commands.responsive-image.messages.exists-error", id=style_id)
            )
        return style_id

    def lazy_enabled(self, options: argparse.Namespace) -> bool:
        if options.lazy is not None:
            return options.lazy
        if self.site.lazy_images is not None:
            return self.site.lazy_images
        return self.catalog.module_exists(LAZY_IMAGE_MODULE)

    def execute(self, options: argparse.Namespace) -> None:
        width = validate_dimension_length(options.width)
        height = validate_dimension_length(options.height) if options.height else None
        style_id = options.id
        label = options.label

        derivatives = plan(
            width, height, self.site.width_marks, include_lazy=self.lazy_enabled(options)
        )

        image_sizes: list[str] = []
        for size in derivatives.sizes:
            derivative_id = f"{style_id}_{size.width}"
            self.create_image_style(derivative_id, derivative_label(label, size), size)
            image_sizes.append(derivative_id)

        if derivatives.lazy is not None:
            self.create_image_style(f"{style_id}_lazy", f"{label} (lazy)", derivatives.lazy)

        responsive_style = self.store.get_storage("responsive_image_style").create(
            {"id": style_id, "label": label}
        )
        assert isinstance(responsive_style, ResponsiveImageStyle)
        (
            responsive_style.set_fallback_image_style(image_sizes[0])
            .set_breakpoint_group(self.site.breakpoint_group)
            .add_image_style_mapping(
                self.site.breakpoint_id,
                self.site.multiplier,
                {
                    "image_mapping_type": "sizes",
                    "image_mapping": {
                        "sizes": self.site.sizes,
                        "sizes_image_styles": image_sizes,
                    },
                },
            )
        )
        self.store.save_new(responsive_style)

        self.io.success(
            self.trans("commands.responsive-image.messages.created", label=label, id=style_id)
        )

    def create_image_style(self, style_id: str, label: str, size: DerivativeSize) -> ImageStyle:
        """Save an image style scaling (and cropping, with a height) to ``size``."""
        storage = self.store.get_storage("image_style")
        if storage.exists(style_id):
            logger.warning("Overwriting existing image style %s", style_id)

        image_style = storage.create({"name": style_id, "label": label})
        assert isinstance(image_style, ImageStyle)
        image_style.add_image_effect(
            {
                "id": "image_scale" if size.scales_freely else "image_scale_and_crop",
                "weight": 0,
                "data": {"width": size.width, "height": size.height},
            }
        )
        self.store.save(image_style)
        self.io.comment(
            self.trans("commands.responsive-image.messages.style-created", id=style_id)
        )
        return image_style
