"""Tests for responsive-image:create."""

from __future__ import annotations

import dataclasses

import pytest
import yaml
from conftest import config_files, make_context, output_of, run_command

from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.commands.responsive_image import (
    ResponsiveImageCreateCommand,
    derivative_label,
)
from site_builder_console.errors import InvalidArgumentError, MissingOptionError
from site_builder_console.imaging.planner import DerivativeSize
from site_builder_console.storage.models import ResponsiveImageStyle
from site_builder_console.storage.store import ConfigStore

HERO = ["--id", "hero", "--label", "Hero", "--width", "1920", "--height", "1080"]


def _read(store: ConfigStore, name: str) -> dict:
    return yaml.safe_load((store.config_dir / f"{name}.yml").read_text(encoding="utf-8"))


class TestResponsiveImageCreate:
    def test_creates_one_style_per_width(self, store, site):
        context = make_context(store, site, interactive=False)
        run_command(ResponsiveImageCreateCommand, context, HERO)

        assert config_files(store.config_dir) == [
            "image.style.hero_1280.yml",
            "image.style.hero_1600.yml",
            "image.style.hero_1920.yml",
            "image.style.hero_400.yml",
            "image.style.hero_800.yml",
            "responsive_image.styles.hero.yml",
        ]
        assert 'Responsive image style "Hero" (hero) created.' in output_of(context)

    def test_derivative_styles_crop_to_aspect_ratio(self, store, site):
        run_command(ResponsiveImageCreateCommand, make_context(store, site, interactive=False), HERO)

        style = _read(store, "image.style.hero_800")
        assert style["label"] == "Hero (800×450)"
        [effect] = style["effects"]
        assert effect["id"] == "image_scale_and_crop"
        assert effect["data"] == {"width": 800, "height": 450}
        assert effect["uuid"]

    def test_responsive_style_maps_sizes(self, store, site):
        run_command(ResponsiveImageCreateCommand, make_context(store, site, interactive=False), HERO)

        style = _read(store, "responsive_image.styles.hero")
        assert style["fallback_image_style"] == "hero_1920"
        assert style["breakpoint_group"] == "responsive_image"
        [mapping] = style["image_style_mappings"]
        assert mapping["breakpoint_id"] == "responsive_image.viewport_sizing"
        assert mapping["multiplier"] == "1x"
        assert mapping["image_mapping_type"] == "sizes"
        assert mapping["image_mapping"] == {
            "sizes": "100vw",
            "sizes_image_styles": ["hero_1920", "hero_1600", "hero_1280", "hero_800", "hero_400"],
        }

    def test_interactive_defaults_and_free_height(self, store, site):
        context = make_context(store, site, ["", "", "800", ""])
        run_command(ResponsiveImageCreateCommand, context)

        style = _read(store, "responsive_image.styles.style")
        assert style["label"] == "Style"
        assert style["image_style_mappings"][0]["image_mapping"]["sizes_image_styles"] == [
            "style_800",
            "style_400",
        ]
        effect = _read(store, "image.style.style_400")["effects"][0]
        assert effect["id"] == "image_scale"
        assert effect["data"] == {"width": 400, "height": None}
        assert _read(store, "image.style.style_400")["label"] == "Style (400×h)"

    def test_invalid_width_reprompts(self, store, site):
        context = make_context(store, site, ["banner", "Banner", "wide", "0", "640", "480"])
        run_command(ResponsiveImageCreateCommand, context)
        assert _read(store, "image.style.banner_640")["effects"][0]["data"] == {
            "width": 640,
            "height": 480,
        }

    def test_lazy_style_on_request(self, store, site):
        context = make_context(store, site, interactive=False)
        run_command(ResponsiveImageCreateCommand, context, [*HERO, "--lazy"])

        lazy = _read(store, "image.style.hero_lazy")
        assert lazy["label"] == "Hero (lazy)"
        assert lazy["effects"][0]["data"] == {"width": 7, "height": 4}
        style = _read(store, "responsive_image.styles.hero")
        assert "hero_lazy" not in style["image_style_mappings"][0]["image_mapping"]["sizes_image_styles"]

    def test_zero_height_lazy_style_rejected(self, store, site):
        argv = ["--id", "strip", "--width", "10000", "--height", "10", "--lazy"]
        with pytest.raises(InvalidArgumentError, match="too wide for a lazy placeholder"):
            run_command(ResponsiveImageCreateCommand, make_context(store, site, interactive=False), argv)
        assert config_files(store.config_dir) == []

    def test_wide_ratio_without_lazy_style(self, store, site):
        argv = ["--id", "strip", "--width", "10000", "--height", "10", "--no-lazy"]
        run_command(ResponsiveImageCreateCommand, make_context(store, site, interactive=False), argv)
        assert (store.config_dir / "responsive_image.styles.strip.yml").is_file()

    def test_lazy_style_follows_module(self, site):
        store = ConfigStore(site.config_dir, CatalogRegistry(modules=["lazy_image"]))
        run_command(
            ResponsiveImageCreateCommand,
            make_context(store, site, interactive=False),
            ["--id", "card", "--width", "500", "--height", "500"],
        )
        assert (store.config_dir / "image.style.card_lazy.yml").is_file()

    def test_no_lazy_option_overrides_site(self, store, site):
        site = dataclasses.replace(site, lazy_images=True)
        run_command(
            ResponsiveImageCreateCommand,
            make_context(store, site, interactive=False),
            [*HERO, "--no-lazy"],
        )
        assert not (store.config_dir / "image.style.hero_lazy.yml").exists()

    def test_site_width_marks_and_mapping(self, store, site):
        site = dataclasses.replace(
            site, width_marks=(1000, 500), sizes="50vw", breakpoint_group="theme"
        )
        run_command(
            ResponsiveImageCreateCommand,
            make_context(store, site, interactive=False),
            ["--id", "teaser", "--width", "1200"],
        )
        style = _read(store, "responsive_image.styles.teaser")
        assert style["breakpoint_group"] == "theme"
        assert style["image_style_mappings"][0]["image_mapping"] == {
            "sizes": "50vw",
            "sizes_image_styles": ["teaser_1200", "teaser_1000", "teaser_500"],
        }

    def test_existing_id_rejected(self, store, site):
        store.save(ResponsiveImageStyle(id="hero", label="Hero"))
        with pytest.raises(InvalidArgumentError, match="already exists"):
            run_command(ResponsiveImageCreateCommand, make_context(store, site, interactive=False), HERO)

    def test_missing_width_without_interaction(self, store, site):
        with pytest.raises(MissingOptionError):
            run_command(
                ResponsiveImageCreateCommand,
                make_context(store, site, interactive=False),
                ["--id", "hero"],
            )
        assert config_files(store.config_dir) == []

    def test_invalid_width_option(self, store, site):
        with pytest.raises(InvalidArgumentError):
            run_command(
                ResponsiveImageCreateCommand,
                make_context(store, site, interactive=False),
                ["--id", "hero", "--width", "-20"],
            )


def test_derivative_label():
    assert derivative_label("Hero", DerivativeSize(800, 450)) == "Hero (800×450)"
    assert derivative_label("Hero", DerivativeSize(800)) == "Hero (800×h)"
