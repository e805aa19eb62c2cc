"""Site configuration -- where a site's config lives and how images are mapped.

A SiteConfig is the single object the commands read site-wide settings
from. It is built from the optional ``site.yaml`` in the site directory::

    config_directory: config/sync
    catalog_file: catalog.yaml
    responsive_image:
      breakpoint_group: responsive_image
      breakpoint_id: responsive_image.viewport_sizing
      multiplier: 1x
      sizes: 100vw
      width_marks: [1920, 1600, 1280, 800, 400]
      lazy: null

Relative paths resolve against the site directory. ``lazy: null`` means
"create the lazy placeholder style when the lazy_image module is enabled".
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from site_builder_console.errors import CatalogError
from site_builder_console.imaging.planner import WIDTH_MARKS

logger = logging.getLogger(__name__)

SITE_DIR_ENV = "SITE_BUILDER_SITE_DIR"
SITE_FILE_NAME = "site.yaml"
IMAGE_STRING_KEYS = ("breakpoint_group", "breakpoint_id", "multiplier", "sizes")


@dataclass
class SiteConfig:
    """Settings of one site.

    Attributes:
        site_dir: Root directory of the site.
        config_dir: Directory holding one YAML file per config entity.
        catalog_file: Catalog describing the site's entity and field
            types.  None means the catalog packaged with the console.
        breakpoint_group: Breakpoint group of new responsive image styles.
        breakpoint_id: Breakpoint the ``sizes`` mapping is attached to.
        multiplier: Pixel density multiplier of that mapping.
        sizes: The ``sizes`` attribute of that mapping.
        width_marks: Canonical derivative widths, widest first.
        lazy_images: Force the lazy placeholder style on or off; None
            follows whether the lazy_image module is enabled.
    """

    site_dir: Path
    config_dir: Path
    catalog_file: Path | None = None
    breakpoint_group: str = "responsive_image"
    breakpoint_id: str = "responsive_image.viewport_sizing"
    multiplier: str = "1x"
    sizes: str = "100vw"
    width_marks: tuple[int, ...] = field(default=WIDTH_MARKS)
    lazy_images: bool | None = None


def resolve_site_dir(site_dir: str | Path | None = None) -> Path:
    """``site_dir``, else $SITE_BUILDER_SITE_DIR, else the working directory."""
    if site_dir:
        return Path(site_dir)
    env_value = os.environ.get(SITE_DIR_ENV)
    return Path(env_value) if env_value else Path.cwd()


def _resolve(site_dir: Path, value: str | None, default: str | None) -> Path | None:
    raw = value or default
    if not raw:
        return None
    path = Path(raw).expanduser()
    return path if path.is_absolute() else site_dir / path


def _check_strings(site_file: Path, section: dict[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        value = section.get(key)
        if value is not None and not isinstance(value, str):
            raise CatalogError(f"{site_file}: {key} must be a string, got {value!r}")


def _width_marks(site_file: Path, value: Any) -> tuple[int, ...]:
    if not value:
        return WIDTH_MARKS
    if not isinstance(value, list) or not all(
        isinstance(m, int) and not isinstance(m, bool) and m > 0 for m in value
    ):
        raise CatalogError(
            f"{site_file}: responsive_image.width_marks must be a list of positive integers"
        )
    return tuple(sorted(set(value), reverse=True))


def load_site_config(site_dir: str | Path | None = None) -> SiteConfig:
    root = resolve_site_dir(site_dir)
    data: dict[str, Any] = {}
    site_file = root / SITE_FILE_NAME
    if site_file.is_file():
        try:
            with open(site_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise CatalogError(f"{site_file} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise CatalogError(f"{site_file} must contain a mapping")
    else:
        logger.debug("No %s in %s, using defaults", SITE_FILE_NAME, root)

    images = data.get("responsive_image") or {}
    if not isinstance(images, dict):
        raise CatalogError(f"{site_file}: responsive_image must be a mapping")
    marks = _width_marks(site_file, images.get("width_marks"))
    _check_strings(site_file, data, ("config_directory", "catalog_file"))
    _check_strings(site_file, images, IMAGE_STRING_KEYS)
    lazy = images.get("lazy")
    if lazy is not None and not isinstance(lazy, bool):
        raise CatalogError(f"{site_file}: responsive_image.lazy must be true, false or null")
    config_dir = _resolve(root, data.get("config_directory"), "config")
    assert config_dir is not None

    return SiteConfig(
        site_dir=root,
        config_dir=config_dir,
        catalog_file=_resolve(root, data.get("catalog_file"), None),
        breakpoint_group=images.get("breakpoint_group", "responsive_image"),
        breakpoint_id=images.get("breakpoint_id", "responsive_image.viewport_sizing"),
        multiplier=images.get("multiplier", "1x"),
        sizes=images.get("sizes", "100vw"),
        width_marks=marks,
        lazy_images=lazy,
    )
