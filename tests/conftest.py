"""Test fixtures for Site Builder Console tests."""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path

import pytest

from site_builder_console.__main__ import build_parser
from site_builder_console.catalog.loader import load_catalog
from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.commands import BundleCreateCommand, Command, CommandContext
from site_builder_console.config import SiteConfig, load_site_config
from site_builder_console.interaction.io import ConsoleIO
from site_builder_console.storage.models import Role
from site_builder_console.storage.store import ConfigStore
from site_builder_console.telemetry import InMemoryTelemetrySink
from site_builder_console.translation import Translator


@pytest.fixture
def catalog() -> CatalogRegistry:
    return load_catalog()


@pytest.fixture
def site(tmp_path: Path) -> SiteConfig:
    return load_site_config(tmp_path)


@pytest.fixture
def telemetry() -> InMemoryTelemetrySink:
    return InMemoryTelemetrySink()


@pytest.fixture
def store(site: SiteConfig, catalog: CatalogRegistry, telemetry: InMemoryTelemetrySink) -> ConfigStore:
    return ConfigStore(site.config_dir, catalog, telemetry)


@pytest.fixture
def translator() -> Translator:
    return Translator()


def make_context(
    store: ConfigStore,
    site: SiteConfig,
    answers: Iterable[str] = (),
    *,
    interactive: bool = True,
) -> CommandContext:
    """Build a command context whose questions are answered from ``answers``."""
    if interactive:
        console = ConsoleIO.scripted(answers, stream=io.StringIO())
    else:
        console = ConsoleIO(stream=io.StringIO(), interactive=False)
    return CommandContext(io=console, catalog=store.catalog, store=store, site=site)


def run_command(
    command_class: type[Command],
    context: CommandContext,
    argv: list[str] | None = None,
) -> Command:
    """Parse ``argv`` for the command the way the CLI does, then run it."""
    args = build_parser(context.translator).parse_args([command_class.name, *(argv or [])])
    command = command_class(context)
    command.run(args)
    return command


def output_of(context: CommandContext) -> str:
    return context.io.stream.getvalue()


def save_role(store: ConfigStore, role_id: str, permissions: list[str] | None = None) -> Role:
    role = Role(id=role_id, label=role_id.title(), permissions=permissions or [])
    store.save(role)
    return role


def config_files(config_dir: Path) -> list[str]:
    return sorted(p.name for p in config_dir.glob("*.yml"))


def create_bundle(store: ConfigStore, site: SiteConfig, entity_type: str, bundle: str, *options: str) -> None:
    """Create a bundle non-interactively through bundle:create."""
    run_command(
        BundleCreateCommand,
        make_context(store, site, interactive=False),
        ["--entity-type", entity_type, "--bundle-name", bundle, *options],
    )
