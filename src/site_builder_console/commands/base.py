"""Command base class and the context every command runs in.

A command fills its unset options through questions in interact(), then
persists configuration in execute(). Options live on the argparse
Namespace so values given as flags skip the matching question.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Any, ClassVar

from site_builder_console.catalog.registry import CatalogRegistry
from site_builder_console.config import SiteConfig
from site_builder_console.interaction.io import ConsoleIO
from site_builder_console.storage.store import ConfigStore
from site_builder_console.translation import Translator


@dataclass
class CommandContext:
    io: ConsoleIO
    catalog: CatalogRegistry
    store: ConfigStore
    site: SiteConfig
    translator: Translator = field(default_factory=Translator)


class Command:
    name: ClassVar[str] = ""
    aliases: ClassVar[tuple[str, ...]] = ()
    translation_key: ClassVar[str] = ""

    def __init__(self, context: CommandContext) -> None:
        self.context = context
        self.io = context.io
        self.catalog = context.catalog
        self.store = context.store
        self.site = context.site

    def trans(self, key: str, **params: Any) -> str:
        return self.context.translator.trans(key, **params)

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser, translator: Translator) -> None:
        """Add the command's options to its sub-parser."""

    def interact(self, options: argparse.Namespace) -> None:
        """Ask for every option that was not given on the command line."""

    def execute(self, options: argparse.Namespace) -> None:
        raise NotImplementedError

    def run(self, options: argparse.Namespace) -> int:
        self.interact(options)
        self.execute(options)
        return 0
