"""Console commands, registered by name and alias."""

from site_builder_console.commands.base import Command, CommandContext
from site_builder_console.commands.bundle import BundleCreateCommand, BundleDeleteCommand
from site_builder_console.commands.field import FieldCreateCommand, FieldDeleteCommand
from site_builder_console.commands.responsive_image import ResponsiveImageCreateCommand

COMMANDS: tuple[type[Command], ...] = (
    BundleCreateCommand,
    BundleDeleteCommand,
    FieldCreateCommand,
    FieldDeleteCommand,
    ResponsiveImageCreateCommand,
)


def get_command(name: str) -> type[Command]:
    """Look up a command class by name or alias."""
    for command in COMMANDS:
        if name == command.name or name in command.aliases:
            return command
    raise KeyError(name)


__all__ = [
    "COMMANDS",
    "BundleCreateCommand",
    "BundleDeleteCommand",
    "Command",
    "CommandContext",
    "FieldCreateCommand",
    "FieldDeleteCommand",
    "ResponsiveImageCreateCommand",
    "get_command",
]
