"""Interactive questions: the IO helper and settings collection."""

from site_builder_console.interaction.io import ConsoleIO
from site_builder_console.interaction.settings import settings_question

__all__ = ["ConsoleIO", "settings_question"]
