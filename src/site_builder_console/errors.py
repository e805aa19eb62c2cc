"""Exception hierarchy and the shared command error helper."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SiteBuilderError(Exception):
    """Base class for every error raised by the console commands."""


class InvalidArgumentError(SiteBuilderError, ValueError):
    """An answer or option value failed validation.

    Raised by validators; the question helper re-prompts on it.
    """


class MissingOptionError(SiteBuilderError):
    """A required value was not supplied in non-interactive mode."""


class EntityNotFoundError(SiteBuilderError, LookupError):
    pass


class DuplicateEntityError(SiteBuilderError):
    pass


class CatalogError(SiteBuilderError):
    """The site catalog is missing or malformed."""


def log_and_return_command_error(
    *, command_name: str, exc: Exception, user_message: str
) -> str:
    """Log full exception details while returning a safe user-facing error."""
    logger.debug("Command '%s' failed", command_name, exc_info=exc)
    return user_message
