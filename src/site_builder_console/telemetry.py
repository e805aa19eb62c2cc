"""Telemetry for configuration changes.

Every write to the config directory is one ConfigEvent: ``config.saved``
(with whether the entity was new) or ``config.deleted``. The store emits
them to whichever sink the CLI or a test hands it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Protocol, runtime_checkable

CONFIG_SAVED = "config.saved"
CONFIG_DELETED = "config.deleted"


@dataclass(frozen=True)
class ConfigEvent:
    name: str
    config_name: str
    entity_type: str
    is_new: bool = False
    timestamp_ms: float = field(default_factory=lambda: time.time() * 1000)

    @classmethod
    def saved(cls, config_name: str, entity_type: str, *, is_new: bool) -> ConfigEvent:
        return cls(CONFIG_SAVED, config_name, entity_type, is_new=is_new)

    @classmethod
    def deleted(cls, config_name: str, entity_type: str) -> ConfigEvent:
        return cls(CONFIG_DELETED, config_name, entity_type)


@runtime_checkable
class TelemetrySink(Protocol):
    def emit(self, event: ConfigEvent) -> None:
        raise NotImplementedError


class NoOpTelemetrySink:
    def emit(self, event: ConfigEvent) -> None:
        _ = event


class InMemoryTelemetrySink:
    """Keeps every event, for tests and for summarizing a command run."""

    def __init__(self) -> None:
        self.events: list[ConfigEvent] = []

    def emit(self, event: ConfigEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.name for event in self.events]

    def config_names(self, event_name: str | None = None) -> list[str]:
        """Config names touched, optionally only by ``config.saved`` or ``config.deleted``."""
        return [
            event.config_name
            for event in self.events
            if event_name is None or event.name == event_name
        ]

    def created(self) -> list[str]:
        return [e.config_name for e in self.events if e.name == CONFIG_SAVED and e.is_new]


class LoggerTelemetrySink:
    """Logs one line per config change, e.g. ``config.saved node.type.article (new)``."""

    def __init__(self, logger_name: str = "site_builder_console.telemetry") -> None:
        self.logger = logging.getLogger(logger_name)

    def emit(self, event: ConfigEvent) -> None:
        suffix = " (new)" if event.is_new else ""
        self.logger.info(
            "%s %s%s",
            event.name,
            event.config_name,
            suffix,
            extra={"config_event": asdict(event)},
        )
