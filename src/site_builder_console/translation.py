"""User-facing strings, looked up by dotted key from a YAML catalog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = Path(__file__).resolve().parent / "translations"


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = str(value)
    return flat


class Translator:
    """Resolves ``commands.bundle.create.description`` style keys.

    Unknown keys come back unchanged so a missing string is visible
    rather than fatal.
    """

    def __init__(self, language: str = "en", directory: Path = TRANSLATIONS_DIR) -> None:
        self.language = language
        path = directory / f"{language}.yaml"
        if not path.is_file():
            logger.warning("No translations for language %r at %s", language, path)
            self._messages: dict[str, str] = {}
            return
        with open(path, encoding="utf-8") as f:
            self._messages = _flatten(yaml.safe_load(f) or {})

    def trans(self, key: str, **params: Any) -> str:
        message = self._messages.get(key)
        if message is None:
            logger.debug("Missing translation: %s", key)
            return key
        return message.format(**params) if params else message
