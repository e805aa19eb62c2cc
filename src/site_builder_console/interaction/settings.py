"""Recursive collection of settings hashes through questions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from site_builder_console.errors import InvalidArgumentError
from site_builder_console.interaction.io import ConsoleIO

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


def _coercer(default: Any):
    """Build a validator that casts an answer back to the default's type."""

    def coerce(value: Any) -> Any:
        if default is None or isinstance(value, type(default)):
            return value
        text = str(value).strip()
        if isinstance(default, bool):
            if text.lower() in _TRUE:
                return True
            if text.lower() in _FALSE:
                return False
            raise InvalidArgumentError(f'Expected a boolean value, got "{text}".')
        if isinstance(default, int):
            try:
                return int(text)
            except ValueError:
                raise InvalidArgumentError(f'Expected an integer, got "{text}".') from None
        if isinstance(default, float):
            try:
                return float(text)
            except ValueError:
                raise InvalidArgumentError(f'Expected a number, got "{text}".') from None
        return value

    return coerce


def settings_question(io: ConsoleIO, settings: Mapping[str, Any]) -> dict[str, Any]:
    """Ask one question per scalar setting, recursing into nested mappings.

    The result has exactly the keys and nesting of ``settings``; an empty
    answer keeps the default.
    """
    values: dict[str, Any] = {}
    recursing: str | None = None

    for key, default in settings.items():
        if isinstance(default, Mapping):
            if default:
                recursing = key
                io.comment(f'Recursing into "{key}" setting hash.')
                values[key] = settings_question(io, default)
            else:
                values[key] = {}
            continue

        if recursing is not None:
            io.comment(f'"{recursing}" setting hash recursing end.')
            recursing = None

        values[key] = io.ask_empty(
            f'Value for "{key}" setting', default, _coercer(default)
        )

    if recursing is not None:
        io.comment(f'"{recursing}" setting hash recursing end.')

    return values
