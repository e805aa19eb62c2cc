"""Validators for question answers and the machine-name string converters.

Every validator returns the normalized value on success and raises
InvalidArgumentError otherwise, so it can be handed straight to
ConsoleIO.ask() as a re-prompting callback.
"""

from __future__ import annotations

import re
from typing import Any

from site_builder_console.errors import InvalidArgumentError

MACHINE_NAME_PATTERN = re.compile(r"^[a-z0-9_]+$")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def validate_machine_name(name: Any) -> str:
    name = "" if name is None else str(name).strip()
    if MACHINE_NAME_PATTERN.match(name):
        return name
    raise InvalidArgumentError(
        f'Machine name "{name}" is invalid, it must contain only lowercase '
        "letters, numbers and underscores."
    )


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def validate_cardinality(value: Any) -> int:
    """Accept a positive integer, or -1 for unlimited."""
    parsed = _parse_int(value)
    if parsed is None or parsed == 0 or parsed < -1:
        raise InvalidArgumentError("Cardinality must be a positive integer or -1.")
    return parsed


def validate_dimension_length(value: Any) -> int:
    parsed = _parse_int(value)
    if parsed is None or parsed < 1:
        raise InvalidArgumentError("Dimension must be a positive integer.")
    return parsed


def underscore_to_camel_case(value: str) -> str:
    """``custom_bundle`` -> ``customBundle``."""
    words = value.replace("_", " ").split()
    if not words:
        return ""
    camel = "".join(word[:1].upper() + word[1:] for word in words)
    return camel[:1].lower() + camel[1:]


def camel_case_to_human(value: str) -> str:
    """``customBundle`` -> ``Custom bundle``."""
    spaced = _CAMEL_BOUNDARY.sub(" ", value).lower()
    return spaced[:1].upper() + spaced[1:]


def humanize_machine_name(name: str, *, strip_prefix: str = "") -> str:
    if strip_prefix and name.startswith(strip_prefix):
        name = name[len(strip_prefix):]
    return camel_case_to_human(underscore_to_camel_case(name))
