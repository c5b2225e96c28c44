"""Text-to-value conversions with the catalog's silent fallback rules.

None of these helpers raise on malformed input: every value has a defined
fallback so older and newer catalog documents keep loading.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .models import MAX_PITCH, MAX_STAVES, MIN_PITCH, PitchRange

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .cursor import ElementCursor

_INT_PATTERN = re.compile(r"[+-]?\d+")


def to_int(text: str | None, default: int = 0) -> int:
    """Parse a decimal integer, returning ``default`` for anything else."""

    if text is None:
        return default
    candidate = text.strip()
    if not _INT_PATTERN.fullmatch(candidate):
        return default
    return int(candidate)


def try_int(text: str | None) -> int | None:
    """Like :func:`to_int` but reports failure as ``None``."""

    if text is None:
        return None
    candidate = text.strip()
    if not _INT_PATTERN.fullmatch(candidate):
        return None
    return int(candidate)


def to_flag(text: str | None) -> bool:
    """Integer flag (``"1"``), anything unparsable is ``False``."""

    return to_int(text) != 0


def parse_percentage(text: str) -> int:
    """``"80%"`` and ``"80"`` both read as ``80``."""

    if text.endswith("%"):
        text = text[:-1]
    return to_int(text)


def parse_pitch_range(text: str) -> PitchRange:
    """Read ``"min-max"``; any other shape yields the full MIDI range."""

    bounds = text.split("-")
    if len(bounds) != 2:
        return PitchRange(MIN_PITCH, MAX_PITCH)
    return PitchRange(to_int(bounds[0]), to_int(bounds[1]))


def parse_bool(text: str | None, default: bool) -> bool:
    """Case-insensitive ``true``/``false``; other values give ``default``."""

    if text is None:
        return default
    lowered = text.lower()
    if lowered == "false":
        return False
    if lowered == "true":
        return True
    return default


def read_bool_attribute(cursor: "ElementCursor", name: str, default: bool) -> bool:
    if not cursor.has_attribute(name):
        return default
    return parse_bool(cursor.attribute(name), default)


def clamp_staff_index(value: int) -> int:
    if value >= MAX_STAVES:
        return MAX_STAVES - 1
    if value < 0:
        return 0
    return value


def read_staff_index(cursor: "ElementCursor") -> int:
    """Zero-based staff index from the one-based ``staff`` attribute."""

    return clamp_staff_index(to_int(cursor.attribute("staff")) - 1)


def derive_id(name: str) -> str:
    """``"Wood Winds"`` becomes ``"wood-winds"``."""

    return name.lower().replace(" ", "-")


__all__ = [
    "clamp_staff_index",
    "derive_id",
    "parse_bool",
    "parse_percentage",
    "parse_pitch_range",
    "read_bool_attribute",
    "read_staff_index",
    "to_flag",
    "to_int",
    "try_int",
]
