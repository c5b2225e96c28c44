"""Drum kit tables used by percussion instruments.

A :class:`Drumset` maps MIDI pitches to the notation of one drum.  The
catalog never shares a table between instruments: every instrument that uses
a kit receives its own copy of :func:`standard_drumset` (or of the table it
inherits) and is free to clear and refill it.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from .coercion import try_int, to_int

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .cursor import ElementCursor


logger = logging.getLogger(__name__)

DRUM_PITCHES = 128


class StemDirection(IntEnum):
    AUTO = 0
    UP = 1
    DOWN = 2

    @classmethod
    def from_code(cls, code: int) -> "StemDirection":
        try:
            return cls(code)
        except ValueError:
            return cls.AUTO


@dataclass(slots=True)
class DrumInstrument:
    """Notation of one drum: notehead, staff line, stem and voice."""

    name: str
    notehead: str = "normal"
    line: int = 0
    stem_direction: StemDirection = StemDirection.UP
    voice: int = 0
    shortcut: str = ""
    variants: List[Tuple[str, str]] = field(default_factory=list)


class Drumset:
    """Pitch-indexed table of :class:`DrumInstrument` entries."""

    def __init__(self, drums: Optional[Dict[int, DrumInstrument]] = None) -> None:
        self._drums: Dict[int, DrumInstrument] = dict(drums or {})

    def __contains__(self, pitch: object) -> bool:
        return pitch in self._drums

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._drums))

    def __len__(self) -> int:
        return len(self._drums)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Drumset):
            return NotImplemented
        return self._drums == other._drums

    def __repr__(self) -> str:
        return f"Drumset(pitches={sorted(self._drums)!r})"

    def drum(self, pitch: int) -> Optional[DrumInstrument]:
        return self._drums.get(pitch)

    def is_valid(self, pitch: int) -> bool:
        drum = self._drums.get(pitch)
        return drum is not None and bool(drum.name)

    def clear(self) -> None:
        self._drums.clear()

    def copy(self) -> "Drumset":
        return Drumset(copy.deepcopy(self._drums))

    def load(self, cursor: "ElementCursor") -> None:
        """Read one ``<Drum pitch="...">`` element into the table."""

        pitch = cursor.int_attribute("pitch", -1)
        if pitch < 0 or pitch >= DRUM_PITCHES:
            logger.debug("Ignoring drum with invalid pitch %d", pitch)
            cursor.skip_current_element()
            return

        drum = self._drums.get(pitch) or DrumInstrument(name="")
        while cursor.read_next_start_element():
            tag = cursor.name
            if tag == "head":
                drum.notehead = cursor.read_element_text().strip() or "normal"
            elif tag == "line":
                drum.line = to_int(cursor.read_element_text())
            elif tag == "voice":
                drum.voice = to_int(cursor.read_element_text())
            elif tag == "name":
                drum.name = cursor.read_element_text()
            elif tag == "stem":
                drum.stem_direction = StemDirection.from_code(to_int(cursor.read_element_text()))
            elif tag == "shortcut":
                drum.shortcut = _read_shortcut(cursor.read_element_text())
            elif tag == "variants":
                drum.variants = _read_variants(cursor)
            else:
                cursor.skip_current_element()
        self._drums[pitch] = drum


def _read_shortcut(text: str) -> str:
    code = try_int(text)
    if code is not None:
        return chr(code) if 0 < code < 0x110000 else ""
    text = text.strip()
    return text[:1].upper()


def _read_variants(cursor: "ElementCursor") -> List[Tuple[str, str]]:
    variants: List[Tuple[str, str]] = []
    while cursor.read_next_start_element():
        if cursor.name != "variant":
            cursor.skip_current_element()
            continue
        pitch = cursor.text_attribute("pitch")
        tremolo = ""
        while cursor.read_next_start_element():
            if cursor.name == "tremolo":
                tremolo = cursor.read_element_text()
            else:
                cursor.skip_current_element()
        variants.append((pitch, tremolo))
    return variants


_UP = StemDirection.UP
_DOWN = StemDirection.DOWN

# pitch: (name, notehead, line, stem, voice, shortcut)
_STANDARD_KIT = {
    35: ("Acoustic Bass Drum", "normal", 7, _UP, 0, ""),
    36: ("Bass Drum 1", "normal", 7, _UP, 0, "B"),
    37: ("Side Stick", "cross", 3, _UP, 0, ""),
    38: ("Acoustic Snare", "normal", 3, _UP, 0, "A"),
    40: ("Electric Snare", "normal", 3, _UP, 0, ""),
    41: ("Low Floor Tom", "normal", 5, _UP, 0, ""),
    42: ("Closed Hi-Hat", "cross", -1, _UP, 0, "G"),
    43: ("High Floor Tom", "normal", 5, _DOWN, 1, ""),
    44: ("Pedal Hi-Hat", "cross", 9, _DOWN, 1, "F"),
    45: ("Low Tom", "normal", 2, _UP, 0, ""),
    46: ("Open Hi-Hat", "cross", 1, _UP, 0, ""),
    47: ("Low-Mid Tom", "normal", 1, _UP, 0, ""),
    48: ("Hi-Mid Tom", "normal", 0, _UP, 0, ""),
    49: ("Crash Cymbal 1", "cross", -2, _UP, 0, "C"),
    50: ("High Tom", "normal", 0, _UP, 0, "E"),
    51: ("Ride Cymbal 1", "cross", 0, _UP, 0, "D"),
    52: ("Chinese Cymbal", "cross", -3, _UP, 0, ""),
    53: ("Ride Bell", "diamond", 0, _UP, 0, ""),
    54: ("Tambourine", "diamond", 2, _UP, 0, ""),
    55: ("Splash Cymbal", "cross", -3, _UP, 0, ""),
    56: ("Cowbell", "triangle-up", 1, _UP, 0, ""),
    57: ("Crash Cymbal 2", "cross", -3, _UP, 0, ""),
    59: ("Ride Cymbal 2", "cross", 2, _UP, 0, ""),
    63: ("Open Hi Conga", "cross", 4, _UP, 0, ""),
    64: ("Low Conga", "cross", 6, _UP, 0, ""),
}


def standard_drumset() -> Drumset:
    """Return a fresh copy of the General MIDI standard kit."""

    return Drumset(
        {
            pitch: DrumInstrument(
                name=name,
                notehead=notehead,
                line=line,
                stem_direction=stem,
                voice=voice,
                shortcut=shortcut,
            )
            for pitch, (name, notehead, line, stem, voice, shortcut) in _STANDARD_KIT.items()
        }
    )


__all__ = [
    "DRUM_PITCHES",
    "DrumInstrument",
    "Drumset",
    "StemDirection",
    "standard_drumset",
]
