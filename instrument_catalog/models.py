"""Data structures describing a parsed instrument catalog."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Dict, List, Optional

from .clefs import ClefType
from .intervals import Interval
from .staff_types import StaffGroup, StaffTypePreset

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .channel import Channel
    from .drumset import Drumset

MAX_STAVES = 4
MIN_PITCH = 0
MAX_PITCH = 127

SOLOISTS_FAMILY = "<soloists>"
UNSORTED_FAMILY = "<unsorted>"


class BracketType(IntEnum):
    NO_BRACKET = -1
    NORMAL = 0
    BRACE = 1
    SQUARE = 2
    LINE = 3

    @classmethod
    def from_code(cls, code: int) -> "BracketType":
        try:
            return cls(code)
        except ValueError:
            return cls.NO_BRACKET


@dataclass(slots=True)
class PitchRange:
    """Inclusive MIDI note range."""

    min: int = MIN_PITCH
    max: int = MAX_PITCH


@dataclass(frozen=True)
class StaffName:
    """Long or short instrument name tagged with its position."""

    name: str
    pos: int = 0


@dataclass(slots=True)
class ClefTypeList:
    concert: ClefType = ClefType.G
    transposing: ClefType = ClefType.G


@dataclass(frozen=True)
class InstrumentString:
    pitch: int
    open: bool = False


@dataclass(slots=True)
class StringData:
    """Fret count and open strings of a fretted instrument."""

    frets: int = 0
    strings: List[InstrumentString] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.frets == 0 and not self.strings


# Controller code used for program changes in MIDI action events.
CTRL_PROGRAM = 0x81000
ME_CONTROLLER = 0xB0


@dataclass(frozen=True)
class MidiEvent:
    type: int
    controller: int
    value: int


@dataclass(slots=True)
class MidiAction:
    name: str = ""
    description: str = ""
    events: List[MidiEvent] = field(default_factory=list)


@dataclass(slots=True)
class Articulation:
    """Playback articulation: velocity and gate time in percent."""

    name: str = ""
    velocity: int = 100
    gate_time: int = 100
    descr: str = ""


@dataclass(slots=True)
class Genre:
    id: str = ""
    name: str = ""


@dataclass(slots=True)
class Family:
    id: str = ""
    name: str = ""


def _per_staff(value):
    return lambda: [copy.copy(value) for _ in range(MAX_STAVES)]


@dataclass(slots=True)
class Instrument:
    """Everything an instrument definition declares.

    Per-staff lists always hold ``MAX_STAVES`` entries.
    """

    id: str = ""
    musicxml_id: str = ""
    name: str = ""
    description: str = ""
    long_names: List[StaffName] = field(default_factory=list)
    short_names: List[StaffName] = field(default_factory=list)
    staves: int = 1
    clefs: List[ClefTypeList] = field(default_factory=_per_staff(ClefTypeList()))
    staff_lines: List[int] = field(default_factory=_per_staff(5))
    small_staff: List[bool] = field(default_factory=_per_staff(False))
    bracket: List[BracketType] = field(default_factory=_per_staff(BracketType.NO_BRACKET))
    bracket_span: List[int] = field(default_factory=_per_staff(0))
    barline_span: List[bool] = field(default_factory=_per_staff(False))
    amateur_pitch_range: PitchRange = field(default_factory=PitchRange)
    professional_pitch_range: PitchRange = field(default_factory=PitchRange)
    transpose: Interval = field(default_factory=Interval)
    staff_group: StaffGroup = StaffGroup.STANDARD
    staff_type_preset: Optional[StaffTypePreset] = None
    use_drumset: bool = False
    drumset: Optional["Drumset"] = None
    string_data: StringData = field(default_factory=StringData)
    midi_actions: List[MidiAction] = field(default_factory=list)
    channels: List["Channel"] = field(default_factory=list)
    genre_ids: List[str] = field(default_factory=list)
    family_id: str = ""
    group_id: str = ""
    extended: bool = False
    single_note_dynamics: bool = True
    sequence_order: int = 0


@dataclass(slots=True)
class InstrumentTemplate:
    id: str = ""
    instrument: Instrument = field(default_factory=Instrument)


@dataclass(slots=True)
class InstrumentGroup:
    id: str = ""
    name: str = ""
    extended: bool = False
    sequence_order: int = 0


@dataclass(slots=True)
class InstrumentOverwrite:
    """Family and display name an order assigns to one instrument."""

    id: str = ""
    name: str = ""


@dataclass(slots=True)
class ScoreOrderGroup:
    """One entry of a score order.

    ``family`` is a family id or one of ``SOLOISTS_FAMILY`` /
    ``UNSORTED_FAMILY``.  The bracket flags are only meaningful for families
    declared inside a section.
    """

    index: int = 0
    family: str = ""
    section: str = ""
    unsorted: str = ""
    bracket: bool = False
    show_system_markings: bool = False
    bar_line_span: bool = True
    thin_bracket: bool = True

    @property
    def is_soloists(self) -> bool:
        return self.family == SOLOISTS_FAMILY

    @property
    def is_unsorted(self) -> bool:
        return self.family == UNSORTED_FAMILY


@dataclass(slots=True)
class ScoreOrder:
    id: str = ""
    name: str = ""
    index: int = 0
    instrument_map: Dict[str, InstrumentOverwrite] = field(default_factory=dict)
    groups: List[ScoreOrderGroup] = field(default_factory=list)

    def append_group(self, group: ScoreOrderGroup) -> ScoreOrderGroup:
        """Append ``group`` at the end, stamping its position as ``index``."""

        group.index = len(self.groups)
        self.groups.append(group)
        return group


@dataclass(slots=True)
class Catalog:
    """All metadata read from one instrument catalog document."""

    groups: Dict[str, InstrumentGroup] = field(default_factory=dict)
    instrument_templates: Dict[str, InstrumentTemplate] = field(default_factory=dict)
    articulations: Dict[str, Articulation] = field(default_factory=dict)
    genres: Dict[str, Genre] = field(default_factory=dict)
    families: Dict[str, Family] = field(default_factory=dict)
    score_orders: Dict[str, ScoreOrder] = field(default_factory=dict)

    def groups_in_order(self) -> List[InstrumentGroup]:
        return sorted(self.groups.values(), key=lambda group: group.sequence_order)

    def templates_in_group(self, group_id: str) -> List[InstrumentTemplate]:
        templates = [
            template
            for template in self.instrument_templates.values()
            if template.instrument.group_id == group_id
        ]
        templates.sort(key=lambda template: template.instrument.sequence_order)
        return templates

    def score_orders_in_order(self) -> List[ScoreOrder]:
        return sorted(self.score_orders.values(), key=lambda order: order.index)


__all__ = [
    "Articulation",
    "BracketType",
    "CTRL_PROGRAM",
    "Catalog",
    "ClefTypeList",
    "Family",
    "Genre",
    "Instrument",
    "InstrumentGroup",
    "InstrumentOverwrite",
    "InstrumentString",
    "InstrumentTemplate",
    "MAX_PITCH",
    "MAX_STAVES",
    "ME_CONTROLLER",
    "MIN_PITCH",
    "MidiAction",
    "MidiEvent",
    "PitchRange",
    "SOLOISTS_FAMILY",
    "ScoreOrder",
    "ScoreOrderGroup",
    "StaffName",
    "StringData",
    "UNSORTED_FAMILY",
]
