from .channel import Channel
from .clefs import ClefType
from .drumset import DrumInstrument, Drumset, standard_drumset
from .intervals import Interval
from .models import (
    MAX_STAVES,
    SOLOISTS_FAMILY,
    UNSORTED_FAMILY,
    Articulation,
    BracketType,
    Catalog,
    ClefTypeList,
    Family,
    Genre,
    Instrument,
    InstrumentGroup,
    InstrumentOverwrite,
    InstrumentTemplate,
    MidiAction,
    PitchRange,
    ScoreOrder,
    ScoreOrderGroup,
    StaffName,
    StringData,
)
from .reader import InstrumentsReader, read_catalog
from .staff_types import StaffGroup, StaffTypePreset, StaffTypeRegistry
from .translation import Translator, gettext_translator, identity_translator

__all__ = [
    "MAX_STAVES",
    "SOLOISTS_FAMILY",
    "UNSORTED_FAMILY",
    "Articulation",
    "BracketType",
    "Catalog",
    "Channel",
    "ClefType",
    "ClefTypeList",
    "DrumInstrument",
    "Drumset",
    "Family",
    "Genre",
    "Instrument",
    "InstrumentGroup",
    "InstrumentOverwrite",
    "InstrumentTemplate",
    "InstrumentsReader",
    "Interval",
    "MidiAction",
    "PitchRange",
    "ScoreOrder",
    "ScoreOrderGroup",
    "StaffGroup",
    "StaffName",
    "StaffTypePreset",
    "StaffTypeRegistry",
    "StringData",
    "Translator",
    "gettext_translator",
    "identity_translator",
    "read_catalog",
    "standard_drumset",
]
