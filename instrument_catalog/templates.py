"""Parser for ``<instrument>`` definitions.

The parser applies child elements strictly in document order to one mutable
:class:`Instrument`.  ``<init>`` is applied the same way: it copies a fixed
set of fields from an earlier template at the moment it is read, so values
set before it are replaced while values set after it win.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Dict, List, Optional

from .channel import read_channel
from .clefs import ClefType, clef_type_from_code, clef_type_from_tag
from .coercion import parse_pitch_range, read_staff_index, to_flag, to_int, try_int
from .cursor import ElementCursor
from .defaults import fill_by_default
from .drumset import Drumset, standard_drumset
from .intervals import chromatic_to_diatonic
from .models import (
    MAX_STAVES,
    BracketType,
    Catalog,
    Instrument,
    InstrumentTemplate,
    StaffName,
)
from .records import read_articulation, read_midi_action, read_staff_name, read_string_data
from .staff_types import StaffTypeRegistry, staff_group_from_text
from .translation import INSTRUMENTS_CONTEXT, Translator, identity_translator


logger = logging.getLogger(__name__)

ClefResolver = Callable[[str], ClefType]
DiatonicResolver = Callable[[int], int]


def init_instrument(target: Instrument, source: Instrument) -> None:
    """Copy the inheritable fields of ``source`` into ``target``.

    Genres, family, group, descriptive names and the sequence order stay with
    ``target``.  A drum table is copied only when ``source`` has one.
    """

    target.id = source.id
    target.musicxml_id = source.musicxml_id
    target.long_names = list(source.long_names)
    target.short_names = list(source.short_names)
    target.staves = source.staves
    target.extended = source.extended

    for index in range(MAX_STAVES):
        target.clefs[index] = copy.copy(source.clefs[index])
        target.staff_lines[index] = source.staff_lines[index]
        target.small_staff[index] = source.small_staff[index]
        target.bracket[index] = source.bracket[index]
        target.bracket_span[index] = source.bracket_span[index]
        target.barline_span[index] = source.barline_span[index]

    target.amateur_pitch_range = copy.copy(source.amateur_pitch_range)
    target.professional_pitch_range = copy.copy(source.professional_pitch_range)
    target.transpose = copy.copy(source.transpose)
    target.staff_group = source.staff_group
    target.staff_type_preset = source.staff_type_preset
    target.use_drumset = source.use_drumset

    if source.drumset is not None:
        target.drumset = source.drumset.copy()

    target.string_data = copy.deepcopy(source.string_data)
    target.midi_actions = copy.deepcopy(source.midi_actions)
    target.channels = copy.deepcopy(source.channels)
    target.single_note_dynamics = source.single_note_dynamics


def _replace_at_position(names: List[StaffName], name: StaffName) -> None:
    for index, existing in enumerate(names):
        if existing.pos == name.pos:
            del names[index]
            break
    names.append(name)


class _TemplateState:
    """Per-definition parse state."""

    __slots__ = ("template", "instrument", "catalog", "custom_drumset")

    def __init__(self, template: InstrumentTemplate, catalog: Catalog) -> None:
        self.template = template
        self.instrument = template.instrument
        self.catalog = catalog
        self.custom_drumset = False


Handler = Callable[["InstrumentTemplateParser", _TemplateState, ElementCursor], None]


class InstrumentTemplateParser:
    """Turns one ``<instrument>`` element into an :class:`InstrumentTemplate`."""

    def __init__(
        self,
        *,
        staff_types: Optional[StaffTypeRegistry] = None,
        standard_kit: Optional[Drumset] = None,
        clef_resolver: ClefResolver = clef_type_from_tag,
        diatonic_resolver: DiatonicResolver = chromatic_to_diatonic,
        translate: Translator = identity_translator,
    ) -> None:
        self._staff_types = staff_types or StaffTypeRegistry.builtin()
        self._standard_kit = standard_kit if standard_kit is not None else standard_drumset()
        self._resolve_clef_tag = clef_resolver
        self._diatonic_for = diatonic_resolver
        self._translate = translate

    def parse(self, cursor: ElementCursor, catalog: Catalog, sequence_order: int) -> InstrumentTemplate:
        """Read the definition under ``cursor``; ``catalog`` resolves ``<init>``."""

        instrument = Instrument(id=cursor.text_attribute("id"), sequence_order=sequence_order)
        template = InstrumentTemplate(id=instrument.id, instrument=instrument)
        state = _TemplateState(template, catalog)

        while cursor.read_next_start_element():
            handler = _HANDLERS.get(cursor.name)
            if handler is None:
                cursor.skip_current_element()
                continue
            handler(self, state, cursor)

        fill_by_default(instrument)
        if not template.id:
            template.id = instrument.id
        return template

    # ------------------------------------------------------------------
    # Names and descriptions
    # ------------------------------------------------------------------
    def _long_name(self, state: _TemplateState, cursor: ElementCursor) -> None:
        _replace_at_position(state.instrument.long_names, read_staff_name(cursor, self._translate))

    def _short_name(self, state: _TemplateState, cursor: ElementCursor) -> None:
        _replace_at_position(state.instrument.short_names, read_staff_name(cursor, self._translate))

    def _track_name(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.name = self._translate(INSTRUMENTS_CONTEXT, cursor.read_element_text())

    def _description(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.description = self._translate(INSTRUMENTS_CONTEXT, cursor.read_element_text())

    def _musicxml_id(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.musicxml_id = cursor.read_element_text()

    def _extended(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.extended = to_flag(cursor.read_element_text())

    # ------------------------------------------------------------------
    # Staves
    # ------------------------------------------------------------------
    def _staves(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staves = to_int(cursor.read_element_text())
        state.instrument.staves = staves
        state.instrument.bracket_span[0] = staves

    def _read_clef(self, cursor: ElementCursor) -> ClefType:
        text = cursor.read_element_text()
        code = try_int(text)
        if code is not None:
            return clef_type_from_code(code)
        return self._resolve_clef_tag(text)

    def _clef(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        clef = self._read_clef(cursor)
        state.instrument.clefs[staff].concert = clef
        state.instrument.clefs[staff].transposing = clef

    def _concert_clef(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.clefs[staff].concert = self._read_clef(cursor)

    def _transposing_clef(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.clefs[staff].transposing = self._read_clef(cursor)

    def _staff_lines(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.staff_lines[staff] = to_int(cursor.read_element_text())

    def _small_staff(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.small_staff[staff] = to_flag(cursor.read_element_text())

    def _bracket(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.bracket[staff] = BracketType.from_code(to_int(cursor.read_element_text()))

    def _bracket_span(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        state.instrument.bracket_span[staff] = to_int(cursor.read_element_text())

    def _barline_span(self, state: _TemplateState, cursor: ElementCursor) -> None:
        staff = read_staff_index(cursor)
        span = to_int(cursor.read_element_text())
        # Spans reaching past the last staff are truncated at MAX_STAVES.
        for index in range(staff, min(staff + span - 1, MAX_STAVES)):
            state.instrument.barline_span[index] = True

    def _staff_type(self, state: _TemplateState, cursor: ElementCursor) -> None:
        instrument = state.instrument
        staff = read_staff_index(cursor)
        preset_name = cursor.text_attribute("staffTypePreset")
        instrument.staff_group = staff_group_from_text(cursor.read_element_text())

        preset = self._staff_types.preset_from_xml_name(preset_name) if preset_name else None
        if preset is None or preset.group is not instrument.staff_group:
            preset = self._staff_types.default_preset(instrument.staff_group)
        instrument.staff_type_preset = preset
        if preset is not None:
            instrument.staff_lines[staff] = preset.lines

    # ------------------------------------------------------------------
    # Pitch and transposition
    # ------------------------------------------------------------------
    def _amateur_range(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.amateur_pitch_range = parse_pitch_range(cursor.read_element_text())

    def _professional_range(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.professional_pitch_range = parse_pitch_range(cursor.read_element_text())

    def _transposition(self, state: _TemplateState, cursor: ElementCursor) -> None:
        chromatic = to_int(cursor.read_element_text())
        state.instrument.transpose.chromatic = chromatic
        state.instrument.transpose.diatonic = self._diatonic_for(chromatic)

    def _transpose_chromatic(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.transpose.chromatic = to_int(cursor.read_element_text())

    def _transpose_diatonic(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.transpose.diatonic = to_int(cursor.read_element_text())

    # ------------------------------------------------------------------
    # Sound
    # ------------------------------------------------------------------
    def _string_data(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.string_data = read_string_data(cursor)

    def _use_drumset(self, state: _TemplateState, cursor: ElementCursor) -> None:
        instrument = state.instrument
        instrument.use_drumset = to_flag(cursor.read_element_text())
        if instrument.use_drumset:
            instrument.drumset = self._standard_kit.copy()

    def _drum(self, state: _TemplateState, cursor: ElementCursor) -> None:
        instrument = state.instrument
        if instrument.drumset is None:
            instrument.drumset = self._standard_kit.copy()
        if not state.custom_drumset:
            instrument.drumset.clear()
            state.custom_drumset = True
        instrument.drumset.load(cursor)

    def _midi_action(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.midi_actions.append(read_midi_action(cursor))

    def _channel(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.channels.append(read_channel(cursor))

    def _articulation(self, state: _TemplateState, cursor: ElementCursor) -> None:
        articulation = read_articulation(cursor)
        state.catalog.articulations[articulation.name] = articulation

    def _single_note_dynamics(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.single_note_dynamics = to_flag(cursor.read_element_text())

    # ------------------------------------------------------------------
    # Classification and inheritance
    # ------------------------------------------------------------------
    def _genre(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.genre_ids.append(cursor.read_element_text())

    def _family(self, state: _TemplateState, cursor: ElementCursor) -> None:
        state.instrument.family_id = cursor.read_element_text()

    def _init(self, state: _TemplateState, cursor: ElementCursor) -> None:
        template_id = cursor.read_element_text()
        source = state.catalog.instrument_templates.get(template_id)
        if source is None:
            logger.debug(
                "Instrument %r initialises from unknown template %r",
                state.template.id,
                template_id,
            )
            init_instrument(state.instrument, Instrument())
            return
        init_instrument(state.instrument, source.instrument)


_HANDLERS: Dict[str, Handler] = {
    "longName": InstrumentTemplateParser._long_name,
    "name": InstrumentTemplateParser._long_name,
    "shortName": InstrumentTemplateParser._short_name,
    "short-name": InstrumentTemplateParser._short_name,
    "trackName": InstrumentTemplateParser._track_name,
    "description": InstrumentTemplateParser._description,
    "extended": InstrumentTemplateParser._extended,
    "staves": InstrumentTemplateParser._staves,
    "clef": InstrumentTemplateParser._clef,
    "concertClef": InstrumentTemplateParser._concert_clef,
    "transposingClef": InstrumentTemplateParser._transposing_clef,
    "stafflines": InstrumentTemplateParser._staff_lines,
    "smallStaff": InstrumentTemplateParser._small_staff,
    "bracket": InstrumentTemplateParser._bracket,
    "bracketSpan": InstrumentTemplateParser._bracket_span,
    "barlineSpan": InstrumentTemplateParser._barline_span,
    "aPitchRange": InstrumentTemplateParser._amateur_range,
    "pPitchRange": InstrumentTemplateParser._professional_range,
    "transposition": InstrumentTemplateParser._transposition,
    "transposeChromatic": InstrumentTemplateParser._transpose_chromatic,
    "transposeDiatonic": InstrumentTemplateParser._transpose_diatonic,
    "instrumentId": InstrumentTemplateParser._musicxml_id,
    "musicXMLid": InstrumentTemplateParser._musicxml_id,
    "StringData": InstrumentTemplateParser._string_data,
    "useDrumset": InstrumentTemplateParser._use_drumset,
    "Drum": InstrumentTemplateParser._drum,
    "MidiAction": InstrumentTemplateParser._midi_action,
    "Channel": InstrumentTemplateParser._channel,
    "channel": InstrumentTemplateParser._channel,
    "Articulation": InstrumentTemplateParser._articulation,
    "stafftype": InstrumentTemplateParser._staff_type,
    "init": InstrumentTemplateParser._init,
    "genre": InstrumentTemplateParser._genre,
    "family": InstrumentTemplateParser._family,
    "singleNoteDynamics": InstrumentTemplateParser._single_note_dynamics,
}


__all__ = ["InstrumentTemplateParser", "init_instrument"]
