"""Parsers for self-contained catalog records.

Each reader starts with the cursor on the record's start tag and returns
with the cursor on its end tag.
"""

from __future__ import annotations

from .coercion import parse_percentage, to_int
from .cursor import ElementCursor
from .models import (
    CTRL_PROGRAM,
    ME_CONTROLLER,
    Articulation,
    Family,
    Genre,
    InstrumentString,
    MidiAction,
    MidiEvent,
    StaffName,
    StringData,
)
from .translation import INSTRUMENTS_CONTEXT, Translator, identity_translator


def read_articulation(cursor: ElementCursor) -> Articulation:
    articulation = Articulation(name=cursor.text_attribute("name"))

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "velocity":
            articulation.velocity = parse_percentage(cursor.read_element_text())
        elif tag == "gateTime":
            articulation.gate_time = parse_percentage(cursor.read_element_text())
        elif tag == "descr":
            articulation.descr = cursor.read_element_text()
        else:
            cursor.skip_current_element()

    return articulation


def read_genre(cursor: ElementCursor, translate: Translator = identity_translator) -> Genre:
    genre = Genre(id=cursor.text_attribute("id"))
    genre.name = _read_translated_name(cursor, translate)
    return genre


def read_family(cursor: ElementCursor, translate: Translator = identity_translator) -> Family:
    family = Family(id=cursor.text_attribute("id"))
    family.name = _read_translated_name(cursor, translate)
    return family


def _read_translated_name(cursor: ElementCursor, translate: Translator) -> str:
    name = ""
    while cursor.read_next_start_element():
        if cursor.name == "name":
            name = translate(INSTRUMENTS_CONTEXT, cursor.read_element_text())
        else:
            cursor.skip_current_element()
    return name


def read_midi_action(cursor: ElementCursor) -> MidiAction:
    """Read ``<MidiAction>``: program and controller events plus a description."""

    action = MidiAction(name=cursor.text_attribute("name"))

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "program":
            value = to_int(cursor.attribute("value"))
            action.events.append(MidiEvent(ME_CONTROLLER, CTRL_PROGRAM, value))
            cursor.skip_current_element()
        elif tag == "controller":
            controller = to_int(cursor.attribute("ctrl"))
            value = to_int(cursor.attribute("value"))
            action.events.append(MidiEvent(ME_CONTROLLER, controller, value))
            cursor.skip_current_element()
        elif tag == "descr":
            action.description = cursor.read_element_text()
        else:
            cursor.skip_current_element()

    return action


def read_string_data(cursor: ElementCursor) -> StringData:
    data = StringData()

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "frets":
            data.frets = to_int(cursor.read_element_text())
        elif tag == "string":
            is_open = to_int(cursor.attribute("open")) != 0
            pitch = to_int(cursor.read_element_text())
            data.strings.append(InstrumentString(pitch=pitch, open=is_open))
        else:
            cursor.skip_current_element()

    return data


def read_staff_name(cursor: ElementCursor, translate: Translator = identity_translator) -> StaffName:
    """Read a ``longName``/``shortName`` element with its ``pos`` attribute."""

    pos = cursor.int_attribute("pos", 0)
    return StaffName(translate(INSTRUMENTS_CONTEXT, cursor.read_element_text()), pos)


__all__ = [
    "read_articulation",
    "read_family",
    "read_genre",
    "read_midi_action",
    "read_staff_name",
    "read_string_data",
]
