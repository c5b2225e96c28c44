"""MIDI channel settings attached to an instrument."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .coercion import to_int
from .cursor import ElementCursor
from .models import Articulation, MidiAction
from .records import read_articulation, read_midi_action

CTRL_HBANK = 0
CTRL_VOLUME = 7
CTRL_PANPOT = 10
CTRL_LBANK = 32
CTRL_REVERB_SEND = 91
CTRL_CHORUS_SEND = 93


@dataclass(slots=True)
class Channel:
    """Sound settings of one instrument channel (``arco``, ``pizzicato``...)."""

    DEFAULT_NAME = "normal"

    name: str = DEFAULT_NAME
    description: str = ""
    synti: str = ""
    program: int = -1
    bank: int = 0
    volume: int = 100
    pan: int = 64
    chorus: int = 0
    reverb: int = 0
    controllers: Dict[int, int] = field(default_factory=dict)
    articulations: List[Articulation] = field(default_factory=list)
    midi_actions: List[MidiAction] = field(default_factory=list)

    def apply_controller(self, controller: int, value: int) -> None:
        if controller == CTRL_HBANK:
            self.bank = (value << 7) + (self.bank & 0x7F)
        elif controller == CTRL_LBANK:
            self.bank = (self.bank & ~0x7F) + (value & 0x7F)
        elif controller == CTRL_VOLUME:
            self.volume = value
        elif controller == CTRL_PANPOT:
            self.pan = value
        elif controller == CTRL_REVERB_SEND:
            self.reverb = value
        elif controller == CTRL_CHORUS_SEND:
            self.chorus = value
        else:
            self.controllers[controller] = value


def read_channel(cursor: ElementCursor) -> Channel:
    """Read a ``<Channel>`` element; an unnamed channel gets ``DEFAULT_NAME``."""

    channel = Channel(name=cursor.text_attribute("name") or Channel.DEFAULT_NAME)

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "program":
            channel.program = to_int(cursor.attribute("value"), default=-1)
            cursor.skip_current_element()
        elif tag == "controller":
            controller = to_int(cursor.attribute("ctrl"))
            value = to_int(cursor.attribute("value"))
            channel.apply_controller(controller, value)
            cursor.skip_current_element()
        elif tag == "Articulation":
            channel.articulations.append(read_articulation(cursor))
        elif tag == "MidiAction":
            channel.midi_actions.append(read_midi_action(cursor))
        elif tag == "synti":
            channel.synti = cursor.read_element_text()
        elif tag == "descr":
            channel.description = cursor.read_element_text()
        else:
            cursor.skip_current_element()

    return channel


__all__ = ["Channel", "read_channel"]
