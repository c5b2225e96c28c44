"""Completion rules applied to every parsed instrument."""

from __future__ import annotations

from .channel import Channel
from .coercion import derive_id
from .models import Instrument

DEFAULT_CHANNEL_VOLUME = 90
DEFAULT_CHANNEL_PAN = 0


def default_channel() -> Channel:
    return Channel(
        name=Channel.DEFAULT_NAME,
        program=0,
        bank=0,
        volume=DEFAULT_CHANNEL_VOLUME,
        pan=DEFAULT_CHANNEL_PAN,
        chorus=0,
        reverb=0,
    )


def fill_by_default(instrument: Instrument) -> Instrument:
    """Guarantee a channel, a name, a description and an id."""

    if not instrument.channels:
        instrument.channels.append(default_channel())

    if not instrument.name and instrument.long_names:
        instrument.name = instrument.long_names[0].name
    if not instrument.description and instrument.long_names:
        instrument.description = instrument.long_names[0].name
    if not instrument.id:
        instrument.id = derive_id(instrument.name)

    return instrument


__all__ = ["DEFAULT_CHANNEL_PAN", "DEFAULT_CHANNEL_VOLUME", "default_channel", "fill_by_default"]
