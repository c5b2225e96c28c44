"""Interval helpers for instrument transpositions."""

from __future__ import annotations

from dataclasses import dataclass

# Diatonic step count for each chromatic interval within one octave.
_CHROMATIC_TO_DIATONIC = (0, 1, 1, 2, 2, 3, 4, 4, 5, 5, 6, 6)


@dataclass(slots=True)
class Interval:
    """Transposition expressed both in semitones and diatonic steps."""

    chromatic: int = 0
    diatonic: int = 0


def chromatic_to_diatonic(semitones: int) -> int:
    """Return the diatonic step count matching ``semitones`` (sign preserved)."""

    down = semitones < 0
    magnitude = -semitones if down else semitones
    octaves, remainder = divmod(magnitude, 12)
    steps = _CHROMATIC_TO_DIATONIC[remainder] + octaves * 7
    return -steps if down else steps


__all__ = ["Interval", "chromatic_to_diatonic"]
