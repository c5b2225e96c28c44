"""Clef codes and the tag lookup used by instrument definitions."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict


class ClefType(IntEnum):
    """Numeric clef codes shared with the score file format."""

    INVALID = -1
    G = 0
    G15_MB = 1
    G8_VB = 2
    G8_VA = 3
    G15_MA = 4
    G8_VB_O = 5
    G8_VB_P = 6
    G_1 = 7
    C1 = 8
    C2 = 9
    C3 = 10
    C4 = 11
    C5 = 12
    C_19C = 13
    C1_F18C = 14
    C3_F18C = 15
    C4_F18C = 16
    C1_F20C = 17
    C3_F20C = 18
    C4_F20C = 19
    F = 20
    F15_MB = 21
    F8_VB = 22
    F_8VA = 23
    F_15MA = 24
    F_B = 25
    F_C = 26
    F_F18C = 27
    F_19C = 28
    PERC = 29
    PERC2 = 30
    TAB = 31
    TAB4 = 32
    TAB_SERIF = 33
    TAB4_SERIF = 34


CLEF_TAGS: Dict[str, ClefType] = {
    "G": ClefType.G,
    "G15mb": ClefType.G15_MB,
    "G8vb": ClefType.G8_VB,
    "G8va": ClefType.G8_VA,
    "G15ma": ClefType.G15_MA,
    "G8vbo": ClefType.G8_VB_O,
    "G8vbp": ClefType.G8_VB_P,
    "G1": ClefType.G_1,
    "C1": ClefType.C1,
    "C2": ClefType.C2,
    "C3": ClefType.C3,
    "C4": ClefType.C4,
    "C5": ClefType.C5,
    "C_19C": ClefType.C_19C,
    "C1_F18C": ClefType.C1_F18C,
    "C3_F18C": ClefType.C3_F18C,
    "C4_F18C": ClefType.C4_F18C,
    "C1_F20C": ClefType.C1_F20C,
    "C3_F20C": ClefType.C3_F20C,
    "C4_F20C": ClefType.C4_F20C,
    "F": ClefType.F,
    "F15mb": ClefType.F15_MB,
    "F8vb": ClefType.F8_VB,
    "F8va": ClefType.F_8VA,
    "F15ma": ClefType.F_15MA,
    "F3": ClefType.F_B,
    "F5": ClefType.F_C,
    "F_F18C": ClefType.F_F18C,
    "F_19C": ClefType.F_19C,
    "PERC": ClefType.PERC,
    "PERC2": ClefType.PERC2,
    "TAB": ClefType.TAB,
    "TAB4": ClefType.TAB4,
    "TAB2": ClefType.TAB_SERIF,
    "TAB4_SERIF": ClefType.TAB4_SERIF,
}


def clef_type_from_tag(tag: str) -> ClefType:
    """Return the clef for a textual tag such as ``"F8vb"``; unknown tags map to ``G``."""

    return CLEF_TAGS.get(tag.strip(), ClefType.G)


def clef_type_from_code(code: int) -> ClefType:
    """Return the clef for a numeric code, ``INVALID`` when the code is unknown."""

    try:
        return ClefType(code)
    except ValueError:
        return ClefType.INVALID


__all__ = ["CLEF_TAGS", "ClefType", "clef_type_from_code", "clef_type_from_tag"]
