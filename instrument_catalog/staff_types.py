"""Staff-type presets referenced by ``<stafftype>`` elements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional


class StaffGroup(str, Enum):
    """Notation family a staff belongs to."""

    STANDARD = "standard"
    PERCUSSION = "percussion"
    TAB = "tablature"


@dataclass(frozen=True)
class StaffTypePreset:
    """Named staff layout with its line count."""

    xml_name: str
    group: StaffGroup
    lines: int
    name: str = ""


_BUILTIN_PRESETS = (
    StaffTypePreset("stdNormal", StaffGroup.STANDARD, 5, "Standard"),
    StaffTypePreset("perc1Line", StaffGroup.PERCUSSION, 1, "Perc. 1 line"),
    StaffTypePreset("perc2Line", StaffGroup.PERCUSSION, 2, "Perc. 2 lines"),
    StaffTypePreset("perc3Line", StaffGroup.PERCUSSION, 3, "Perc. 3 lines"),
    StaffTypePreset("perc5Line", StaffGroup.PERCUSSION, 5, "Perc. 5 lines"),
    StaffTypePreset("tab6StrSimple", StaffGroup.TAB, 6, "Tab. 6-str. simple"),
    StaffTypePreset("tab6StrCommon", StaffGroup.TAB, 6, "Tab. 6-str. common"),
    StaffTypePreset("tab6StrFull", StaffGroup.TAB, 6, "Tab. 6-str. full"),
    StaffTypePreset("tab4StrSimple", StaffGroup.TAB, 4, "Tab. 4-str. simple"),
    StaffTypePreset("tab4StrCommon", StaffGroup.TAB, 4, "Tab. 4-str. common"),
    StaffTypePreset("tab4StrFull", StaffGroup.TAB, 4, "Tab. 4-str. full"),
    StaffTypePreset("tab5StrSimple", StaffGroup.TAB, 5, "Tab. 5-str. simple"),
    StaffTypePreset("tab5StrCommon", StaffGroup.TAB, 5, "Tab. 5-str. common"),
    StaffTypePreset("tab5StrFull", StaffGroup.TAB, 5, "Tab. 5-str. full"),
    StaffTypePreset("tabUkulele", StaffGroup.TAB, 4, "Tab. ukulele"),
    StaffTypePreset("tabBalajka", StaffGroup.TAB, 3, "Tab. balalaika"),
    StaffTypePreset("tabDulcimer", StaffGroup.TAB, 3, "Tab. dulcimer"),
    StaffTypePreset("tab6StrItalian", StaffGroup.TAB, 6, "Tab. 6-str. Italian"),
    StaffTypePreset("tab6StrFrench", StaffGroup.TAB, 6, "Tab. 6-str. French"),
    StaffTypePreset("tab7StrCommon", StaffGroup.TAB, 7, "Tab. 7-str. common"),
    StaffTypePreset("tab8StrCommon", StaffGroup.TAB, 8, "Tab. 8-str. common"),
)

_BUILTIN_DEFAULTS = {
    StaffGroup.STANDARD: "stdNormal",
    StaffGroup.PERCUSSION: "perc5Line",
    StaffGroup.TAB: "tab6StrCommon",
}


class StaffTypeRegistry:
    """Read-only lookup of staff-type presets by XML name and by group."""

    def __init__(
        self,
        presets: Iterable[StaffTypePreset],
        defaults: Dict[StaffGroup, str],
    ) -> None:
        self._presets: Dict[str, StaffTypePreset] = {preset.xml_name: preset for preset in presets}
        self._defaults: Dict[StaffGroup, StaffTypePreset] = {}
        for group, xml_name in defaults.items():
            preset = self._presets.get(xml_name)
            if preset is None or preset.group is not group:
                raise ValueError(f"Default preset {xml_name!r} is not a {group.value} preset")
            self._defaults[group] = preset

    @classmethod
    def builtin(cls) -> "StaffTypeRegistry":
        return cls(_BUILTIN_PRESETS, _BUILTIN_DEFAULTS)

    def preset_from_xml_name(self, xml_name: str) -> Optional[StaffTypePreset]:
        return self._presets.get(xml_name)

    def default_preset(self, group: StaffGroup) -> Optional[StaffTypePreset]:
        return self._defaults.get(group)


def staff_group_from_text(text: str) -> StaffGroup:
    """Map ``<stafftype>`` text onto a group; anything unknown is standard."""

    if text == "percussion":
        return StaffGroup.PERCUSSION
    if text == "tablature":
        return StaffGroup.TAB
    return StaffGroup.STANDARD


__all__ = [
    "StaffGroup",
    "StaffTypePreset",
    "StaffTypeRegistry",
    "staff_group_from_text",
]
