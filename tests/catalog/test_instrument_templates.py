from __future__ import annotations

import pytest

from instrument_catalog.clefs import ClefType
from instrument_catalog.drumset import standard_drumset
from instrument_catalog.models import MAX_STAVES, BracketType, PitchRange, StaffName
from instrument_catalog.staff_types import StaffGroup


def _group(body: str) -> str:
    return f'<museScore><InstrumentGroup id="test">{body}</InstrumentGroup></museScore>'


@pytest.fixture
def read_instruments(read_catalog_xml):
    def _read(body: str):
        catalog = read_catalog_xml(_group(body))
        return {template_id: template.instrument for template_id, template in catalog.instrument_templates.items()}

    return _read


def test_long_names_replace_entries_at_the_same_position(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="violin">
          <longName>Violin</longName>
          <longName pos="1">Violin II</longName>
          <longName>Violino</longName>
          <shortName>Vln.</shortName>
          <short-name>Vl.</short-name>
        </Instrument>
        """
    )["violin"]

    assert instrument.long_names == [StaffName("Violin II", 1), StaffName("Violino", 0)]
    assert instrument.short_names == [StaffName("Vl.", 0)]


def test_name_and_description_elements(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="flute">
          <name>Flute</name>
          <trackName>Concert Flute</trackName>
          <description>Western concert flute</description>
          <instrumentId>wind.flutes.flute</instrumentId>
        </Instrument>
        """
    )["flute"]

    assert instrument.long_names == [StaffName("Flute", 0)]
    assert instrument.name == "Concert Flute"
    assert instrument.description == "Western concert flute"
    assert instrument.musicxml_id == "wind.flutes.flute"


def test_staves_and_per_staff_settings(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="piano">
          <longName>Piano</longName>
          <staves>2</staves>
          <clef staff="1">G</clef>
          <clef staff="2">F</clef>
          <stafflines staff="2">4</stafflines>
          <smallStaff staff="2">1</smallStaff>
          <bracket staff="1">1</bracket>
          <bracket staff="2">99</bracket>
          <bracketSpan staff="2">3</bracketSpan>
          <barlineSpan staff="1">2</barlineSpan>
        </Instrument>
        """
    )["piano"]

    assert instrument.staves == 2
    assert instrument.bracket_span == [2, 3, 0, 0]
    assert instrument.clefs[0].concert is ClefType.G
    assert instrument.clefs[1].concert is ClefType.F
    assert instrument.clefs[1].transposing is ClefType.F
    assert instrument.staff_lines == [5, 4, 5, 5]
    assert instrument.small_staff == [False, True, False, False]
    assert instrument.bracket[:2] == [BracketType.BRACE, BracketType.NO_BRACKET]
    assert instrument.barline_span == [True, False, False, False]


def test_clef_accepts_numbers_and_tags_per_side(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="horn">
          <longName>Horn</longName>
          <clef>0</clef>
          <concertClef>F</concertClef>
          <transposingClef staff="2">G8vb</transposingClef>
          <clef staff="9">C3</clef>
        </Instrument>
        """
    )["horn"]

    assert instrument.clefs[0].concert is ClefType.F
    assert instrument.clefs[0].transposing is ClefType.G
    assert instrument.clefs[1].transposing is ClefType.G8_VB
    assert instrument.clefs[1].concert is ClefType.G
    assert instrument.clefs[MAX_STAVES - 1].concert is ClefType.C3


def test_unknown_clef_tag_resolves_to_treble(read_instruments) -> None:
    instrument = read_instruments('<Instrument id="x"><longName>X</longName><clef>bogus</clef></Instrument>')["x"]

    assert instrument.clefs[0].concert is ClefType.G


def test_barline_span_stops_at_last_staff(read_instruments) -> None:
    instrument = read_instruments(
        '<Instrument id="x"><longName>X</longName><barlineSpan staff="3">5</barlineSpan></Instrument>'
    )["x"]

    assert instrument.barline_span == [False, False, True, True]


def test_pitch_ranges_and_transposition(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="clarinet">
          <longName>Clarinet in B♭</longName>
          <aPitchRange>50-89</aPitchRange>
          <pPitchRange>broken</pPitchRange>
          <transposition>-2</transposition>
        </Instrument>
        <Instrument id="odd">
          <longName>Odd</longName>
          <transposeDiatonic>-1</transposeDiatonic>
          <transposeChromatic>-3</transposeChromatic>
        </Instrument>
        """
    )

    clarinet = instruments["clarinet"]
    assert clarinet.amateur_pitch_range == PitchRange(50, 89)
    assert clarinet.professional_pitch_range == PitchRange(0, 127)
    assert (clarinet.transpose.chromatic, clarinet.transpose.diatonic) == (-2, -1)

    odd = instruments["odd"]
    assert (odd.transpose.chromatic, odd.transpose.diatonic) == (-3, -1)


def test_stafftype_uses_named_preset_or_group_default(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="guitar">
          <longName>Guitar</longName>
          <stafftype staff="1" staffTypePreset="tab4StrCommon">tablature</stafftype>
        </Instrument>
        <Instrument id="snare">
          <longName>Snare</longName>
          <stafftype staffTypePreset="tab6StrCommon">percussion</stafftype>
        </Instrument>
        <Instrument id="triangle">
          <longName>Triangle</longName>
          <stafftype staffTypePreset="perc1Line">percussion</stafftype>
        </Instrument>
        <Instrument id="voice">
          <longName>Voice</longName>
          <stafftype>something</stafftype>
        </Instrument>
        """
    )

    guitar = instruments["guitar"]
    assert guitar.staff_group is StaffGroup.TAB
    assert guitar.staff_type_preset.xml_name == "tab4StrCommon"
    assert guitar.staff_lines[0] == 4

    snare = instruments["snare"]
    assert snare.staff_group is StaffGroup.PERCUSSION
    assert snare.staff_type_preset.xml_name == "perc5Line"
    assert snare.staff_lines[0] == 5

    assert instruments["triangle"].staff_lines[0] == 1

    voice = instruments["voice"]
    assert voice.staff_group is StaffGroup.STANDARD
    assert voice.staff_type_preset.xml_name == "stdNormal"


def test_use_drumset_copies_the_standard_kit(read_instruments) -> None:
    instrument = read_instruments(
        '<Instrument id="kit"><longName>Drumset</longName><useDrumset>1</useDrumset></Instrument>'
    )["kit"]

    assert instrument.use_drumset is True
    assert instrument.drumset == standard_drumset()
    assert instrument.drumset is not standard_drumset()


def test_first_drum_element_discards_the_default_entries(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="kit">
          <longName>Percussion</longName>
          <useDrumset>1</useDrumset>
          <Drum pitch="38"><head>cross</head><line>3</line><name>Snare</name><stem>2</stem><shortcut>S</shortcut></Drum>
          <Drum pitch="36"><line>7</line><name>Kick</name><voice>1</voice><shortcut>66</shortcut></Drum>
          <Drum pitch="300"><name>Ignored</name></Drum>
        </Instrument>
        """
    )["kit"]

    drumset = instrument.drumset
    assert list(drumset) == [36, 38]
    snare = drumset.drum(38)
    assert (snare.name, snare.notehead, snare.line, int(snare.stem_direction), snare.shortcut) == (
        "Snare",
        "cross",
        3,
        2,
        "S",
    )
    kick = drumset.drum(36)
    assert (kick.name, kick.voice, kick.shortcut) == ("Kick", 1, "B")


def test_drum_without_use_drumset_allocates_a_table(read_instruments) -> None:
    instrument = read_instruments(
        '<Instrument id="bells"><longName>Bells</longName><Drum pitch="60"><name>Bell</name></Drum></Instrument>'
    )["bells"]

    assert instrument.use_drumset is False
    assert list(instrument.drumset) == [60]


def test_use_drumset_replaces_an_earlier_custom_table(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="kit">
          <longName>Kit</longName>
          <Drum pitch="60"><name>Bongo</name></Drum>
          <useDrumset>1</useDrumset>
          <Drum pitch="61"><name>Low Bongo</name></Drum>
        </Instrument>
        """
    )["kit"]

    drumset = instrument.drumset
    assert 60 not in drumset
    assert 61 in drumset
    assert 38 in drumset
    assert len(drumset) == len(standard_drumset()) + 1


def test_midi_actions_channels_and_classification(read_catalog_xml) -> None:
    catalog = read_catalog_xml(
        _group(
            """
            <Instrument id="trumpet">
              <longName>Trumpet</longName>
              <MidiAction name="open"><program value="56"/></MidiAction>
              <Channel name="open"><program value="56"/></Channel>
              <channel name="mute"><program value="59"/></channel>
              <Articulation name="marcato"><velocity>120%</velocity></Articulation>
              <genre>common</genre>
              <genre>jazz</genre>
              <family>trumpets</family>
              <singleNoteDynamics>0</singleNoteDynamics>
              <extended>1</extended>
              <StringData><frets>0</frets></StringData>
            </Instrument>
            """
        )
    )

    instrument = catalog.instrument_templates["trumpet"].instrument
    assert [action.name for action in instrument.midi_actions] == ["open"]
    assert [(channel.name, channel.program) for channel in instrument.channels] == [("open", 56), ("mute", 59)]
    assert catalog.articulations["marcato"].velocity == 120
    assert instrument.genre_ids == ["common", "jazz"]
    assert instrument.family_id == "trumpets"
    assert instrument.single_note_dynamics is False
    assert instrument.extended is True


def test_init_copies_an_earlier_template(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="violin">
          <longName>Violin</longName>
          <shortName>Vln.</shortName>
          <description>Bowed strings</description>
          <musicXMLid>strings.violin</musicXMLid>
          <clef>G</clef>
          <aPitchRange>55-96</aPitchRange>
          <pPitchRange>55-103</pPitchRange>
          <Channel name="arco"><program value="40"/></Channel>
          <Channel name="pizzicato"><program value="45"/></Channel>
          <genre>classical</genre>
          <family>strings</family>
        </Instrument>
        <Instrument id="violin-section">
          <init>violin</init>
          <longName>Violins</longName>
          <genre>orchestra</genre>
        </Instrument>
        """
    )

    violin = instruments["violin"]
    section = instruments["violin-section"]
    assert section.long_names == [StaffName("Violins", 0)]
    assert section.short_names == violin.short_names
    assert section.musicxml_id == "strings.violin"
    assert section.professional_pitch_range == PitchRange(55, 103)
    assert [channel.name for channel in section.channels] == ["arco", "pizzicato"]
    assert section.channels is not violin.channels
    assert section.genre_ids == ["orchestra"]
    assert section.family_id == ""
    assert section.id == "violin"
    assert section.sequence_order == violin.sequence_order + 1


def test_fields_set_before_init_are_overwritten(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="a">
          <longName>Alpha</longName>
          <staves>1</staves>
          <aPitchRange>40-80</aPitchRange>
          <transposition>0</transposition>
        </Instrument>
        <Instrument id="b">
          <aPitchRange>10-20</aPitchRange>
          <transposition>-9</transposition>
          <init>a</init>
          <transposition>7</transposition>
        </Instrument>
        """
    )

    a = instruments["a"]
    b = instruments["b"]
    assert b.amateur_pitch_range == a.amateur_pitch_range == PitchRange(40, 80)
    assert (b.transpose.chromatic, b.transpose.diatonic) == (7, 4)
    assert (a.transpose.chromatic, a.transpose.diatonic) == (0, 0)
    assert b.long_names == a.long_names
    assert b.staves == a.staves


INHERITED_FIELDS = (
    "id",
    "musicxml_id",
    "long_names",
    "short_names",
    "staves",
    "extended",
    "clefs",
    "staff_lines",
    "small_staff",
    "bracket",
    "bracket_span",
    "barline_span",
    "amateur_pitch_range",
    "professional_pitch_range",
    "staff_group",
    "staff_type_preset",
    "use_drumset",
    "drumset",
    "string_data",
    "midi_actions",
    "channels",
    "single_note_dynamics",
)


def test_init_inherits_every_copied_field_except_overrides(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="guitar">
          <longName>Guitar</longName>
          <longName pos="1">Guitar 2</longName>
          <shortName>Gtr.</shortName>
          <musicXMLid>pluck.guitar</musicXMLid>
          <extended>1</extended>
          <staves>2</staves>
          <clef staff="1">G8vb</clef>
          <clef staff="2">TAB</clef>
          <stafflines staff="2">6</stafflines>
          <smallStaff staff="1">1</smallStaff>
          <bracket staff="1">2</bracket>
          <bracketSpan staff="2">1</bracketSpan>
          <barlineSpan staff="1">2</barlineSpan>
          <aPitchRange>40-83</aPitchRange>
          <pPitchRange>40-88</pPitchRange>
          <transposition>-12</transposition>
          <stafftype staff="2" staffTypePreset="tab6StrCommon">tablature</stafftype>
          <useDrumset>1</useDrumset>
          <StringData><frets>19</frets><string>40</string><string>45</string></StringData>
          <MidiAction name="palm"><controller ctrl="64" value="127"/></MidiAction>
          <Channel name="open"><program value="24"/></Channel>
          <Channel name="muted"><program value="28"/></Channel>
          <singleNoteDynamics>0</singleNoteDynamics>
        </Instrument>
        <Instrument id="guitar-copy">
          <init>guitar</init>
          <transposition>0</transposition>
        </Instrument>
        """
    )

    source = instruments["guitar"]
    inherited = instruments["guitar-copy"]
    for name in INHERITED_FIELDS:
        assert getattr(inherited, name) == getattr(source, name), name
    assert (source.transpose.chromatic, inherited.transpose.chromatic) == (-12, 0)
    assert inherited.drumset is not source.drumset
    assert inherited.channels is not source.channels
    assert inherited.clefs[0] is not source.clefs[0]


def test_init_copies_drum_table_instead_of_sharing(read_instruments) -> None:
    instruments = read_instruments(
        """
        <Instrument id="kit">
          <longName>Kit</longName>
          <Drum pitch="36"><name>Kick</name></Drum>
        </Instrument>
        <Instrument id="kit2">
          <init>kit</init>
          <Drum pitch="38"><name>Snare</name></Drum>
        </Instrument>
        """
    )

    assert list(instruments["kit"].drumset) == [36]
    assert list(instruments["kit2"].drumset) == [38]


def test_init_from_unknown_template_resets_inherited_fields(read_catalog_xml) -> None:
    catalog = read_catalog_xml(
        _group(
            """
            <Instrument id="lonely">
              <longName>Before</longName>
              <init>missing</init>
              <trackName>After</trackName>
            </Instrument>
            """
        )
    )

    assert "missing" not in catalog.instrument_templates
    instrument = catalog.instrument_templates["lonely"].instrument
    assert instrument.long_names == []
    assert instrument.name == "After"
    assert instrument.id == "after"


def test_unknown_elements_are_skipped_with_their_subtree(read_instruments) -> None:
    instrument = read_instruments(
        """
        <Instrument id="x">
          <future><longName>Not me</longName></future>
          <longName>Me</longName>
        </Instrument>
        """
    )["x"]

    assert instrument.long_names == [StaffName("Me", 0)]


def test_instrument_defaults(read_instruments) -> None:
    instrument = read_instruments('<Instrument id="plain"><longName>Plain</longName></Instrument>')["plain"]

    assert instrument.staves == 1
    assert instrument.staff_lines == [5] * MAX_STAVES
    assert instrument.bracket == [BracketType.NO_BRACKET] * MAX_STAVES
    assert instrument.staff_group is StaffGroup.STANDARD
    assert instrument.staff_type_preset is None
    assert instrument.drumset is None
    assert instrument.single_note_dynamics is True
    assert instrument.string_data.is_empty()
