"""Builds a :class:`Catalog` from an instrument catalog document.

The document is read in a single pass.  Unknown elements are skipped with
their whole subtree and malformed values fall back to defaults, so the only
way to fail is an unreadable source.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Optional

from shared.result import CatalogReadError, Result

from .clefs import clef_type_from_tag
from .coercion import derive_id, to_flag
from .cursor import ElementCursor
from .drumset import Drumset
from .intervals import chromatic_to_diatonic
from .models import Catalog, InstrumentGroup
from .records import read_articulation, read_family, read_genre
from .score_orders import read_score_order
from .staff_types import StaffTypeRegistry
from .templates import ClefResolver, DiatonicResolver, InstrumentTemplateParser
from .translation import INSTRUMENTS_CONTEXT, Translator, identity_translator


logger = logging.getLogger(__name__)

ROOT_TAG = "museScore"
GROUP_TAGS = frozenset({"instrument-group", "InstrumentGroup"})


class _BuildState:
    """Catalog under construction plus its declaration counters."""

    __slots__ = ("catalog", "group_count", "instrument_count", "order_count")

    def __init__(self) -> None:
        self.catalog = Catalog()
        self.group_count = 0
        self.instrument_count = 0
        self.order_count = 0


class InstrumentsReader:
    """Reads instrument catalog documents.

    The collaborators (staff-type presets, the standard drum kit, clef and
    interval lookups, translation) are read-only and may be shared between
    reads; each read owns its catalog exclusively.
    """

    def __init__(
        self,
        *,
        staff_types: Optional[StaffTypeRegistry] = None,
        standard_kit: Optional[Drumset] = None,
        clef_resolver: ClefResolver = clef_type_from_tag,
        diatonic_resolver: DiatonicResolver = chromatic_to_diatonic,
        translate: Translator = identity_translator,
    ) -> None:
        self._translate = translate
        self._templates = InstrumentTemplateParser(
            staff_types=staff_types,
            standard_kit=standard_kit,
            clef_resolver=clef_resolver,
            diatonic_resolver=diatonic_resolver,
            translate=translate,
        )

    def read_meta(self, path: str | Path) -> Result[Catalog, CatalogReadError]:
        """Read and parse the catalog stored at ``path``."""

        source = Path(path)
        try:
            data = source.read_bytes()
        except OSError as exc:
            logger.warning("Unable to read instrument catalog %s: %s", source, exc)
            error = CatalogReadError(source, exc.strerror or str(exc))
            error.__cause__ = exc
            return Result.err(error)

        catalog = self.read_meta_bytes(data)
        logger.info(
            "Loaded %d instrument templates in %d groups from %s",
            len(catalog.instrument_templates),
            len(catalog.groups),
            source,
        )
        return Result.ok(catalog)

    def read_meta_bytes(self, data: bytes | str) -> Catalog:
        """Parse an in-memory catalog document."""

        state = _BuildState()
        cursor = ElementCursor(data)

        while cursor.read_next_start_element():
            if cursor.name != ROOT_TAG:
                continue
            while cursor.read_next_start_element():
                self._read_top_level(cursor, state)

        return state.catalog

    def _read_top_level(self, cursor: ElementCursor, state: _BuildState) -> None:
        catalog = state.catalog
        tag = cursor.name
        if tag in GROUP_TAGS:
            self._load_group(cursor, state)
        elif tag == "Articulation":
            articulation = read_articulation(cursor)
            catalog.articulations[articulation.name] = articulation
        elif tag == "Genre":
            genre = read_genre(cursor, self._translate)
            catalog.genres[genre.id] = genre
        elif tag == "Family":
            family = read_family(cursor, self._translate)
            catalog.families[family.id] = family
        elif tag == "Order":
            order = read_score_order(cursor, self._translate)
            order.index = state.order_count
            state.order_count += 1
            catalog.score_orders[order.id] = order
        else:
            logger.debug("Skipping unknown catalog element <%s>", tag)
            cursor.skip_current_element()

    def _load_group(self, cursor: ElementCursor, state: _BuildState) -> None:
        catalog = state.catalog
        group = InstrumentGroup(
            id=cursor.text_attribute("id"),
            name=self._translate(INSTRUMENTS_CONTEXT, cursor.text_attribute("name")),
            extended=to_flag(cursor.attribute("extended")),
            sequence_order=state.group_count,
        )
        state.group_count += 1
        members = []

        while cursor.read_next_start_element():
            tag = cursor.name
            if tag.lower() == "instrument":
                template = self._templates.parse(cursor, catalog, state.instrument_count)
                state.instrument_count += 1
                template.instrument.group_id = group.id
                members.append(template)
                catalog.instrument_templates[template.id] = template
            elif tag == "ref":
                self._reinsert_template(cursor.read_element_text(), catalog)
            elif tag == "name":
                group.name = self._translate(INSTRUMENTS_CONTEXT, cursor.read_element_text())
            elif tag == "extended":
                group.extended = to_flag(cursor.read_element_text())
            else:
                cursor.skip_current_element()

        if not group.id:
            group.id = derive_id(group.name)
            for template in members:
                template.instrument.group_id = group.id

        catalog.groups[group.id] = group

    @staticmethod
    def _reinsert_template(template_id: str, catalog: Catalog) -> None:
        # A reference re-inserts the existing template under its own id.
        template = catalog.instrument_templates.get(template_id)
        if template is None:
            logger.debug("Group references unknown instrument template %r", template_id)
            return
        catalog.instrument_templates[template.id] = copy.deepcopy(template)


def read_catalog(path: str | Path, reader: Optional[InstrumentsReader] = None) -> Result[Catalog, CatalogReadError]:
    """Read ``path`` with ``reader`` (a default reader when omitted)."""

    return (reader or InstrumentsReader()).read_meta(path)


__all__ = ["GROUP_TAGS", "InstrumentsReader", "ROOT_TAG", "read_catalog"]
