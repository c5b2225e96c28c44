"""Parser for ``<Order>`` blocks describing the vertical order of a score."""

from __future__ import annotations

from .coercion import read_bool_attribute
from .cursor import ElementCursor
from .models import (
    SOLOISTS_FAMILY,
    UNSORTED_FAMILY,
    InstrumentOverwrite,
    ScoreOrder,
    ScoreOrderGroup,
)
from .translation import ORDER_CONTEXT, Translator, identity_translator


def read_score_order(cursor: ElementCursor, translate: Translator = identity_translator) -> ScoreOrder:
    """Read one score order; group ``index`` values follow declaration order."""

    order = ScoreOrder(id=cursor.text_attribute("id"))

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "name":
            order.name = translate(ORDER_CONTEXT, cursor.read_element_text())
        elif tag == "instrument":
            instrument_id = cursor.text_attribute("id")
            order.instrument_map[instrument_id] = _read_overwrite(cursor)
        elif tag == "family":
            order.append_group(ScoreOrderGroup(family=cursor.read_element_text()))
        elif tag == "soloists":
            order.append_group(_soloists_group())
            cursor.skip_current_element()
        elif tag == "unsorted":
            order.append_group(_unsorted_group(cursor))
            cursor.skip_current_element()
        elif tag == "section":
            _read_section(cursor, order)
        else:
            cursor.skip_current_element()

    return order


def _read_overwrite(cursor: ElementCursor) -> InstrumentOverwrite:
    overwrite = InstrumentOverwrite()
    while cursor.read_next_start_element():
        if cursor.name == "family":
            overwrite.id = cursor.text_attribute("id")
            overwrite.name = cursor.read_element_text()
        else:
            cursor.skip_current_element()
    return overwrite


def _read_section(cursor: ElementCursor, order: ScoreOrder) -> None:
    section = cursor.text_attribute("id")

    while cursor.read_next_start_element():
        tag = cursor.name
        if tag == "family":
            group = ScoreOrderGroup(
                section=section,
                bracket=True,
                show_system_markings=read_bool_attribute(cursor, "showSystemMarkings", False),
                bar_line_span=read_bool_attribute(cursor, "barLineSpan", True),
                thin_bracket=read_bool_attribute(cursor, "thinBrackets", True),
            )
            group.family = cursor.read_element_text()
            order.append_group(group)
        elif tag == "soloists":
            group = _soloists_group()
            group.section = section
            order.append_group(group)
            cursor.skip_current_element()
        elif tag == "unsorted":
            group = _unsorted_group(cursor)
            group.section = section
            order.append_group(group)
            cursor.skip_current_element()
        else:
            cursor.skip_current_element()


def _soloists_group() -> ScoreOrderGroup:
    return ScoreOrderGroup(family=SOLOISTS_FAMILY)


def _unsorted_group(cursor: ElementCursor) -> ScoreOrderGroup:
    return ScoreOrderGroup(family=UNSORTED_FAMILY, unsorted=cursor.text_attribute("group"))


__all__ = ["read_score_order"]
