from __future__ import annotations

import textwrap
from typing import Callable

import pytest

from instrument_catalog.cursor import ElementCursor
from instrument_catalog.models import Catalog
from instrument_catalog.reader import InstrumentsReader


def dedent_xml(xml: str) -> str:
    return textwrap.dedent(xml).strip()


@pytest.fixture
def reader() -> InstrumentsReader:
    return InstrumentsReader()


@pytest.fixture
def read_catalog_xml(reader: InstrumentsReader) -> Callable[[str], Catalog]:
    """Parse a complete catalog document given as an indented string."""

    def _read(xml: str) -> Catalog:
        return reader.read_meta_bytes(dedent_xml(xml))

    return _read


@pytest.fixture
def cursor_at() -> Callable[[str], ElementCursor]:
    """Return a cursor positioned on the root element of ``xml``."""

    def _cursor(xml: str) -> ElementCursor:
        cursor = ElementCursor(dedent_xml(xml))
        assert cursor.read_next_start_element()
        return cursor

    return _cursor
