"""Forward-only cursor over the start/end events of an XML document.

The catalog parsers walk the document the way a streaming reader does: they
ask for the next start element at the current nesting level, read the text of
leaf elements, and skip whole subtrees they do not understand.  The cursor is
backed by :class:`xml.etree.ElementTree.XMLPullParser`.  A tokenizer error
ends the event stream (it is logged, never raised) so a truncated document
yields everything that was readable before the damage.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple
import xml.etree.ElementTree as ET

from .coercion import to_int


logger = logging.getLogger(__name__)

_Event = Tuple[str, ET.Element]


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""

    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


class ElementCursor:
    """Streaming view of an XML buffer positioned on one start or end tag."""

    def __init__(self, data: bytes | str) -> None:
        self._close_error: ET.ParseError | None = None
        parser = ET.XMLPullParser(events=("start", "end"))
        parser.feed(data)
        try:
            parser.close()
        except ET.ParseError as exc:
            self._close_error = exc
        self._parser = parser
        self._events: Iterator[_Event] = self._iter_events()
        self._kind: Optional[str] = None
        self._element: Optional[ET.Element] = None
        self.error: ET.ParseError | None = None

    def _iter_events(self) -> Iterator[_Event]:
        try:
            yield from self._parser.read_events()
        except ET.ParseError as exc:
            self._report(exc)
            return
        if self._close_error is not None:
            self._report(self._close_error)

    def _report(self, exc: ET.ParseError) -> None:
        if self.error is None:
            self.error = exc
            logger.warning("Stopped reading malformed catalog document: %s", exc)

    def _advance(self) -> bool:
        event = next(self._events, None)
        if event is None:
            self._kind = None
            self._element = None
            return False
        self._kind, self._element = event
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def read_next_start_element(self) -> bool:
        """Advance to the next start tag inside the current element.

        Returns ``False`` when the end tag of the enclosing element (or the end
        of the document) is reached instead.
        """

        if not self._advance():
            return False
        return self._kind == "start"

    def skip_current_element(self) -> None:
        """Consume everything up to the end tag of the current element."""

        if self._kind != "start":
            return
        depth = 1
        while depth and self._advance():
            depth += 1 if self._kind == "start" else -1

    def read_element_text(self) -> str:
        """Consume the current element and return its character data."""

        if self._kind != "start" or self._element is None:
            return ""
        element = self._element
        self.skip_current_element()
        return "".join(element.itertext())

    # ------------------------------------------------------------------
    # Current element
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        if self._element is None:
            return ""
        return local_name(self._element.tag)

    def has_attribute(self, name: str) -> bool:
        return self._element is not None and name in self._element.attrib

    def attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        if self._element is None:
            return default
        return self._element.get(name, default)

    def text_attribute(self, name: str) -> str:
        """Attribute value, or an empty string when absent."""

        return self.attribute(name) or ""

    def int_attribute(self, name: str, default: int = 0) -> int:
        """Integer attribute; malformed values read as ``0``, absent ones as ``default``."""

        value = self.attribute(name)
        if value is None:
            return default
        return to_int(value)


__all__ = ["ElementCursor", "local_name"]
