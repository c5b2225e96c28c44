"""Localisation of display texts read from catalog documents."""

from __future__ import annotations

import gettext
import logging
from pathlib import Path
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

Translator = Callable[[str, str], str]
"""``translate(context, text)`` returns the display text for ``text``."""

CATALOG_DOMAIN = "instruments"
INSTRUMENTS_CONTEXT = "InstrumentsXML"
ORDER_CONTEXT = "OrderXML"


def identity_translator(context: str, text: str) -> str:
    return text


def gettext_translator(
    locale_dir: str | Path,
    languages: Sequence[str] | None = None,
    domain: str = CATALOG_DOMAIN,
) -> Translator:
    """Build a translator backed by compiled ``.mo`` catalogs.

    Missing catalogs fall back to the untranslated text.
    """

    translations = gettext.translation(
        domain,
        localedir=str(locale_dir),
        languages=list(languages) if languages else None,
        fallback=True,
    )
    if type(translations) is gettext.NullTranslations:
        logger.debug("No %s translations found in %s", domain, locale_dir)

    def translate(context: str, text: str) -> str:
        if not text:
            return text
        return translations.pgettext(context, text)

    return translate


__all__ = [
    "CATALOG_DOMAIN",
    "INSTRUMENTS_CONTEXT",
    "ORDER_CONTEXT",
    "Translator",
    "gettext_translator",
    "identity_translator",
]
