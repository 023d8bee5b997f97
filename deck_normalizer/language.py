"""Detect whether a presentation is written in the primary or secondary script."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from .document import DocumentPresentation
from .extraction import extract_slide_titles
from .models import Language

LOGGER = logging.getLogger(__name__)

# Lower-case letter ranges: Latin for the primary locale, Cyrillic for the secondary.
PRIMARY_LETTERS = ("a", "z")
SECONDARY_LETTERS = ("а", "я")


def _in_range(ch: str, letters: Tuple[str, str]) -> bool:
    return letters[0] <= ch <= letters[1]


def count_script_letters(titles: Iterable[Optional[str]]) -> Tuple[int, int]:
    """Return ``(primary, secondary)`` letter counts over the non-null titles."""

    primary = secondary = 0
    for title in titles:
        if title is None:
            continue
        for ch in title.lower():
            if _in_range(ch, PRIMARY_LETTERS):
                primary += 1
            elif _in_range(ch, SECONDARY_LETTERS):
                secondary += 1
    return primary, secondary


def classify_titles(titles: Iterable[Optional[str]]) -> Language:
    primary, secondary = count_script_letters(titles)
    return Language.SECONDARY if secondary > primary / 2 else Language.PRIMARY


def detect_language(presentation: DocumentPresentation) -> Language:
    LOGGER.info("Detecting presentation language...")
    language = classify_titles(extract_slide_titles(presentation))
    LOGGER.info("  Language detected: %s", language.value)
    return language


def contains_secondary_script(text: str) -> bool:
    return any(_in_range(ch, SECONDARY_LETTERS) for ch in text.lower())
