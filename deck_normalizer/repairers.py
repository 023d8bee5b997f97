"""Slide-level repairs: section divider slides, title casing, license slide."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .casing import fix_title_casing
from .document import DocumentPresentation, DocumentSlide
from .extraction import extract_slide_titles, extract_title_shapes
from .models import Language, TEXT_ROLES
from .rules import NormalizationRules

LOGGER = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Section title slides
# ----------------------------------------------------------------------

def fix_section_title_slide(slide: DocumentSlide) -> List[str]:
    """Move the slide's texts into its layout placeholders, in order.

    Every title/subtitle/body placeholder holding text is emptied into a
    list and deleted. The layout's missing text placeholders are then
    restored and receive the captured texts positionally; placeholders left
    without text are deleted. Returns the captured texts.
    """

    slide_texts: List[str] = []
    for shape in slide.shapes():
        role = shape.placeholder_role()
        if role is None:
            # not a placeholder
            continue
        if role in TEXT_ROLES and shape.has_text:
            slide_texts.append(shape.text)
            shape.delete()

    slide.restore_layout_placeholders(TEXT_ROLES)
    targets = [shape for shape in slide.placeholders() if shape.has_role(*TEXT_ROLES)]
    for i, placeholder in enumerate(targets):
        if i < len(slide_texts):
            placeholder.set_text(slide_texts[i])
        else:
            placeholder.delete()
    return slide_texts


def fix_section_title_slides(
    presentation: DocumentPresentation, rules: NormalizationRules
) -> int:
    LOGGER.info("Fixing broken section title slides...")

    fixed = 0
    for slide in presentation.slides():
        if slide.layout_name != rules.section_title_layout:
            continue
        slide_texts = fix_section_title_slide(slide)
        fixed += 1
        LOGGER.info(
            " Fixed slide #%s: %s",
            slide.position,
            slide_texts[0] if slide_texts else None,
        )
    return fixed


# ----------------------------------------------------------------------
# Title casing
# ----------------------------------------------------------------------

def fix_slide_titles(presentation: DocumentPresentation, rules: NormalizationRules) -> int:
    """Title-case every title and subtitle; returns the number of shapes rewritten."""

    LOGGER.info("Fixing incorrect slide titles...")

    fixed = 0
    for entry in extract_title_shapes(presentation, include_subtitles=True):
        if entry.shape is None:
            continue
        new_title = rules.override_title(fix_title_casing(entry.text))
        if new_title is not None and new_title != entry.text:
            LOGGER.info(
                "  Replaced slide #%s title: [%s] -> [%s]",
                entry.slide_position,
                entry.text,
                new_title,
            )
            entry.shape.set_text(new_title)
            fixed += 1
    return fixed


# ----------------------------------------------------------------------
# License slide
# ----------------------------------------------------------------------

def fix_license_slide(
    presentation: DocumentPresentation,
    template_path: Path,
    language: Language,
    rules: NormalizationRules,
) -> int:
    """Replace every license slide with the template's license slide.

    Titles are captured once up front; each replacement deletes one slide
    and inserts one at the same position, so the captured positions stay
    valid. Returns the number of replaced slides.
    """

    LOGGER.info("Fixing the [License] slide...")

    rule = rules.license_rule(language)
    if rule is None:
        LOGGER.info("  No license slide configured for language %s", language.value)
        return 0

    slide_titles = extract_slide_titles(presentation)
    replaced = 0
    for slide_num, title in enumerate(slide_titles, start=1):
        if title != rule.title:
            continue
        LOGGER.info(
            "  Found the [License] slide #%s --> replacing it from the template", slide_num
        )
        presentation.delete_slide(presentation.slide_at(slide_num))
        presentation.insert_from_file(
            template_path, slide_num - 1, rule.template_slide, rule.template_slide
        )
        replaced += 1
    return replaced
