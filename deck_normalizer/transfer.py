"""Move the source deck's content, sections and metadata into the template shell."""

from __future__ import annotations

import logging

from .casing import fix_title_casing
from .document import DocumentPresentation
from .rules import NormalizationRules

LOGGER = logging.getLogger(__name__)


def remove_all_sections_and_slides(presentation: DocumentPresentation) -> None:
    """Strip the template down to its masters, layouts and styling."""

    LOGGER.info("Removing all sections and slides from the template...")
    presentation.delete_all_sections()
    presentation.delete_all_slides()


def copy_document_properties(
    source: DocumentPresentation, destination: DocumentPresentation
) -> None:
    LOGGER.info("Copying document properties (metadata)...")
    properties = source.properties().sanitized()
    destination.set_properties(properties)


def copy_slides_and_sections(
    source: DocumentPresentation, destination: DocumentPresentation
) -> int:
    """Insert every source slide and replay the source's section boundaries.

    Returns the number of sections created in ``destination``.
    """

    LOGGER.info("Copying all slides and sections from the source presentation...")

    LOGGER.info("  Copying all slides from the source presentation...")
    destination.insert_from_file(source.path, 0)

    LOGGER.info("  Copying all sections from the source presentation...")
    section_slide_index = 1
    slide_count = destination.slide_count
    source_sections = source.sections()
    for ordinal, section in enumerate(source_sections, start=1):
        name = fix_title_casing(section.name)
        if section_slide_index <= slide_count:
            destination.add_section_before(section_slide_index, name)
        else:
            destination.append_section(ordinal, name)
        section_slide_index += section.slide_count
    return len(source_sections)


def fix_code_boxes(
    source: DocumentPresentation,
    destination: DocumentPresentation,
    rules: NormalizationRules,
) -> int:
    """Restore paragraph spacing and proofing language of source-code boxes.

    Must run right after the bulk insert, while slide *n* of ``destination``
    is still the copy of slide *n* of ``source``. Returns the number of
    slides fixed.
    """

    LOGGER.info("Fixing source code boxes...")

    fixed = 0
    source_slides = source.slides()
    destination_slides = destination.slides()
    for slide_num, (old_slide, new_slide) in enumerate(
        zip(source_slides, destination_slides), start=1
    ):
        if new_slide.layout_name != rules.code_box_layout:
            continue
        old_placeholders = old_slide.placeholders()
        for shape_num, new_shape in enumerate(new_slide.placeholders()):
            if not new_shape.has_text:
                continue
            if shape_num < len(old_placeholders):
                spacing = old_placeholders[shape_num].paragraph_spacing().clamped()
                new_shape.set_paragraph_spacing(spacing)
            new_shape.set_language(rules.code_box_language)
        fixed += 1
        LOGGER.info("  Fixed the code box styling at slide #%s", slide_num)
    return fixed
