"""Re-create slide-number boxes and notes-page footers from the template."""

from __future__ import annotations

import logging
from typing import Optional

from .document import DocumentPresentation, DocumentShape
from .exceptions import TemplateConfigurationError
from .models import PlaceholderRole, ShapeKind, StyleTemplate
from .rules import NormalizationRules

LOGGER = logging.getLogger(__name__)

SLIDE_NUMBER_BOX_NAME = "Slide Number"


def find_slide_number_shape(
    presentation: DocumentPresentation, rules: NormalizationRules
) -> DocumentShape:
    """Return the slide-number placeholder of the canonical numbered layout."""

    layout = next(
        (item for item in presentation.layouts() if item.name == rules.numbered_layout),
        None,
    )
    if layout is None:
        raise TemplateConfigurationError(
            f"layout '{rules.numbered_layout}' does not exist in the template",
            stage="slide_numbers",
        )
    shape = next(
        (item for item in layout.shapes() if item.has_role(PlaceholderRole.SLIDE_NUMBER)),
        None,
    )
    if shape is None:
        raise TemplateConfigurationError(
            f"layout '{rules.numbered_layout}' has no slide number placeholder",
            stage="slide_numbers",
        )
    return shape


def is_slide_number_shape(shape: DocumentShape) -> bool:
    if shape.kind == ShapeKind.TEXT_BOX and SLIDE_NUMBER_BOX_NAME in shape.name:
        return True
    return shape.has_role(PlaceholderRole.SLIDE_NUMBER)


def fix_slide_numbers(presentation: DocumentPresentation, rules: NormalizationRules) -> int:
    """Replace every slide-number box with the template's; returns slides numbered."""

    LOGGER.info("Fixing slide numbering...")

    slide_number_template = find_slide_number_shape(presentation, rules).copy_style()

    numbered = 0
    for slide in presentation.slides():
        for shape in slide.shapes():
            if is_slide_number_shape(shape):
                shape.delete()

        if slide.layout_name not in rules.unnumbered_layouts:
            slide.paste(slide_number_template)
            numbered += 1
        LOGGER.debug("  Slide #%s numbered: %s", slide.position, slide.layout_name)
    return numbered


def find_notes_footer(presentation: DocumentPresentation) -> Optional[DocumentShape]:
    return next(
        (
            shape
            for shape in presentation.notes_master_shapes()
            if shape.has_role(PlaceholderRole.FOOTER)
        ),
        None,
    )


def fix_slide_notes_pages(presentation: DocumentPresentation) -> int:
    """Replace the footer of every notes page; returns the pages fixed."""

    LOGGER.info("Fixing slide notes pages...")

    footer = find_notes_footer(presentation)
    if footer is None:
        raise TemplateConfigurationError(
            "the notes master has no footer placeholder", stage="notes_pages"
        )
    footer_template: StyleTemplate = footer.copy_style()

    fixed = 0
    for slide in presentation.slides():
        if not slide.has_notes_page:
            continue
        for shape in slide.notes_shapes():
            if shape.has_role(PlaceholderRole.FOOTER):
                shape.delete()
        slide.paste_notes(footer_template)
        fixed += 1
    return fixed
