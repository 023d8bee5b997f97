"""Rebase every slide on a canonical layout and prune the layouts left unused."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .document import DocumentLayout, DocumentPresentation
from .exceptions import TemplateConfigurationError
from .rules import NormalizationRules

LOGGER = logging.getLogger(__name__)


@dataclass
class LayoutNormalizationResult:
    replaced: int = 0
    deleted: List[str] = field(default_factory=list)


def layouts_by_name(presentation: DocumentPresentation) -> Dict[str, DocumentLayout]:
    """Return a name -> layout table; the last layout wins on duplicate names."""

    table: Dict[str, DocumentLayout] = {}
    for layout in presentation.layouts():
        table[layout.name] = layout
    return table


def fix_invalid_slide_layouts(
    presentation: DocumentPresentation, rules: NormalizationRules
) -> LayoutNormalizationResult:
    LOGGER.info("Fixing the invalid slide layouts...")

    custom_layouts = layouts_by_name(presentation)
    layouts_for_deleting: List[str] = []
    result = LayoutNormalizationResult()

    for slide in presentation.slides():
        old_layout_name = slide.layout_name
        new_layout_name = rules.canonical_layout(old_layout_name)
        if new_layout_name == old_layout_name:
            continue
        new_layout = custom_layouts.get(new_layout_name)
        if new_layout is None:
            raise TemplateConfigurationError(
                f"canonical layout '{new_layout_name}' does not exist in the template",
                stage="layouts",
            )
        LOGGER.info(
            '  Replacing invalid slide layout "%s" on slide #%s with "%s"',
            old_layout_name,
            slide.position,
            new_layout_name,
        )
        slide.set_layout(new_layout)
        result.replaced += 1
        if old_layout_name not in layouts_for_deleting:
            layouts_for_deleting.append(old_layout_name)

    # Only safe once no slide can be rebased onto an orphan again.
    names_in_use = {slide.layout_name for slide in presentation.slides()}
    for layout_name in layouts_for_deleting:
        if layout_name in names_in_use:
            LOGGER.debug('  Keeping layout "%s": still referenced', layout_name)
            continue
        for layout in presentation.layouts():
            if layout.name == layout_name:
                LOGGER.info('  Deleting unused layout "%s"', layout_name)
                layout.delete()
        result.deleted.append(layout_name)
    return result
