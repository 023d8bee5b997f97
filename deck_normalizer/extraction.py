"""Locate title and subtitle shapes on every slide."""

from __future__ import annotations

from typing import List, Optional

from .document import DocumentPresentation, DocumentShape, DocumentSlide
from .models import ExtractedTitle, PlaceholderRole


def find_title_shape(slide: DocumentSlide) -> Optional[DocumentShape]:
    """Return the shape holding the slide title.

    When a slide carries several title placeholders the last one wins;
    without any, the first placeholder is used when it can hold text.
    Slides without either have no title.
    """

    placeholders = slide.placeholders()
    title_shape = None
    for shape in placeholders:
        if shape.has_role(PlaceholderRole.TITLE) and shape.has_text_frame:
            title_shape = shape
    if title_shape is None and placeholders and placeholders[0].has_text_frame:
        title_shape = placeholders[0]
    return title_shape


def extract_title_shapes(
    presentation: DocumentPresentation, *, include_subtitles: bool = False
) -> List[ExtractedTitle]:
    """Return title entries in slide order.

    Without ``include_subtitles`` the result holds exactly one entry per
    slide (``shape`` and ``text`` are ``None`` for untitled slides). With it,
    every subtitle placeholder follows its slide's title entry, so the list
    must be treated as a flat sequence of shapes rather than a per-slide array.
    """

    entries: List[ExtractedTitle] = []
    for position, slide in enumerate(presentation.slides(), start=1):
        title_shape = find_title_shape(slide)
        entries.append(
            ExtractedTitle(
                slide_position=position,
                shape=title_shape,
                text=title_shape.text if title_shape is not None else None,
            )
        )
        if include_subtitles:
            for shape in slide.placeholders():
                if shape.has_role(PlaceholderRole.SUBTITLE) and shape.has_text_frame:
                    entries.append(
                        ExtractedTitle(slide_position=position, shape=shape, text=shape.text)
                    )
    return entries


def extract_slide_titles(presentation: DocumentPresentation) -> List[Optional[str]]:
    """Return one (possibly ``None``) title per slide, in slide order."""

    return [entry.text for entry in extract_title_shapes(presentation)]
