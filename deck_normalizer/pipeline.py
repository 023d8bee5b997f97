"""Run every normalization stage in order over one source deck."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .document import EditorSession
from .language import detect_language
from .layouts import fix_invalid_slide_layouts
from .models import NormalizationReport
from .numbering import fix_slide_notes_pages, fix_slide_numbers
from .pptx_engine import PptxEditorSession
from .repairers import fix_license_slide, fix_section_title_slides, fix_slide_titles
from .rules import NormalizationRules, load_rules
from .transfer import (
    copy_document_properties,
    copy_slides_and_sections,
    fix_code_boxes,
    remove_all_sections_and_slides,
)

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
SessionFactory = Callable[[], EditorSession]


def working_copy_path(dest_path: Path) -> Path:
    """Temporary file the destination is built in before being moved into place."""

    return dest_path.with_name(f".~{dest_path.stem}.partial{dest_path.suffix}")


class DeckNormalizer:
    """Rebuild a source deck on top of a template and repair it.

    The destination is assembled in a working copy next to ``dest_path`` and
    only moved over it after a successful save. The editor session is
    released when the run ends, except in visible mode where it is left
    open for inspection; call :meth:`release` afterwards.
    """

    def __init__(
        self,
        rules: Optional[NormalizationRules] = None,
        session_factory: SessionFactory = PptxEditorSession,
    ) -> None:
        self.rules = rules or load_rules()
        self.session_factory = session_factory
        self.session: Optional[EditorSession] = None

    def normalize(
        self,
        source_path: PathLike,
        dest_path: PathLike,
        template_path: PathLike,
        visible: bool = False,
    ) -> NormalizationReport:
        source_path = Path(source_path).resolve()
        dest_path = Path(dest_path).resolve()
        template_path = Path(template_path).resolve()
        working_path = working_copy_path(dest_path)
        report = NormalizationReport(source_path=str(source_path), dest_path=str(dest_path))

        self.session = session = self.session_factory()
        try:
            LOGGER.info("Processing input presentation: %s", source_path)
            source = session.open(source_path, visible)

            LOGGER.info(
                "Copying the PPTX template '%s' as output presentation '%s'",
                template_path,
                dest_path,
            )
            session.copy_file(template_path, working_path)

            LOGGER.info("Opening the output presentation: %s...", dest_path)
            destination = session.open(working_path, visible)

            remove_all_sections_and_slides(destination)
            copy_document_properties(source, destination)
            report.section_count = copy_slides_and_sections(source, destination)
            report.code_boxes_fixed = fix_code_boxes(source, destination, self.rules)

            LOGGER.info("Closing the input presentation...")
            source.close()

            report.language = detect_language(destination)
            report.license_slides_replaced = fix_license_slide(
                destination, template_path, report.language, self.rules
            )
            layout_result = fix_invalid_slide_layouts(destination, self.rules)
            report.layouts_replaced = layout_result.replaced
            report.layouts_deleted = layout_result.deleted
            report.section_title_slides_fixed = fix_section_title_slides(destination, self.rules)
            report.titles_fixed = fix_slide_titles(destination, self.rules)
            report.slides_numbered = fix_slide_numbers(destination, self.rules)
            report.notes_pages_fixed = fix_slide_notes_pages(destination)
            report.slide_count = destination.slide_count

            LOGGER.info("Saving the output presentation: %s", dest_path)
            destination.save()
            session.move_file(working_path, dest_path)
            destination.relocate(dest_path)
        except Exception:
            LOGGER.error("Normalization of %s failed", source_path)
            session.remove_file(working_path)
            raise
        finally:
            if not visible:
                self.release()
        return report

    def release(self) -> None:
        """Close the editor session, if one is still open."""

        if self.session is not None and self.session.is_open:
            LOGGER.info("Closing the editor session...")
            self.session.close()
        self.session = None


def normalize(
    source_path: PathLike,
    dest_path: PathLike,
    template_path: PathLike,
    visible: bool = False,
    *,
    rules: Optional[NormalizationRules] = None,
    session_factory: Optional[SessionFactory] = None,
) -> NormalizationReport:
    """Normalize ``source_path`` into ``dest_path`` using ``template_path``."""

    normalizer = DeckNormalizer(rules=rules, session_factory=session_factory or PptxEditorSession)
    return normalizer.normalize(source_path, dest_path, template_path, visible)
