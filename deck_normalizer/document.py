"""Abstract interface to the document engine the pipeline edits through.

Slides and shapes are addressed by stable identity (``slide_id`` and
``shape_id``). A slide's 1-based ``position`` is resolved from the live
document each time it is read, because inserting or deleting a slide shifts
the position of every slide after it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from .models import (
    DocumentProperties,
    ParagraphSpacing,
    PlaceholderRole,
    SectionInfo,
    ShapeKind,
    StyleTemplate,
)


class DocumentShape(ABC):
    """A shape on a slide, a layout, a notes page or the notes master."""

    @property
    @abstractmethod
    def shape_id(self) -> int:
        """Identifier of the shape, unique within its slide."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the shape as shown in the selection pane."""

    @property
    @abstractmethod
    def kind(self) -> ShapeKind:
        """Whether the shape is a placeholder, a text box or something else."""

    @abstractmethod
    def placeholder_role(self) -> Optional[PlaceholderRole]:
        """Return the placeholder role, or ``None`` when the shape is not a placeholder."""

    @property
    @abstractmethod
    def has_text_frame(self) -> bool:
        """True when the shape can hold text."""

    @property
    @abstractmethod
    def text(self) -> Optional[str]:
        """Text of the shape, ``None`` when it has no text frame."""

    @abstractmethod
    def set_text(self, value: str) -> None:
        """Replace the whole text of the shape."""

    @abstractmethod
    def paragraph_spacing(self) -> ParagraphSpacing:
        """Spacing of the first paragraph."""

    @abstractmethod
    def set_paragraph_spacing(self, spacing: ParagraphSpacing) -> None:
        """Apply ``spacing`` to every paragraph; ``None`` values are left alone."""

    @abstractmethod
    def set_language(self, language_tag: str) -> None:
        """Set the proofing language (e.g. ``en-US``) of all text runs."""

    @abstractmethod
    def copy_style(self) -> StyleTemplate:
        """Return a detached copy of this shape that can be pasted elsewhere."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the shape from its container."""

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------
    def has_role(self, *roles: PlaceholderRole) -> bool:
        """True when the shape is a placeholder with one of ``roles``."""

        role = self.placeholder_role()
        return role is not None and role in roles

    @property
    def has_text(self) -> bool:
        return bool(self.has_text_frame and self.text)


class DocumentLayout(ABC):
    """A custom layout belonging to the slide master."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name."""

    @abstractmethod
    def shapes(self) -> List[DocumentShape]:
        """Shapes defined on the layout, in z-order."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the layout from the slide master."""


class DocumentSlide(ABC):
    """A slide of a presentation."""

    @property
    @abstractmethod
    def slide_id(self) -> int:
        """Identifier of the slide, stable across inserts and deletes."""

    @property
    @abstractmethod
    def position(self) -> int:
        """Current 1-based position of the slide in its presentation."""

    @abstractmethod
    def layout(self) -> DocumentLayout:
        """Layout the slide is based on."""

    @abstractmethod
    def set_layout(self, layout: DocumentLayout) -> None:
        """Rebase the slide on ``layout``."""

    @abstractmethod
    def shapes(self) -> List[DocumentShape]:
        """Snapshot of the slide's shapes, in z-order."""

    @abstractmethod
    def placeholders(self) -> List[DocumentShape]:
        """Snapshot of the slide's placeholders, in placeholder-index order."""

    @abstractmethod
    def restore_layout_placeholders(
        self, roles: Iterable[PlaceholderRole]
    ) -> List[DocumentShape]:
        """Re-add layout placeholders with ``roles`` that are missing on the slide."""

    @property
    @abstractmethod
    def has_notes_page(self) -> bool:
        """True when the slide owns a notes page."""

    @abstractmethod
    def notes_shapes(self) -> List[DocumentShape]:
        """Shapes of the notes page (empty when there is none)."""

    @abstractmethod
    def paste(self, template: StyleTemplate) -> DocumentShape:
        """Add a copy of ``template`` to the slide."""

    @abstractmethod
    def paste_notes(self, template: StyleTemplate) -> DocumentShape:
        """Add a copy of ``template`` to the slide's notes page."""

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------
    @property
    def layout_name(self) -> str:
        return self.layout().name


class DocumentPresentation(ABC):
    """An open presentation file."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """File the presentation was opened from and is saved to."""

    @abstractmethod
    def slides(self) -> List[DocumentSlide]:
        """Snapshot of the slides in presentation order."""

    @abstractmethod
    def slide_at(self, position: int) -> DocumentSlide:
        """Return the slide at 1-based ``position``."""

    @abstractmethod
    def delete_slide(self, slide: DocumentSlide) -> None:
        """Delete ``slide``; later slides move up by one position."""

    @abstractmethod
    def insert_from_file(
        self,
        path: Path,
        index: int,
        first: Optional[int] = None,
        last: Optional[int] = None,
    ) -> int:
        """Insert slides ``first``..``last`` (1-based, inclusive) of ``path``.

        The slides are placed after the slide at position ``index``; ``0``
        inserts at the beginning. Omitting the range inserts every slide.
        Returns the number of inserted slides.
        """

    @abstractmethod
    def sections(self) -> List[SectionInfo]:
        """Sections in order, with their first slide position and slide count."""

    @abstractmethod
    def delete_all_sections(self) -> None:
        """Remove every section marker (the slides are kept)."""

    @abstractmethod
    def add_section_before(self, slide_index: int, name: str) -> None:
        """Start a new section at the slide at 1-based ``slide_index``."""

    @abstractmethod
    def append_section(self, ordinal: int, name: str) -> None:
        """Insert an empty section at 1-based ``ordinal`` in the section list."""

    @abstractmethod
    def layouts(self) -> List[DocumentLayout]:
        """Custom layouts of the slide master."""

    @abstractmethod
    def notes_master_shapes(self) -> List[DocumentShape]:
        """Shapes of the notes master."""

    @abstractmethod
    def properties(self) -> DocumentProperties:
        """Built-in document properties."""

    @abstractmethod
    def set_properties(self, properties: DocumentProperties) -> None:
        """Write every non-``None`` value of ``properties``."""

    @abstractmethod
    def relocate(self, path: Path) -> None:
        """Point :attr:`path` at a file the presentation was moved to."""

    @abstractmethod
    def save(self) -> None:
        """Write the presentation back to :attr:`path`."""

    @abstractmethod
    def close(self) -> None:
        """Release the presentation; it must not be used afterwards."""

    # ------------------------------------------------------------------
    # Utility helpers
    # ------------------------------------------------------------------
    @property
    def slide_count(self) -> int:
        return len(self.slides())

    def delete_all_slides(self) -> None:
        while self.slide_count > 0:
            self.delete_slide(self.slide_at(1))


class EditorSession(ABC):
    """A session of the document engine. Only one may be open at a time."""

    @abstractmethod
    def open(self, path: Path, visible: bool = False) -> DocumentPresentation:
        """Open the presentation stored at ``path``."""

    @abstractmethod
    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy a presentation file on disk, overwriting ``destination``."""

    @abstractmethod
    def move_file(self, source: Path, destination: Path) -> None:
        """Atomically move ``source`` onto ``destination``."""

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """Delete ``path`` if it exists."""

    @abstractmethod
    def close(self) -> None:
        """Close every presentation opened by the session and release it."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """False once :meth:`close` has been called."""
