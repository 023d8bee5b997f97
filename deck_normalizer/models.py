"""Value types shared by the normalization stages and the document engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Language(str, Enum):
    """Locale of a presentation as detected from its slide titles."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class ShapeKind(str, Enum):
    PLACEHOLDER = "placeholder"
    TEXT_BOX = "text-box"
    OTHER = "other"


class PlaceholderRole(str, Enum):
    TITLE = "title"
    SUBTITLE = "subtitle"
    BODY = "body"
    SLIDE_NUMBER = "slide-number"
    FOOTER = "footer"
    NONE = "none"


TEXT_ROLES = frozenset(
    {PlaceholderRole.TITLE, PlaceholderRole.SUBTITLE, PlaceholderRole.BODY}
)


@dataclass(slots=True)
class ParagraphSpacing:
    """Paragraph spacing of a text frame.

    ``space_before`` and ``space_after`` are expressed in points,
    ``line_spacing`` as a multiple of the line height. ``None`` means the
    value is inherited.
    """

    space_before: Optional[float] = None
    space_after: Optional[float] = None
    line_spacing: Optional[float] = None

    def clamped(self) -> "ParagraphSpacing":
        """Return a copy where every explicit value is non-negative."""

        def _clamp(value: Optional[float]) -> Optional[float]:
            return None if value is None else max(0.0, value)

        return ParagraphSpacing(
            space_before=_clamp(self.space_before),
            space_after=_clamp(self.space_after),
            line_spacing=_clamp(self.line_spacing),
        )


@dataclass(slots=True)
class DocumentProperties:
    """Built-in document metadata copied between presentations."""

    title: Optional[str] = None
    subject: Optional[str] = None
    category: Optional[str] = None
    keywords: Optional[str] = None

    FIELDS = ("title", "subject", "category", "keywords")

    def sanitized(self) -> "DocumentProperties":
        """Replace commas with semicolons and drop blank values."""

        values: Dict[str, Optional[str]] = {}
        for name in self.FIELDS:
            value = getattr(self, name)
            if value is None or not str(value).strip():
                values[name] = None
            else:
                values[name] = str(value).replace(",", ";")
        return DocumentProperties(**values)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {name: getattr(self, name) for name in self.FIELDS}


@dataclass(slots=True)
class SectionInfo:
    """A section of a presentation: its name and the slides it spans."""

    name: str
    first_slide: int
    slide_count: int


@dataclass(slots=True)
class StyleTemplate:
    """Detached copy of a shape that can be pasted onto other slides.

    ``payload`` is engine specific and opaque to the pipeline.
    """

    name: str
    payload: Any


@dataclass(slots=True)
class ExtractedTitle:
    """A title (or subtitle) shape found on a slide together with its text."""

    slide_position: int
    shape: Any = None
    text: Optional[str] = None


@dataclass(slots=True)
class NormalizationReport:
    """Summary of the work done by one pipeline run."""

    source_path: str
    dest_path: str
    language: Optional[Language] = None
    slide_count: int = 0
    section_count: int = 0
    code_boxes_fixed: int = 0
    license_slides_replaced: int = 0
    layouts_replaced: int = 0
    layouts_deleted: List[str] = field(default_factory=list)
    section_title_slides_fixed: int = 0
    titles_fixed: int = 0
    slides_numbered: int = 0
    notes_pages_fixed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_path": self.source_path,
            "dest_path": self.dest_path,
            "language": self.language.value if self.language else None,
            "slide_count": self.slide_count,
            "section_count": self.section_count,
            "code_boxes_fixed": self.code_boxes_fixed,
            "license_slides_replaced": self.license_slides_replaced,
            "layouts_replaced": self.layouts_replaced,
            "layouts_deleted": list(self.layouts_deleted),
            "section_title_slides_fixed": self.section_title_slides_fixed,
            "titles_fixed": self.titles_fixed,
            "slides_numbered": self.slides_numbered,
            "notes_pages_fixed": self.notes_pages_fixed,
        }
