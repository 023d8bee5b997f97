"""Normalize slide decks onto a corporate PowerPoint template."""

from .models import (
    DocumentProperties,
    Language,
    NormalizationReport,
    ParagraphSpacing,
    PlaceholderRole,
    SectionInfo,
    ShapeKind,
    StyleTemplate,
)
from .exceptions import (
    DocumentAccessError,
    NormalizationError,
    RulesValidationError,
    SessionError,
    TemplateConfigurationError,
)
from .rules import LicenseSlideRule, NormalizationRules, load_rules
from .config import NormalizerSettings, load_settings
from .pptx_engine import PptxEditorSession
from .pipeline import DeckNormalizer, normalize

__all__ = [
    "DocumentProperties",
    "Language",
    "NormalizationReport",
    "ParagraphSpacing",
    "PlaceholderRole",
    "SectionInfo",
    "ShapeKind",
    "StyleTemplate",
    "NormalizationError",
    "TemplateConfigurationError",
    "DocumentAccessError",
    "RulesValidationError",
    "SessionError",
    "LicenseSlideRule",
    "NormalizationRules",
    "load_rules",
    "NormalizerSettings",
    "load_settings",
    "PptxEditorSession",
    "DeckNormalizer",
    "normalize",
]
