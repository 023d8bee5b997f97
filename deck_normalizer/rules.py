"""Static normalization tables: layout mapping, title overrides, license titles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .exceptions import RulesValidationError
from .models import Language

DEFAULT_RULES_PATH = Path(__file__).with_name("normalization_rules.json")


@dataclass(frozen=True)
class LicenseSlideRule:
    """Title that identifies the license slide and its replacement in the template."""

    title: str
    template_slide: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LicenseSlideRule":
        title = data.get("title")
        if not title:
            raise RulesValidationError("license slide rule is missing 'title'")
        template_slide = int(data.get("template_slide", 1))
        if template_slide < 1:
            raise RulesValidationError(
                f"license slide rule '{title}' has invalid template_slide {template_slide}"
            )
        return cls(title=title, template_slide=template_slide)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "template_slide": self.template_slide}


@dataclass(frozen=True)
class NormalizationRules:
    """Immutable configuration injected into every pipeline stage."""

    layout_mappings: Mapping[str, str]
    default_layout: str
    title_overrides: Mapping[str, str] = field(default_factory=dict)
    license_slides: Mapping[Language, LicenseSlideRule] = field(default_factory=dict)
    unnumbered_layouts: FrozenSet[str] = frozenset()
    numbered_layout: str = "Title and Content"
    section_title_layout: str = "Section Title Slide"
    code_box_layout: str = "Source Code Example"
    code_box_language: str = "en-US"

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------
    def canonical_layout(self, layout_name: str) -> str:
        """Map a raw layout name to its canonical name (total over all names)."""

        return self.layout_mappings.get(layout_name, self.default_layout)

    def license_rule(self, language: Language) -> Optional[LicenseSlideRule]:
        return self.license_slides.get(language)

    def override_title(self, title: Optional[str]) -> Optional[str]:
        if title is None:
            return None
        return self.title_overrides.get(title, title)

    def canonical_layout_names(self) -> FrozenSet[str]:
        return frozenset(self.layout_mappings.values()) | {self.default_layout}

    # ------------------------------------------------------------------
    # (de)serialization
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalizationRules":
        if not isinstance(data, dict):
            raise RulesValidationError("rules document must be a JSON object")

        layout_mappings = data.get("layout_mappings")
        if not isinstance(layout_mappings, dict) or not layout_mappings:
            raise RulesValidationError("rules are missing 'layout_mappings'")
        default_layout = data.get("default_layout")
        if not default_layout:
            raise RulesValidationError("rules are missing 'default_layout'")

        license_slides: Dict[Language, LicenseSlideRule] = {}
        for key, value in dict(data.get("license_slides", {})).items():
            try:
                language = Language(key)
            except ValueError as exc:
                raise RulesValidationError(
                    f"unknown language '{key}' in license_slides", original_error=exc
                ) from exc
            license_slides[language] = LicenseSlideRule.from_dict(value)

        defaults = cls(layout_mappings={}, default_layout=default_layout)
        return cls(
            layout_mappings=dict(layout_mappings),
            default_layout=default_layout,
            title_overrides=dict(data.get("title_overrides", {})),
            license_slides=license_slides,
            unnumbered_layouts=frozenset(data.get("unnumbered_layouts", [])),
            numbered_layout=data.get("numbered_layout", defaults.numbered_layout),
            section_title_layout=data.get(
                "section_title_layout", defaults.section_title_layout
            ),
            code_box_layout=data.get("code_box_layout", defaults.code_box_layout),
            code_box_language=data.get("code_box_language", defaults.code_box_language),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout_mappings": dict(self.layout_mappings),
            "default_layout": self.default_layout,
            "title_overrides": dict(self.title_overrides),
            "license_slides": {
                language.value: rule.to_dict()
                for language, rule in self.license_slides.items()
            },
            "unnumbered_layouts": sorted(self.unnumbered_layouts),
            "numbered_layout": self.numbered_layout,
            "section_title_layout": self.section_title_layout,
            "code_box_layout": self.code_box_layout,
            "code_box_language": self.code_box_language,
        }


def load_rules(path: Optional[Path] = None) -> NormalizationRules:
    """Load rules from ``path`` (defaults to the bundled rules file)."""

    rules_path = Path(path or DEFAULT_RULES_PATH)
    if not rules_path.exists():
        raise FileNotFoundError(f"Normalization rules not found at {rules_path}")
    try:
        data = json.loads(rules_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RulesValidationError(
            f"{rules_path} is not valid JSON: {exc}", original_error=exc
        ) from exc
    return NormalizationRules.from_dict(data)
