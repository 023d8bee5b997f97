"""Runtime settings read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

TEMPLATE_ENV = "DECK_NORMALIZER_TEMPLATE"
RULES_ENV = "DECK_NORMALIZER_RULES"
LOG_LEVEL_ENV = "DECK_NORMALIZER_LOG_LEVEL"
VISIBLE_ENV = "DECK_NORMALIZER_VISIBLE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class NormalizerSettings:
    template_path: Optional[Path] = None
    rules_path: Optional[Path] = None
    log_level: str = "INFO"
    visible: bool = False

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""

        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def _optional_path(value: Optional[str]) -> Optional[Path]:
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> NormalizerSettings:
    """Build settings from ``environ`` (defaults to ``os.environ`` after ``load_dotenv()``)."""

    if environ is None:
        load_dotenv()
        environ = os.environ

    return NormalizerSettings(
        template_path=_optional_path(environ.get(TEMPLATE_ENV)),
        rules_path=_optional_path(environ.get(RULES_ENV)),
        log_level=(environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper(),
        visible=(environ.get(VISIBLE_ENV) or "").strip().lower() in _TRUTHY,
    )
