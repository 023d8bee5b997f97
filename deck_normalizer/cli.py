from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .config import load_settings
from .exceptions import NormalizationError, RulesValidationError
from .pipeline import DeckNormalizer
from .rules import load_rules


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deck-normalizer",
        description="Rebuild a slide deck on top of a corporate template and repair its formatting.",
    )
    parser.add_argument("source", help="input presentation (.pptx)")
    parser.add_argument("dest", help="output presentation (.pptx), overwritten if it exists")
    parser.add_argument(
        "--template",
        help="template presentation (default: $DECK_NORMALIZER_TEMPLATE)",
    )
    parser.add_argument(
        "--rules",
        help="normalization rules JSON (default: the bundled normalization_rules.json)",
    )
    parser.add_argument(
        "--visible",
        action="store_true",
        default=None,
        help="keep the editor session open after the run",
    )
    parser.add_argument("--log-level", help="logging level name (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    if args.log_level:
        settings.log_level = args.log_level.upper()

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    source = Path(args.source)
    if not source.is_file():
        print(f"[NG] source presentation not found: {source}")
        return 2

    template = Path(args.template) if args.template else settings.template_path
    if template is None:
        print("[NG] no template given (use --template or set DECK_NORMALIZER_TEMPLATE)")
        return 2
    if not template.is_file():
        print(f"[NG] template presentation not found: {template}")
        return 2

    rules_path = Path(args.rules) if args.rules else settings.rules_path
    try:
        rules = load_rules(rules_path)
    except (FileNotFoundError, RulesValidationError) as exc:
        print(f"[NG] cannot load rules: {exc}")
        return 2

    visible = settings.visible if args.visible is None else args.visible
    normalizer = DeckNormalizer(rules=rules)
    try:
        report = normalizer.normalize(source, Path(args.dest), template, visible)
    except NormalizationError as exc:
        print(f"[NG] {exc}")
        return 1

    print(f"[OK] normalized: {report.dest_path}")
    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
