"""Title casing for English slide titles, subtitles and section names.

Each line is title-cased word by word: the first letter of a plain word is
upper-cased, short function words are lower-cased unless they open or close
the line. Words with capitals after the first letter (``JavaScript``,
``HTML``), digits or inner symbols (``Node.js``, ``C#``) are kept verbatim,
and text containing Cyrillic letters is returned unchanged. Applying the
rule to its own output changes nothing.
"""

from __future__ import annotations

import re
from typing import Optional

from .language import contains_secondary_script

MINOR_WORDS = frozenset(
    {
        "a", "an", "the",
        "and", "but", "or", "nor",
        "as", "at", "by", "for", "from", "in", "into", "of", "on", "per",
        "to", "via", "vs", "with",
    }
)

_LINE_BREAKS = re.compile(r"([\r\n\v]+)")
_WHITESPACE = re.compile(r"(\s+)")
_PLAIN_WORD = re.compile(
    r"^(?P<lead>[\"'(\[{«“‘]*)"
    r"(?P<core>[A-Za-z][A-Za-z']*)"
    r"(?P<trail>[\"'.,:;!?)\]}»”’]*)$"
)


def _fix_word(word: str, *, edge: bool) -> str:
    match = _PLAIN_WORD.match(word)
    if match is None:
        return word
    core = match.group("core")
    if any(ch.isupper() for ch in core[1:]):
        return word
    if not edge and core.lower() in MINOR_WORDS:
        core = core.lower()
    else:
        core = core[0].upper() + core[1:]
    return match.group("lead") + core + match.group("trail")


def _fix_line(line: str) -> str:
    tokens = _WHITESPACE.split(line)
    word_positions = [i for i, token in enumerate(tokens) if token and not token.isspace()]
    for n, i in enumerate(word_positions):
        edge = n == 0 or n == len(word_positions) - 1
        tokens[i] = _fix_word(tokens[i], edge=edge)
    return "".join(tokens)


def fix_title_casing(text: Optional[str]) -> Optional[str]:
    """Return ``text`` in English title case (``None`` stays ``None``)."""

    if text is None or contains_secondary_script(text):
        return text
    parts = _LINE_BREAKS.split(text)
    return "".join(
        part if _LINE_BREAKS.fullmatch(part) else _fix_line(part) for part in parts
    )
