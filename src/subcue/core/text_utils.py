"""
Text utilities for cleaning subtitle cue text.

Subtitle sources carry inline markup (``<i>``, ``<font>``), ASS-style override
blocks (``{\\an8}``), escaped entities and encoding debris. These helpers strip
them so cue text is ready for display.
"""

import re

from ..config import LEGACY_NBSP

_TAG_RE = re.compile(r"<[^>]*>", re.MULTILINE)
# Style directives take the horizontal whitespace in front of them along
_STYLE_RE = re.compile(r"[ \t]*\{.*?\}")

_ENTITIES = [
    ("&amp;", "&"),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&quot;", '"'),
]

# U+200B read back through cp1252, and the character itself
_ZERO_WIDTH_ARTIFACTS = ["\u00e2\u20ac\u2039", "\u200b"]


def strip_markup(text: str) -> str:
    """Remove ``<...>`` tags and ``{...}`` style directives."""
    text = _TAG_RE.sub("", text)
    return _STYLE_RE.sub("", text)


def decode_entities(text: str, legacy_nbsp: bool = LEGACY_NBSP) -> str:
    """Decode the handful of HTML entities subtitle files actually use."""
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text.replace("&nbsp;", "'" if legacy_nbsp else " ")


def sanitize_text(text: str, legacy_nbsp: bool = LEGACY_NBSP) -> str:
    """Clean cue text of markup tags, style blocks, entities and artifacts.

    Steps run in a fixed order: tags, style directives, ``<br>`` and literal
    ``\\n`` to newlines, entities, zero-width artifacts.
    """
    cleaned = strip_markup(text)
    cleaned = cleaned.replace("<br>", "\n")
    cleaned = decode_entities(cleaned, legacy_nbsp=legacy_nbsp)
    cleaned = cleaned.replace("\\n", "\n")
    for artifact in _ZERO_WIDTH_ARTIFACTS:
        cleaned = cleaned.replace(artifact, "")
    return cleaned
