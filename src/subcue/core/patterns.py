"""Regular expressions for the built-in subtitle formats.

Every pattern exposes the same named groups so a single extractor can decode
any of them:

- ``index``: explicit cue counter / identifier (SRT and VTT only)
- ``start_h``, ``start_m``, ``start_s``, ``start_ms``: start time fields
- ``end_h``, ``end_m``, ``end_s``, ``end_ms``: end time fields
- ``text``: cue body

Hours are optional everywhere, so both ``HH:MM:SS.mmm`` and ``MM:SS.mmm``
timings match.
"""

import re
from dataclasses import dataclass
from re import Pattern

from ..exceptions import UnsupportedFormatError
from .models import SubtitleFormat


_DOT = r"\."
# Text lines need a visible character; a blank or space-only line ends the cue
_TEXT_LINE = r"[^\S\r\n]*\S[^\r\n]*"


def _timestamp(
    prefix: str, fraction_sep: str = "[,.]", fraction_required: bool = True
) -> str:
    fraction = rf"{fraction_sep}(?P<{prefix}_ms>\d{{1,3}})"
    if not fraction_required:
        fraction = rf"(?:{fraction})?"
    return (
        rf"(?:(?P<{prefix}_h>\d+):)?"  # optional hours
        rf"(?P<{prefix}_m>\d{{1,2}}):"  # minutes
        rf"(?P<{prefix}_s>\d{{1,2}})"  # seconds
        + fraction  # fraction of a second
    )


# ----------------------
# SubRip
# ----------------------
_SRT_PATTERN = rf"""
    (?:^(?P<index>\d+)[ \t]*\r?\n)?        # counter line
    {_timestamp("start")}
    [ \t]*-->[ \t]*
    {_timestamp("end")}
    [^\r\n]*(?:\r?\n|$)                    # rest of the timing line
    (?P<text>{_TEXT_LINE}(?:\r?\n{_TEXT_LINE})*)?  # text lines up to a blank line
"""

# ----------------------
# WebVTT
# ----------------------
_VTT_PATTERN = rf"""
    (?:^(?!.*-->)(?P<index>[^\r\n]*\S)[ \t]*\r?\n)?  # optional cue identifier
    {_timestamp("start", _DOT)}
    [ \t]*-->[ \t]*
    {_timestamp("end", _DOT)}
    [^\r\n]*(?:\r?\n|$)                    # cue settings are ignored
    (?P<text>{_TEXT_LINE}(?:\r?\n{_TEXT_LINE})*)?
"""

# ----------------------
# TTML / DFXP
# ----------------------
_TTML_PATTERN = rf"""
    <p\b[^>]*?\bbegin\s*=\s*["']{_timestamp("start", _DOT, fraction_required=False)}["']
    [^>]*?\bend\s*=\s*["']{_timestamp("end", _DOT, fraction_required=False)}["']
    [^>]*>
    (?P<text>.*?)
    </p>
"""


@dataclass(frozen=True)
class PatternDescriptor:
    """A compiled subtitle pattern and how to read its matches."""

    format: SubtitleFormat
    regex: Pattern[str]
    uses_index: bool = False

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    @classmethod
    def custom(cls, pattern: str, flags: int = re.MULTILINE) -> "PatternDescriptor":
        """Wrap a caller-supplied expression."""
        regex = re.compile(pattern, flags)
        return cls(
            format=SubtitleFormat.CUSTOM,
            regex=regex,
            uses_index="index" in regex.groupindex,
        )


SRT = PatternDescriptor(
    SubtitleFormat.SRT, re.compile(_SRT_PATTERN, re.VERBOSE | re.MULTILINE), True
)
VTT = PatternDescriptor(
    SubtitleFormat.VTT, re.compile(_VTT_PATTERN, re.VERBOSE | re.MULTILINE), True
)
TTML = PatternDescriptor(
    SubtitleFormat.TTML,
    re.compile(_TTML_PATTERN, re.VERBOSE | re.DOTALL | re.IGNORECASE),
)

_CATALOG = {
    SubtitleFormat.SRT: SRT,
    SubtitleFormat.VTT: VTT,
    SubtitleFormat.TTML: TTML,
    SubtitleFormat.DFXP: TTML,
}


def get_pattern(fmt: SubtitleFormat) -> PatternDescriptor:
    """Return the built-in descriptor for ``fmt``."""
    try:
        return _CATALOG[SubtitleFormat(fmt)]
    except (KeyError, ValueError):
        raise UnsupportedFormatError(
            f"No built-in pattern for subtitle format {fmt!r}"
        ) from None
