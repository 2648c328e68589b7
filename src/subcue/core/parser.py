"""Cue extraction: turn a subtitle payload into raw Cue objects.

Two parser variants share one call surface, ``parse()``:

- ``BuiltinParser`` looks its pattern up in the catalog by format tag;
- ``CustomParser`` takes a caller pattern and an optional decode callback.

Extraction is best effort. Text between matches is ignored and a match whose
fields cannot be decoded is dropped, so a damaged block never fails the file.
"""

from dataclasses import dataclass
from re import Match
from typing import Callable, Iterable, List, Optional, Union

from ..utils.logging import get_logger
from .models import Cue, SubtitleObject
from .patterns import PatternDescriptor, get_pattern

logger = get_logger(__name__)

OnParsing = Callable[[Iterable[Match[str]]], List[Cue]]


# ----------------------
# Field decoding
# ----------------------
def _group(match: Match[str], name: str) -> Optional[str]:
    if name not in match.re.groupindex:
        return None
    return match.group(name)


def _to_int(value: Optional[str]) -> int:
    return int(value) if value else 0


def _fraction_to_ms(frac: Optional[str]) -> int:
    """Read a fractional-second field: "5" is 500 ms, "05" is 50 ms."""
    if not frac:
        return 0
    return int(frac.ljust(3, "0")[:3])


def match_time_ms(match: Match[str], prefix: str) -> int:
    """Resolve ``<prefix>_h/_m/_s/_ms`` groups of a match to milliseconds.

    Missing groups count as zero, which is how ``MM:SS.mmm`` timings (no hours
    group) are told apart from ``HH:MM:SS.mmm`` ones.
    """
    hours = _to_int(_group(match, f"{prefix}_h"))
    minutes = _to_int(_group(match, f"{prefix}_m"))
    seconds = _to_int(_group(match, f"{prefix}_s"))
    millis = _fraction_to_ms(_group(match, f"{prefix}_ms"))
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis


def _match_index(match: Match[str], position: int, uses_index: bool) -> int:
    if not uses_index:
        return position
    raw = _group(match, "index")
    try:
        return int(raw.strip()) if raw else position
    except ValueError:
        return position


# ----------------------
# Extraction
# ----------------------
def decode_matches(
    matches: Iterable[Match[str]], uses_index: bool = False
) -> List[Cue]:
    """Decode named-group matches into cues, in match order."""
    cues: List[Cue] = []
    for position, match in enumerate(matches, start=1):
        try:
            start = match_time_ms(match, "start")
            end = match_time_ms(match, "end")
        except ValueError as e:
            logger.debug(f"Skipping undecodable subtitle block #{position}: {e}")
            continue
        text = (_group(match, "text") or "").strip()
        cues.append(
            Cue(
                index=_match_index(match, position, uses_index),
                start=start,
                end=end,
                text=text,
            )
        )
    return cues


def extract_cues(data: str, descriptor: PatternDescriptor) -> List[Cue]:
    """Run ``descriptor`` over the whole payload and decode every match."""
    if data.startswith("\ufeff"):
        data = data[1:]
    cues = decode_matches(descriptor.regex.finditer(data), descriptor.uses_index)
    logger.debug(f"Extracted {len(cues)} {descriptor.format.value} cues")
    return cues


# ----------------------
# Parser variants
# ----------------------
@dataclass(frozen=True)
class BuiltinParser:
    """Parser for the formats the pattern catalog knows about."""

    source: SubtitleObject

    @property
    def descriptor(self) -> PatternDescriptor:
        return get_pattern(self.source.format)

    def parse(self) -> List[Cue]:
        return extract_cues(self.source.data, self.descriptor)


@dataclass(frozen=True)
class CustomParser:
    """Parser driven by a caller pattern.

    ``on_parsing`` receives every match of ``pattern`` and returns the cues.
    Without it, matches are decoded through the standard named groups
    (``start_h`` ... ``end_ms``, ``text`` and optionally ``index``).
    """

    source: SubtitleObject
    pattern: str
    on_parsing: Optional[OnParsing] = None

    @property
    def descriptor(self) -> PatternDescriptor:
        return PatternDescriptor.custom(self.pattern)

    def parse(self) -> List[Cue]:
        descriptor = self.descriptor
        if self.on_parsing is None:
            return extract_cues(self.source.data, descriptor)
        return list(self.on_parsing(descriptor.regex.finditer(self.source.data)))


Parser = Union[BuiltinParser, CustomParser]


def make_parser(
    source: SubtitleObject,
    pattern: Optional[str] = None,
    on_parsing: Optional[OnParsing] = None,
) -> Parser:
    """Pick the parser variant for ``source``.

    A custom pattern always wins; otherwise the format tag must have a
    catalog entry, or ``UnsupportedFormatError`` is raised.
    """
    if pattern is not None:
        return CustomParser(source, pattern, on_parsing)
    get_pattern(source.format)
    return BuiltinParser(source)
