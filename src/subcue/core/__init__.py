"""Core functionality modules."""

from .controller import ControllerState, SubtitleController
from .lookup import CueIndex
from .models import Cue, SubtitleFormat, SubtitleObject
from .parser import BuiltinParser, CustomParser, extract_cues, make_parser
from .patterns import PatternDescriptor, get_pattern
from .providers import FileSubtitle, NetworkSubtitle, StringSubtitle
from .reconcile import flatten_cues
from .text_utils import sanitize_text

__all__ = [
    "Cue",
    "SubtitleFormat",
    "SubtitleObject",
    "PatternDescriptor",
    "get_pattern",
    "extract_cues",
    "make_parser",
    "BuiltinParser",
    "CustomParser",
    "sanitize_text",
    "flatten_cues",
    "CueIndex",
    "ControllerState",
    "SubtitleController",
    "StringSubtitle",
    "FileSubtitle",
    "NetworkSubtitle",
]
